"""Authors API: thin routes delegating to AuthorService.

Bodies are serialized by the use case (list pages come straight from the
cache as JSON bytes), so routes return raw Responses.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Query, Request, Response

from app.api.v1.dependencies import get_author_service
from app.application.use_cases.authors import AuthorService
from app.core.config import get_settings
from app.core.constants import PAGINATION_MAX_PAGE
from app.core.limiter import limit_writes
from app.schemas.author import (
    AuthorPayload,
    AuthorResponse,
    ErrorResponse,
    ValidationErrorResponse,
)

router = APIRouter()

JSON_MEDIA_TYPE = "application/json"

_AUTHOR_BODY = {
    "requestBody": {
        "required": True,
        "content": {
            JSON_MEDIA_TYPE: {
                "schema": AuthorPayload.model_json_schema(by_alias=True),
                "example": {"firstName": "Jane", "lastName": "Doe"},
            }
        },
    }
}
_NOT_FOUND = {404: {"model": ErrorResponse, "description": "Author not found"}}
_INVALID = {400: {"model": ValidationErrorResponse, "description": "Validation failed"}}


@router.get(
    "",
    responses={200: {"model": list[AuthorResponse], "description": "One page of authors"}},
)
async def list_authors(
    service: Annotated[AuthorService, Depends(get_author_service)],
    page: int = Query(
        1, ge=1, le=PAGINATION_MAX_PAGE, description="Page to fetch (1-based)"
    ),
    limit: int | None = Query(
        None, ge=1, description="Authors per page (default and cap from settings)"
    ),
) -> Response:
    """List authors, one page at a time. Pages are served from the cache when present."""
    if limit is None:
        limit = get_settings().pagination_default_limit
    payload = await service.list_authors(page=page, limit=limit)
    return Response(content=payload, media_type=JSON_MEDIA_TYPE)


@router.get(
    "/{author_id}",
    name="get_author",
    responses={200: {"model": AuthorResponse}, **_NOT_FOUND},
)
async def get_author(
    author_id: str,
    service: Annotated[AuthorService, Depends(get_author_service)],
) -> Response:
    """Get one author by id."""
    payload = await service.get_author(author_id)
    return Response(content=payload, media_type=JSON_MEDIA_TYPE)


@router.post(
    "",
    status_code=201,
    responses={201: {"model": AuthorResponse}, **_INVALID},
    openapi_extra=_AUTHOR_BODY,
)
@limit_writes
async def create_author(
    request: Request,
    service: Annotated[AuthorService, Depends(get_author_service)],
) -> Response:
    """Create an author. Location header points at the new resource."""
    created = await service.create_author(await request.body())
    location = str(request.url_for("get_author", author_id=created.author.id))
    return Response(
        content=created.payload,
        status_code=201,
        media_type=JSON_MEDIA_TYPE,
        headers={"Location": location},
    )


@router.put(
    "/{author_id}",
    status_code=204,
    responses={**_INVALID, **_NOT_FOUND},
    openapi_extra=_AUTHOR_BODY,
)
@limit_writes
async def update_author(
    request: Request,
    author_id: str,
    service: Annotated[AuthorService, Depends(get_author_service)],
) -> Response:
    """Replace an author's first and last name."""
    await service.update_author(author_id, await request.body())
    return Response(status_code=204)


@router.delete("/{author_id}", status_code=204, responses=_NOT_FOUND)
@limit_writes
async def delete_author(
    request: Request,
    author_id: str,
    service: Annotated[AuthorService, Depends(get_author_service)],
) -> Response:
    """Delete an author."""
    await service.delete_author(author_id)
    return Response(status_code=204)
