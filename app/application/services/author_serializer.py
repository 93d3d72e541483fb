"""Author serializer: read models to JSON bytes and request bodies to AuthorData.

Serialization groups select which fields are exposed, so the same read model
can back several views. Output is produced with pydantic TypeAdapters and is
byte-for-byte deterministic for equal input, which keeps cached pages stable.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence

from pydantic import TypeAdapter
from pydantic import ValidationError as PydanticValidationError

from app.application.dtos.author import AuthorData, AuthorResult
from app.core.constants import GROUP_GET_AUTHORS
from app.domain.exceptions import FieldError, ValidationException
from app.schemas.author import AuthorPayload, AuthorResponse

# Group name -> attribute names (python side) exposed for that group.
SERIALIZATION_GROUPS: dict[str, frozenset[str]] = {
    GROUP_GET_AUTHORS: frozenset({"id", "first_name", "last_name"}),
}

_list_adapter = TypeAdapter(list[AuthorResponse])
_item_adapter = TypeAdapter(AuthorResponse)


def _error_field(loc: tuple) -> str:
    """Public JSON name for a pydantic error location (body root -> 'body')."""
    if not loc:
        return "body"
    return ".".join(str(part) for part in loc)


class AuthorSerializer:
    """serialize(value, groups) -> bytes and deserialize(bytes, groups) -> AuthorData."""

    def _include(self, groups: Iterable[str]) -> set[str]:
        fields: set[str] = set()
        for group in groups:
            try:
                fields |= SERIALIZATION_GROUPS[group]
            except KeyError:
                raise ValueError(f"Unknown serialization group: {group!r}") from None
        return fields

    def serialize(
        self,
        value: AuthorResult | Sequence[AuthorResult],
        groups: Iterable[str] = (GROUP_GET_AUTHORS,),
    ) -> bytes:
        """Serialize one author or a sequence of authors to JSON bytes."""
        include = self._include(groups)
        if isinstance(value, AuthorResult):
            model = AuthorResponse.model_validate(value)
            return _item_adapter.dump_json(model, by_alias=True, include=include)
        models = [AuthorResponse.model_validate(a) for a in value]
        return _list_adapter.dump_json(
            models, by_alias=True, include={"__all__": include}
        )

    def deserialize(
        self,
        data: bytes,
        groups: Iterable[str] = (GROUP_GET_AUTHORS,),
    ) -> AuthorData:
        """Parse a JSON request body. Malformed JSON or wrong types raise ValidationException."""
        include = self._include(groups)
        try:
            payload = AuthorPayload.model_validate_json(data or b"{}")
        except PydanticValidationError as e:
            raise ValidationException(
                [FieldError(_error_field(err["loc"]), err["msg"]) for err in e.errors()],
                message="Malformed request body",
            ) from e
        return AuthorData(
            first_name=payload.first_name if "first_name" in include else None,
            last_name=payload.last_name if "last_name" in include else None,
        )
