"""Author ORM model. Table: author."""

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column

from app.infrastructure.persistence.database import Base
from app.infrastructure.persistence.models.mixins import BaseModelMixin

AUTHOR_NAME_MAX_LENGTH = 255


class Author(BaseModelMixin, Base):
    """Book author. Listed in (created_at, id) order."""

    __tablename__ = "author"

    first_name: Mapped[str] = mapped_column(String(AUTHOR_NAME_MAX_LENGTH), nullable=False)
    last_name: Mapped[str] = mapped_column(String(AUTHOR_NAME_MAX_LENGTH), nullable=False)
