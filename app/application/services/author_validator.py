"""Author validator: field rules checked before any author mutation."""

from app.application.dtos.author import AuthorData
from app.domain.exceptions import FieldError

NAME_MAX_LENGTH = 255

# (attribute, public JSON name) in reporting order
_NAME_FIELDS = (("first_name", "firstName"), ("last_name", "lastName"))


class AuthorValidator:
    """Collects every failed rule instead of stopping at the first one."""

    def validate(self, author: AuthorData) -> list[FieldError]:
        """Return field-level errors for author (empty list when valid).

        Rules: firstName and lastName are required, not blank, and at most
        NAME_MAX_LENGTH characters once surrounding whitespace is stripped.
        """
        errors: list[FieldError] = []
        for attr, field in _NAME_FIELDS:
            value = getattr(author, attr)
            if value is None or not value.strip():
                errors.append(FieldError(field, "This value should not be blank."))
            elif len(value.strip()) > NAME_MAX_LENGTH:
                errors.append(
                    FieldError(
                        field,
                        f"This value is too long. It should have {NAME_MAX_LENGTH} characters or less.",
                    )
                )
        return errors
