"""API errors and validation helpers."""

from datetime import date, datetime, timezone


class NotFoundError(Exception):
    """Resource not found."""

    def __init__(self, message: str = "Resource not found"):
        self.message = message
        super().__init__(self.message)


class ValidationError(Exception):
    """Validation error."""

    def __init__(self, message: str = "Validation error"):
        self.message = message
        super().__init__(self.message)


MAX_LIMIT = 1000


def validate_limit(limit: int | None) -> None:
    """Validate an optional list size."""
    if limit is not None and not 1 <= limit <= MAX_LIMIT:
        raise ValidationError(f"Invalid limit: {limit}. Must be between 1 and {MAX_LIMIT}")


def validate_id(name: str, value: str) -> None:
    """Validate a record id is a non-empty string."""
    if not isinstance(value, str) or not value.strip():
        raise ValidationError(f"Invalid {name}: {value!r}")


def parse_as_of(value: str | date | None) -> datetime | None:
    """Reference day for freshness as a UTC midnight, None for today."""
    if value is None:
        return None
    if isinstance(value, str):
        try:
            value = date.fromisoformat(value)
        except ValueError:
            raise ValidationError(f"Invalid as_of: {value!r}. Expected YYYY-MM-DD") from None
    if isinstance(value, datetime):
        value = value.date()
    return datetime(value.year, value.month, value.day, tzinfo=timezone.utc)
