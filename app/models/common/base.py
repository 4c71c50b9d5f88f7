"""Base entity class for all domain entities."""

from dataclasses import asdict, dataclass
from datetime import datetime
from enum import Enum
from typing import Any


def _encode(value: Any) -> Any:
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, datetime):
        return value.isoformat()
    if isinstance(value, tuple):
        return [_encode(v) for v in value]
    return value


def _dict_factory(items: list[tuple[str, Any]]) -> dict[str, Any]:
    return {k: _encode(v) for k, v in items}


@dataclass(frozen=True)
class BaseEntity:
    """Base class for all entities and computed records."""

    def to_dict(self) -> dict[str, Any]:
        """Convert to a plain dict (enums as values, datetimes as ISO strings)."""
        return asdict(self, dict_factory=_dict_factory)
