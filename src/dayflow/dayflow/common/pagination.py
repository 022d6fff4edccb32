from __future__ import annotations

from dataclasses import dataclass, field
from typing import Generic, List, TypeVar

from ..core.constants import DEFAULT_PAGE_LIMIT, DEFAULT_PAGE_OFFSET
from ..core.exceptions import ValidationError

T = TypeVar("T")


@dataclass(frozen=True)
class Page(Generic[T]):
    items: List[T] = field(default_factory=list)
    total: int = 0
    limit: int = DEFAULT_PAGE_LIMIT
    offset: int = DEFAULT_PAGE_OFFSET


def clamp_window(limit: int | str | None, offset: int | str | None) -> tuple[int, int]:
    """Zero or missing limit/offset fall back to the defaults; negatives are clamped."""

    limit = _as_int(limit, "Limit") or DEFAULT_PAGE_LIMIT
    offset = _as_int(offset, "Offset") or DEFAULT_PAGE_OFFSET
    return max(limit, 1), max(offset, 0)


def _as_int(value: int | str | None, field_name: str) -> int:
    try:
        return int(value or 0)
    except (TypeError, ValueError):
        raise ValidationError(f"{field_name} must be an integer") from None
