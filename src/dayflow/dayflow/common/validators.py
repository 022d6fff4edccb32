from __future__ import annotations

from datetime import date
from enum import Enum
from typing import Any, Type, TypeVar

from ..core.exceptions import ValidationError
from .datetime_utils import coerce_date

E = TypeVar("E", bound=Enum)


def require_choice(enum_cls: Type[E], value: Any, field_name: str) -> E:
    try:
        return enum_cls(value)
    except ValueError:
        allowed = ", ".join(m.value for m in enum_cls)
        raise ValidationError(f"{field_name} must be one of: {allowed}") from None


def require_date(value: Any, field_name: str) -> date:
    try:
        return coerce_date(value)
    except (TypeError, ValueError):
        raise ValidationError(f"{field_name} must be a date (YYYY-MM-DD)") from None
