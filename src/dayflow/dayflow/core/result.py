"""Action results.

Every action returns either ``ActionSuccess[T]`` or ``ActionFailure``. Callers
branch on ``result.success`` (a literal ``True``/``False`` per variant), and
``to_envelope`` turns either one into the wire shape::

    {"success": bool, "message": str, "data": ..., "fieldErrors": {...}}
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, ClassVar, Dict, Generic, List, Literal, Optional, TypeVar, Union

from ..common.serialization import to_jsonable

T = TypeVar("T")

FieldErrors = Dict[str, List[str]]


@dataclass(frozen=True)
class ActionSuccess(Generic[T]):
    message: str
    data: Optional[T] = None

    success: ClassVar[Literal[True]] = True


@dataclass(frozen=True)
class ActionFailure:
    message: str
    field_errors: Optional[FieldErrors] = None
    # Only bulk deletes attach data to a failure (the per-id report).
    data: Any = None

    success: ClassVar[Literal[False]] = False


ActionResult = Union[ActionSuccess[T], ActionFailure]


def ok(message: str, data: Optional[T] = None) -> ActionSuccess[T]:
    return ActionSuccess(message=message, data=data)


def fail(message: str, *, field_errors: Optional[FieldErrors] = None, data: Any = None) -> ActionFailure:
    return ActionFailure(message=message, field_errors=field_errors, data=data)


def to_envelope(result: Union[ActionSuccess[Any], ActionFailure]) -> dict:
    envelope: dict = {"success": result.success, "message": result.message}
    if result.data is not None:
        envelope["data"] = to_jsonable(result.data)
    if isinstance(result, ActionFailure) and result.field_errors:
        envelope["fieldErrors"] = {k: list(v) for k, v in result.field_errors.items()}
    return envelope
