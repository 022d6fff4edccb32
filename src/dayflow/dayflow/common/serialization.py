from __future__ import annotations

import dataclasses
from datetime import date, datetime
from enum import Enum
from typing import Any, Mapping


def camel_case(name: str) -> str:
    # Enum-style keys (HALF_DAY) are left alone.
    if name != name.lower():
        return name
    head, *rest = name.split("_")
    return head + "".join(part[:1].upper() + part[1:] for part in rest)


def to_jsonable(value: Any) -> Any:
    """Convert domain objects into JSON-friendly structures.

    Dataclass fields and mapping keys are emitted in camelCase, which is what the
    browser clients expect (``userId``, ``startDate``...). Read-only properties
    listed in a dataclass ``__json_extra__`` tuple are emitted as well.
    """

    if isinstance(value, Enum):
        return value.value
    if value is None or isinstance(value, (bool, int, float, str)):
        return value
    if isinstance(value, datetime):
        return value.isoformat()
    if isinstance(value, date):
        return value.isoformat()
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        out = {camel_case(f.name): to_jsonable(getattr(value, f.name)) for f in dataclasses.fields(value)}
        for extra in getattr(value, "__json_extra__", ()):
            out[camel_case(extra)] = to_jsonable(getattr(value, extra))
        return out
    if isinstance(value, Mapping):
        return {_key(k): to_jsonable(v) for k, v in value.items()}
    if isinstance(value, (list, tuple, set, frozenset)):
        return [to_jsonable(v) for v in value]
    raise TypeError(f"Cannot serialise value of type {type(value)!r}")


def _key(key: Any) -> str:
    if isinstance(key, Enum):
        return str(key.value)
    return camel_case(str(key))
