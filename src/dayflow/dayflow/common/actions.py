from __future__ import annotations

import logging
from functools import wraps
from typing import Callable, Dict, List, TypeVar

from pydantic import ValidationError as SchemaError

from ..core.exceptions import DomainError, ValidationError
from ..core.result import ActionFailure, fail

logger = logging.getLogger(__name__)

F = TypeVar("F", bound=Callable)


def action(fallback_message: str, *, invalid_message: str = "Invalid input") -> Callable[[F], F]:
    """Turn any exception escaping an action into an ``ActionFailure``.

    The exception message is forwarded when it has one, otherwise
    ``fallback_message`` is used. Schema failures carry ``invalid_message``
    and the per-field errors. Nothing is retried.
    """

    def decorator(fn: F) -> F:
        @wraps(fn)
        def wrapper(*args, **kwargs):
            try:
                return fn(*args, **kwargs)
            except SchemaError as e:
                return fail(invalid_message, field_errors=field_errors_from(e))
            except ValidationError as e:
                logger.info("%s rejected: %s", fn.__qualname__, e)
                return fail(str(e) or fallback_message, field_errors=e.field_errors)
            except DomainError as e:
                logger.info("%s rejected: %s", fn.__qualname__, e)
                return fail(str(e) or fallback_message)
            except Exception as e:
                logger.exception("%s failed", fn.__qualname__)
                return fail(str(e) or fallback_message)

        return wrapper  # type: ignore[return-value]

    return decorator


def required(message: str, **values) -> ActionFailure | None:
    """Flat failure when any of the given values is missing."""

    if any(not v for v in values.values()):
        return fail(message)
    return None


def field_errors_from(exc: SchemaError) -> Dict[str, List[str]]:
    """Group pydantic errors by top-level field, like a flattened form error map."""

    out: Dict[str, List[str]] = {}
    for err in exc.errors():
        loc = err.get("loc") or ()
        key = str(loc[0]) if loc else "_form"
        msg = str(err.get("msg", "Invalid value"))
        if msg.startswith("Value error, "):
            msg = msg[len("Value error, "):]
        out.setdefault(key, []).append(msg)
    return out
