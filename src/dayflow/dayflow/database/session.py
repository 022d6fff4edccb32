from __future__ import annotations

from contextlib import contextmanager
from typing import Iterator

from sqlalchemy.orm import Session

from .connection import DatabaseConnection


@contextmanager
def session_scope(db: DatabaseConnection) -> Iterator[Session]:
    """One unit of work: commit on success, roll back on any error."""

    session = db.session()
    try:
        yield session
        session.commit()
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()
