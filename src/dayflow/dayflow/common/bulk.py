from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, List, Sequence, Tuple

from ..core.enums import DeleteOutcome


@dataclass(frozen=True)
class BulkDeleteItem:
    id: str
    outcome: DeleteOutcome


@dataclass(frozen=True)
class BulkDeleteReport:
    """Per-id result of a bulk delete.

    ``deleted_ids`` is the all-or-nothing view: the full requested list when
    every id was deleted, otherwise empty. A row is deleted once, so repeats
    of an id after its first occurrence are reported as NOT_FOUND.
    """

    results: Tuple[BulkDeleteItem, ...]

    __json_extra__ = ("deleted_ids", "missing_ids")

    @classmethod
    def build(cls, requested: Sequence[str], deleted: Iterable[str]) -> "BulkDeleteReport":
        pending = set(deleted)
        results = []
        for i in requested:
            if i in pending:
                pending.discard(i)
                results.append(BulkDeleteItem(id=i, outcome=DeleteOutcome.DELETED))
            else:
                results.append(BulkDeleteItem(id=i, outcome=DeleteOutcome.NOT_FOUND))
        return cls(results=tuple(results))

    @property
    def requested_ids(self) -> List[str]:
        return [r.id for r in self.results]

    @property
    def all_deleted(self) -> bool:
        return all(r.outcome == DeleteOutcome.DELETED for r in self.results)

    @property
    def deleted_ids(self) -> List[str]:
        return self.requested_ids if self.all_deleted else []

    @property
    def missing_ids(self) -> List[str]:
        return [r.id for r in self.results if r.outcome == DeleteOutcome.NOT_FOUND]
