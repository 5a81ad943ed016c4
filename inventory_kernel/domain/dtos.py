"""
DTOs -- Pure domain data transfer objects crossing the persistence boundary.

Responsibility:
    SyncPlan describes how an edited item list maps onto storage operations:
    rows to update, rows to insert and uuids to delete.

Architecture position:
    Kernel > Domain -- pure, zero I/O. Produced by
    inventory_engines.sync_plan, consumed by inventory_kernel.db.sync.
"""

from __future__ import annotations

from dataclasses import dataclass

from inventory_kernel.domain.line_item import LineItem


@dataclass(frozen=True)
class SyncPlan:
    """
    Storage operations needed to persist an edited item list.

    Guarantees:
        - Every item in ``updates`` has a uuid; no item in ``inserts`` has one.
        - ``deletes`` lists uuids in the order they appeared originally.
    """

    updates: tuple[LineItem, ...] = ()
    inserts: tuple[LineItem, ...] = ()
    deletes: tuple[str, ...] = ()

    @property
    def is_empty(self) -> bool:
        return not (self.updates or self.inserts or self.deletes)

    @property
    def operation_count(self) -> int:
        return len(self.updates) + len(self.inserts) + len(self.deletes)
