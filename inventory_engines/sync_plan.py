"""
Module: inventory_engines.sync_plan
Responsibility:
    Prepare an edited item list for saving: check that every item carries
    the fields storage needs, and derive which stored rows to update,
    which to insert and which to delete.

Architecture position:
    Engines -- pure calculation layer, zero I/O. The resulting SyncPlan is
    applied by inventory_kernel.db.sync.

Invariants enforced:
    - Items with a uuid are updates; items without one are inserts.
    - A uuid present in the original list but absent now is a delete.
    - Process-local ids must be unique before a plan is built.

Failure modes:
    - DuplicateItemIdError when two current items share an id.
"""

from __future__ import annotations

from collections.abc import Sequence

from inventory_engines.tracer import traced_engine
from inventory_kernel.domain.dtos import SyncPlan
from inventory_kernel.domain.line_item import LineItem, ensure_unique_ids
from inventory_kernel.logging_config import get_logger

logger = get_logger("engines.sync_plan")


def validate_items(items: Sequence[LineItem]) -> dict[str, str]:
    """
    Return field errors keyed by field name; empty when the list can be saved.

    Only the first failing item is reported per field, and checking stops
    at the first item with a problem.
    """
    errors: dict[str, str] = {}
    if not items:
        errors["inventory_items"] = "At least one inventory item is required"
        return errors

    for item in items:
        if item.unit_value is None:
            errors["unit_value"] = "Unit value is required for all items"
            break
        if not item.unit:
            errors["unit"] = "Metric unit is required for all items"
            break
        if not item.item_code:
            errors["item_code"] = "Item code is required for all items"
            break
    return errors


@traced_engine("sync_plan", "1.0")
def build_sync_plan(
    original_items: Sequence[LineItem],
    current_items: Sequence[LineItem],
) -> SyncPlan:
    """Map *current_items* onto storage operations relative to *original_items*."""
    ensure_unique_ids(current_items)

    updates = tuple(item for item in current_items if item.uuid)
    inserts = tuple(item for item in current_items if not item.uuid)

    current_uuids = {item.uuid for item in updates}
    deletes: list[str] = []
    for item in original_items:
        if item.uuid and item.uuid not in current_uuids and item.uuid not in deletes:
            deletes.append(item.uuid)

    plan = SyncPlan(updates=updates, inserts=inserts, deletes=tuple(deletes))
    logger.info("sync_plan_built", extra={
        "update_count": len(plan.updates),
        "insert_count": len(plan.inserts),
        "delete_count": len(plan.deletes),
    })
    return plan
