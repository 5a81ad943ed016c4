"""
Module: inventory_kernel.db.sync
Responsibility: Apply a SyncPlan to the ``inventory_items`` table and load
    stored rows back for ``load_line_items``.
Architecture position: Kernel > DB. Consumes inventory_kernel.domain DTOs.

Invariants enforced:
    - Runs inside the caller's session; the caller owns commit/rollback
      (see ``session_scope``).
    - Inserted rows get a fresh uuid4; the process-local item id is dropped.

Failure modes:
    - SQLAlchemy errors propagate unchanged; nothing is committed here.
"""

from collections.abc import Sequence
from typing import Any
from uuid import uuid4

from sqlalchemy import delete, select, update
from sqlalchemy.orm import Session

from inventory_kernel.db.base import InventoryItemRecord
from inventory_kernel.domain.dtos import SyncPlan
from inventory_kernel.domain.line_item import LineItem
from inventory_kernel.logging_config import get_logger

logger = get_logger("db.sync")

_WRITABLE_COLUMNS = (
    "company_uuid",
    "item_code",
    "unit",
    "unit_value",
    "packaging_unit",
    "cost",
    "group_id",
    "properties",
    "status",
)


def _column_values(item: LineItem) -> dict[str, Any]:
    row = item.to_row()
    return {name: row[name] for name in _WRITABLE_COLUMNS}


def apply_sync_plan(
    session: Session,
    plan: SyncPlan,
    inventory_uuid: str,
) -> list[str]:
    """
    Issue the inserts, updates and deletes described by *plan*.

    Returns:
        The uuids created for ``plan.inserts``, in insert order.
    """
    logger.info("sync_plan_apply_started", extra={
        "inventory_uuid": inventory_uuid,
        "update_count": len(plan.updates),
        "insert_count": len(plan.inserts),
        "delete_count": len(plan.deletes),
    })

    for item in plan.updates:
        session.execute(
            update(InventoryItemRecord)
            .where(InventoryItemRecord.uuid == item.uuid)
            .where(InventoryItemRecord.inventory_uuid == inventory_uuid)
            .values(**_column_values(item))
        )

    created: list[str] = []
    for item in plan.inserts:
        new_uuid = str(uuid4())
        session.add(InventoryItemRecord(
            uuid=new_uuid,
            inventory_uuid=inventory_uuid,
            **_column_values(item),
        ))
        created.append(new_uuid)

    if plan.deletes:
        session.execute(
            delete(InventoryItemRecord)
            .where(InventoryItemRecord.inventory_uuid == inventory_uuid)
            .where(InventoryItemRecord.uuid.in_(plan.deletes))
        )

    session.flush()

    logger.info("sync_plan_applied", extra={
        "inventory_uuid": inventory_uuid,
        "created_count": len(created),
    })
    return created


def load_inventory_rows(
    session: Session,
    inventory_uuid: str,
    order_by: Sequence[Any] = (),
) -> list[dict[str, Any]]:
    """Return stored rows for one inventory as dicts for ``load_line_items``."""
    stmt = select(InventoryItemRecord).where(
        InventoryItemRecord.inventory_uuid == inventory_uuid
    )
    if order_by:
        stmt = stmt.order_by(*order_by)
    records = session.scalars(stmt).all()
    return [record.to_row() for record in records]
