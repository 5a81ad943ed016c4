"""Persistence translation layer for inventory line items."""

from inventory_kernel.db.base import Base, InventoryItemRecord
from inventory_kernel.db.engine import (
    create_tables,
    drop_tables,
    get_engine,
    get_session,
    init_engine_from_url,
    reset_engine,
    session_scope,
)
from inventory_kernel.db.sync import apply_sync_plan, load_inventory_rows

__all__ = [
    "Base",
    "InventoryItemRecord",
    "apply_sync_plan",
    "create_tables",
    "drop_tables",
    "get_engine",
    "get_session",
    "init_engine_from_url",
    "load_inventory_rows",
    "reset_engine",
    "session_scope",
]
