"""
Tests for applying sync plans to the inventory_items table.

Uses an in-memory SQLite engine; no external database is required.
"""

import pytest

from inventory_engines.group_mutation import create_group_from_item, remove_group
from inventory_engines.sync_plan import build_sync_plan
from inventory_kernel.db import (
    InventoryItemRecord,
    apply_sync_plan,
    create_tables,
    get_session,
    init_engine_from_url,
    load_inventory_rows,
    reset_engine,
    session_scope,
)
from inventory_kernel.domain.line_item import load_line_items

INVENTORY = "inv-1"


@pytest.fixture
def db():
    init_engine_from_url("sqlite://")
    create_tables()
    yield
    reset_engine()


def _seed(rows):
    with session_scope() as session:
        for row in rows:
            session.add(InventoryItemRecord(inventory_uuid=INVENTORY, **row))


def _stored_rows():
    with session_scope() as session:
        return load_inventory_rows(session, INVENTORY, order_by=[InventoryItemRecord.item_code])


class TestApplySyncPlan:
    """Tests for apply_sync_plan round trips through the table."""

    def test_group_creation_updates_original_and_inserts_rest(self, db):
        _seed([{"uuid": "u1", "item_code": "A", "unit": "m", "unit_value": 5}])
        original, next_id = load_line_items(_stored_rows())

        members, _ = create_group_from_item(original[0], 3, next_id, new_group_id="G")
        plan = build_sync_plan(original, members)

        with session_scope() as session:
            created = apply_sync_plan(session, plan, INVENTORY)

        rows = _stored_rows()
        assert len(created) == 2
        assert len(rows) == 3
        assert {row["group_id"] for row in rows} == {"G"}
        assert "u1" in {row["uuid"] for row in rows}

    def test_removed_group_rows_are_deleted(self, db):
        _seed([
            {"uuid": "u1", "item_code": "A", "group_id": ""},
            {"uuid": "u2", "item_code": "B", "group_id": "G"},
            {"uuid": "u3", "item_code": "C", "group_id": "G"},
        ])
        original, _ = load_line_items(_stored_rows())

        plan = build_sync_plan(original, remove_group("G", original))
        with session_scope() as session:
            apply_sync_plan(session, plan, INVENTORY)

        assert [row["uuid"] for row in _stored_rows()] == ["u1"]

    def test_failure_rolls_back(self, db):
        _seed([{"uuid": "u1", "item_code": "A"}])
        original, _ = load_line_items(_stored_rows())
        plan = build_sync_plan(original, [])

        with pytest.raises(RuntimeError):
            with session_scope() as session:
                apply_sync_plan(session, plan, INVENTORY)
                raise RuntimeError("abort")

        assert [row["uuid"] for row in _stored_rows()] == ["u1"]

    def test_other_inventories_untouched(self, db):
        with session_scope() as session:
            session.add(InventoryItemRecord(uuid="x1", inventory_uuid="inv-2", item_code="Z"))
        _seed([{"uuid": "u1", "item_code": "A"}])
        original, _ = load_line_items(_stored_rows())

        with session_scope() as session:
            apply_sync_plan(session, build_sync_plan(original, []), INVENTORY)

        session = get_session()
        try:
            assert session.get(InventoryItemRecord, "x1") is not None
        finally:
            session.close()
