"""Tests for LineItem, group keys and id helpers."""

import dataclasses
from decimal import Decimal

import pytest

from inventory_kernel.domain.line_item import (
    LineItem,
    RealGroupKey,
    SyntheticGroupKey,
    ViewMode,
    coerce_field_value,
    ensure_unique_ids,
    load_line_items,
)
from inventory_kernel.exceptions import DuplicateItemIdError, InventoryKernelError


class TestLineItem:
    """Tests for the LineItem value object."""

    def test_is_frozen(self):
        item = LineItem(id=1)
        with pytest.raises(dataclasses.FrozenInstanceError):
            item.id = 2

    def test_hashable_despite_properties(self):
        item = LineItem(id=1, properties={"a": 1})
        assert hash(item) == hash(LineItem(id=1, properties={"b": 2}))

    @pytest.mark.parametrize("group_id, grouped", [
        (None, False), ("", False), ("  ", False), ("g-1", True),
    ])
    def test_is_grouped(self, group_id, grouped):
        assert LineItem(id=1, group_id=group_id).is_grouped is grouped

    def test_from_row_converts_numbers_to_decimal(self):
        item = LineItem.from_row(
            {"uuid": "u1", "unit_value": 2.5, "cost": 10, "extra": "ignored"},
            item_id=7,
        )

        assert item.id == 7
        assert item.unit_value == Decimal("2.5")
        assert item.cost == Decimal("10")
        assert item.properties == {}

    def test_to_row_omits_process_local_fields(self):
        row = LineItem(id=3, uuid="u3", group_id=None, is_new=True).to_row()

        assert "id" not in row
        assert "is_new" not in row
        assert row["group_id"] == ""


class TestGroupKeys:
    """Tests for the GroupKey tagged union."""

    def test_real_and_synthetic_never_equal(self):
        assert RealGroupKey("individual-u1") != SyntheticGroupKey(0, "u1")

    def test_synthetic_rendering(self):
        assert str(SyntheticGroupKey(4, "u9")) == "individual-u9"

    def test_view_mode_accepts_strings(self):
        assert ViewMode("grouped") is ViewMode.GROUPED


class TestIdHelpers:
    """Tests for load_line_items and ensure_unique_ids."""

    def test_load_assigns_sequential_ids(self):
        items, next_id = load_line_items([{"uuid": "a"}, {"uuid": "b"}, {"uuid": "c"}])

        assert [i.id for i in items] == [1, 2, 3]
        assert [i.uuid for i in items] == ["a", "b", "c"]
        assert next_id == 4

    def test_load_empty(self):
        assert load_line_items([]) == ([], 1)

    def test_unique_ids_pass(self):
        ensure_unique_ids([LineItem(id=1), LineItem(id=2)])

    def test_duplicate_ids_raise_typed_error(self):
        with pytest.raises(DuplicateItemIdError) as exc_info:
            ensure_unique_ids([LineItem(id=1), LineItem(id=2), LineItem(id=1)])

        err = exc_info.value
        assert isinstance(err, InventoryKernelError)
        assert err.code == "DUPLICATE_ITEM_ID"
        assert err.occurrences == 2

    def test_coerce_field_value(self):
        assert coerce_field_value("unit_value", "1.50") == Decimal("1.50")
        assert coerce_field_value("properties", None) == {}
        assert coerce_field_value("unit", "kg") == "kg"
