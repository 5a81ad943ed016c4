"""
Tests for the Group Mutation Engine.

Covers:
- Creating a group from an item (uuid retention, ids, counter)
- Resizing (grow in place, shrink keeps earliest, remove, no-op)
- Removing and ungrouping
- Argument checks and absent-group behaviour
"""

from decimal import Decimal

import pytest

from inventory_engines.group_mutation import (
    create_group_from_item,
    remove_group,
    resize_group,
    ungroup,
)
from inventory_engines.grouping import describe_group, partition_by_group
from inventory_kernel.exceptions import InvalidGroupIdError, InvalidGroupSizeError


class TestCreateGroupFromItem:
    """Tests for create_group_from_item."""

    def test_group_of_three_from_saved_item(self, item_factory):
        item = item_factory(1, uuid="u1")

        members, next_id = create_group_from_item(item, 3, 2)

        assert [m.id for m in members] == [2, 3, 4]
        assert next_id == 5
        assert [m.uuid for m in members] == ["u1", None, None]
        assert [m.is_new for m in members] == [False, True, True]
        group_ids = {m.group_id for m in members}
        assert len(group_ids) == 1
        assert group_ids.pop().strip()

    def test_members_copy_domain_fields(self, item_factory):
        item = item_factory(1, item_code="CABLE", cost=Decimal("3.10"), properties={"gauge": "12"})

        members, _ = create_group_from_item(item, 2, 10)

        for member in members:
            assert member.item_code == "CABLE"
            assert member.cost == Decimal("3.10")
            assert member.properties == {"gauge": "12"}
            assert member.company_uuid == item.company_uuid

    def test_members_do_not_share_properties_mapping(self, item_factory):
        members, _ = create_group_from_item(item_factory(1), 2, 10)
        assert members[0].properties is not members[1].properties

    def test_each_call_gets_a_fresh_group_id(self, item_factory):
        item = item_factory(1)

        first, _ = create_group_from_item(item, 2, 10)
        second, _ = create_group_from_item(item, 2, 20)

        assert first[0].group_id != second[0].group_id

    def test_explicit_group_id(self, item_factory):
        members, _ = create_group_from_item(item_factory(1), 2, 10, new_group_id="pallet-7")
        assert {m.group_id for m in members} == {"pallet-7"}

    def test_new_item_stays_new(self, item_factory):
        item = item_factory(1, uuid=None, is_new=True)

        members, _ = create_group_from_item(item, 2, 5)

        assert all(m.is_new for m in members)
        assert all(m.uuid is None for m in members)

    def test_size_one_is_tagged_but_not_a_group(self, item_factory):
        members, next_id = create_group_from_item(item_factory(1), 1, 7)

        assert len(members) == 1
        assert next_id == 8
        assert members[0].is_grouped
        assert not describe_group(members[0], partition_by_group(members)).is_group

    def test_input_item_untouched(self, item_factory):
        item = item_factory(1)
        create_group_from_item(item, 3, 2)
        assert item.id == 1 and item.group_id == ""

    @pytest.mark.parametrize("bad_size", [0, -2, 2.5, "3", True])
    def test_invalid_size_raises(self, item_factory, bad_size):
        with pytest.raises(InvalidGroupSizeError):
            create_group_from_item(item_factory(1), bad_size, 2)


class TestResizeGroup:
    """Tests for resize_group."""

    def test_shrink_to_one_keeps_earliest_member(self, group_factory):
        group = group_factory("G", 1, 3)

        items, next_id = resize_group("G", 1, group, 10)

        assert items == [group[0]]
        assert next_id == 10

    def test_grow_inserts_after_last_member(self, item_factory, group_factory):
        group = group_factory("G", 2, 2)
        items = [item_factory(1), *group, item_factory(4)]

        result, next_id = resize_group("G", 4, items, 10)

        assert [i.id for i in result] == [1, 2, 3, 10, 11, 4]
        assert next_id == 12

    def test_grown_members_copy_first_member(self, item_factory):
        items = [
            item_factory(1, group_id="G", item_code="FIRST"),
            item_factory(2, group_id="G", item_code="SECOND"),
        ]

        result, _ = resize_group("G", 3, items, 50)

        added = result[2]
        assert added.item_code == "FIRST"
        assert added.uuid is None
        assert added.is_new
        assert added.group_id == "G"

    def test_grow_with_scattered_members_inserts_after_last(self, item_factory):
        items = [
            item_factory(1, group_id="G"),
            item_factory(2),
            item_factory(3, group_id="G"),
            item_factory(4),
        ]

        result, _ = resize_group("G", 3, items, 9)

        assert [i.id for i in result] == [1, 2, 3, 9, 4]

    def test_shrink_leaves_other_items_in_place(self, item_factory, group_factory):
        group = group_factory("G", 2, 3)
        items = [item_factory(1), *group, item_factory(5)]

        result, next_id = resize_group("G", 2, items, 10)

        assert [i.id for i in result] == [1, 2, 3, 5]
        assert result[0] is items[0] and result[-1] is items[-1]
        assert next_id == 10

    @pytest.mark.parametrize("size", [0, -1])
    def test_non_positive_size_removes_group(self, item_factory, group_factory, size):
        items = [item_factory(1), *group_factory("G", 2, 2)]

        result, next_id = resize_group("G", size, items, 10)

        assert [i.id for i in result] == [1]
        assert next_id == 10

    def test_same_size_is_noop(self, group_factory):
        group = group_factory("G", 1, 2)

        result, next_id = resize_group("G", 2, group, 10)

        assert result == group
        assert next_id == 10

    def test_grow_then_shrink_restores_count_and_survivors(self, item_factory, group_factory):
        group = group_factory("G", 1, 3)
        items = [*group, item_factory(4)]

        grown, next_id = resize_group("G", 5, items, 10)
        restored, final_id = resize_group("G", 3, grown, next_id)

        assert [i for i in restored if i.group_id == "G"] == group
        assert len(restored) == len(items)
        assert final_id == 12

    def test_shrink_then_grow_keeps_survivors(self, group_factory):
        group = group_factory("G", 1, 4)

        shrunk, next_id = resize_group("G", 2, group, 10)
        regrown, _ = resize_group("G", 4, shrunk, next_id)

        assert regrown[:2] == group[:2]
        assert len(regrown) == 4
        assert all(m.is_new for m in regrown[2:])

    def test_absent_group_is_noop(self, item_factory, captured_logs):
        items = [item_factory(1)]

        result, next_id = resize_group("missing", 3, items, 10)

        assert result == items
        assert next_id == 10
        assert any(r["message"] == "group_resize_group_not_found" for r in captured_logs())

    def test_does_not_mutate_input(self, group_factory):
        group = group_factory("G", 1, 2)
        snapshot = list(group)

        resize_group("G", 4, group, 10)
        resize_group("G", 1, group, 10)

        assert group == snapshot

    @pytest.mark.parametrize("bad_size", [1.5, "2", None])
    def test_invalid_size_raises(self, group_factory, bad_size):
        with pytest.raises(InvalidGroupSizeError):
            resize_group("G", bad_size, group_factory("G", 1, 2), 10)

    @pytest.mark.parametrize("bad_group_id", ["", "   ", None])
    def test_blank_group_id_raises(self, item_factory, bad_group_id):
        with pytest.raises(InvalidGroupIdError):
            resize_group(bad_group_id, 2, [item_factory(1)], 10)


class TestRemoveGroup:
    """Tests for remove_group."""

    def test_removes_exactly_the_group(self, item_factory, group_factory):
        items = [
            item_factory(1),
            *group_factory("G", 2, 2),
            item_factory(4, group_id="H"),
            item_factory(5),
        ]

        result = remove_group("G", items)

        assert [i.id for i in result] == [1, 4, 5]
        assert all(i.group_id != "G" for i in result)

    def test_idempotent_on_same_input(self, group_factory, item_factory):
        items = [*group_factory("G", 1, 2), item_factory(3)]
        assert remove_group("G", items) == remove_group("G", items)

    def test_absent_group_returns_copy(self, item_factory):
        items = [item_factory(1)]

        result = remove_group("nope", items)

        assert result == items
        assert result is not items


class TestUngroup:
    """Tests for ungroup."""

    def test_clears_group_and_keeps_count(self, item_factory, group_factory):
        items = [item_factory(1), *group_factory("G", 2, 3)]

        result = ungroup("G", items)

        assert len(result) == len(items)
        assert [i.id for i in result] == [1, 2, 3, 4]
        assert all(i.group_id == "" for i in result)

    def test_keeps_other_fields(self, group_factory):
        group = group_factory("G", 1, 2)

        result = ungroup("G", group)

        assert [i.uuid for i in result] == [g.uuid for g in group]
        assert [i.cost for i in result] == [g.cost for g in group]

    def test_members_become_visible_standalone_items(self, group_factory):
        result = ungroup("G", group_factory("G", 1, 2))
        partition = partition_by_group(result)

        assert all(not describe_group(i, partition).is_group for i in result)

    def test_other_groups_untouched(self, group_factory):
        other = group_factory("H", 3, 2)
        items = [*group_factory("G", 1, 2), *other]

        result = ungroup("G", items)

        assert result[2:] == other


class TestGroupSizeLimit:
    """Tests for the max_group_size bound on creation and growth."""

    def test_create_above_limit_rejected(self, item_factory):
        with pytest.raises(InvalidGroupSizeError) as exc_info:
            create_group_from_item(item_factory(1), 1005, 2, max_group_size=1000)

        assert exc_info.value.group_size == 1005
        assert exc_info.value.maximum == 1000

    def test_create_at_limit_allowed(self, item_factory):
        members, next_id = create_group_from_item(item_factory(1), 5, 2, max_group_size=5)

        assert len(members) == 5
        assert next_id == 7

    def test_grow_above_limit_rejected_without_change(self, group_factory):
        group = group_factory("G", 1, 2)
        snapshot = list(group)

        with pytest.raises(InvalidGroupSizeError):
            resize_group("G", 3000, group, 10, max_group_size=1000)
        assert group == snapshot

    def test_shrink_and_remove_unaffected_by_limit(self, group_factory):
        group = group_factory("G", 1, 4)

        shrunk, _ = resize_group("G", 2, group, 10, max_group_size=3)
        removed, _ = resize_group("G", 0, group, 10, max_group_size=3)

        assert len(shrunk) == 2
        assert removed == []

    def test_no_limit_by_default(self, item_factory):
        members, _ = create_group_from_item(item_factory(1), 1005, 2)
        assert len(members) == 1005
