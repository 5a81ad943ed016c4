"""
Module: inventory_engines.editing
Responsibility:
    Everyday list edits around the group operations: add a blank item,
    turn an item into a group in place, edit a field (propagating across a
    group), remove a single item, reset units after a measurement-unit
    change, copy inventory-level properties onto an item, total the cost.

Architecture position:
    Engines -- pure calculation layer, zero I/O.

Invariants enforced:
    - A field edit on a member of a real group applies to every member.
      ``inherit_item_properties`` is the exception: it targets one item.
    - Identity fields (id, uuid, group_id, is_new) are never editable here;
      they change only through the group and duplication engines.
    - Grouping an item in place keeps the group at the item's position.

Failure modes:
    - InvalidFieldError for identity or unknown fields.
    - InvalidGroupSizeError from ``group_item`` for sizes < 1 or above
      ``max_group_size``.
    - Unknown item ids are no-ops.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import replace
from decimal import Decimal
from typing import Any

from inventory_engines.group_mutation import create_group_from_item
from inventory_engines.grouping import describe_group, partition_by_group
from inventory_engines.preconditions import require_group_size
from inventory_kernel.domain.line_item import (
    DOMAIN_FIELDS,
    IDENTITY_FIELDS,
    ItemDefaults,
    LineItem,
    coerce_field_value,
)
from inventory_kernel.exceptions import InvalidFieldError
from inventory_kernel.logging_config import get_logger

logger = get_logger("engines.editing")


def add_item(
    current_items: Sequence[LineItem],
    next_id: int,
    defaults: ItemDefaults,
) -> tuple[list[LineItem], int]:
    """Prepend a blank, unsaved, ungrouped item."""
    item = LineItem(
        id=next_id,
        company_uuid=defaults.company_uuid,
        unit=defaults.unit,
        unit_value=Decimal("0"),
        packaging_unit=defaults.packaging_unit,
        cost=Decimal("0"),
        properties={},
        is_new=True,
        group_id="",
    )
    logger.debug("item_added", extra={"item_id": next_id})
    return [item, *current_items], next_id + 1


def group_item(
    item_id: int,
    group_size: int,
    current_items: Sequence[LineItem],
    next_id: int,
    *,
    max_group_size: int | None = None,
) -> tuple[list[LineItem], int]:
    """Replace the item *item_id* by a group of *group_size* at the same index."""
    require_group_size(group_size, maximum=max_group_size)
    index = next(
        (i for i, item in enumerate(current_items) if item.id == item_id), None
    )
    if index is None:
        logger.warning("group_item_not_found", extra={"item_id": item_id})
        return list(current_items), next_id

    members, new_next_id = create_group_from_item(
        current_items[index], group_size, next_id, max_group_size=max_group_size
    )
    updated = [*current_items[:index], *members, *current_items[index + 1:]]
    return updated, new_next_id


def update_item_field(
    item_id: int,
    field_name: str,
    value: Any,
    current_items: Sequence[LineItem],
) -> list[LineItem]:
    """Set one domain field, on the whole group when the item belongs to one."""
    if field_name in IDENTITY_FIELDS:
        raise InvalidFieldError(field_name, "identity fields are managed by the engines")
    if field_name not in DOMAIN_FIELDS:
        raise InvalidFieldError(field_name, "unknown field")

    target = next((item for item in current_items if item.id == item_id), None)
    if target is None:
        logger.warning("update_item_not_found", extra={"item_id": item_id})
        return list(current_items)

    new_value = coerce_field_value(field_name, value)
    info = describe_group(target, partition_by_group(current_items))

    if info.is_group:
        updated = [
            replace(item, **{field_name: new_value})
            if item.group_id == info.group_id else item
            for item in current_items
        ]
        logger.debug("group_field_updated", extra={
            "group_id": info.group_id,
            "field": field_name,
            "member_count": info.group_size,
        })
        return updated

    return [
        replace(item, **{field_name: new_value}) if item.id == item_id else item
        for item in current_items
    ]


def remove_item(item_id: int, current_items: Sequence[LineItem]) -> list[LineItem]:
    """Drop the single item *item_id*."""
    return [item for item in current_items if item.id != item_id]


def change_measurement_unit(current_items: Sequence[LineItem]) -> list[LineItem]:
    """
    Clear unit and unit value on every item.

    Called when the inventory switches measurement unit (e.g. length to
    weight): the old units no longer apply, so each item must be re-entered.
    """
    updated = [
        replace(item, unit=None, unit_value=Decimal("0")) for item in current_items
    ]
    logger.info("measurement_unit_changed", extra={"reset_count": len(updated)})
    return updated


def inherit_item_properties(
    item_id: int,
    properties: Mapping[str, Any] | None,
    current_items: Sequence[LineItem],
) -> list[LineItem]:
    """Replace the properties of the single item *item_id* with a copy of *properties*."""
    if not any(item.id == item_id for item in current_items):
        logger.warning("inherit_item_not_found", extra={"item_id": item_id})
        return list(current_items)

    inherited = dict(properties or {})
    return [
        replace(item, properties=dict(inherited)) if item.id == item_id else item
        for item in current_items
    ]


def total_cost(items: Sequence[LineItem]) -> Decimal:
    """Sum of item costs; items without a cost count as zero."""
    return sum((item.cost or Decimal("0") for item in items), Decimal("0"))
