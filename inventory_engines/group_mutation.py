"""
Module: inventory_engines.group_mutation
Responsibility:
    State-changing group operations over a list of line items: create a
    group from one item, resize a group, remove a group, ungroup.

Architecture position:
    Engines -- pure calculation layer, zero I/O.

Invariants enforced:
    - Inputs are never mutated; every operation returns a new list.
    - New items take sequential ids starting at the caller's ``next_id``;
      the returned counter is ``next_id`` plus the number of items created.
    - A group created from an item keeps that item's uuid on its first
      member only; every other created member is new (no uuid).
    - Growing a group copies the first member's fields and inserts the new
      members right after the group's last member. Shrinking keeps the
      earliest members. Items outside the group are never touched.

Failure modes:
    - InvalidGroupSizeError for non-integer sizes, sizes < 1 when
      creating a group, and sizes above the caller's ``max_group_size``.
    - InvalidGroupIdError for a blank group id.
    - A group id with no members is not an error: the input comes back
      unchanged and a warning is logged.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import replace
from uuid import uuid4

from inventory_engines.preconditions import (
    require_group_id,
    require_group_size,
    require_resize_target,
)
from inventory_engines.tracer import traced_engine
from inventory_kernel.domain.line_item import LineItem
from inventory_kernel.logging_config import get_logger

logger = get_logger("engines.group_mutation")


def make_group_id() -> str:
    """Fresh identifier for a group."""
    return str(uuid4())


def template_copy(
    template: LineItem,
    item_id: int,
    group_id: str | None,
    uuid: str | None = None,
    is_new: bool = True,
) -> LineItem:
    """Copy *template*'s domain fields onto a new identity."""
    return replace(
        template,
        id=item_id,
        uuid=uuid,
        group_id=group_id,
        is_new=is_new,
        properties=dict(template.properties),
    )


@traced_engine("group_mutation", "1.0", fingerprint_fields=("item", "group_size", "next_id"))
def create_group_from_item(
    item: LineItem,
    group_size: int,
    next_id: int,
    *,
    new_group_id: str | None = None,
    max_group_size: int | None = None,
) -> tuple[list[LineItem], int]:
    """
    Turn *item* into a group of *group_size* identical members.

    The first member keeps ``item.uuid`` and ``item.is_new`` so the stored
    row maps onto the group. A size of 1 yields a single tagged member,
    which ``describe_group`` still reports as not a group. Sizes above
    *max_group_size* (when given) are rejected.
    """
    require_group_size(group_size, maximum=max_group_size)
    group_id = new_group_id or make_group_id()

    members = [
        template_copy(
            item,
            next_id + offset,
            group_id,
            uuid=item.uuid if offset == 0 else None,
            is_new=item.is_new if offset == 0 else True,
        )
        for offset in range(group_size)
    ]

    logger.info("group_created", extra={
        "group_id": group_id,
        "source_item_id": item.id,
        "group_size": group_size,
        "kept_uuid": item.uuid is not None,
    })
    return members, next_id + group_size


@traced_engine("group_mutation", "1.0", fingerprint_fields=("group_id", "new_size", "next_id"))
def resize_group(
    group_id: str,
    new_size: int,
    current_items: Sequence[LineItem],
    next_id: int,
    *,
    max_group_size: int | None = None,
) -> tuple[list[LineItem], int]:
    """
    Grow, shrink or remove the group *group_id*.

    Growing past *max_group_size* (when given) is rejected.

    Returns:
        ``(items, new_next_id)``. The counter only advances when members
        are added.
    """
    require_group_id(group_id)
    require_resize_target(new_size, maximum=max_group_size)

    members = [item for item in current_items if item.group_id == group_id]
    current_count = len(members)

    if not members:
        logger.warning("group_resize_group_not_found", extra={
            "group_id": group_id,
            "new_size": new_size,
        })
        return list(current_items), next_id

    if new_size <= 0:
        logger.info("group_resized", extra={
            "group_id": group_id,
            "old_size": current_count,
            "new_size": 0,
        })
        return remove_group(group_id, current_items), next_id

    if new_size == current_count:
        return list(current_items), next_id

    if new_size > current_count:
        added = new_size - current_count
        template = members[0]
        new_members = [
            template_copy(template, next_id + offset, group_id)
            for offset in range(added)
        ]
        last_index = max(
            index for index, item in enumerate(current_items)
            if item.group_id == group_id
        )
        updated = [
            *current_items[: last_index + 1],
            *new_members,
            *current_items[last_index + 1:],
        ]
        logger.info("group_resized", extra={
            "group_id": group_id,
            "old_size": current_count,
            "new_size": new_size,
            "added_count": added,
        })
        return updated, next_id + added

    keep_ids = {item.id for item in members[:new_size]}
    updated = [
        item for item in current_items
        if item.group_id != group_id or item.id in keep_ids
    ]
    logger.info("group_resized", extra={
        "group_id": group_id,
        "old_size": current_count,
        "new_size": new_size,
        "dropped_count": current_count - new_size,
    })
    return updated, next_id


@traced_engine("group_mutation", "1.0", fingerprint_fields=("group_id",))
def remove_group(group_id: str, current_items: Sequence[LineItem]) -> list[LineItem]:
    """Drop every member of *group_id*; everything else keeps its order."""
    require_group_id(group_id)
    remaining = [item for item in current_items if item.group_id != group_id]
    removed = len(current_items) - len(remaining)
    if removed == 0:
        logger.warning("group_remove_group_not_found", extra={"group_id": group_id})
    else:
        logger.info("group_removed", extra={
            "group_id": group_id,
            "removed_count": removed,
        })
    return remaining


@traced_engine("group_mutation", "1.0", fingerprint_fields=("group_id",))
def ungroup(group_id: str, current_items: Sequence[LineItem]) -> list[LineItem]:
    """Clear the group id of every member so each becomes a standalone item."""
    require_group_id(group_id)
    updated: list[LineItem] = []
    released = 0
    for item in current_items:
        if item.group_id == group_id:
            updated.append(replace(item, group_id=""))
            released += 1
        else:
            updated.append(item)

    if released == 0:
        logger.warning("group_ungroup_group_not_found", extra={"group_id": group_id})
    else:
        logger.info("group_ungrouped", extra={
            "group_id": group_id,
            "released_count": released,
        })
    return updated
