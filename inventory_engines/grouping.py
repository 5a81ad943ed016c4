"""
Module: inventory_engines.grouping
Responsibility:
    Partition an ordered list of line items into groups and answer
    per-item group questions: is this a group, how big, is this item the
    representative, what is its display ordinal, which items are visible.

Architecture position:
    Engines -- pure calculation layer, zero I/O.
    May only import inventory_kernel.domain and inventory_kernel.exceptions.

Invariants enforced:
    - Partitioning is total and disjoint: every item lands in exactly one
      bucket, and items keep their input order inside a bucket.
    - Ungrouped items get a SyntheticGroupKey that cannot collide with a
      RealGroupKey or with another synthetic key from the same call.
    - The representative of a group is its first member in list order,
      compared by ``id`` (not by object identity).
    - Nothing is cached: every query recomputes from the list it is given.

Failure modes:
    - InvalidViewModeError on an unknown display mode.

Usage:
    from inventory_engines.grouping import partition_by_group, describe_group

    partition = partition_by_group(items)
    info = describe_group(items[0], partition)
    if info.is_group and info.is_first_in_group:
        ...
"""

from __future__ import annotations

from collections.abc import Sequence

from inventory_engines.preconditions import require_view_mode
from inventory_engines.tracer import traced_engine
from inventory_kernel.domain.line_item import (
    GroupInfo,
    GroupKey,
    LineItem,
    RealGroupKey,
    SyntheticGroupKey,
    ViewMode,
)
from inventory_kernel.logging_config import get_logger

logger = get_logger("engines.grouping")

Partition = dict[GroupKey, tuple[LineItem, ...]]


def partition_by_group(items: Sequence[LineItem]) -> Partition:
    """Bucket items by group id; each ungrouped item gets its own bucket."""
    buckets: dict[GroupKey, list[LineItem]] = {}
    for position, item in enumerate(items):
        if item.is_grouped:
            buckets.setdefault(RealGroupKey(item.group_id), []).append(item)
        else:
            ref = item.uuid or str(item.id)
            buckets[SyntheticGroupKey(position, ref)] = [item]
    return {key: tuple(members) for key, members in buckets.items()}


def describe_group(item: LineItem, partition: Partition) -> GroupInfo:
    """
    Group metadata for *item* within *partition*.

    An item whose group is missing from the partition (the partition was
    built from a different list) reports a size of 0 and is not first.
    """
    if not item.is_grouped:
        return GroupInfo(
            is_group=False,
            group_size=1,
            is_first_in_group=True,
            group_id=None,
        )

    members = partition.get(RealGroupKey(item.group_id), ())
    return GroupInfo(
        is_group=len(members) > 1,
        group_size=len(members),
        is_first_in_group=bool(members) and members[0].id == item.id,
        group_id=item.group_id,
    )


def _is_displayed(item: LineItem, partition: Partition) -> bool:
    info = describe_group(item, partition)
    return not info.is_group or info.is_first_in_group


def display_number(
    item: LineItem,
    all_items: Sequence[LineItem],
    partition: Partition,
) -> int:
    """1-based label ordinal among displayed rows; 0 if *item* is not one."""
    displayed = [each for each in all_items if _is_displayed(each, partition)]
    for ordinal, each in enumerate(displayed, start=1):
        if each.id == item.id:
            return ordinal
    return 0


@traced_engine("grouping", "1.0", fingerprint_fields=("mode",))
def visible_items(
    all_items: Sequence[LineItem],
    mode: ViewMode | str,
) -> list[LineItem]:
    """Items to render: all of them in flat mode, one row per group otherwise."""
    view_mode = require_view_mode(mode)
    if view_mode is ViewMode.FLAT:
        return list(all_items)

    partition = partition_by_group(all_items)
    visible = [item for item in all_items if _is_displayed(item, partition)]
    logger.debug("visible_items_computed", extra={
        "mode": view_mode.value,
        "item_count": len(all_items),
        "visible_count": len(visible),
    })
    return visible
