"""
Module: inventory_engines.duplication
Responsibility:
    Replicate line items: a whole group, a standalone item, or "whatever
    the user selected" (which dispatches to one of the two).

Architecture position:
    Engines -- pure calculation layer, zero I/O.

Invariants enforced:
    - Duplicates are always new: uuid cleared, ``is_new=True``.
    - Duplicating any member of a real group duplicates the whole group;
      each replica gets its own fresh group id.
    - Duplicates of a standalone item are never grouped with each other
      or with the original.
    - Ids are consumed sequentially from the caller's counter.

Failure modes:
    - InvalidCountError when count is not an integer >= 1.
    - An unknown item id is a no-op (input returned, warning logged).
"""

from __future__ import annotations

from collections.abc import Sequence

from inventory_engines.group_mutation import make_group_id, template_copy
from inventory_engines.grouping import describe_group, partition_by_group
from inventory_engines.preconditions import require_count
from inventory_engines.tracer import traced_engine
from inventory_kernel.domain.line_item import LineItem
from inventory_kernel.logging_config import get_logger

logger = get_logger("engines.duplication")


def duplicate_group(
    group_members: Sequence[LineItem],
    new_group_id: str,
    start_id: int,
) -> list[LineItem]:
    """One-to-one copy of *group_members* under *new_group_id*."""
    return [
        template_copy(member, start_id + offset, new_group_id)
        for offset, member in enumerate(group_members)
    ]


@traced_engine("duplication", "1.0", fingerprint_fields=("item", "count", "start_id"))
def duplicate_item(
    item: LineItem,
    count: int,
    start_id: int,
) -> tuple[list[LineItem], int]:
    """*count* independent, ungrouped copies of *item*."""
    require_count(count)
    copies = [
        template_copy(item, start_id + offset, "")
        for offset in range(count)
    ]
    return copies, start_id + count


@traced_engine("duplication", "1.0", fingerprint_fields=("item_id", "count", "next_id"))
def duplicate_selection(
    item_id: int,
    count: int,
    current_items: Sequence[LineItem],
    next_id: int,
) -> tuple[list[LineItem], int]:
    """
    Duplicate the selected item *count* times and prepend the copies.

    A member of a real group stands for its whole group: the group is
    replicated *count* times, one fresh group id per replica.
    """
    require_count(count)

    selected = next((item for item in current_items if item.id == item_id), None)
    if selected is None:
        logger.warning("duplicate_item_not_found", extra={"item_id": item_id})
        return list(current_items), next_id

    info = describe_group(selected, partition_by_group(current_items))

    if info.is_group:
        members = [item for item in current_items if item.group_id == info.group_id]
        copies: list[LineItem] = []
        cursor = next_id
        for _ in range(count):
            replica = duplicate_group(members, make_group_id(), cursor)
            copies.extend(replica)
            cursor += len(replica)
        logger.info("group_duplicated", extra={
            "group_id": info.group_id,
            "group_size": len(members),
            "replica_count": count,
            "created_count": len(copies),
        })
    else:
        copies, cursor = duplicate_item(selected, count, next_id)
        logger.info("item_duplicated", extra={
            "item_id": item_id,
            "created_count": len(copies),
        })

    return [*copies, *current_items], cursor
