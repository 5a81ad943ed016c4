"""
Module: inventory_engines
Responsibility:
    Package entrypoint that re-exports the public symbols of the pure
    grouping engines. This is the import surface for callers that hold an
    inventory's line items in memory.

Architecture position:
    Engines -- pure calculation layer, zero I/O.
    May only import inventory_kernel (domain, exceptions, logging).
    MUST NOT import inventory_config or inventory_kernel.db.

Invariants enforced:
    - Purity: every operation takes a complete list snapshot and returns a
      new one; inputs are never mutated.
    - The caller owns the ``next_id`` counter; operations that create
      items take it as a parameter and return the advanced value.

Usage:
    from inventory_engines import (
        partition_by_group, describe_group, visible_items,
        create_group_from_item, resize_group, remove_group, ungroup,
        duplicate_selection,
    )
"""

from inventory_kernel.logging_config import get_logger

logger = get_logger("engines")

from inventory_engines.duplication import (
    duplicate_group,
    duplicate_item,
    duplicate_selection,
)
from inventory_engines.editing import (
    add_item,
    change_measurement_unit,
    group_item,
    inherit_item_properties,
    remove_item,
    total_cost,
    update_item_field,
)
from inventory_engines.group_mutation import (
    create_group_from_item,
    make_group_id,
    remove_group,
    resize_group,
    ungroup,
)
from inventory_engines.grouping import (
    Partition,
    describe_group,
    display_number,
    partition_by_group,
    visible_items,
)
from inventory_engines.sync_plan import build_sync_plan, validate_items

__all__ = [
    # Grouping queries
    "Partition",
    "partition_by_group",
    "describe_group",
    "display_number",
    "visible_items",
    # Group mutation
    "make_group_id",
    "create_group_from_item",
    "resize_group",
    "remove_group",
    "ungroup",
    # Duplication
    "duplicate_group",
    "duplicate_item",
    "duplicate_selection",
    # Editing
    "add_item",
    "group_item",
    "update_item_field",
    "remove_item",
    "change_measurement_unit",
    "inherit_item_properties",
    "total_cost",
    # Save preparation
    "validate_items",
    "build_sync_plan",
]

logger.debug("engines_package_loaded", extra={
    "modules": [
        "grouping", "group_mutation", "duplication", "editing", "sync_plan",
    ],
})
