"""Pure domain types for the inventory kernel."""

from inventory_kernel.domain.dtos import SyncPlan
from inventory_kernel.domain.line_item import (
    DOMAIN_FIELDS,
    IDENTITY_FIELDS,
    GroupInfo,
    GroupKey,
    GroupingLimits,
    ItemDefaults,
    LineItem,
    RealGroupKey,
    SyntheticGroupKey,
    ViewMode,
    coerce_field_value,
    ensure_unique_ids,
    load_line_items,
)

__all__ = [
    "DOMAIN_FIELDS",
    "IDENTITY_FIELDS",
    "GroupInfo",
    "GroupKey",
    "GroupingLimits",
    "ItemDefaults",
    "LineItem",
    "RealGroupKey",
    "SyncPlan",
    "SyntheticGroupKey",
    "ViewMode",
    "coerce_field_value",
    "ensure_unique_ids",
    "load_line_items",
]
