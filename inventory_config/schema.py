"""
GroupingConfig schema.

The human-authored configuration for the inventory screens: defaults for
new items and the grouping controls. YAML ``root.yaml`` files are parsed
into these types by the loader and checked by the validator.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from inventory_config.lifecycle import ConfigStatus
from inventory_kernel.domain.line_item import ViewMode


@dataclass(frozen=True)
class ItemDefaultsDef:
    """Field values for a freshly added line item."""

    unit: str = "m"
    packaging_unit: str = "roll"


@dataclass(frozen=True)
class GroupingConfig:
    """Runtime grouping configuration for one company scope."""

    config_id: str
    version: int
    company_uuid: str = "*"  # "*" applies to every company
    status: ConfigStatus = ConfigStatus.DRAFT
    default_view_mode: ViewMode = ViewMode.GROUPED
    default_group_size: int = 2
    default_duplicate_count: int = 1
    max_group_size: int = 1000
    item_defaults: ItemDefaultsDef = field(default_factory=ItemDefaultsDef)
    checksum: str = ""
