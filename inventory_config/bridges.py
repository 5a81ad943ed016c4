"""
Config -> Kernel Bridges.

Functions that convert a GroupingConfig into kernel inputs. These live in
inventory_config (the producer) because the kernel and the engines must
never import inventory_config.

Usage:
    from inventory_config import get_active_config
    from inventory_config.bridges import build_grouping_limits, build_item_defaults

    config = get_active_config(company_uuid)
    items, next_id = add_item(items, next_id, build_item_defaults(config, company_uuid))

    limits = build_grouping_limits(config)
    items, next_id = group_item(
        item_id, limits.default_group_size, items, next_id,
        max_group_size=limits.max_group_size,
    )
"""

from __future__ import annotations

from inventory_config.schema import GroupingConfig
from inventory_kernel.domain.line_item import GroupingLimits, ItemDefaults


def build_item_defaults(config: GroupingConfig, company_uuid: str) -> ItemDefaults:
    """ItemDefaults for items added on behalf of *company_uuid*."""
    return ItemDefaults(
        company_uuid=company_uuid,
        unit=config.item_defaults.unit,
        packaging_unit=config.item_defaults.packaging_unit,
    )


def build_grouping_limits(config: GroupingConfig) -> GroupingLimits:
    """GroupingLimits carrying the configured bound and input defaults."""
    return GroupingLimits(
        max_group_size=config.max_group_size,
        default_group_size=config.default_group_size,
        default_duplicate_count=config.default_duplicate_count,
        default_view_mode=config.default_view_mode,
    )
