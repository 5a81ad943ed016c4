"""
Configuration Loader (``inventory_config.loader``).

Responsibility
--------------
Loads ``root.yaml`` files and parses them into ``GroupingConfig``
instances. Runtime callers go through ``inventory_config.get_active_config()``.

Failure modes
-------------
* Missing YAML file  -> ``FileNotFoundError`` propagates.
* Malformed YAML  -> ``yaml.YAMLError`` propagates.
* Missing required keys  -> ``KeyError`` propagates.
* Unknown status or view mode  -> ``ValueError``.
"""

from __future__ import annotations

import hashlib
import json
from pathlib import Path
from typing import Any

import yaml

from inventory_config.lifecycle import ConfigStatus
from inventory_config.schema import GroupingConfig, ItemDefaultsDef
from inventory_kernel.domain.line_item import ViewMode


def load_yaml_file(path: Path) -> dict[str, Any]:
    """
    Load a single YAML file and return its contents as a dict.

    Raises:
        FileNotFoundError: if the file does not exist.
        yaml.YAMLError: if the file contains invalid YAML.
    """
    with open(path) as f:
        return yaml.safe_load(f) or {}


def parse_item_defaults(data: dict[str, Any]) -> ItemDefaultsDef:
    """Parse ItemDefaultsDef from a dict; absent keys keep their defaults."""
    base = ItemDefaultsDef()
    return ItemDefaultsDef(
        unit=data.get("unit", base.unit),
        packaging_unit=data.get("packaging_unit", base.packaging_unit),
    )


def parse_grouping_config(data: dict[str, Any], checksum: str = "") -> GroupingConfig:
    """
    Parse a ``GroupingConfig`` from a dict.

    ``config_id`` and ``version`` are required; everything else has a
    default.
    """
    grouping = data.get("grouping", {}) or {}
    return GroupingConfig(
        config_id=data["config_id"],
        version=int(data["version"]),
        company_uuid=str(data.get("company_uuid", "*")),
        status=ConfigStatus(data.get("status", ConfigStatus.DRAFT.value)),
        default_view_mode=ViewMode(grouping.get("default_view_mode", ViewMode.GROUPED.value)),
        default_group_size=grouping.get("default_group_size", 2),
        default_duplicate_count=grouping.get("default_duplicate_count", 1),
        max_group_size=grouping.get("max_group_size", 1000),
        item_defaults=parse_item_defaults(data.get("item_defaults", {}) or {}),
        checksum=checksum,
    )


def compute_checksum(data: dict[str, Any]) -> str:
    """
    Compute SHA-256 checksum of canonical JSON serialization.

    Identical ``data`` always produces identical checksums.
    """
    canonical = json.dumps(data, sort_keys=True, default=str)
    return hashlib.sha256(canonical.encode()).hexdigest()


def load_config_file(path: Path) -> GroupingConfig:
    """Load and parse one ``root.yaml``; the checksum covers its raw content."""
    data = load_yaml_file(path)
    return parse_grouping_config(data, checksum=compute_checksum(data))
