"""
inventory_config -- single public entrypoint for grouping configuration.

Responsibility:
    ``get_active_config()`` is the only way to obtain configuration at
    runtime. It returns a validated ``GroupingConfig``; YAML loading is an
    internal detail.

Architecture position:
    Configuration sits above ``inventory_kernel`` and beside
    ``inventory_engines``. Neither of them imports ``inventory_config``;
    ``inventory_config.bridges`` translates config into kernel inputs.

Failure modes:
    - ``FileNotFoundError`` -- no configuration set matches the company.
    - ``ValueError`` -- the matching set fails validation.
    - ``ConfigIntegrityError`` -- checksum mismatch against an approved pin.

Every successful call emits an ``INVENTORY_CONFIG_TRACE`` log record with
the config id, version, checksum and company scope.
"""

from __future__ import annotations

import logging
from pathlib import Path

from inventory_config.integrity import ConfigIntegrityError, verify_fingerprint_pin
from inventory_config.lifecycle import ConfigStatus
from inventory_config.loader import load_config_file
from inventory_config.schema import GroupingConfig, ItemDefaultsDef
from inventory_config.validator import validate_configuration

_logger = logging.getLogger("inventory_kernel.config")

_DEFAULT_CONFIG_DIR = Path(__file__).parent / "sets"


def get_active_config(
    company_uuid: str = "*",
    config_dir: Path | None = None,
) -> GroupingConfig:
    """The ONLY public configuration entrypoint.

    A set whose ``company_uuid`` equals *company_uuid* wins over a
    wildcard (``"*"``) set; among equals, PUBLISHED beats other statuses,
    then the highest version wins. SUPERSEDED sets are ignored.

    Raises:
        FileNotFoundError: If no configuration set matches.
        ValueError: If the matching configuration fails validation.
        ConfigIntegrityError: If an approved fingerprint pin does not match.
    """
    sets_dir = config_dir or _DEFAULT_CONFIG_DIR
    config, set_dir = _find_matching_config(sets_dir, company_uuid)

    validation = validate_configuration(config)
    if not validation.is_valid:
        raise ValueError(
            "Configuration validation failed:\n"
            + "\n".join(f"  - {e}" for e in validation.errors)
        )
    for warning in validation.warnings:
        _logger.warning("config_validation_warning", extra={
            "config_id": config.config_id,
            "warning": warning,
        })

    verify_fingerprint_pin(
        config_id=config.config_id,
        checksum=config.checksum,
        config_dir=set_dir,
    )

    _logger.info(
        "INVENTORY_CONFIG_TRACE",
        extra={
            "trace_type": "INVENTORY_CONFIG_TRACE",
            "config_set_id": config.config_id,
            "config_set_version": config.version,
            "checksum": config.checksum,
            "scope_company_uuid": config.company_uuid,
            "requested_company_uuid": company_uuid,
        },
    )
    return config


def _find_matching_config(
    sets_dir: Path, company_uuid: str
) -> tuple[GroupingConfig, Path]:
    """Find the configuration set for *company_uuid* and its directory.

    Raises:
        FileNotFoundError: If ``sets_dir`` does not exist or nothing matches.
    """
    if not sets_dir.is_dir():
        raise FileNotFoundError(f"Configuration sets directory not found: {sets_dir}")

    exact: list[tuple[GroupingConfig, Path]] = []
    wildcard: list[tuple[GroupingConfig, Path]] = []

    for subdir in sorted(sets_dir.iterdir()):
        root_file = subdir / "root.yaml"
        if not subdir.is_dir() or not root_file.exists():
            continue
        config = load_config_file(root_file)
        if not config.status.is_selectable:
            _logger.debug("config_set_skipped", extra={
                "config_id": config.config_id,
                "status": config.status.value,
            })
            continue
        if config.company_uuid == company_uuid:
            exact.append((config, subdir))
        elif config.company_uuid == "*":
            wildcard.append((config, subdir))

    candidates = exact or wildcard
    if not candidates:
        raise FileNotFoundError(
            f"No configuration set found for company_uuid='{company_uuid}' in {sets_dir}"
        )

    return max(
        candidates,
        key=lambda pair: (pair[0].status == ConfigStatus.PUBLISHED, pair[0].version),
    )


__all__ = [
    "ConfigIntegrityError",
    "ConfigStatus",
    "GroupingConfig",
    "ItemDefaultsDef",
    "get_active_config",
]
