"""
Configuration Validator (``inventory_config.validator``).

Checks a parsed ``GroupingConfig`` for values the engines would reject
at runtime, so a bad configuration fails at load time instead.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from inventory_config.schema import GroupingConfig


@dataclass
class ConfigValidationResult:
    """
    Result of configuration validation.

    ``is_valid`` returns ``True`` only when ``errors`` is empty.
    """

    errors: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        return not self.errors


def _is_int(value: object) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def validate_configuration(config: GroupingConfig) -> ConfigValidationResult:
    """Validate sizes, counts and item defaults of *config*."""
    result = ConfigValidationResult()

    if not config.config_id:
        result.errors.append("config_id must not be empty")
    if config.version < 1:
        result.errors.append(f"version must be >= 1, got {config.version}")

    if not _is_int(config.max_group_size) or config.max_group_size < 1:
        result.errors.append(
            f"grouping.max_group_size must be an integer >= 1, got {config.max_group_size!r}"
        )
    elif not _is_int(config.default_group_size) or not (
        1 <= config.default_group_size <= config.max_group_size
    ):
        result.errors.append(
            "grouping.default_group_size must be an integer between 1 and "
            f"{config.max_group_size}, got {config.default_group_size!r}"
        )
    elif config.default_group_size == 1:
        result.warnings.append(
            "grouping.default_group_size is 1: new groups will not display as groups"
        )

    if not _is_int(config.default_duplicate_count) or config.default_duplicate_count < 1:
        result.errors.append(
            "grouping.default_duplicate_count must be an integer >= 1, "
            f"got {config.default_duplicate_count!r}"
        )

    defaults = config.item_defaults
    if not defaults.unit:
        result.errors.append("item_defaults.unit must not be empty")
    if not defaults.packaging_unit:
        result.errors.append("item_defaults.packaging_unit must not be empty")

    return result
