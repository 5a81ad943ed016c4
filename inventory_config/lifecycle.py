"""
Configuration lifecycle status.

Each configuration set declares a status. When several sets match a
company, PUBLISHED sets win over the rest. SUPERSEDED sets are retired
and never selected.
"""

from enum import Enum, unique


@unique
class ConfigStatus(str, Enum):
    """Lifecycle status for a configuration set."""

    DRAFT = "draft"
    REVIEWED = "reviewed"
    PUBLISHED = "published"
    SUPERSEDED = "superseded"

    @property
    def is_selectable(self) -> bool:
        return self is not ConfigStatus.SUPERSEDED
