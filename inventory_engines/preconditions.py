"""Argument checks shared by the grouping engines.

Each check raises before any output is built, so a rejected call never
leaves a half-built list behind.
"""

from __future__ import annotations

from typing import Any

from inventory_kernel.domain.line_item import ViewMode
from inventory_kernel.exceptions import (
    InvalidCountError,
    InvalidGroupIdError,
    InvalidGroupSizeError,
    InvalidViewModeError,
)


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def require_group_size(
    group_size: Any,
    minimum: int = 1,
    maximum: int | None = None,
) -> int:
    if not _is_int(group_size) or group_size < minimum:
        raise InvalidGroupSizeError(group_size, minimum, maximum)
    if maximum is not None and group_size > maximum:
        raise InvalidGroupSizeError(group_size, minimum, maximum)
    return group_size


def require_resize_target(new_size: Any, maximum: int | None = None) -> int:
    # Zero and negative sizes are valid here: they remove the group.
    if not _is_int(new_size):
        raise InvalidGroupSizeError(new_size, minimum=0, maximum=maximum)
    if maximum is not None and new_size > maximum:
        raise InvalidGroupSizeError(new_size, minimum=0, maximum=maximum)
    return new_size


def require_count(count: Any) -> int:
    if not _is_int(count) or count < 1:
        raise InvalidCountError(count)
    return count


def require_group_id(group_id: Any) -> str:
    if not isinstance(group_id, str) or not group_id.strip():
        raise InvalidGroupIdError(group_id)
    return group_id


def require_view_mode(mode: Any) -> ViewMode:
    try:
        return ViewMode(mode)
    except ValueError:
        raise InvalidViewModeError(mode) from None
