"""
Typed Exception Hierarchy for the Inventory Kernel.

Every error has a typed class (catch by type, not message), a ``code``
class attribute (machine-readable, API-safe) and structured attributes
carrying the offending values.

    InventoryKernelError (base)
    |
    +-- InvalidArgumentError (also a ValueError)
    |   +-- InvalidGroupSizeError
    |   +-- InvalidCountError
    |   +-- InvalidGroupIdError
    |   +-- InvalidViewModeError
    |   +-- InvalidFieldError
    |
    +-- IdentityError
        +-- DuplicateItemIdError

Category        | Code                  | When Raised
----------------|-----------------------|------------------------------------------
Argument        | INVALID_GROUP_SIZE    | Group size is not an int or out of range
                | INVALID_COUNT         | Duplicate count is not an int or < 1
                | INVALID_GROUP_ID      | Blank group id passed to a group operation
                | INVALID_VIEW_MODE     | View mode is not "flat" or "grouped"
                | INVALID_FIELD         | Unknown or identity field in an edit
----------------|-----------------------|------------------------------------------
Identity        | DUPLICATE_ITEM_ID     | Same process-local id used by two items

Referential absences (a group id or item id that is not in the list) are
NOT errors: operations return their input unchanged.
"""

from typing import Any


class InventoryKernelError(Exception):
    """
    Base exception for all inventory kernel errors.

    All subclasses must have a `code` class attribute for machine-readable
    error identification.
    """

    code: str = "INVENTORY_KERNEL_ERROR"


# Argument exceptions


class InvalidArgumentError(InventoryKernelError, ValueError):
    """Base exception for caller contract violations on argument values."""

    code: str = "INVALID_ARGUMENT"


class InvalidGroupSizeError(InvalidArgumentError):
    """Group size is not an integer or outside the allowed range."""

    code: str = "INVALID_GROUP_SIZE"

    def __init__(self, group_size: Any, minimum: int, maximum: int | None = None):
        self.group_size = group_size
        self.minimum = minimum
        self.maximum = maximum
        bounds = f">= {minimum}" if maximum is None else f"between {minimum} and {maximum}"
        super().__init__(f"Invalid group size {group_size!r}: must be an integer {bounds}")


class InvalidCountError(InvalidArgumentError):
    """Duplicate count is not a positive integer."""

    code: str = "INVALID_COUNT"

    def __init__(self, count: Any):
        self.count = count
        super().__init__(f"Invalid count {count!r}: must be an integer >= 1")


class InvalidGroupIdError(InvalidArgumentError):
    """Group operations require a non-blank group id."""

    code: str = "INVALID_GROUP_ID"

    def __init__(self, group_id: Any):
        self.group_id = group_id
        super().__init__(f"Invalid group id {group_id!r}: must be a non-blank string")


class InvalidViewModeError(InvalidArgumentError):
    """View mode is not one of the supported modes."""

    code: str = "INVALID_VIEW_MODE"

    def __init__(self, mode: Any):
        self.mode = mode
        super().__init__(f"Invalid view mode {mode!r}: expected 'flat' or 'grouped'")


class InvalidFieldError(InvalidArgumentError):
    """Field cannot be edited (unknown or an identity field)."""

    code: str = "INVALID_FIELD"

    def __init__(self, field_name: str, reason: str):
        self.field_name = field_name
        self.reason = reason
        super().__init__(f"Cannot edit field '{field_name}': {reason}")


# Identity exceptions


class IdentityError(InventoryKernelError):
    """Base exception for process-local identity violations."""

    code: str = "IDENTITY_ERROR"


class DuplicateItemIdError(IdentityError):
    """Two live items share the same process-local id."""

    code: str = "DUPLICATE_ITEM_ID"

    def __init__(self, item_id: int, occurrences: int):
        self.item_id = item_id
        self.occurrences = occurrences
        super().__init__(
            f"Item id {item_id} is used by {occurrences} items in the same list"
        )
