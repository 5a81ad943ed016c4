"""
Line items -- Immutable inventory units and their grouping vocabulary.

Responsibility:
    Defines LineItem (one physical/logical unit of a parent inventory
    record), the GroupKey tagged union used to bucket items, GroupInfo
    (derived per-item group metadata), ViewMode and ItemDefaults.

Architecture position:
    Kernel > Domain -- pure functional core, zero I/O.
    Imported by inventory_engines and inventory_kernel.db.

Invariants enforced:
    - ``id`` is process-local and never persisted; ``to_row()`` omits it.
    - A blank or missing ``group_id`` means "not grouped".
    - Synthetic group keys live only inside a partition; they are a separate
      type from real keys and are never written back into ``group_id``.

Failure modes:
    - DuplicateItemIdError from ``ensure_unique_ids`` when two items share
      an ``id``.
"""

from __future__ import annotations

from collections import Counter
from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass, field
from decimal import Decimal
from enum import Enum
from typing import Any

from inventory_kernel.exceptions import DuplicateItemIdError

# Fields a caller may edit through the engines. Identity fields are excluded.
DOMAIN_FIELDS: tuple[str, ...] = (
    "company_uuid",
    "item_code",
    "unit",
    "unit_value",
    "packaging_unit",
    "cost",
    "properties",
    "status",
)

IDENTITY_FIELDS: tuple[str, ...] = ("id", "uuid", "group_id", "is_new")

_DECIMAL_FIELDS = ("unit_value", "cost")


def _to_decimal(value: Any) -> Decimal | None:
    if value is None or isinstance(value, Decimal):
        return value
    return Decimal(str(value))


def coerce_field_value(field_name: str, value: Any) -> Any:
    """Normalize an edited value to the type LineItem stores for the field."""
    if field_name in _DECIMAL_FIELDS:
        return _to_decimal(value)
    if field_name == "properties":
        return dict(value or {})
    return value


@dataclass(frozen=True, slots=True)
class LineItem:
    """
    One inventory unit belonging to a parent inventory record.

    Contract:
        Frozen; engines derive new items with ``dataclasses.replace``.
    Guarantees:
        - ``properties`` is excluded from hashing so items stay hashable.
    Non-goals:
        - Does not validate domain attributes; see
          ``inventory_engines.sync_plan.validate_items``.
    """

    id: int
    company_uuid: str = ""
    uuid: str | None = None
    group_id: str | None = None
    is_new: bool = False
    item_code: str | None = None
    unit: str | None = None
    unit_value: Decimal | None = None
    packaging_unit: str | None = None
    cost: Decimal | None = None
    properties: Mapping[str, Any] = field(default_factory=dict, hash=False)
    status: str | None = None

    @property
    def is_grouped(self) -> bool:
        """True when the item carries a non-blank group id."""
        return bool(self.group_id and self.group_id.strip())

    @classmethod
    def from_row(cls, row: Mapping[str, Any], item_id: int) -> LineItem:
        """Build an item from a storage row. Unknown keys are ignored."""
        return cls(
            id=item_id,
            company_uuid=row.get("company_uuid") or "",
            uuid=row.get("uuid"),
            group_id=row.get("group_id"),
            is_new=bool(row.get("is_new", False)),
            item_code=row.get("item_code"),
            unit=row.get("unit"),
            unit_value=_to_decimal(row.get("unit_value")),
            packaging_unit=row.get("packaging_unit"),
            cost=_to_decimal(row.get("cost")),
            properties=dict(row.get("properties") or {}),
            status=row.get("status"),
        )

    def to_row(self) -> dict[str, Any]:
        """Storage-facing dict. ``id`` and ``is_new`` are never persisted."""
        return {
            "uuid": self.uuid,
            "company_uuid": self.company_uuid,
            "item_code": self.item_code,
            "unit": self.unit,
            "unit_value": self.unit_value,
            "packaging_unit": self.packaging_unit,
            "cost": self.cost,
            "group_id": self.group_id or "",
            "properties": dict(self.properties),
            "status": self.status,
        }


@dataclass(frozen=True, slots=True)
class RealGroupKey:
    """Bucket key for items sharing a stored ``group_id``."""

    group_id: str

    def __str__(self) -> str:
        return self.group_id


@dataclass(frozen=True, slots=True)
class SyntheticGroupKey:
    """Call-scoped bucket key for an ungrouped item.

    ``position`` is the item's index in the partitioned sequence, which makes
    the key unique within one call. ``ref`` is the uuid or id, for display.
    """

    position: int
    ref: str

    def __str__(self) -> str:
        return f"individual-{self.ref}"


GroupKey = RealGroupKey | SyntheticGroupKey


@dataclass(frozen=True, slots=True)
class GroupInfo:
    """Derived group metadata for one item."""

    is_group: bool
    group_size: int
    is_first_in_group: bool
    group_id: str | None


class ViewMode(str, Enum):
    """How a list of items is projected for display."""

    FLAT = "flat"  # Every item individually
    GROUPED = "grouped"  # One row per group


@dataclass(frozen=True, slots=True)
class ItemDefaults:
    """Field values for a freshly added item."""

    company_uuid: str = ""
    unit: str | None = None
    packaging_unit: str | None = None


@dataclass(frozen=True, slots=True)
class GroupingLimits:
    """
    Grouping controls for one company.

    ``max_group_size`` bounds group creation and growth (``None`` means
    unbounded). The defaults pre-fill the group-size and duplicate-count
    inputs and pick the initial view mode.
    """

    max_group_size: int | None = None
    default_group_size: int = 2
    default_duplicate_count: int = 1
    default_view_mode: ViewMode = ViewMode.GROUPED


def load_line_items(rows: Iterable[Mapping[str, Any]]) -> tuple[list[LineItem], int]:
    """Assign ids 1..n to loaded rows and return ``(items, next_id)``."""
    items = [LineItem.from_row(row, index + 1) for index, row in enumerate(rows)]
    return items, len(items) + 1


def ensure_unique_ids(items: Sequence[LineItem]) -> None:
    """Raise DuplicateItemIdError if any process-local id appears twice."""
    counts = Counter(item.id for item in items)
    for item_id, occurrences in counts.items():
        if occurrences > 1:
            raise DuplicateItemIdError(item_id, occurrences)
