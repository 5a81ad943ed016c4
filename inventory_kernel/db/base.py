"""
Module: inventory_kernel.db.base
Responsibility: Declarative base for SQLAlchemy ORM models and the
    ``inventory_items`` row model.
Architecture position: Kernel > DB. Lowest-level import target for
    persistence code. MUST NOT import from inventory_engines.

Invariants enforced:
    - Decimal maps to Numeric(18, 4) so unit values and costs never
      round-trip through float.
    - ``uuid`` is the persistent identity; the process-local ``id`` of a
      LineItem never reaches the database.
"""

from decimal import Decimal
from typing import Any, ClassVar
from uuid import uuid4

from sqlalchemy import JSON, Numeric, String
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


class Base(DeclarativeBase):
    """Declarative base for all inventory ORM models."""

    type_annotation_map: ClassVar[dict] = {
        Decimal: Numeric(18, 4),
    }


class InventoryItemRecord(Base):
    """One stored inventory unit (a LineItem with a uuid)."""

    __tablename__ = "inventory_items"

    uuid: Mapped[str] = mapped_column(
        String(36),
        primary_key=True,
        default=lambda: str(uuid4()),
    )
    inventory_uuid: Mapped[str] = mapped_column(String(36), index=True)
    company_uuid: Mapped[str] = mapped_column(String(36), default="")
    item_code: Mapped[str | None] = mapped_column(String(100))
    unit: Mapped[str | None] = mapped_column(String(20))
    unit_value: Mapped[Decimal | None]
    packaging_unit: Mapped[str | None] = mapped_column(String(50))
    cost: Mapped[Decimal | None]
    group_id: Mapped[str] = mapped_column(String(36), default="", index=True)
    properties: Mapped[dict[str, Any]] = mapped_column(JSON, default=dict)
    status: Mapped[str | None] = mapped_column(String(20))

    def to_row(self) -> dict[str, Any]:
        """Row dict in the shape ``LineItem.from_row`` expects."""
        return {
            "uuid": self.uuid,
            "company_uuid": self.company_uuid,
            "item_code": self.item_code,
            "unit": self.unit,
            "unit_value": self.unit_value,
            "packaging_unit": self.packaging_unit,
            "cost": self.cost,
            "group_id": self.group_id,
            "properties": self.properties or {},
            "status": self.status,
        }
