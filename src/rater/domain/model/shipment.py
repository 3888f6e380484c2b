"""Shipment description: the physical items and where they are going.

Everything here is immutable once a request has been parsed. The numeric
fields on ShipmentItem are optional on purpose: the analyzer substitutes
conservative defaults rather than rejecting a request over one blank field.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal
from enum import Enum


class PackagingKind(Enum):
    PACKAGE = "package"
    PALLET = "pallet"


class DimensionUnit(Enum):
    INCH = "inch"
    FOOT = "foot"

    @staticmethod
    def parse(raw: object) -> DimensionUnit | None:
        """Accept the common spellings ('in', 'inches', 'ft', 'feet', ...)."""
        if not isinstance(raw, str):
            return None
        return _UNIT_ALIASES.get(raw.strip().lower())


_UNIT_ALIASES = {
    "in": DimensionUnit.INCH,
    "inch": DimensionUnit.INCH,
    "inches": DimensionUnit.INCH,
    "ft": DimensionUnit.FOOT,
    "foot": DimensionUnit.FOOT,
    "feet": DimensionUnit.FOOT,
}


@dataclass(frozen=True)
class Dimensions:
    length: Decimal | None = None
    width: Decimal | None = None
    height: Decimal | None = None
    unit: DimensionUnit | None = None


@dataclass(frozen=True)
class ShipmentItem:
    """One physical unit (a parcel or a pallet), possibly repeated."""

    kind: PackagingKind
    weight: Decimal | None = None
    quantity: int = 1
    dimensions: Dimensions = field(default_factory=Dimensions)
    volume: Decimal | None = None  # cubic feet, trusted when present


@dataclass(frozen=True)
class Destination:
    city: str
    region: str
    residential: bool = False
    postal_code: str | None = None


@dataclass(frozen=True)
class ShipmentSummary:
    """Aggregate metrics for one rating run.

    Invariants:
    - ``billable_weight`` is the larger of actual and dimensional weight
    - ``density`` is always a finite number, even for zero volume
    """

    actual_weight: Decimal
    dimensional_weight: Decimal
    total_volume: Decimal
    item_count: int
    max_dimension: Decimal
    density: Decimal

    @property
    def billable_weight(self) -> Decimal:
        return max(self.actual_weight, self.dimensional_weight)

    @property
    def dimensional_excess(self) -> Decimal:
        """Weight billed above the actual weight because of bulk."""
        return max(Decimal("0"), self.dimensional_weight - self.actual_weight)
