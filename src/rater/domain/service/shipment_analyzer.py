"""Domain service: Shipment Analyzer.

Reduces a list of physical items to the aggregate metrics the rate engine
needs. Missing or unusable numbers are replaced by conservative defaults
(never zero) so a single blank field can't abort the pipeline or cause a
division by zero further down.
"""

from __future__ import annotations

import sys
from decimal import Decimal

from rater.domain.model.shipment import (
    DimensionUnit,
    PackagingKind,
    ShipmentItem,
    ShipmentSummary,
)

INCHES_PER_FOOT = Decimal("12")

# Stand-in for "infinitely dense" when a shipment has no volume; it sorts
# into the densest freight class.
MAX_DENSITY = Decimal(repr(sys.float_info.max))

DEFAULT_WEIGHT = {
    PackagingKind.PACKAGE: Decimal("1"),
    PackagingKind.PALLET: Decimal("50"),
}

DEFAULT_DIMENSIONS = {
    PackagingKind.PACKAGE: (Decimal("12"), Decimal("8"), Decimal("6"), DimensionUnit.INCH),
    PackagingKind.PALLET: (Decimal("4"), Decimal("4"), Decimal("4"), DimensionUnit.FOOT),
}


def _positive(value: Decimal | None) -> Decimal | None:
    if value is None or value <= 0:
        return None
    return value


class ShipmentAnalyzer:

    def __init__(self, dimensional_factor: Decimal = Decimal("166")) -> None:
        self._dimensional_factor = dimensional_factor

    def analyze(self, items: list[ShipmentItem], kind: PackagingKind) -> ShipmentSummary:
        """Aggregate weight and volume for ``items`` rated as ``kind``."""
        actual_weight = Decimal("0")
        total_volume = Decimal("0")
        item_count = 0
        max_dimension = Decimal("0")

        for item in items:
            quantity = item.quantity if item.quantity > 0 else 1
            weight = _positive(item.weight) or DEFAULT_WEIGHT[item.kind]
            actual_weight += weight * quantity

            volume, largest_axis = self._item_volume(item)
            total_volume += volume * quantity
            max_dimension = max(max_dimension, largest_axis)
            item_count += quantity

        if kind == PackagingKind.PACKAGE:
            dimensional_weight = total_volume * self._dimensional_factor
        else:
            # LTL is never billed on dimensional weight
            dimensional_weight = actual_weight

        if total_volume > 0:
            density = actual_weight / total_volume
        else:
            density = MAX_DENSITY

        return ShipmentSummary(
            actual_weight=actual_weight,
            dimensional_weight=dimensional_weight,
            total_volume=total_volume,
            item_count=item_count,
            max_dimension=max_dimension,
            density=density,
        )

    # --- Internal helpers -----------------------------------------------------

    @staticmethod
    def _item_volume(item: ShipmentItem) -> tuple[Decimal, Decimal]:
        """Return (cubic feet for one unit, largest raw axis)."""
        default_l, default_w, default_h, default_unit = DEFAULT_DIMENSIONS[item.kind]
        dims = item.dimensions
        unit = dims.unit or default_unit

        # Defaults are expressed in the kind's natural unit
        scale = Decimal("1")
        if unit != default_unit:
            scale = INCHES_PER_FOOT if unit == DimensionUnit.INCH else 1 / INCHES_PER_FOOT

        length = _positive(dims.length) or default_l * scale
        width = _positive(dims.width) or default_w * scale
        height = _positive(dims.height) or default_h * scale
        largest_axis = max(length, width, height)

        if item.volume is not None and item.volume >= 0:
            return item.volume, largest_axis

        if unit == DimensionUnit.INCH:
            length /= INCHES_PER_FOOT
            width /= INCHES_PER_FOOT
            height /= INCHES_PER_FOOT
        return length * width * height, largest_axis
