"""Static rating configuration: geography, freight classes, fees, services.

These are data, not logic. They are loaded from JSON by the
infrastructure layer and handed to the rating services, so tables can be
swapped or extended without touching the engine.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from enum import Enum

from rater.domain.model.shipment import PackagingKind


class ServiceTier(Enum):
    STANDARD = "standard"
    EXPRESS = "express"
    PREMIUM = "premium"


@dataclass(frozen=True)
class DistanceTable:
    """Distance factors relative to a single fixed origin.

    Keys are stored lower-cased so lookups are case-insensitive.
    """

    city_factors: dict[str, Decimal]
    region_factors: dict[str, Decimal]
    default_factor: Decimal = Decimal("1.5")
    origin: str = ""


@dataclass(frozen=True)
class FreightClassTable:
    """Density ladder and per-class, per-tier rates (cents per 100 lbs).

    ``ladder`` is ordered by descending minimum density; the last step is
    the catch-all for anything lighter.
    """

    ladder: tuple[tuple[Decimal, Decimal], ...]
    rates: dict[Decimal, dict[ServiceTier, Decimal]]
    default_rate: Decimal
    lightest_class: Decimal = Decimal("500")


@dataclass(frozen=True)
class ParcelPricing:
    handling_fee_per_item: int
    residential_multiplier: Decimal
    fuel_rate: Decimal
    dimensional_penalty_rate: Decimal
    dimensional_factor: Decimal = Decimal("166")


@dataclass(frozen=True)
class LtlPricing:
    fuel_rate: Decimal
    minimum_charge: int
    hundredweight: Decimal = Decimal("100")


@dataclass(frozen=True)
class CarrierService:
    """One carrier/service pair and its fixed fees.

    Parcel services price by ``per_unit_rate`` (cents per billable lb);
    LTL services price by freight class using ``tier``.
    """

    service_id: str
    carrier_name: str
    service_name: str
    kind: PackagingKind
    transit_time_days: int
    per_unit_rate: Decimal = Decimal("0")
    tier: ServiceTier = ServiceTier.STANDARD
    residential_fee: int = 0
    lift_gate_fee: int = 0
    extra_surcharges: tuple[tuple[str, int], ...] = ()


@dataclass(frozen=True)
class RatingTables:
    distance: DistanceTable
    freight: FreightClassTable
    parcel: ParcelPricing
    ltl: LtlPricing
    services: tuple[CarrierService, ...]
    valid_until: date
    currency: str = "CAD"
    metadata: dict[str, str] = field(default_factory=dict)

    def services_for(self, kind: PackagingKind) -> list[CarrierService]:
        return [s for s in self.services if s.kind == kind]
