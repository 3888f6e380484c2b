"""Domain service: Rate Engine.

Turns a shipment summary and a distance factor into priced, itemized
quotes for every configured carrier service. Two parallel paths:

  Parcel: per-pound rate on billable weight plus a per-item handling fee,
    scaled by distance (and a residential multiplier), then fuel,
    residential and dimensional-weight surcharges.
  LTL: freight-class rate per hundredweight, scaled by distance, then
    fuel, lift gate and residential delivery surcharges, with the
    total floored at a minimum charge.

All amounts are integer minor units, rounded half-up at each step.
"""

from __future__ import annotations

import math
from decimal import Decimal

from loguru import logger

from rater.domain.model.quote import RateQuote, Surcharge
from rater.domain.model.rate_tables import CarrierService, RatingTables
from rater.domain.model.shipment import Destination, PackagingKind, ShipmentSummary
from rater.domain.model.value_objects import Money, round_half_up
from rater.domain.service.freight_classifier import FreightClassifier


class RateEngine:

    def __init__(self, tables: RatingTables, classifier: FreightClassifier) -> None:
        self._tables = tables
        self._classifier = classifier

    def quote(
        self,
        summary: ShipmentSummary,
        distance_factor: Decimal,
        destination: Destination,
        kind: PackagingKind,
    ) -> list[RateQuote]:
        """Quote every service for ``kind``, cheapest first."""
        if kind == PackagingKind.PALLET:
            freight_class = self._classifier.classify(summary.density)
            logger.debug(
                "LTL density {:.3f} lbs/ft3 -> freight class {}",
                float(summary.density),
                freight_class,
            )
            quotes = [
                self._quote_ltl(service, summary, distance_factor, destination, freight_class)
                for service in self._tables.services_for(kind)
            ]
        else:
            quotes = [
                self._quote_parcel(service, summary, distance_factor, destination)
                for service in self._tables.services_for(kind)
            ]

        return sorted(quotes, key=lambda q: q.total.amount)

    # --- Parcel ---------------------------------------------------------------

    def _quote_parcel(
        self,
        service: CarrierService,
        summary: ShipmentSummary,
        distance_factor: Decimal,
        destination: Destination,
    ) -> RateQuote:
        pricing = self._tables.parcel

        weight_cost = round_half_up(summary.billable_weight * service.per_unit_rate)
        handling_fee = summary.item_count * pricing.handling_fee_per_item
        base_cost = weight_cost + handling_fee

        multiplier = distance_factor
        if destination.residential:
            multiplier *= pricing.residential_multiplier
        adjusted_cost = round_half_up(base_cost * multiplier)

        surcharges = [
            self._surcharge("fuel", round_half_up(adjusted_cost * pricing.fuel_rate)),
        ]
        if destination.residential:
            surcharges.append(self._surcharge("residential", service.residential_fee))
        if summary.dimensional_weight > summary.actual_weight:
            penalty = round_half_up(summary.dimensional_excess * pricing.dimensional_penalty_rate)
            surcharges.append(self._surcharge("dimensional_weight", penalty))
        surcharges.extend(self._extra_surcharges(service))

        return self._compose(service, adjusted_cost, surcharges)

    # --- LTL ------------------------------------------------------------------

    def _quote_ltl(
        self,
        service: CarrierService,
        summary: ShipmentSummary,
        distance_factor: Decimal,
        destination: Destination,
        freight_class: Decimal,
    ) -> RateQuote:
        pricing = self._tables.ltl

        weight_units = max(1, math.ceil(summary.actual_weight / pricing.hundredweight))
        class_rate = self._classifier.rate_for(freight_class, service.tier)
        base_cost = round_half_up(weight_units * class_rate)
        adjusted_cost = round_half_up(base_cost * distance_factor)

        surcharges = [
            self._surcharge("fuel", round_half_up(adjusted_cost * pricing.fuel_rate)),
            self._surcharge("lift_gate", service.lift_gate_fee),
        ]
        if destination.residential:
            surcharges.append(self._surcharge("residential_delivery", service.residential_fee))
        surcharges.extend(self._extra_surcharges(service))

        return self._compose(
            service,
            adjusted_cost,
            surcharges,
            minimum_total=Money(pricing.minimum_charge, self._tables.currency),
        )

    # --- Internal helpers -----------------------------------------------------

    def _surcharge(self, surcharge_type: str, amount: int) -> Surcharge:
        return Surcharge(type=surcharge_type, amount=Money(amount, self._tables.currency))

    def _extra_surcharges(self, service: CarrierService) -> list[Surcharge]:
        return [self._surcharge(kind, amount) for kind, amount in service.extra_surcharges]

    def _compose(
        self,
        service: CarrierService,
        base_cost: int,
        surcharges: list[Surcharge],
        minimum_total: Money | None = None,
    ) -> RateQuote:
        quote = RateQuote.compose(
            carrier_name=service.carrier_name,
            service_name=service.service_name,
            service_id=service.service_id,
            valid_until=self._tables.valid_until,
            base=Money(base_cost, self._tables.currency),
            surcharges=surcharges,
            transit_time_days=service.transit_time_days,
            minimum_total=minimum_total,
        )
        logger.debug(
            "{} {}: base {} total {}",
            quote.carrier_name,
            quote.service_name,
            quote.base,
            quote.total,
        )
        return quote


def filter_quotes(
    quotes: list[RateQuote],
    services: list[str] | None = None,
    excluded_services: list[str] | None = None,
) -> list[RateQuote]:
    """Keep quotes in the allow-list (if any) and not in the deny-list.

    Order is preserved, so a sorted input stays sorted.
    """
    return [
        q for q in quotes if is_selected(q.service_id, services, excluded_services)
    ]


def is_selected(
    service_id: str,
    services: list[str] | None = None,
    excluded_services: list[str] | None = None,
) -> bool:
    """An empty allow-list allows everything."""
    if services and service_id not in services:
        return False
    return not excluded_services or service_id not in excluded_services
