"""Application service: Rate Shipment use case.

Runs the pure rating pipeline for one parsed request:

  ShipmentAnalyzer -> DistanceRater -> (FreightClassifier) -> RateEngine

then applies the caller's allow/deny lists. Stateless; safe to call from
any number of threads at once.
"""

from __future__ import annotations

from loguru import logger

from rater.application.dto import RateRequestSpec
from rater.domain.exceptions import ComputationUnavailableError, DomainException
from rater.domain.model.quote import RateQuote
from rater.domain.model.rate_tables import RatingTables
from rater.domain.service.distance_rater import DistanceRater
from rater.domain.service.freight_classifier import FreightClassifier
from rater.domain.service.rate_engine import RateEngine, filter_quotes, is_selected
from rater.domain.service.shipment_analyzer import ShipmentAnalyzer


class RateShipmentHandler:

    def __init__(self, tables: RatingTables) -> None:
        self._tables = tables
        self._analyzer = ShipmentAnalyzer(tables.parcel.dimensional_factor)
        self._distance_rater = DistanceRater(tables.distance)
        self._engine = RateEngine(tables, FreightClassifier(tables.freight))

    def handle(self, spec: RateRequestSpec) -> list[RateQuote]:
        """Quote a shipment, cheapest first.

        Domain errors propagate as-is; anything else is logged and
        replaced by ComputationUnavailableError so the cause never
        reaches the caller.
        """
        try:
            summary = self._analyzer.analyze(list(spec.items), spec.kind)
            logger.debug(
                "Shipment: actual {} lbs, dimensional {} lbs, volume {} ft3, {} item(s)",
                summary.actual_weight,
                summary.dimensional_weight,
                summary.total_volume,
                summary.item_count,
            )
            factor = self._distance_rater.rate(spec.destination)
            quotes = self._engine.quote(summary, factor, spec.destination, spec.kind)
        except DomainException:
            raise
        except Exception as exc:
            logger.exception("Rating failed for {} shipment", spec.kind.value)
            raise ComputationUnavailableError() from exc

        return filter_quotes(quotes, list(spec.services), list(spec.excluded_services))

    def candidate_count(self, spec: RateRequestSpec) -> int:
        """Number of services that could answer this request."""
        return sum(
            1
            for service in self._tables.services_for(spec.kind)
            if is_selected(service.service_id, list(spec.services), list(spec.excluded_services))
        )
