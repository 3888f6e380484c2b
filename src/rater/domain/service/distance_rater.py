"""Domain service: Distance Rater.

Maps a destination to a dimensionless price multiplier with a two-tier
lookup (city, then region) and a fixed default, so any destination,
including ones never seen before, gets a bounded factor.
"""

from __future__ import annotations

from decimal import Decimal

from loguru import logger

from rater.domain.model.rate_tables import DistanceTable
from rater.domain.model.shipment import Destination


class DistanceRater:

    def __init__(self, table: DistanceTable) -> None:
        self._table = table

    def rate(self, destination: Destination) -> Decimal:
        city = (destination.city or "").strip().lower()
        factor = self._table.city_factors.get(city)
        if factor is not None:
            logger.debug("Distance factor {} for city '{}'", factor, destination.city)
            return factor

        region = (destination.region or "").strip().lower()
        factor = self._table.region_factors.get(region)
        if factor is not None:
            logger.debug(
                "City '{}' not rated, using region '{}' factor {}",
                destination.city,
                destination.region,
                factor,
            )
            return factor

        logger.debug(
            "No distance entry for '{}', '{}', using default factor {}",
            destination.city,
            destination.region,
            self._table.default_factor,
        )
        return self._table.default_factor
