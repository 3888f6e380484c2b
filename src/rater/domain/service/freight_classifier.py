"""Domain service: Freight Classifier (LTL only).

Density (lbs per cubic foot) maps to one of the 18 standard freight
classes, 50 through 500; denser freight gets a lower, cheaper class.
"""

from __future__ import annotations

from decimal import Decimal

from loguru import logger

from rater.domain.model.rate_tables import FreightClassTable, ServiceTier


class FreightClassifier:

    def __init__(self, table: FreightClassTable) -> None:
        self._table = table

    def classify(self, density: Decimal) -> Decimal:
        for min_density, freight_class in self._table.ladder:
            if density >= min_density:
                return freight_class
        return self._table.lightest_class

    def rate_for(self, freight_class: Decimal, tier: ServiceTier) -> Decimal:
        """Cents per hundredweight for a class and service tier.

        A class missing from the table, or a class row without the tier,
        falls back to the mid-table default so the pipeline always produces
        a number.
        """
        rate = self._table.rates.get(freight_class, {}).get(tier)
        if rate is None:
            logger.warning(
                "No rate for freight class {} tier '{}', using default {}",
                freight_class,
                tier.value,
                self._table.default_rate,
            )
            return self._table.default_rate
        return rate
