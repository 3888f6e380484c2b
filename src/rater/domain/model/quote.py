"""RateQuote: one priced carrier-service offer."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date

from rater.domain.exceptions import ValidationError
from rater.domain.model.value_objects import Money


@dataclass(frozen=True)
class Surcharge:
    type: str
    amount: Money


@dataclass(frozen=True)
class RateQuote:
    """An immutable quote.

    Use ``RateQuote.compose()`` to build one: it is the only place the
    total is computed, so ``total`` and the itemization can never disagree.
    """

    carrier_name: str
    service_name: str
    service_id: str
    valid_until: date
    base: Money
    surcharges: tuple[Surcharge, ...]
    total: Money
    transit_time_days: int

    @staticmethod
    def compose(
        *,
        carrier_name: str,
        service_name: str,
        service_id: str,
        valid_until: date,
        base: Money,
        surcharges: list[Surcharge],
        transit_time_days: int,
        minimum_total: Money | None = None,
    ) -> RateQuote:
        """Build a quote with ``total = base + sum(surcharges)``.

        When ``minimum_total`` is given the total is floored at it; the
        itemization is left as computed.
        """
        if not service_id:
            raise ValidationError("Quote requires a service ID")

        total = base
        for surcharge in surcharges:
            total = total + surcharge.amount
        if minimum_total is not None and total < minimum_total:
            total = minimum_total

        return RateQuote(
            carrier_name=carrier_name,
            service_name=service_name,
            service_id=service_id,
            valid_until=valid_until,
            base=base,
            surcharges=tuple(surcharges),
            total=total,
            transit_time_days=transit_time_days,
        )

    def surcharge(self, surcharge_type: str) -> Surcharge | None:
        for s in self.surcharges:
            if s.type == surcharge_type:
                return s
        return None
