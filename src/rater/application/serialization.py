"""Wire format for quotes and poll results.

Every monetary field is ``{"currency", "value"}`` where ``value`` is the
integer minor-unit amount as a base-10 string, never a float.
"""

from __future__ import annotations

from rater.application.dto import JobView
from rater.domain.model.quote import RateQuote
from rater.domain.model.value_objects import Money


def money_to_raw(money: Money) -> dict:
    return {"currency": money.currency, "value": str(money.amount)}


def quote_to_raw(quote: RateQuote) -> dict:
    return {
        "carrier_name": quote.carrier_name,
        "service_name": quote.service_name,
        "service_id": quote.service_id,
        "valid_until": {
            "year": quote.valid_until.year,
            "month": quote.valid_until.month,
            "day": quote.valid_until.day,
        },
        "total": money_to_raw(quote.total),
        "base": money_to_raw(quote.base),
        "surcharges": [
            {"type": s.type, "amount": money_to_raw(s.amount)}
            for s in quote.surcharges
        ],
        "taxes": [],
        "transit_time_days": quote.transit_time_days,
        "transit_time_not_available": False,
    }


def job_view_to_raw(view: JobView) -> dict:
    return {
        "status": {
            "done": view.done,
            "total": view.total,
            "complete": view.complete,
        },
        "rates": [quote_to_raw(q) for q in view.rates],
    }
