"""Data Transfer Objects: plain containers that cross layer boundaries.

DTOs carry data between the CLI/HTTP adapters and the application layer
without exposing domain internals to the outside world.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from rater.domain.model.quote import RateQuote
from rater.domain.model.shipment import Destination, PackagingKind, ShipmentItem


@dataclass(frozen=True)
class RateRequestSpec:
    """Input: a parsed rate request, ready for the rating pipeline."""

    kind: PackagingKind
    items: tuple[ShipmentItem, ...]
    destination: Destination
    services: tuple[str, ...] = ()
    excluded_services: tuple[str, ...] = ()


@dataclass(frozen=True)
class JobView:
    """Output: what a poll sees.

    ``rates`` is empty until ``done`` is True.
    """

    done: bool
    total: int
    complete: int
    rates: tuple[RateQuote, ...] = field(default_factory=tuple)
