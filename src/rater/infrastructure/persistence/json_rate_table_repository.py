"""JSON-file-backed implementation of RateTableRepository."""

from __future__ import annotations

import json
from datetime import date
from decimal import Decimal
from pathlib import Path

from loguru import logger

from rater.domain.exceptions import ValidationError
from rater.domain.model.rate_tables import (
    CarrierService,
    DistanceTable,
    FreightClassTable,
    LtlPricing,
    ParcelPricing,
    RatingTables,
    ServiceTier,
)
from rater.domain.model.shipment import PackagingKind
from rater.domain.repository.rate_table_repository import RateTableRepository


def _dec(value) -> Decimal:
    return Decimal(str(value))


class JsonRateTableRepository(RateTableRepository):

    def __init__(self, file_path: Path) -> None:
        self._file_path = file_path

    # --- RateTableRepository interface ----------------------------------------

    def load(self) -> RatingTables:
        text = self._file_path.read_text(encoding="utf-8")
        try:
            tables = self._to_domain(json.loads(text, parse_float=Decimal))
        except (KeyError, TypeError, ValueError) as exc:
            raise ValidationError(
                f"Invalid rate tables in {self._file_path}: {exc!r}"
            ) from exc

        logger.debug(
            "Loaded {} service(s), {} cities, {} regions from {}",
            len(tables.services),
            len(tables.distance.city_factors),
            len(tables.distance.region_factors),
            self._file_path,
        )
        return tables

    # --- Serialization --------------------------------------------------------

    @classmethod
    def _to_domain(cls, raw: dict) -> RatingTables:
        return RatingTables(
            distance=cls._distance(raw["distance"]),
            freight=cls._freight(raw["freight_classes"]),
            parcel=cls._parcel(raw["parcel"]),
            ltl=cls._ltl(raw["ltl"]),
            services=tuple(cls._service(s) for s in raw["services"]),
            valid_until=date.fromisoformat(raw["valid_until"]),
            currency=raw.get("currency", "CAD"),
        )

    @staticmethod
    def _distance(raw: dict) -> DistanceTable:
        return DistanceTable(
            city_factors={k.strip().lower(): _dec(v) for k, v in raw["cities"].items()},
            region_factors={k.strip().lower(): _dec(v) for k, v in raw["regions"].items()},
            default_factor=_dec(raw.get("default_factor", "1.5")),
            origin=raw.get("origin", ""),
        )

    @staticmethod
    def _freight(raw: dict) -> FreightClassTable:
        ladder = sorted(
            ((_dec(step["min_density"]), _dec(step["freight_class"])) for step in raw["ladder"]),
            key=lambda step: step[0],
            reverse=True,
        )
        rates = {
            _dec(freight_class): {ServiceTier(tier): _dec(rate) for tier, rate in tiers.items()}
            for freight_class, tiers in raw["rates"].items()
        }
        return FreightClassTable(
            ladder=tuple(ladder),
            rates=rates,
            default_rate=_dec(raw["default_rate"]),
            lightest_class=_dec(raw.get("lightest_class", "500")),
        )

    @staticmethod
    def _parcel(raw: dict) -> ParcelPricing:
        return ParcelPricing(
            handling_fee_per_item=int(raw["handling_fee_per_item"]),
            residential_multiplier=_dec(raw["residential_multiplier"]),
            fuel_rate=_dec(raw["fuel_rate"]),
            dimensional_penalty_rate=_dec(raw["dimensional_penalty_rate"]),
            dimensional_factor=_dec(raw.get("dimensional_factor", "166")),
        )

    @staticmethod
    def _ltl(raw: dict) -> LtlPricing:
        return LtlPricing(
            fuel_rate=_dec(raw["fuel_rate"]),
            minimum_charge=int(raw["minimum_charge"]),
            hundredweight=_dec(raw.get("hundredweight", "100")),
        )

    @staticmethod
    def _service(raw: dict) -> CarrierService:
        return CarrierService(
            service_id=raw["service_id"],
            carrier_name=raw["carrier_name"],
            service_name=raw["service_name"],
            kind=PackagingKind(raw["packaging_type"]),
            transit_time_days=int(raw["transit_time_days"]),
            per_unit_rate=_dec(raw.get("per_unit_rate", 0)),
            tier=ServiceTier(raw.get("tier", ServiceTier.STANDARD.value)),
            residential_fee=int(raw.get("residential_fee", 0)),
            lift_gate_fee=int(raw.get("lift_gate_fee", 0)),
            extra_surcharges=tuple(
                (extra["type"], int(extra["amount"]))
                for extra in raw.get("extra_surcharges", [])
            ),
        )
