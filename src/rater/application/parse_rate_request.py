"""Application service: turn a raw rate-request payload into a RateRequestSpec.

Only structurally missing sections (no ``details``, no destination, no
item list for the declared packaging type) are rejected. Individual
numeric fields that are blank or nonsensical are left unset and the
analyzer substitutes defaults for them.

Expected shape::

    {
      "services": ["CP_EXPEDITED"],            # optional allow-list
      "excluded_services": ["PUR_GROUND"],     # optional deny-list
      "details": {
        "packaging_type": "package" | "pallet",
        "destination": {"city": ..., "region": ..., "residential": bool,
                        "postal_code" | "zip": ...},
        "packaging_properties": {"packages" | "pallets": [ {item}, ... ]}
      }
    }

An item is ``{"weight", "quantity", "dimensions": {"length", "width",
"height", "unit"}, "volume"}``; the nested ``measurements`` form
(``{"weight": {"value"}, "cuboid": {"l", "w", "h", "unit"}}``) is accepted
too.
"""

from __future__ import annotations

from typing import Any

from rater.application.dto import RateRequestSpec
from rater.domain.exceptions import InvalidInputError
from rater.domain.model.shipment import (
    Destination,
    DimensionUnit,
    Dimensions,
    PackagingKind,
    ShipmentItem,
)
from rater.domain.model.value_objects import to_decimal

_ITEM_LIST_KEY = {
    PackagingKind.PACKAGE: "packages",
    PackagingKind.PALLET: "pallets",
}

_TRUTHY = {"true", "yes", "y", "1"}


def parse_rate_request(payload: Any) -> RateRequestSpec:
    if not isinstance(payload, dict):
        raise InvalidInputError("Rate request body must be a JSON object")

    details = _require_section(payload, "details")
    kind = _parse_kind(details.get("packaging_type"))
    destination = _parse_destination(_require_section(details, "destination"))
    properties = _require_section(details, "packaging_properties")

    list_key = _ITEM_LIST_KEY[kind]
    raw_items = properties.get(list_key)
    if not isinstance(raw_items, list) or not raw_items:
        raise InvalidInputError(
            f"packaging_properties.{list_key} is required for packaging_type "
            f"'{kind.value}'"
        )

    items = []
    for index, raw in enumerate(raw_items):
        if not isinstance(raw, dict):
            raise InvalidInputError(f"{list_key}[{index}] must be an object")
        items.append(_parse_item(raw, kind))

    return RateRequestSpec(
        kind=kind,
        items=tuple(items),
        destination=destination,
        services=_parse_service_list(payload, "services"),
        excluded_services=_parse_service_list(payload, "excluded_services"),
    )


# --- Sections -----------------------------------------------------------------


def _require_section(parent: dict, key: str) -> dict:
    section = parent.get(key)
    if not isinstance(section, dict):
        raise InvalidInputError(f"'{key}' is required")
    return section


def _parse_kind(raw: Any) -> PackagingKind:
    try:
        return PackagingKind(str(raw).strip().lower())
    except ValueError:
        raise InvalidInputError(
            f"Invalid packaging_type {raw!r}. Expected 'package' or 'pallet'."
        )


def _parse_destination(raw: dict) -> Destination:
    # Accept both a flat destination and one nested under "address"
    address = raw.get("address") if isinstance(raw.get("address"), dict) else raw
    postal = address.get("postal_code") or address.get("zip")
    return Destination(
        city=str(address.get("city") or ""),
        region=str(address.get("region") or address.get("province") or ""),
        residential=_parse_flag(raw.get("residential", address.get("residential"))),
        postal_code=str(postal) if postal else None,
    )


def _parse_service_list(payload: dict, key: str) -> tuple[str, ...]:
    raw = payload.get(key)
    if raw is None:
        return ()
    if not isinstance(raw, list):
        raise InvalidInputError(f"'{key}' must be a list of service IDs")
    return tuple(str(s) for s in raw)


# --- Items --------------------------------------------------------------------


def _parse_item(raw: dict, kind: PackagingKind) -> ShipmentItem:
    measurements = raw.get("measurements")
    if isinstance(measurements, dict):
        weight_raw = measurements.get("weight")
        cuboid = measurements.get("cuboid") or {}
        dims_raw = {
            "length": cuboid.get("l"),
            "width": cuboid.get("w"),
            "height": cuboid.get("h"),
            "unit": cuboid.get("unit"),
        }
    else:
        weight_raw = raw.get("weight")
        dims_raw = raw.get("dimensions") or {}

    if isinstance(weight_raw, dict):
        weight_raw = weight_raw.get("value")
    if not isinstance(dims_raw, dict):
        dims_raw = {}

    return ShipmentItem(
        kind=kind,
        weight=to_decimal(weight_raw),
        quantity=_parse_quantity(raw.get("quantity")),
        dimensions=Dimensions(
            length=to_decimal(dims_raw.get("length")),
            width=to_decimal(dims_raw.get("width")),
            height=to_decimal(dims_raw.get("height")),
            unit=DimensionUnit.parse(dims_raw.get("unit")),
        ),
        volume=to_decimal(raw.get("volume")),
    )


def _parse_quantity(raw: Any) -> int:
    value = to_decimal(raw)
    if value is None or value <= 0 or value != value.to_integral_value():
        return 1
    return int(value)


def _parse_flag(raw: Any) -> bool:
    if isinstance(raw, str):
        return raw.strip().lower() in _TRUTHY
    return bool(raw)
