"""Tests for parsing raw rate-request payloads."""

from decimal import Decimal

import pytest

from rater.application.parse_rate_request import parse_rate_request
from rater.domain.exceptions import InvalidInputError
from rater.domain.model.shipment import DimensionUnit, PackagingKind


def _payload(**details_overrides) -> dict:
    details = {
        "packaging_type": "package",
        "destination": {"city": "Toronto", "region": "ON", "residential": True, "zip": "M5V 2T6"},
        "packaging_properties": {
            "packages": [
                {
                    "weight": 5,
                    "quantity": 2,
                    "dimensions": {"length": 12, "width": 8, "height": 6, "unit": "in"},
                }
            ]
        },
    }
    details.update(details_overrides)
    return {"services": ["CP_REGULAR"], "excluded_services": [], "details": details}


class TestParseHappyPath:

    def test_parses_package_request(self):
        spec = parse_rate_request(_payload())
        assert spec.kind == PackagingKind.PACKAGE
        assert spec.services == ("CP_REGULAR",)
        assert spec.excluded_services == ()
        item = spec.items[0]
        assert item.weight == Decimal("5")
        assert item.quantity == 2
        assert item.dimensions.unit == DimensionUnit.INCH
        assert item.dimensions.length == Decimal("12")

    def test_parses_destination(self):
        dest = parse_rate_request(_payload()).destination
        assert dest.city == "Toronto"
        assert dest.region == "ON"
        assert dest.residential is True
        assert dest.postal_code == "M5V 2T6"

    def test_nested_address_form(self):
        spec = parse_rate_request(
            _payload(destination={"address": {"city": "Halifax", "region": "NS"}, "residential": "false"})
        )
        assert spec.destination.city == "Halifax"
        assert spec.destination.residential is False

    def test_pallets(self):
        spec = parse_rate_request(
            _payload(
                packaging_type="pallet",
                packaging_properties={"pallets": [{"weight": "400", "volume": 48}]},
            )
        )
        assert spec.kind == PackagingKind.PALLET
        assert spec.items[0].kind == PackagingKind.PALLET
        assert spec.items[0].volume == Decimal("48")

    def test_measurements_form(self):
        spec = parse_rate_request(
            _payload(
                packaging_properties={
                    "packages": [
                        {
                            "measurements": {
                                "weight": {"unit": "lb", "value": 7},
                                "cuboid": {"unit": "ft", "l": 2, "w": 1, "h": 1},
                            }
                        }
                    ]
                }
            )
        )
        item = spec.items[0]
        assert item.weight == Decimal("7")
        assert item.dimensions.unit == DimensionUnit.FOOT
        assert item.dimensions.length == Decimal("2")

    def test_blank_numbers_left_for_defaults(self):
        spec = parse_rate_request(
            _payload(packaging_properties={"packages": [{"weight": "", "quantity": -2, "dimensions": "n/a"}]})
        )
        item = spec.items[0]
        assert item.weight is None
        assert item.quantity == 1
        assert item.dimensions.length is None

    def test_service_lists_optional(self):
        payload = _payload()
        del payload["services"]
        del payload["excluded_services"]
        spec = parse_rate_request(payload)
        assert spec.services == ()
        assert spec.excluded_services == ()


class TestParseInvalidInput:

    def test_body_must_be_object(self):
        with pytest.raises(InvalidInputError, match="JSON object"):
            parse_rate_request(["not", "a", "dict"])

    def test_details_required(self):
        with pytest.raises(InvalidInputError, match="'details' is required"):
            parse_rate_request({"services": []})

    def test_unknown_packaging_type(self):
        with pytest.raises(InvalidInputError, match="Invalid packaging_type"):
            parse_rate_request(_payload(packaging_type="crate"))

    def test_destination_required(self):
        with pytest.raises(InvalidInputError, match="'destination' is required"):
            parse_rate_request(_payload(destination=None))

    def test_packaging_properties_required(self):
        with pytest.raises(InvalidInputError, match="'packaging_properties' is required"):
            parse_rate_request(_payload(packaging_properties=None))

    def test_item_list_must_match_packaging_type(self):
        with pytest.raises(InvalidInputError, match="packaging_properties.pallets"):
            parse_rate_request(_payload(packaging_type="pallet"))

    def test_empty_item_list(self):
        with pytest.raises(InvalidInputError, match="packaging_properties.packages"):
            parse_rate_request(_payload(packaging_properties={"packages": []}))

    def test_item_must_be_object(self):
        with pytest.raises(InvalidInputError, match=r"packages\[0\]"):
            parse_rate_request(_payload(packaging_properties={"packages": [5]}))

    def test_services_must_be_list(self):
        payload = _payload()
        payload["services"] = "CP_REGULAR"
        with pytest.raises(InvalidInputError, match="'services' must be a list"):
            parse_rate_request(payload)
