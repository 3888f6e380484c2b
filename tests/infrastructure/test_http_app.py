"""Component tests for the HTTP adapter, using FastAPI's TestClient."""

import pytest
from fastapi.testclient import TestClient

from rater.application.job_store import JobStore
from rater.application.rate_shipment import RateShipmentHandler
from rater.domain.exceptions import ComputationUnavailableError
from rater.infrastructure.http.app import create_app
from tests.fakes import FakeJobRepository, ManualScheduler, load_tables

PAYLOAD = {
    "services": [],
    "excluded_services": ["PUR_LTL"],
    "details": {
        "origin": {"city": "Toronto", "region": "ON"},
        "destination": {"city": "Iqaluit", "region": "NU", "residential": False, "zip": "X0A 0H0"},
        "packaging_type": "pallet",
        "packaging_properties": {
            "pallets": [
                {"weight": 50, "quantity": 10, "dimensions": {"length": 4, "width": 4, "height": 4, "unit": "ft"}}
            ]
        },
    },
}


class FailingRater(RateShipmentHandler):

    def handle(self, spec):
        raise ComputationUnavailableError()


@pytest.fixture
def scheduler():
    return ManualScheduler()


@pytest.fixture
def client(scheduler):
    store = JobStore(FakeJobRepository(), RateShipmentHandler(load_tables()), scheduler)
    return TestClient(create_app(store))


class TestSubmitEndpoint:

    def test_accepted(self, client):
        response = client.post("/rate", json=PAYLOAD)
        assert response.status_code == 202
        assert response.json()["request_id"]

    def test_invalid_input_is_400(self, client):
        response = client.post("/rate", json={"details": {"packaging_type": "pallet"}})
        assert response.status_code == 400
        assert "destination" in response.json()["message"]

    def test_missing_body_is_400(self, client):
        response = client.post("/rate")
        assert response.status_code == 400

    def test_body_that_is_not_json_is_400(self, client):
        response = client.post(
            "/rate", content=b"{not json", headers={"content-type": "application/json"}
        )
        assert response.status_code == 400
        assert response.json() == {"message": "Rate request body must be valid JSON"}


class TestPollEndpoint:

    def test_processing_then_done(self, client, scheduler):
        request_id = client.post("/rate", json=PAYLOAD).json()["request_id"]

        pending = client.get(f"/rate/{request_id}").json()
        assert pending["status"]["done"] is False
        assert pending["status"]["total"] == 2
        assert pending["rates"] == []

        scheduler.run_all()
        done = client.get(f"/rate/{request_id}").json()
        assert done["status"] == {"done": True, "total": 2, "complete": 2}
        assert [r["service_id"] for r in done["rates"]] == ["DR_LTL_STD", "DR_LTL_EXP"]

    def test_money_serialized_as_integer_strings(self, client, scheduler):
        request_id = client.post("/rate", json=PAYLOAD).json()["request_id"]
        scheduler.run_all()
        rate = client.get(f"/rate/{request_id}").json()["rates"][0]

        assert rate["total"] == {"currency": "CAD", "value": "478125"}
        assert rate["base"] == {"currency": "CAD", "value": "405000"}
        assert rate["surcharges"] == [
            {"type": "fuel", "amount": {"currency": "CAD", "value": "72900"}},
            {"type": "lift_gate", "amount": {"currency": "CAD", "value": "225"}},
        ]
        assert rate["valid_until"] == {"year": 2026, "month": 12, "day": 31}
        assert rate["taxes"] == []
        assert rate["transit_time_not_available"] is False

    def test_unknown_id_is_404(self, client):
        response = client.get("/rate/does-not-exist")
        assert response.status_code == 404
        assert response.json() == {"message": "Rate request not found"}

    def test_computation_failure_is_generic_500(self, scheduler):
        store = JobStore(FakeJobRepository(), FailingRater(load_tables()), scheduler)
        client = TestClient(create_app(store))
        request_id = client.post("/rate", json=PAYLOAD).json()["request_id"]
        scheduler.run_all()

        response = client.get(f"/rate/{request_id}")
        assert response.status_code == 500
        assert response.json() == {
            "message": "Shipping rate calculation temporarily unavailable",
            "error": "Please try again or contact support",
        }


class TestServiceEndpoints:

    def test_health(self, client):
        response = client.get("/health")
        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "healthy"
        assert "timestamp" in data
        assert data["uptime"] >= 0

    def test_root_lists_endpoints(self, client):
        data = client.get("/").json()
        assert "POST /rate" in data["available_endpoints"]

    def test_unknown_endpoint_lists_available_ones(self, client):
        response = client.get("/quotes")
        assert response.status_code == 404
        data = response.json()
        assert data["message"] == "Endpoint not found"
        assert "GET /rate/{id}" in data["available_endpoints"]
