"""Tests for the Flask development app."""

import json

import pytest

from main import app


@pytest.fixture
def client():
    app.config["TESTING"] = True
    with app.test_client() as client:
        yield client


class TestFlaskApp:
    """Routes mirror the Lambda handler."""

    def test_health(self, client):
        response = client.get("/health")
        assert response.status_code == 200
        assert response.get_json() == {"status": "healthy"}

    def test_api_info(self, client):
        response = client.get("/api")
        assert response.status_code == 200
        assert "classify_proposals" in response.get_json()["endpoints"]

    def test_calculate_totals(self, client):
        payload = {
            "startDate": "2025-06-01",
            "endDate": "2025-06-03",
            "discountName": "TYPE:dollar",
            "discountValue": 50,
            "deliveryFee": 50,
            "sectionsJSON": json.dumps([{"products": [{"quantity": 2, "price": 100}]}]),
        }
        response = client.post("/calculate_totals", json=payload)

        assert response.status_code == 200
        totals = response.get_json()["totals"]
        assert totals["standardRateDiscount"] == 50.0
        assert totals["rentalTotal"] == 190.0

    def test_calculate_totals_invalid_body(self, client):
        response = client.post("/calculate_totals", data="not json", content_type="application/json")
        assert response.status_code == 400
        assert response.get_json()["status"] == "validation_failed"

    def test_classify_proposals(self, client):
        payload = {"proposals": [{"id": "x", "status": "Cancelled"}]}
        response = client.post("/classify_proposals", json=payload)

        assert response.status_code == 200
        body = response.get_json()
        assert body["cancelled"][0]["id"] == "x"
        assert body["cancelled"][0]["totals"]["total"] == 0.0

    def test_classify_proposals_rejects_non_object_entries(self, client):
        response = client.post("/classify_proposals", json={"proposals": [1]})
        assert response.status_code == 400
