"""
Tests for calculation and scenario API endpoints.
"""

import pytest

from fincalc.config import get_settings


def loan_scenario(name="30 year fixed", **overrides):
    payload = {
        "name": name,
        "loan_amount": 100000,
        "loan_interest_rate": 4.5,
        "loan_term": 30,
        "payment_frequency": 12,
    }
    payload.update(overrides)
    return payload


class TestHealth:
    def test_health_check(self, client):
        response = client.get("/health")
        assert response.status_code == 200
        assert response.json()["status"] == "healthy"


class TestCalculateEndpoint:
    """Test POST /api/calculate."""

    def test_future_value(self, client):
        response = client.post(
            "/api/calculate",
            json={
                "calculation_target": "FUTURE_VALUE",
                "principal": 10000,
                "annual_interest_rate": 5,
                "time_period": 10,
                "compounding_frequency": 1,
                "inflation_rate": 2,
            },
        )
        assert response.status_code == 200
        data = response.json()
        assert data["calculation_target"] == "FUTURE_VALUE"
        assert data["error"] is None
        assert abs(data["future_value"] - 16288.95) < 0.01
        assert data["real_future_value"] < data["future_value"]
        assert len(data["growth_data"]) == 10
        assert data["growth_data"][-1]["year"] == 10

    def test_principal_response_has_only_principal_fields(self, client):
        response = client.post(
            "/api/calculate",
            json={
                "calculation_target": "PRINCIPAL",
                "future_value": 20000,
                "annual_interest_rate": 5,
                "time_period": 10,
            },
        )
        data = response.json()
        assert abs(data["principal"] - 12278.27) < 0.01
        assert "growth_data" not in data
        assert "amortization_schedule" not in data

    def test_domain_error_returned_as_data(self, client):
        response = client.post(
            "/api/calculate",
            json={
                "calculation_target": "ANNUAL_INTEREST_RATE",
                "principal": 10000,
                "future_value": 5000,
                "time_period": 10,
            },
        )
        assert response.status_code == 200
        data = response.json()
        assert data["error"].startswith(
            "Future value must be greater than or equal to principal"
        )
        assert data["annual_interest_rate"] == 0

    def test_loan_payment(self, client):
        response = client.post(
            "/api/calculate",
            json={
                "calculation_target": "LOAN_PAYMENT",
                "loan_amount": 100000,
                "loan_interest_rate": 4.5,
                "loan_term": 30,
                "payment_frequency": 12,
                "first_payment_date": "2025-02-01",
            },
        )
        assert response.status_code == 200
        data = response.json()
        assert abs(data["periodic_payment"] - 506.69) < 0.01
        assert len(data["amortization_schedule"]) == 360
        assert data["amortization_schedule"][-1]["ending_balance"] == 0
        assert data["amortization_schedule"][-1]["payment_date"] == "2055-01-01"

    def test_unknown_target_rejected(self, client):
        response = client.post(
            "/api/calculate",
            json={"calculation_target": "MORTGAGE_POINTS", "principal": 1},
        )
        assert response.status_code == 422

    def test_time_period_limit(self, client):
        limit = get_settings().max_time_period_years
        response = client.post(
            "/api/calculate",
            json={
                "calculation_target": "FUTURE_VALUE",
                "principal": 100,
                "annual_interest_rate": 1,
                "time_period": limit + 1,
            },
        )
        assert response.status_code == 400

    def test_schedule_limit(self, client):
        limit = get_settings().max_schedule_payments
        response = client.post(
            "/api/calculate",
            json={
                "calculation_target": "LOAN_PAYMENT",
                "loan_amount": 100000,
                "loan_interest_rate": 5,
                "loan_term": limit,
                "payment_frequency": 52,
            },
        )
        assert response.status_code == 400


class TestAmortizationEndpoint:
    """Test POST /api/calculate/amortization."""

    def test_schedule(self, client):
        response = client.post(
            "/api/calculate/amortization",
            json={
                "loan_amount": 20000,
                "loan_interest_rate": 6,
                "loan_term": 5,
                "payment_frequency": 4,
            },
        )
        assert response.status_code == 200
        data = response.json()
        assert data["number_of_payments"] == 20
        assert data["amortization_schedule"][-1]["ending_balance"] == 0
        assert data["total_interest_paid"] > 0

    def test_invalid_loan(self, client):
        response = client.post(
            "/api/calculate/amortization",
            json={"loan_amount": 20000, "loan_interest_rate": 6, "loan_term": 0},
        )
        assert response.status_code == 400
        assert response.json()["detail"] == "Loan term must be positive."


class TestScenarios:
    """Test saved loan scenarios."""

    def test_create_and_get(self, client):
        response = client.post("/api/scenarios/", json=loan_scenario())
        assert response.status_code == 201
        scenario = response.json()
        assert scenario["name"] == "30 year fixed"
        assert abs(scenario["periodic_payment"] - 506.69) < 0.01
        assert scenario["inputs"]["loan_term"] == 30

        fetched = client.get(f"/api/scenarios/{scenario['id']}")
        assert fetched.status_code == 200
        assert fetched.json() == scenario

    def test_list(self, client):
        client.post("/api/scenarios/", json=loan_scenario("first"))
        client.post("/api/scenarios/", json=loan_scenario("second", loan_term=15))

        response = client.get("/api/scenarios/")
        data = response.json()
        assert data["total"] == 2
        assert [s["name"] for s in data["scenarios"]] == ["first", "second"]

    def test_invalid_loan_not_saved(self, client):
        response = client.post("/api/scenarios/", json=loan_scenario(loan_amount=0))
        assert response.status_code == 400
        assert response.json()["detail"] == "Loan amount must be positive."
        assert client.get("/api/scenarios/").json()["total"] == 0

    def test_delete(self, client):
        scenario = client.post("/api/scenarios/", json=loan_scenario()).json()

        response = client.delete(f"/api/scenarios/{scenario['id']}")
        assert response.status_code == 200
        assert response.json() == {"deleted": True}
        assert client.get(f"/api/scenarios/{scenario['id']}").status_code == 404
        assert client.delete(f"/api/scenarios/{scenario['id']}").status_code == 404

    def test_unknown_scenario(self, client):
        assert client.get("/api/scenarios/does-not-exist").status_code == 404

    def test_compare(self, client):
        thirty = client.post("/api/scenarios/", json=loan_scenario("30y")).json()
        fifteen = client.post(
            "/api/scenarios/", json=loan_scenario("15y", loan_term=15)
        ).json()

        response = client.post(
            "/api/scenarios/compare",
            json={"scenario_ids": [fifteen["id"], thirty["id"]]},
        )
        assert response.status_code == 200
        data = response.json()
        assert [s["id"] for s in data["scenarios"]] == [fifteen["id"], thirty["id"]]
        # Longer term: smaller payment, more interest overall
        assert data["lowest_payment_id"] == thirty["id"]
        assert data["lowest_total_cost_id"] == fifteen["id"]

    def test_compare_unknown_id(self, client):
        scenario = client.post("/api/scenarios/", json=loan_scenario()).json()
        response = client.post(
            "/api/scenarios/compare",
            json={"scenario_ids": [scenario["id"], "missing"]},
        )
        assert response.status_code == 404

    def test_compare_needs_two(self, client):
        scenario = client.post("/api/scenarios/", json=loan_scenario()).json()
        response = client.post(
            "/api/scenarios/compare", json={"scenario_ids": [scenario["id"]]}
        )
        assert response.status_code == 422

    @pytest.mark.parametrize("name", ["", "x" * 101])
    def test_name_length(self, client, name):
        response = client.post("/api/scenarios/", json=loan_scenario(name))
        assert response.status_code == 422
