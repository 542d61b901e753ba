"""Tests for the Flask app used in local development."""

import pytest

from main import app


@pytest.fixture
def client():
    app.config["TESTING"] = True
    with app.test_client() as client:
        yield client


@pytest.fixture
def payload():
    return {
        "config": {"costPerHour": 0, "workerPoolPercent_1": 10},
        "jobs": [{"id": "solo", "invoiceAmount": 500, "workerLog": [{"name": "Bo", "minutes": 60}]}],
    }


class TestFlaskApp:

    def test_health(self, client):
        response = client.get("/health")
        assert response.status_code == 200
        assert response.get_json()["status"] == "healthy"

    def test_api_info(self, client):
        response = client.get("/api")
        assert response.get_json()["message"] == "Bonus Allocation API"

    def test_compute_bonuses(self, client, payload):
        response = client.post("/compute_bonuses", json=payload)

        assert response.status_code == 200
        body = response.get_json()
        assert body["employees"][0]["name"] == "Bo"
        assert body["employees"][0]["total"] == 50.0

    def test_filter_employee(self, client, payload):
        payload["employee"] = "nobody"
        body = client.post("/compute_bonuses", json=payload).get_json()
        assert body["employee_count"] == 0

    def test_job_breakdown(self, client, payload):
        body = client.post("/job_breakdown", json=payload).get_json()
        assert body["jobs"][0]["total_bonus"] == 50.0

    def test_empty_body(self, client):
        response = client.post("/compute_bonuses", data="", content_type="application/json")
        assert response.status_code == 400
        assert response.get_json()["status"] == "failed"

    def test_validation_error(self, client):
        response = client.post("/compute_bonuses", json={"jobs": [1, 2]})
        assert response.status_code == 400
        assert response.get_json()["status"] == "validation_failed"

    def test_agent_commissions(self, client):
        payload = {
            "config": {"agents": [{"name": "Ava", "comm": 5}]},
            "jobs": [
                {"id": "a", "invoiceAmount": 1000, "agentName": "Ava"},
                {"id": "b", "invoiceAmount": 1000},
            ],
            "agent": "Ava",
        }
        body = client.post("/agent_commissions", json=payload).get_json()

        assert body["grand_total"] == 50.0
        assert [a["agent"] for a in body["agents"]] == ["Ava"]
