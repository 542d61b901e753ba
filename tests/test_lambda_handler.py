"""Tests for AWS Lambda handler."""

import base64
import json

import pytest

from lambda_handler import lambda_handler


@pytest.fixture
def payload():
    return {
        "config": {"leaderPoolPercent_2": 5, "workerPoolPercent_2": 10},
        "directory": [{"displayName": "Bo Smith"}],
        "jobs": [{
            "id": "job-1",
            "invoiceAmount": 1000,
            "financeStatus": "complete",
            "leader": "Lee",
            "workerLog": [{"name": "Lee", "minutes": 480}, {"name": "bo smith", "minutes": 480}],
        }],
    }


class TestLambdaHandler:
    """Test the Lambda handler routes and responses."""

    def test_health_check(self):
        """GET /health returns healthy status."""
        event = {"httpMethod": "GET", "path": "/health"}
        response = lambda_handler(event, None)

        assert response["statusCode"] == 200
        body = json.loads(response["body"])
        assert body["status"] == "healthy"
        assert "environment" in body

    def test_api_info(self):
        """GET /api lists the bonus endpoints."""
        event = {"httpMethod": "GET", "path": "/api"}
        response = lambda_handler(event, None)

        assert response["statusCode"] == 200
        body = json.loads(response["body"])
        assert set(body["endpoints"]) == {"compute_bonuses", "job_breakdown", "agent_commissions", "health"}

    def test_cors_preflight(self):
        """OPTIONS requests return CORS headers."""
        event = {"httpMethod": "OPTIONS", "path": "/compute_bonuses"}
        response = lambda_handler(event, None)

        assert response["statusCode"] == 200
        assert "Access-Control-Allow-Origin" in response["headers"]
        assert "Access-Control-Allow-Methods" in response["headers"]

    def test_not_found(self):
        """Unknown paths return 404."""
        event = {"httpMethod": "GET", "path": "/unknown"}
        response = lambda_handler(event, None)

        assert response["statusCode"] == 404

    def test_wrong_method_is_not_found(self):
        event = {"httpMethod": "GET", "path": "/compute_bonuses"}
        assert lambda_handler(event, None)["statusCode"] == 404

    def test_compute_bonuses_success(self, payload):
        """POST /compute_bonuses returns per-employee summaries."""
        event = {"httpMethod": "POST", "path": "/compute_bonuses", "body": json.dumps(payload)}
        response = lambda_handler(event, None)

        assert response["statusCode"] == 200
        body = json.loads(response["body"])
        assert body["employee_count"] == 2
        assert body["grand_total"] == 150.0
        assert [e["name"] for e in body["employees"]] == ["Bo Smith", "Lee"]

    def test_job_breakdown_success(self, payload):
        event = {"httpMethod": "POST", "path": "/job_breakdown", "body": json.dumps(payload)}
        response = lambda_handler(event, None)

        assert response["statusCode"] == 200
        card = json.loads(response["body"])["jobs"][0]
        assert card["id"] == "job-1"
        assert card["calculations"]["leader_pool"]["value"] == 50.0

    def test_empty_body(self):
        """Missing body returns 400."""
        event = {"httpMethod": "POST", "path": "/compute_bonuses", "body": ""}
        response = lambda_handler(event, None)

        assert response["statusCode"] == 400
        assert json.loads(response["body"])["status"] == "failed"

    def test_invalid_json(self):
        """Malformed JSON returns 400."""
        event = {"httpMethod": "POST", "path": "/compute_bonuses", "body": "{not json"}
        response = lambda_handler(event, None)

        assert response["statusCode"] == 400
        assert "Invalid JSON" in json.loads(response["body"])["error"]

    def test_validation_error(self):
        """A jobs field that is not a list is rejected."""
        event = {"httpMethod": "POST", "path": "/compute_bonuses", "body": json.dumps({"jobs": "all"})}
        response = lambda_handler(event, None)

        assert response["statusCode"] == 400
        assert json.loads(response["body"])["status"] == "validation_failed"

    def test_http_api_v2_format(self, payload):
        """HTTP API (v2) events carry method and path elsewhere."""
        event = {
            "requestContext": {"http": {"method": "POST"}},
            "rawPath": "/compute_bonuses",
            "body": json.dumps(payload),
        }
        response = lambda_handler(event, None)

        assert response["statusCode"] == 200

    def test_null_request_context(self):
        """A null requestContext falls through to a 404 rather than raising."""
        event = {"requestContext": None, "rawPath": "/compute_bonuses"}
        response = lambda_handler(event, None)

        assert response["statusCode"] == 404

    def test_agent_commissions(self):
        payload = {
            "config": {"agents": [{"name": "Ava", "comm": 5}]},
            "jobs": [{"id": "a", "invoiceAmount": 400, "agentName": "Ava"}],
        }
        event = {"httpMethod": "POST", "path": "/agent_commissions", "body": json.dumps(payload)}
        response = lambda_handler(event, None)

        assert response["statusCode"] == 200
        assert json.loads(response["body"])["grand_total"] == 20.0

    def test_base64_body(self, payload):
        encoded = base64.b64encode(json.dumps(payload).encode("utf-8")).decode("ascii")
        event = {
            "httpMethod": "POST",
            "path": "/compute_bonuses",
            "body": encoded,
            "isBase64Encoded": True,
        }
        response = lambda_handler(event, None)

        assert response["statusCode"] == 200
        assert json.loads(response["body"])["grand_total"] == 150.0
