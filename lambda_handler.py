"""
AWS Lambda entry point for the Bonus Allocation API.

Serves the same routes as the Flask app in main.py, which is the one to
run locally.
"""

import base64
import json
import logging
import os

from bonus_engine import BonusProcessor

logger = logging.getLogger()
logger.setLevel(logging.INFO)

# dev, staging or prod
ENVIRONMENT = os.environ.get("ENVIRONMENT", "dev")

# Module level so warm invocations reuse it
processor = BonusProcessor()

RESPONSE_HEADERS = {
    "Content-Type": "application/json",
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Headers": "Content-Type,Authorization",
    "Access-Control-Allow-Methods": "GET,POST,OPTIONS",
}

ENDPOINTS = {
    "compute_bonuses": "/compute_bonuses [POST]",
    "job_breakdown": "/job_breakdown [POST]",
    "agent_commissions": "/agent_commissions [POST]",
    "health": "/health [GET]",
}


def _response(status_code, payload):
    return {"statusCode": status_code, "headers": RESPONSE_HEADERS, "body": json.dumps(payload)}


def _request_line(event):
    """Method and path from either a REST API (v1) or HTTP API (v2) event."""
    http = (event.get("requestContext") or {}).get("http") or {}
    method = event.get("httpMethod") or http.get("method", "")
    path = event.get("path") or event.get("rawPath", "")
    return method, path


def _read_body(event):
    """The decoded request payload, or None when the event has no body."""
    raw = event.get("body")
    if raw is None or raw == "":
        return None
    if not isinstance(raw, str):
        # Direct invocations may pass the payload already parsed
        return raw
    if event.get("isBase64Encoded"):
        raw = base64.b64decode(raw).decode("utf-8")
    return json.loads(raw)


def lambda_handler(event, context):
    """
    Dispatch an API Gateway event.

    Routes:
    - GET /health
    - GET /api
    - POST /compute_bonuses
    - POST /job_breakdown
    - POST /agent_commissions
    - OPTIONS on any path (preflight)
    """
    method, path = _request_line(event)
    if method == "OPTIONS":
        return {"statusCode": 200, "headers": RESPONSE_HEADERS, "body": ""}

    routes = {
        ("GET", "/health"): handle_health,
        ("GET", "/api"): handle_api_info,
        ("POST", "/compute_bonuses"): lambda: handle_processing(
            event, processor.process_from_dict, "Computing bonuses"
        ),
        ("POST", "/job_breakdown"): lambda: handle_processing(
            event, processor.job_breakdown_from_dict, "Building job breakdown"
        ),
        ("POST", "/agent_commissions"): lambda: handle_processing(
            event, processor.agent_commissions_from_dict, "Building agent commissions"
        ),
    }
    handler = routes.get((method, path))
    if handler is None:
        return _response(404, {"error": "Not found", "path": path})
    return handler()


def handle_health():
    return _response(200, {"status": "healthy", "environment": ENVIRONMENT})


def handle_api_info():
    return _response(
        200,
        {
            "status": "ok",
            "message": "Bonus Allocation API",
            "version": "1.0",
            "environment": ENVIRONMENT,
            "runtime": "AWS Lambda",
            "endpoints": ENDPOINTS,
        },
    )


def handle_processing(event, action, label):
    """Run a processor action on the event's payload and wrap the result."""
    try:
        input_data = _read_body(event)
        if input_data is None:
            return _response(400, {"error": "No input data provided", "status": "failed"})

        job_count = len(input_data.get("jobs") or []) if isinstance(input_data, dict) else 0
        logger.info("%s: %d jobs", label, job_count)

        result = action(input_data)

        logger.info("%s completed: %d jobs", label, job_count)
        return _response(200, result)

    except json.JSONDecodeError as e:
        logger.error("Request body is not valid JSON: %s", e)
        return _response(400, {"error": f"Invalid JSON: {e}", "status": "failed"})

    except (ValueError, KeyError, TypeError) as e:
        # Malformed payload: jobs not a list, wrong record types
        logger.error("Rejected bonus request: %s", e)
        return _response(400, {"error": f"Validation error: {e}", "status": "validation_failed"})

    except Exception as e:
        # Details stay in the log; the caller gets a generic message
        logger.error("Bonus processing failed: %s", e, exc_info=True)
        return _response(500, {"error": "An unexpected error occurred during processing", "status": "failed"})
