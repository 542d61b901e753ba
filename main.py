from flask import Flask, request, jsonify
from flask_cors import CORS
from bonus_engine import BonusProcessor
import os
import logging

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

app = Flask(__name__)

# The dashboard calls the API straight from the browser
CORS(app)

processor = BonusProcessor()


def _error(message, status, code):
    return jsonify({"error": message, "status": status}), code


@app.route("/api", methods=["GET"])
def api_info():
    """Service name, version and routes"""
    return jsonify({
        "status": "ok",
        "message": "Bonus Allocation API",
        "version": "1.0",
        "endpoints": {
            "compute_bonuses": "/compute_bonuses [POST]",
            "job_breakdown": "/job_breakdown [POST]",
            "agent_commissions": "/agent_commissions [POST]",
            "health": "/health [GET]",
        },
    }), 200


@app.route("/health", methods=["GET"])
def health():
    return jsonify({"status": "healthy"}), 200


def _run(action, label):
    """Run a processor action on the JSON body and map failures to status codes."""
    payload = request.get_json(force=True, silent=True)
    if not payload:
        return _error("No input data provided", "failed", 400)

    job_count = len(payload.get("jobs") or []) if isinstance(payload, dict) else 0
    logger.info("%s: %d jobs", label, job_count)

    try:
        result = action(payload)
    except (ValueError, KeyError, TypeError) as e:
        logger.error("Rejected bonus request: %s", e)
        return _error(str(e), "validation_failed", 400)
    except Exception as e:
        logger.error("Bonus processing failed: %s", e, exc_info=True)
        return _error("An unexpected error occurred during processing", "failed", 500)

    logger.info("%s completed: %d jobs", label, job_count)
    return jsonify(result), 200


@app.route("/compute_bonuses", methods=["POST"])
def compute_bonuses():
    """
    Per-employee bonus totals and line items for the posted jobs
    """
    return _run(processor.process_from_dict, "Computing bonuses")


@app.route("/job_breakdown", methods=["POST"])
def job_breakdown():
    """
    Profit, pools and lines of each posted job
    """
    return _run(processor.job_breakdown_from_dict, "Building job breakdown")


@app.route("/agent_commissions", methods=["POST"])
def agent_commissions():
    """
    Commission per agent for the posted jobs, optionally one agent or month
    """
    return _run(processor.agent_commissions_from_dict, "Building agent commissions")


if __name__ == "__main__":
    app.run(host="0.0.0.0", port=int(os.environ.get("PORT", 8080)), debug=False)
