from flask import Flask, request, jsonify, make_response
from flask_cors import CORS
from settlement import SettlementAggregator
from settlement.access import build_authorizer
from settlement.config import load_settings
from settlement.errors import ValidationError
from settlement.report import ReportRenderer
from settlement.request import SettlementRequest
import logging

settings = load_settings()

# Configure logging
logging.basicConfig(level=getattr(logging, settings.log_level, logging.INFO))
logger = logging.getLogger(__name__)

app = Flask(__name__)

# Enable CORS for all routes
CORS(app)

# Stateless; shared across requests
aggregator = SettlementAggregator()
renderer = ReportRenderer()
authorizer = build_authorizer(settings.agency_passphrase)

CREDENTIAL_HEADER = "X-Agency-Credential"


def _has_agency_access() -> bool:
    return authorizer.has_elevated_access(request.headers.get(CREDENTIAL_HEADER))


def _read_payload():
    input_data = request.get_json(force=True, silent=True)
    if not input_data:
        return None
    return input_data


def _consultant_name(input_data) -> str:
    consultant = input_data.get("consultant") if isinstance(input_data, dict) else None
    if isinstance(consultant, dict):
        return consultant.get("name") or "Unknown"
    return "Unknown"


def _text_response(body: str, status: int = 200):
    response = make_response(body, status)
    response.headers["Content-Type"] = "text/plain; charset=utf-8"
    return response


@app.route("/api", methods=["GET"])
def api_info():
    """API information endpoint"""
    return jsonify({
        "status": "ok",
        "message": "Travel Agency Settlement API",
        "version": "4.8",
        "environment": settings.environment,
        "endpoints": {
            "settlement": "/settlement [POST]",
            "report": "/settlement/report?view=consultant|agency [POST]",
            "share": "/settlement/share [POST]",
            "health": "/health [GET]"
        }
    }), 200


@app.route("/health", methods=["GET"])
def health():
    """Health check for monitoring"""
    return jsonify({"status": "healthy"}), 200


@app.route("/settlement", methods=["POST"])
def compute_settlement():
    """
    Compute a settlement. Agency figures are included only for callers
    holding the agency credential.
    """
    try:
        input_data = _read_payload()

        if not input_data:
            return jsonify({
                "error": "No input data provided",
                "status": "failed"
            }), 400

        consultant = _consultant_name(input_data)
        logger.info(f"Processing settlement: {consultant}")

        result = aggregator.process_from_dict(
            input_data,
            include_agency=_has_agency_access(),
            default_policy=settings.default_policy,
        )

        if result["validation_errors"]:
            logger.warning(f"Settlement for {consultant} has {len(result['validation_errors'])} validation errors")
        logger.info(f"Settlement processed successfully: {consultant}")

        return jsonify(result), 200

    except ValueError as e:
        logger.error(f"Validation error: {str(e)}")
        return jsonify({
            "error": str(e),
            "status": "validation_failed"
        }), 400

    except Exception as e:
        # Unexpected errors
        logger.error(f"Processing error: {str(e)}", exc_info=True)
        return jsonify({
            "error": str(e),
            "status": "failed"
        }), 500


def _export(render):
    """Shared flow for text exports: parse, validate, compute, render."""
    try:
        input_data = _read_payload()
        if not input_data:
            return jsonify({"error": "No input data provided", "status": "failed"}), 400

        settlement_request = SettlementRequest.from_dict(input_data, default_policy=settings.default_policy)
        aggregator.validator.validate_for_export(settlement_request)
        result = aggregator.process_request(settlement_request)

        logger.info(f"Exporting settlement: {_consultant_name(input_data)}")
        return _text_response(render(result))

    except ValidationError as e:
        logger.warning(f"Export blocked: {str(e)}")
        return jsonify({
            "error": "Settlement cannot be exported until these fields are fixed",
            "status": "validation_failed",
            "validation_errors": [err.to_dict() for err in e.errors]
        }), 422

    except ValueError as e:
        logger.error(f"Validation error: {str(e)}")
        return jsonify({"error": str(e), "status": "validation_failed"}), 400

    except Exception as e:
        logger.error(f"Export error: {str(e)}", exc_info=True)
        return jsonify({
            "error": str(e),
            "status": "failed"
        }), 500


@app.route("/settlement/report", methods=["POST"])
def settlement_report():
    """Plain-text report. view=agency requires the agency credential."""
    view = request.args.get("view", "consultant")

    if view == "agency":
        if not _has_agency_access():
            logger.warning("Agency report requested without agency access")
            return jsonify({"error": "Agency access required", "status": "forbidden"}), 403
        return _export(renderer.agency_report)

    if view != "consultant":
        return jsonify({"error": f"Invalid view: {view}. Must be 'consultant' or 'agency'", "status": "failed"}), 400

    return _export(renderer.consultant_report)


@app.route("/settlement/share", methods=["POST"])
def settlement_share():
    """Short plain-text message for sharing."""
    return _export(renderer.share_text)


if __name__ == "__main__":
    app.run(host="0.0.0.0", port=settings.port, debug=False)
