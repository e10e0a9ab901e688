"""
AWS Lambda handler for the Settlement Engine API.

This is the production entry point for AWS Lambda deployments.
For local development, use main.py (Flask app) instead.
"""

import base64
import json
import logging

from settlement import SettlementAggregator
from settlement.access import build_authorizer
from settlement.config import load_settings

settings = load_settings()

# Configure logging
logger = logging.getLogger()
logger.setLevel(getattr(logging, settings.log_level, logging.INFO))

# Initialize aggregator (reused across warm invocations)
aggregator = SettlementAggregator()
authorizer = build_authorizer(settings.agency_passphrase)

# CORS headers for API Gateway
CORS_HEADERS = {
    "Content-Type": "application/json",
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Headers": "Content-Type,Authorization,X-Agency-Credential",
    "Access-Control-Allow-Methods": "GET,POST,OPTIONS",
}


def lambda_handler(event, context):
    """
    Main Lambda entry point.

    Handles API Gateway events for:
    - GET /health
    - GET /api
    - POST /settlement
    - OPTIONS (CORS preflight)
    """
    # Handle CORS preflight
    http_method = event.get("httpMethod") or event.get("requestContext", {}).get("http", {}).get("method", "")
    if http_method == "OPTIONS":
        return {"statusCode": 200, "headers": CORS_HEADERS, "body": ""}

    # Get path (supports both REST API and HTTP API formats)
    path = event.get("path") or event.get("rawPath", "")

    # Route to appropriate handler
    if path == "/health" and http_method == "GET":
        return handle_health()
    elif path == "/settlement" and http_method == "POST":
        return handle_settlement(event)
    elif path == "/api" and http_method == "GET":
        return handle_api_info()
    else:
        return {"statusCode": 404, "headers": CORS_HEADERS, "body": json.dumps({"error": "Not found", "path": path})}


def handle_health():
    """Health check endpoint."""
    return {
        "statusCode": 200,
        "headers": CORS_HEADERS,
        "body": json.dumps({"status": "healthy", "environment": settings.environment}),
    }


def handle_api_info():
    """API information endpoint."""
    return {
        "statusCode": 200,
        "headers": CORS_HEADERS,
        "body": json.dumps(
            {
                "status": "ok",
                "message": "Travel Agency Settlement API",
                "version": "4.8",
                "environment": settings.environment,
                "runtime": "AWS Lambda",
                "endpoints": {"settlement": "/settlement [POST]", "health": "/health [GET]"},
            }
        ),
    }


def _credential(event) -> str | None:
    # API Gateway may lowercase header names
    headers = event.get("headers") or {}
    for name, value in headers.items():
        if name.lower() == "x-agency-credential":
            return value
    return None


def _consultant_name(input_data) -> str:
    consultant = input_data.get("consultant") if isinstance(input_data, dict) else None
    if isinstance(consultant, dict):
        return consultant.get("name") or "Unknown"
    return "Unknown"


def handle_settlement(event):
    """Compute a settlement through the engine."""
    try:
        # Parse request body
        body = event.get("body", "")
        if isinstance(body, str):
            if not body:
                return {
                    "statusCode": 400,
                    "headers": CORS_HEADERS,
                    "body": json.dumps({"error": "No input data provided", "status": "failed"}),
                }
            # Handle base64 encoded body (API Gateway)
            if event.get("isBase64Encoded"):
                body = base64.b64decode(body).decode("utf-8")
            input_data = json.loads(body)
        else:
            input_data = body

        # Log request
        consultant = _consultant_name(input_data)
        logger.info(f"Processing settlement: {consultant}")

        result = aggregator.process_from_dict(
            input_data,
            include_agency=authorizer.has_elevated_access(_credential(event)),
            default_policy=settings.default_policy,
        )

        logger.info(f"Settlement processed successfully: {consultant}")

        return {"statusCode": 200, "headers": CORS_HEADERS, "body": json.dumps(result)}

    except json.JSONDecodeError as e:
        logger.error(f"JSON parse error: {str(e)}")
        return {
            "statusCode": 400,
            "headers": CORS_HEADERS,
            "body": json.dumps({"error": f"Invalid JSON: {str(e)}", "status": "failed"}),
        }

    except (ValueError, KeyError, TypeError) as e:
        # Malformed payloads and unknown policies
        logger.error(f"Validation error: {str(e)}")
        return {
            "statusCode": 400,
            "headers": CORS_HEADERS,
            "body": json.dumps({"error": f"Validation error: {str(e)}", "status": "validation_failed"}),
        }

    except Exception as e:
        # Unexpected errors - log details but return generic message to avoid information disclosure
        logger.error(f"Unexpected processing error: {str(e)}", exc_info=True)
        return {
            "statusCode": 500,
            "headers": CORS_HEADERS,
            "body": json.dumps({"error": "An unexpected error occurred during processing", "status": "failed"}),
        }
