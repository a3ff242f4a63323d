"""
AWS Lambda handler for the Rental Proposal Totals API.

This is the production entry point for AWS Lambda deployments.
For local development, use main.py (Flask app) instead.
"""

import base64
import json
import logging
import os

from rental_engine import ProposalClassifier, TotalsProcessor
from rental_engine.validators import RequestValidator

# Configure logging
logger = logging.getLogger()
logger.setLevel(logging.INFO)

# Environment (dev, staging, prod)
ENVIRONMENT = os.environ.get("ENVIRONMENT", "dev")

# Initialize engine (reused across warm invocations)
processor = TotalsProcessor()
classifier = ProposalClassifier()
validator = RequestValidator()

# CORS headers for API Gateway
CORS_HEADERS = {
    "Content-Type": "application/json",
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Headers": "Content-Type,Authorization",
    "Access-Control-Allow-Methods": "GET,POST,OPTIONS",
}


def lambda_handler(event, context):
    """
    Main Lambda entry point.

    Handles API Gateway events for:
    - GET /health
    - GET /api
    - POST /calculate_totals
    - POST /classify_proposals
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
    elif path == "/api" and http_method == "GET":
        return handle_api_info()
    elif path == "/calculate_totals" and http_method == "POST":
        return handle_calculate_totals(event)
    elif path == "/classify_proposals" and http_method == "POST":
        return handle_classify_proposals(event)
    else:
        return _response(404, {"error": "Not found", "path": path})


def handle_health():
    """Health check endpoint."""
    return _response(200, {"status": "healthy", "environment": ENVIRONMENT})


def handle_api_info():
    """API information endpoint."""
    return _response(
        200,
        {
            "status": "ok",
            "message": "Rental Proposal Totals API",
            "version": "1.0",
            "environment": ENVIRONMENT,
            "runtime": "AWS Lambda",
            "endpoints": {
                "calculate_totals": "/calculate_totals [POST]",
                "classify_proposals": "/classify_proposals [POST]",
                "health": "/health [GET]",
            },
        },
    )


def handle_calculate_totals(event):
    """Compute the totals breakdown for one proposal record."""
    try:
        input_data = _parse_body(event)
        validator.validate_proposal(input_data)

        proposal_id = input_data.get("id", "Unknown")
        logger.info(f"Calculating totals for proposal: {proposal_id}")

        result = processor.process_from_dict(input_data)

        logger.info(f"Totals calculated: {proposal_id} -> {result['totals']['total']}")
        return _response(200, result)

    except Exception as e:
        return _error_response(e)


def handle_classify_proposals(event):
    """Split a proposal list into active, completed and cancelled, with totals."""
    try:
        input_data = _parse_body(event)
        validator.validate_proposal_list(input_data)

        proposals = input_data["proposals"]
        logger.info(f"Classifying {len(proposals)} proposals")

        result = classifier.classify_with_totals(proposals, processor)
        return _response(200, result)

    except Exception as e:
        return _error_response(e)


def _parse_body(event):
    """Decode the request body. Returns None when the body is empty."""
    body = event.get("body", "")
    if not isinstance(body, str):
        return body
    if not body:
        return None
    # Handle base64 encoded body (API Gateway)
    if event.get("isBase64Encoded"):
        body = base64.b64decode(body).decode("utf-8")
    return json.loads(body)


def _response(status_code, payload):
    return {"statusCode": status_code, "headers": CORS_HEADERS, "body": json.dumps(payload)}


def _error_response(error):
    if isinstance(error, json.JSONDecodeError):
        logger.error(f"JSON parse error: {str(error)}")
        return _response(400, {"error": f"Invalid JSON: {str(error)}", "status": "failed"})

    if isinstance(error, (ValueError, KeyError, TypeError)):
        logger.error(f"Validation error: {str(error)}")
        return _response(400, {"error": f"Validation error: {str(error)}", "status": "validation_failed"})

    # Unexpected errors - log details but return generic message to avoid information disclosure
    logger.error(f"Unexpected processing error: {str(error)}", exc_info=True)
    return _response(500, {"error": "An unexpected error occurred during processing", "status": "failed"})
