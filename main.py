from flask import Flask, request, jsonify
from flask_cors import CORS
from rental_engine import ProposalClassifier, TotalsProcessor
from rental_engine.validators import RequestValidator
import os
import logging

# Configure logging
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

app = Flask(__name__)

# Enable CORS for all routes (the client portal calls the API from the browser)
CORS(app)

# Initialize the engine
processor = TotalsProcessor()
classifier = ProposalClassifier()
validator = RequestValidator()


@app.route("/api", methods=["GET"])
def api_info():
    """API information endpoint"""
    return jsonify({
        "status": "ok",
        "message": "Rental Proposal Totals API",
        "version": "1.0",
        "endpoints": {
            "calculate_totals": "/calculate_totals [POST]",
            "classify_proposals": "/classify_proposals [POST]",
            "health": "/health [GET]"
        }
    }), 200


@app.route("/health", methods=["GET"])
def health():
    """Health check for monitoring"""
    return jsonify({"status": "healthy"}), 200


@app.route("/calculate_totals", methods=["POST"])
def calculate_totals():
    """
    Compute the totals breakdown for one proposal record
    """
    try:
        input_data = request.get_json(force=True, silent=True)
        validator.validate_proposal(input_data)

        proposal_id = input_data.get('id', 'Unknown')
        logger.info(f"Calculating totals for proposal: {proposal_id}")

        result = processor.process_from_dict(input_data)

        logger.info(f"Totals calculated: {proposal_id} -> {result['totals']['total']}")

        return jsonify(result), 200

    except ValueError as e:
        # Request envelope errors
        logger.error(f"Validation error: {str(e)}")
        return jsonify({
            "error": str(e),
            "status": "validation_failed"
        }), 400

    except Exception as e:
        # Unexpected errors
        logger.error(f"Processing error: {str(e)}", exc_info=True)
        return jsonify({
            "error": "An unexpected error occurred during processing",
            "status": "failed"
        }), 500


@app.route("/classify_proposals", methods=["POST"])
def classify_proposals():
    """
    Split a proposal list into active, completed and cancelled, with totals
    """
    try:
        input_data = request.get_json(force=True, silent=True)
        validator.validate_proposal_list(input_data)

        proposals = input_data["proposals"]
        logger.info(f"Classifying {len(proposals)} proposals")

        result = classifier.classify_with_totals(proposals, processor)

        return jsonify(result), 200

    except ValueError as e:
        logger.error(f"Validation error: {str(e)}")
        return jsonify({
            "error": str(e),
            "status": "validation_failed"
        }), 400

    except Exception as e:
        logger.error(f"Processing error: {str(e)}", exc_info=True)
        return jsonify({
            "error": "An unexpected error occurred during processing",
            "status": "failed"
        }), 500


if __name__ == "__main__":
    port = int(os.environ.get("PORT", 8080))
    app.run(host="0.0.0.0", port=port, debug=False)
