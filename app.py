import os
import logging

from flask import Flask, request, jsonify
from flask_cors import CORS
from dotenv import load_dotenv

from invoicecalc.calculator import DocumentCalculator
from invoicecalc.extractor import DocumentExtractor
from invoicecalc.summarizer import DocumentSummarizer, upi_payment_uri

load_dotenv()

# Configuration
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
MAX_LINE_ITEMS = int(os.getenv("MAX_LINE_ITEMS", "500"))

# Configure logging
logging.basicConfig(level=LOG_LEVEL)
logger = logging.getLogger(__name__)

app = Flask(__name__)
CORS(app)

extractor = DocumentExtractor()
calculator = DocumentCalculator()
summarizer = DocumentSummarizer(calculator)


def parse_document():
    """Validate the request body and build a Document from it."""
    data = request.get_json(silent=True)

    if not isinstance(data, dict):
        raise ValueError("Request body must be a JSON object")

    line_items = data.get('line_items') or []
    if not isinstance(line_items, list):
        raise ValueError("line_items must be a list")
    if len(line_items) > MAX_LINE_ITEMS:
        raise ValueError(f"Too many line items: {len(line_items)} (max {MAX_LINE_ITEMS})")

    return extractor.extract_from_dict(data)


def error_response(message, status):
    return jsonify({
        "is_success": False,
        "error": message
    }), status


@app.route('/calculate', methods=['POST'])
def calculate_document():
    """API endpoint returning the document with its full breakdown."""
    try:
        document = parse_document()
        summary = summarizer.summarize(document)
        logger.info(
            "Calculated %s %s: grand total %s",
            document.document_type, document.doc_no,
            summary['calculations']['grand_total']
        )
        return jsonify({
            "is_success": True,
            "data": summary
        }), 200

    except ValueError as e:
        logger.warning("Rejected document: %s", e)
        return error_response(str(e), 400)
    except Exception as e:
        logger.exception("Failed to calculate document")
        return error_response(str(e), 500)


@app.route('/summary', methods=['POST'])
def summarize_document():
    """API endpoint returning a plain-text summary and payment URI."""
    try:
        document = parse_document()
        breakdown = calculator.calculate(document)
        return jsonify({
            "is_success": True,
            "summary": summarizer.get_formatted_summary(document),
            "upi_uri": upi_payment_uri(document, breakdown)
        }), 200

    except ValueError as e:
        logger.warning("Rejected document: %s", e)
        return error_response(str(e), 400)
    except Exception as e:
        logger.exception("Failed to summarize document")
        return error_response(str(e), 500)


@app.route('/health', methods=['GET'])
def health_check():
    """Health check endpoint."""
    return jsonify({"status": "healthy"}), 200


if __name__ == '__main__':
    port = int(os.getenv('PORT', 5001))
    app.run(host='0.0.0.0', port=port, debug=os.getenv('DEBUG', 'False').lower() == 'true')
