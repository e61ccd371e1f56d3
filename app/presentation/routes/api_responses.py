"""
JSON response helpers shared by the API blueprints.
"""

from flask import jsonify, request

from app import db
from app.buisness.core.errors import ErpDomainError, ValidationError
from app.logger import get_logger

logger = get_logger("roll_erp.routes.api")


def json_body() -> dict:
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        raise ValidationError("Request body must be a JSON object")
    return data


def optional_json_body() -> dict:
    data = request.get_json(silent=True)
    return data if isinstance(data, dict) else {}


def error_response(error: ErpDomainError):
    return jsonify(error.to_dict()), error.status_code


def server_error(action: str, error: Exception):
    db.session.rollback()
    logger.error(f"Failed to {action}: {error}", exc_info=True)
    return jsonify({"error": f"Failed to {action}", "details": str(error)}), 500
