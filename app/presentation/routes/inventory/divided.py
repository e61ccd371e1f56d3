from flask import jsonify
from flask_login import current_user, login_required
from sqlalchemy.exc import SQLAlchemyError

from app.buisness.core.errors import ErpDomainError
from app.buisness.inventory.stock.roll_manager import RollManager
from app.logger import get_logger
from app.presentation.routes.api_responses import (
    error_response,
    json_body,
    optional_json_body,
    server_error,
)
from app.presentation.routes.inventory import inventory_bp
from app.services.inventory.inventory_service import InventoryService

logger = get_logger("roll_erp.routes.inventory.divided")


@inventory_bp.get('/divided')
@login_required
def list_divided():
    try:
        return jsonify(InventoryService.list_divided())
    except SQLAlchemyError as e:
        logger.error(f"Error loading divided rolls: {e}", exc_info=True)
        return jsonify([])


@inventory_bp.post('/divided')
@login_required
def create_divided():
    try:
        divided = RollManager(current_user.id).divide(json_body())
    except ErpDomainError as e:
        return error_response(e)
    except Exception as e:
        return server_error("create divided roll", e)
    return jsonify(divided.to_api_dict()), 200


@inventory_bp.post('/divided/<int:divided_id>/inspect')
@login_required
def inspect_divided(divided_id):
    try:
        note = optional_json_body().get("note")
        divided = RollManager(current_user.id).inspect_divided(divided_id, note)
    except ErpDomainError as e:
        return error_response(e)
    except Exception as e:
        return server_error("inspect divided roll", e)
    return jsonify(divided.to_api_dict()), 200


@inventory_bp.delete('/divided/<int:divided_id>')
@login_required
def delete_divided(divided_id):
    try:
        roll_no = RollManager(current_user.id).delete_divided(divided_id)
    except ErpDomainError as e:
        return error_response(e)
    except Exception as e:
        return server_error("delete divided roll", e)
    return jsonify({"success": True, "rollNo": roll_no}), 200
