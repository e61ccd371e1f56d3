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

logger = get_logger("roll_erp.routes.inventory.stock")


@inventory_bp.get('/stock')
@login_required
def list_stock():
    try:
        return jsonify(InventoryService.list_stock())
    except SQLAlchemyError as e:
        logger.error(f"Error loading stock: {e}", exc_info=True)
        return jsonify([])


@inventory_bp.post('/stock')
@login_required
def create_stock():
    try:
        stock = RollManager(current_user.id).intake_stock(json_body())
    except ErpDomainError as e:
        return error_response(e)
    except Exception as e:
        return server_error("create stock", e)
    return jsonify(stock.to_api_dict()), 200


@inventory_bp.post('/stock/<int:stock_id>/inspect')
@login_required
def inspect_stock(stock_id):
    try:
        note = optional_json_body().get("note")
        stock = RollManager(current_user.id).inspect_stock(stock_id, note)
    except ErpDomainError as e:
        return error_response(e)
    except Exception as e:
        return server_error("inspect stock", e)
    return jsonify(stock.to_api_dict()), 200


@inventory_bp.put('/stock/<int:stock_id>')
@login_required
def update_stock(stock_id):
    try:
        stock = RollManager(current_user.id).update_stock(stock_id, json_body())
    except ErpDomainError as e:
        return error_response(e)
    except Exception as e:
        return server_error("update stock", e)
    return jsonify(stock.to_api_dict()), 200


@inventory_bp.delete('/stock/<int:stock_id>')
@login_required
def delete_stock(stock_id):
    try:
        jumbo_roll_no = RollManager(current_user.id).delete_stock(stock_id)
    except ErpDomainError as e:
        return error_response(e)
    except Exception as e:
        return server_error("delete stock", e)
    return jsonify({"success": True, "jumboRollNo": jumbo_roll_no}), 200
