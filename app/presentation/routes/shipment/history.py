from flask import jsonify
from flask_login import login_required
from sqlalchemy.exc import SQLAlchemyError

from app.buisness.core.errors import NotFoundError
from app.logger import get_logger
from app.presentation.routes.api_responses import error_response, server_error
from app.presentation.routes.shipment import shipment_bp
from app.services.shipment.shipment_service import ShipmentService

logger = get_logger("roll_erp.routes.shipment.history")


@shipment_bp.get('/history')
@login_required
def shipment_history():
    try:
        return jsonify(ShipmentService.history())
    except SQLAlchemyError as e:
        logger.error(f"Error loading shipment history: {e}", exc_info=True)
        return jsonify([])


@shipment_bp.get('/history/<int:shipment_id>')
@login_required
def shipment_detail(shipment_id):
    try:
        shipment = ShipmentService.shipment_detail(shipment_id)
    except SQLAlchemyError as e:
        return server_error("load shipment", e)
    if shipment is None:
        return error_response(NotFoundError("Shipment not found"))
    return jsonify(shipment)
