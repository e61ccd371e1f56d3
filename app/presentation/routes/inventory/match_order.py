from flask import jsonify, request
from flask_login import login_required
from sqlalchemy.exc import SQLAlchemyError

from app.logger import get_logger
from app.presentation.routes.inventory import inventory_bp
from app.services.inventory.match_order_service import MatchOrderService

logger = get_logger("roll_erp.routes.inventory.match_order")


@inventory_bp.get('/match-order')
@login_required
def match_order():
    order_no = (request.args.get('orderNo') or '').strip()
    if not order_no:
        return jsonify({"error": "Order number is required"}), 400
    try:
        return jsonify(MatchOrderService.match_candidates(order_no))
    except SQLAlchemyError as e:
        logger.error(f"Error matching inventory for order {order_no}: {e}", exc_info=True)
        return jsonify(MatchOrderService.empty_result())
