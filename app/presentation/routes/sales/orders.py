from flask import current_app, jsonify, request
from flask_login import current_user, login_required
from sqlalchemy.exc import SQLAlchemyError

from app.buisness.core.errors import ErpDomainError, NotFoundError
from app.buisness.sales.order_manager import OrderManager
from app.logger import get_logger
from app.presentation.routes.api_responses import error_response, json_body, server_error
from app.presentation.routes.sales import sales_bp
from app.services.sales.order_service import OrderService
from app.utils.logging_sanitizer import sanitize_payload

logger = get_logger("roll_erp.routes.sales.orders")


def _manager() -> OrderManager:
    return OrderManager(
        user_id=current_user.id,
        max_attempts=current_app.config.get('ORDER_NO_MAX_ATTEMPTS', 3),
    )


@sales_bp.get('/orders')
@login_required
def list_orders():
    try:
        return jsonify(OrderService.list_orders())
    except SQLAlchemyError as e:
        logger.error(f"Error loading orders: {e}", exc_info=True)
        return jsonify([])


@sales_bp.get('/orders/<int:order_id>')
@login_required
def order_detail(order_id):
    try:
        order = OrderService.get_order(order_id)
    except SQLAlchemyError as e:
        return server_error("load order", e)
    if order is None:
        return error_response(NotFoundError("Order not found"))
    return jsonify(order)


@sales_bp.get('/orders/generate-order-no')
@login_required
def generate_order_no():
    try:
        return jsonify({"orderNo": _manager().preview_order_no()})
    except ErpDomainError as e:
        return error_response(e)
    except Exception as e:
        return server_error("generate order number", e)


@sales_bp.post('/orders')
@login_required
def create_order():
    try:
        payload = json_body()
        logger.debug(f"Create order request: {sanitize_payload(payload)}")
        order = _manager().create_order(payload)
    except ErpDomainError as e:
        logger.warning(f"Order create rejected: {e.message}")
        return error_response(e)
    except Exception as e:
        return server_error("create order", e)
    return jsonify(order.to_api_dict()), 200


@sales_bp.put('/orders')
@login_required
def update_order():
    try:
        payload = json_body()
        logger.debug(f"Update order request: {sanitize_payload(payload)}")
        order = _manager().update_order(payload)
    except ErpDomainError as e:
        logger.warning(f"Order update rejected: {e.message}")
        return error_response(e)
    except Exception as e:
        return server_error("update order", e)
    return jsonify(order.to_api_dict()), 200


@sales_bp.delete('/orders')
@login_required
def delete_order():
    try:
        order_no = _manager().delete_order(request.args.get('id'))
    except ErpDomainError as e:
        return error_response(e)
    except Exception as e:
        return server_error("delete order", e)
    return jsonify({
        "success": True,
        "message": f"Order {order_no} deleted successfully",
        "orderNo": order_no,
    }), 200
