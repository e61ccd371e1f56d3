from flask import jsonify, request
from flask_login import current_user, login_required
from sqlalchemy.exc import SQLAlchemyError

from app.buisness.core.errors import ErpDomainError, ValidationError
from app.buisness.core.payload_parsing import is_blank, to_optional_int
from app.buisness.shipment.barcode_matcher import BarcodeMatcher
from app.buisness.shipment.shipment_draft import ShipmentDraft
from app.buisness.shipment.shipment_processor import ShipmentProcessor, load_order
from app.logger import get_logger
from app.presentation.routes.api_responses import error_response, json_body, server_error
from app.presentation.routes.shipment import shipment_bp
from app.services.shipment.shipment_service import ShipmentService

logger = get_logger("roll_erp.routes.shipment.scanning")


@shipment_bp.get('/orders')
@login_required
def unshipped_orders():
    page = request.args.get('page', 1, type=int)
    page_size = request.args.get('pageSize', 10, type=int)
    search = request.args.get('search', type=str)
    try:
        return jsonify(ShipmentService.unshipped_orders(page, page_size, search))
    except SQLAlchemyError as e:
        logger.error(f"Error loading orders awaiting shipment: {e}", exc_info=True)
        return jsonify(ShipmentService.empty_page(page))


@shipment_bp.post('/validate-barcode')
@login_required
def validate_barcode():
    try:
        data = json_body()
        barcode = data.get('barcodeValue')
        if is_blank(data.get('orderId')) or is_blank(barcode):
            raise ValidationError("Missing required parameters", matched=False)
        order = load_order(data.get('orderId'))
        draft = ShipmentDraft.from_payload(order.id, data.get('scannedItems'))
        result = BarcodeMatcher(order).validate(
            str(barcode),
            draft,
            order_item_id=to_optional_int(data.get('orderItemId'), "orderItemId"),
        )
    except ErpDomainError as e:
        return error_response(e)
    except Exception as e:
        return server_error("validate barcode", e)

    logger.info(f"Scan {barcode} on order {order.order_no}: matched={result.matched} duplicate={result.duplicate}")
    return jsonify(result.to_dict()), 200


@shipment_bp.post('/process')
@login_required
def process_shipment():
    try:
        data = json_body()
        if is_blank(data.get('orderId')):
            raise ValidationError("Order ID is required")
        shipment = ShipmentProcessor(current_user.id).process(
            data.get('orderId'),
            data.get('scannedItems'),
            data.get('notes'),
        )
    except ErpDomainError as e:
        logger.warning(f"Shipment rejected: {e.message}")
        return error_response(e)
    except Exception as e:
        return server_error("process shipment", e)

    return jsonify({
        "message": f"Shipment processed for order {shipment.order.order_no}",
        "shipment": shipment.to_api_dict(),
    }), 200
