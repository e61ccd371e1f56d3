from flask import jsonify, make_response, request
from flask_login import login_required
from sqlalchemy.exc import SQLAlchemyError

from app.buisness.core.errors import NotFoundError
from app.buisness.shipment.travel_document import HtmlTravelDocumentRenderer, TravelDocumentBuilder
from app.logger import get_logger
from app.presentation.routes.api_responses import error_response, server_error
from app.presentation.routes.shipment import shipment_bp
from app.services.shipment.shipment_service import ShipmentService

logger = get_logger("roll_erp.routes.shipment.travel_document")


@shipment_bp.get('/travel-document/<int:shipment_id>')
@login_required
def travel_document(shipment_id):
    try:
        shipment = ShipmentService.get_shipment(shipment_id)
    except SQLAlchemyError as e:
        return server_error("load shipment", e)
    if shipment is None:
        return error_response(NotFoundError("Shipment not found"))

    document = TravelDocumentBuilder(shipment).build()
    if request.args.get('format') == 'json':
        return jsonify(document)

    renderer = HtmlTravelDocumentRenderer()
    try:
        html = renderer.render(document)
    except Exception as e:
        return server_error("render travel document", e)

    response = make_response(html)
    response.headers['Content-Type'] = 'text/html; charset=utf-8'
    response.headers['Content-Disposition'] = f'attachment; filename="{renderer.filename(document)}"'
    logger.info(f"Travel document generated for shipment {shipment_id}")
    return response
