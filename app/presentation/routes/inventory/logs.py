from flask import jsonify, request
from flask_login import login_required
from sqlalchemy.exc import SQLAlchemyError

from app.buisness.core.errors import ErpDomainError
from app.logger import get_logger
from app.presentation.routes.api_responses import error_response
from app.presentation.routes.inventory import inventory_bp
from app.services.inventory.inspection_log_service import DEFAULT_LIMIT, InspectionLogService

logger = get_logger("roll_erp.routes.inventory.logs")


@inventory_bp.get('/logs')
@login_required
def inspection_logs():
    page = request.args.get('page', 1, type=int)
    limit = request.args.get('limit', DEFAULT_LIMIT, type=int)
    try:
        return jsonify(InspectionLogService.list_logs(
            page,
            limit,
            log_type=request.args.get('type'),
            item_type=request.args.get('itemType'),
            start_date=request.args.get('startDate'),
            end_date=request.args.get('endDate'),
        ))
    except ErpDomainError as e:
        return error_response(e)
    except SQLAlchemyError as e:
        logger.error(f"Error loading inspection logs: {e}", exc_info=True)
        return jsonify(InspectionLogService.empty_page(page, limit))
