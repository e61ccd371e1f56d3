"""
Inspection Log Service
Presentation service for the roll inspection history.
"""

from datetime import datetime, timedelta
from typing import Any, Dict, Optional

from app.buisness.core.errors import ValidationError
from app.data.inventory.stock.inspection_log import InspectionLog

DEFAULT_LIMIT = 50
MAX_LIMIT = 200


def _parse_day(value: Optional[str], field: str, end_of_day: bool = False) -> Optional[datetime]:
    if not value:
        return None
    try:
        parsed = datetime.fromisoformat(value)
    except ValueError:
        raise ValidationError(f"Invalid {field}: {value}") from None
    # A bare date as the upper bound covers the whole day
    if end_of_day and len(value) == 10:
        parsed += timedelta(days=1, microseconds=-1)
    return parsed


class InspectionLogService:
    """
    Read-only inspection log queries.

    Provides:
    - Filtered, paginated log listing (newest first)
    """

    @staticmethod
    def empty_page(page: int = 1, limit: int = DEFAULT_LIMIT) -> Dict[str, Any]:
        return {'data': [], 'pagination': {'page': page, 'limit': limit, 'total': 0, 'totalPages': 0}}

    @staticmethod
    def list_logs(
        page: int = 1,
        limit: int = DEFAULT_LIMIT,
        log_type: Optional[str] = None,
        item_type: Optional[str] = None,
        start_date: Optional[str] = None,
        end_date: Optional[str] = None,
    ) -> Dict[str, Any]:
        """
        Get inspection logs with filters.

        Args:
            page: 1-based page number
            limit: Rows per page (capped at MAX_LIMIT)
            log_type: stock_inspected / divided_inspected
            item_type: stock / divided
            start_date: ISO date or datetime, inclusive
            end_date: ISO date or datetime; a bare date includes the whole day

        Returns:
            Dictionary with data and pagination (page, limit, total, totalPages)
        """
        page = max(1, page or 1)
        limit = min(max(1, limit or DEFAULT_LIMIT), MAX_LIMIT)
        date_from = _parse_day(start_date, 'startDate')
        date_to = _parse_day(end_date, 'endDate', end_of_day=True)

        query = InspectionLog.query
        if log_type:
            query = query.filter_by(type=log_type)
        if item_type:
            query = query.filter_by(item_type=item_type)
        if date_from:
            query = query.filter(InspectionLog.created_at >= date_from)
        if date_to:
            query = query.filter(InspectionLog.created_at <= date_to)

        query = query.order_by(InspectionLog.created_at.desc(), InspectionLog.id.desc())
        pagination = query.paginate(page=page, per_page=limit, error_out=False)

        return {
            'data': [log.to_api_dict() for log in pagination.items],
            'pagination': {
                'page': page,
                'limit': limit,
                'total': pagination.total,
                'totalPages': pagination.pages,
            },
        }
