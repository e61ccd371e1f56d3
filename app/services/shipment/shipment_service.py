"""
Shipment Service
Presentation service for the shipping queue and shipment history.
"""

import math
from typing import Any, Dict, List, Optional

from app import db
from app.data.core.customer import Customer
from app.data.sales.order import Order
from app.data.shipment.shipment import Shipment

DEFAULT_PAGE_SIZE = 10
MAX_PAGE_SIZE = 100


class ShipmentService:
    """
    Read-only shipment queries.

    Provides:
    - Paginated, searchable list of orders still waiting to ship
    - Shipment history list and detail
    """

    @staticmethod
    def empty_page(page: int = 1) -> Dict[str, Any]:
        return {'orders': [], 'totalItems': 0, 'totalPages': 0, 'currentPage': page}

    @staticmethod
    def unshipped_orders(page: int = 1, page_size: int = DEFAULT_PAGE_SIZE, search: Optional[str] = None) -> Dict[str, Any]:
        """
        Orders without a shipment.

        Args:
            page: 1-based page number
            page_size: Rows per page (capped at MAX_PAGE_SIZE)
            search: Case-insensitive match on order number or customer name

        Returns:
            Dictionary with orders, totalItems, totalPages and currentPage
        """
        page = max(1, page or 1)
        page_size = min(max(1, page_size or DEFAULT_PAGE_SIZE), MAX_PAGE_SIZE)

        query = Order.query.outerjoin(Shipment, Shipment.order_id == Order.id).filter(Shipment.id.is_(None))
        if search:
            like = f"%{search.strip()}%"
            query = query.join(Customer, Customer.id == Order.customer_id).filter(
                Order.order_no.ilike(like) | Customer.name.ilike(like)
            )

        total = query.count()
        orders = (
            query.order_by(Order.created_at.desc(), Order.id.desc())
            .offset((page - 1) * page_size)
            .limit(page_size)
            .all()
        )
        return {
            'orders': [order.to_api_dict() for order in orders],
            'totalItems': total,
            'totalPages': math.ceil(total / page_size) if total else 0,
            'currentPage': page,
        }

    @staticmethod
    def history() -> List[Dict[str, Any]]:
        shipments = Shipment.query.order_by(Shipment.shipment_date.desc(), Shipment.id.desc()).all()
        rows = []
        for shipment in shipments:
            order = shipment.order
            rows.append({
                'id': shipment.id,
                'orderId': shipment.order_id,
                'orderNo': order.order_no if order else None,
                'customerName': order.customer.name if order and order.customer else None,
                'shipmentDate': shipment.shipment_date.isoformat() if shipment.shipment_date else None,
                'processedBy': shipment.processed_by.username if shipment.processed_by else None,
                'itemCount': len(shipment.shipment_items),
                'notes': shipment.notes,
            })
        return rows

    @staticmethod
    def shipment_detail(shipment_id: int) -> Optional[Dict[str, Any]]:
        """Shipment with its scanned units grouped under the order line they fulfilled"""
        shipment = db.session.get(Shipment, shipment_id)
        if shipment is None:
            return None

        grouped = {}
        for shipment_item in shipment.shipment_items:
            grouped.setdefault(shipment_item.order_item_id, []).append(shipment_item.to_api_dict())

        data = shipment.to_api_dict()
        data['customer'] = (
            shipment.order.customer.to_dict(include_audit_fields=False, camel_case=True)
            if shipment.order and shipment.order.customer else None
        )
        data['orderItems'] = [
            dict(item.to_api_dict(), shippedUnits=grouped.get(item.id, []))
            for item in shipment.order.order_items
        ]
        return data

    @staticmethod
    def get_shipment(shipment_id: int) -> Optional[Shipment]:
        return db.session.get(Shipment, shipment_id)
