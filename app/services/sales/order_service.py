"""
Order Service
Presentation service for order listings and detail.
"""

from typing import Any, Dict, List, Optional

from app import db
from app.data.sales.order import Order


class OrderService:
    """Read-only order queries"""

    @staticmethod
    def list_orders() -> List[Dict[str, Any]]:
        """
        All orders, newest first, with the customer name and the first line's type
        for the listing table.
        """
        orders = Order.query.order_by(Order.created_at.desc(), Order.id.desc()).all()
        rows = []
        for order in orders:
            row = order.to_dict(camel_case=True)
            row['customerName'] = order.customer.name if order.customer else None
            row['type'] = order.order_items[0].type if order.order_items else None
            row['itemCount'] = len(order.order_items)
            rows.append(row)
        return rows

    @staticmethod
    def get_order(order_id: int) -> Optional[Dict[str, Any]]:
        order = db.session.get(Order, order_id)
        return order.to_api_dict() if order else None
