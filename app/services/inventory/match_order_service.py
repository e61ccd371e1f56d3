"""
Match Order Service
Finds the inventory units that belong to an order, for pre-populating a scanning session.
"""

from typing import Any, Dict, List

from app.data.inventory.stock.divided import Divided
from app.data.inventory.stock.stock import Stock
from app.data.sales.order import Order
from app.logger import get_logger

logger = get_logger("roll_erp.services.inventory.match_order")


class MatchOrderService:
    """
    Candidate lookup by order number.

    Sources, in order of precedence:
    - units pointing at the order by order_id ("reserved" / "sold")
    - units referenced by the order's lines ("order-item")
    - units recorded on the order's shipment ("shipment")
    """

    @staticmethod
    def empty_result() -> Dict[str, List]:
        return {'stockItems': [], 'dividedItems': [], 'orderItems': []}

    @staticmethod
    def match_candidates(order_no: str) -> Dict[str, Any]:
        """
        Args:
            order_no: Human readable order number (SO-...)

        Returns:
            Dictionary with stockItems, dividedItems and orderItems; empty
            lists when the order does not exist
        """
        order = Order.query.filter_by(order_no=order_no).first()
        if order is None:
            logger.info(f"match-order: no order {order_no}")
            return MatchOrderService.empty_result()

        found = {'stock': {}, 'divided': {}}

        def add(unit, reason):
            if unit is not None and unit.id not in found[unit.unit_kind]:
                found[unit.unit_kind][unit.id] = unit.to_api_dict(match_reason=reason)

        for model in (Stock, Divided):
            for unit in model.query.filter(
                model.order_id == order.id,
                model.status.in_(('Reserved', 'Sold'))
            ).order_by(model.id).all():
                add(unit, unit.status.lower())

        for item in order.order_items:
            add(item.unit, 'order-item')

        if order.shipment is not None:
            for shipment_item in order.shipment.shipment_items:
                add(shipment_item.unit, 'shipment')

        result = {
            'stockItems': list(found['stock'].values()),
            'dividedItems': list(found['divided'].values()),
            'orderItems': [item.to_api_dict() for item in order.order_items],
        }
        logger.debug(
            f"match-order {order_no}: {len(result['stockItems'])} stock, {len(result['dividedItems'])} divided"
        )
        return result
