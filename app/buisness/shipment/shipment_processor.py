from __future__ import annotations

from datetime import datetime

from app import db
from app.buisness.core.errors import NotFoundError, ValidationError
from app.buisness.core.payload_parsing import to_optional_int, to_text
from app.buisness.inventory.status.status_manager import InventoryStatusManager
from app.buisness.inventory.stock.roll_manager import find_unit_by_barcode
from app.buisness.sales.order_manager import units_linked_to
from app.buisness.shipment.barcode_matcher import candidate_items, owned_by_other_order
from app.buisness.shipment.shipment_draft import ShipmentDraft
from app.data.sales.order import Order
from app.data.shipment.shipment import Shipment
from app.data.shipment.shipment_item import ShipmentItem
from app.logger import get_logger

logger = get_logger("roll_erp.buisness.shipment.processor")


def load_order(order_id) -> Order:
    order_id = to_optional_int(order_id, "orderId")
    if order_id is None:
        raise ValidationError("Order ID is required")
    order = db.session.get(Order, order_id)
    if order is None:
        raise NotFoundError("Order not found")
    return order


class ShipmentProcessor:
    """
    Turns a fully scanned draft into a Shipment.

    The client's scans are re-validated here; nothing is written unless every
    scan resolves to a unit this order may ship and every line has reached its
    required count. The shipment, its items, the unit sales and the order
    status change are committed together.
    """

    def __init__(self, user_id: int | None = None):
        self.user_id = user_id
        self.status_manager = InventoryStatusManager()

    def _resolve(self, order: Order, draft: ShipmentDraft) -> list[tuple]:
        items_by_id = {item.id: item for item in order.order_items}
        seen = {}
        resolved = []
        for record in draft.records():
            item = items_by_id.get(record.order_item_id)
            if item is None:
                raise ValidationError(f"Order item {record.order_item_id} does not belong to order {order.order_no}")

            if record.barcode in seen:
                if seen[record.barcode] == item.id:
                    raise ValidationError(f"Barcode {record.barcode} was scanned more than once for the same item")
                raise ValidationError(f"Barcode {record.barcode} was scanned for more than one order item")
            seen[record.barcode] = item.id

            unit = find_unit_by_barcode(record.barcode)
            if unit is None:
                raise ValidationError(f"Barcode {record.barcode} does not match any item in inventory")
            if owned_by_other_order(unit, order):
                raise ValidationError(f"Barcode {record.barcode} belongs to a different order")
            if item not in candidate_items(order, unit):
                raise ValidationError(f"Barcode {record.barcode} does not match order item {item.line_number}")
            resolved.append((item, unit, record))
        return resolved

    def process(self, order_id, scanned_items, notes=None) -> Shipment:
        order = load_order(order_id)
        if order.is_shipped:
            raise ValidationError(f"Order {order.order_no} has already been shipped")
        if not scanned_items:
            raise ValidationError("No scanned items provided")

        draft = ShipmentDraft.from_payload(order.id, scanned_items)
        resolved = self._resolve(order, draft)
        missing = draft.missing(order.order_items)
        if missing:
            raise ValidationError("Not all order items have been fully scanned", missing=missing)

        shipped_at = datetime.utcnow()
        try:
            shipment = Shipment(
                order=order,
                processed_by_id=self.user_id,
                shipment_date=shipped_at,
                notes=to_text(notes),
                created_by_id=self.user_id,
                updated_by_id=self.user_id,
            )
            db.session.add(shipment)

            scanned_units = set()
            for item, unit, record in resolved:
                self.status_manager.mark_sold(unit, order, item.length, sold_at=shipped_at)
                unit.updated_by_id = self.user_id
                scanned_units.add((unit.unit_kind, unit.id))
                shipment.shipment_items.append(ShipmentItem(
                    order_item=item,
                    scanned_barcode=record.barcode,
                    unit_kind=unit.unit_kind,
                    stock_id=unit.id if unit.unit_kind == "stock" else None,
                    divided_id=unit.id if unit.unit_kind == "divided" else None,
                    created_by_id=self.user_id,
                    updated_by_id=self.user_id,
                ))

            for unit in units_linked_to(order):
                if (unit.unit_kind, unit.id) not in scanned_units:
                    self.status_manager.release(unit, order)

            order.status = "Shipped"
            order.updated_by_id = self.user_id
            db.session.commit()
        except Exception:
            db.session.rollback()
            logger.error(f"Failed to process shipment for order {order.order_no}", exc_info=True)
            raise

        logger.info(
            f"Shipped order {order.order_no}: shipment {shipment.id} with {len(resolved)} unit(s)"
        )
        return shipment
