from __future__ import annotations

from sqlalchemy.exc import IntegrityError

from app import db
from app.buisness.core.errors import (
    ConflictError,
    NotFoundError,
    PersistenceError,
    ValidationError,
)
from app.buisness.core.payload_parsing import is_blank, to_optional_int, to_text
from app.buisness.inventory.status.status_manager import InventoryStatusManager
from app.buisness.sales.order_lines import OrderLine, parse_order_lines
from app.buisness.sales.order_number import OrderNumberAllocator
from app.buisness.sales.order_pricing import compute_total, validate_discount
from app.data.core.customer import Customer
from app.data.inventory.stock.divided import Divided
from app.data.inventory.stock.stock import Stock
from app.data.sales.order import Order
from app.data.sales.order_item import OrderItem
from app.logger import get_logger

logger = get_logger("roll_erp.buisness.sales.orders")

DEFAULT_MAX_ATTEMPTS = 3

UNIT_MODELS = {
    "stock": Stock,
    "divided": Divided,
}


def _is_order_no_collision(error: IntegrityError) -> bool:
    return "order_no" in str(error.orig).lower()


def load_unit(unit_kind: str, unit_id: int):
    unit = db.session.get(UNIT_MODELS[unit_kind], unit_id)
    if unit is None:
        label = "Stock" if unit_kind == "stock" else "Divided roll"
        raise NotFoundError(f"{label} {unit_id} not found")
    return unit


def units_linked_to(order: Order) -> list:
    """
    Every inventory unit this order may have touched: units referenced by its
    lines, units on its shipment, and units pointing at it by order_id.
    Deduplicated by (kind, id), in that order.
    """
    seen = set()
    units = []

    def add(unit):
        if unit is None:
            return
        key = (unit.unit_kind, unit.id)
        if key not in seen:
            seen.add(key)
            units.append(unit)

    for item in order.order_items:
        add(item.unit)
    if order.shipment is not None:
        for shipment_item in order.shipment.shipment_items:
            add(shipment_item.unit)
    for model in (Stock, Divided):
        for unit in model.query.filter_by(order_id=order.id).order_by(model.id).all():
            add(unit)
    return units


class OrderManager:
    """
    Order lifecycle: create (with order-number allocation and unit
    reservation), update and delete.

    Each public method is one transaction. Domain errors roll the session back
    and propagate unchanged; an order_no uniqueness violation on create is
    retried with a freshly scanned number up to max_attempts times.
    """

    def __init__(self, user_id: int | None = None, max_attempts: int = DEFAULT_MAX_ATTEMPTS, allocator=None):
        self.user_id = user_id
        self.max_attempts = max(1, max_attempts)
        self.allocator = allocator or OrderNumberAllocator()
        self.status_manager = InventoryStatusManager()

    # ----- shared helpers -----

    def _customer(self, customer_id) -> Customer:
        customer_id = to_optional_int(customer_id, "customerId")
        if customer_id is None:
            raise ValidationError("Customer ID is required")
        customer = db.session.get(Customer, customer_id)
        if customer is None:
            raise NotFoundError(f"Customer {customer_id} not found")
        return customer

    def _write_lines(self, order: Order, lines: list[OrderLine]) -> None:
        """Create the OrderItems and reserve the unit each one points at"""
        for line in lines:
            unit = load_unit(line.unit_kind, line.unit_id)
            self.status_manager.reserve(unit, order)
            unit.updated_by_id = self.user_id
            order.order_items.append(OrderItem(
                line_number=line.line_number,
                type=line.type,
                product=line.product,
                gsm=line.gsm,
                width=line.width,
                length=line.length,
                weight=line.weight,
                quantity=line.quantity,
                price=line.price,
                tax=line.tax,
                unit_kind=line.unit_kind,
                stock_id=unit.id if line.unit_kind == "stock" else None,
                divided_id=unit.id if line.unit_kind == "divided" else None,
                created_by_id=self.user_id,
                updated_by_id=self.user_id,
            ))

    def _get_order(self, order_id) -> Order:
        order_id = to_optional_int(order_id, "id")
        if order_id is None:
            raise ValidationError("Order ID is required")
        order = db.session.get(Order, order_id)
        if order is None:
            raise NotFoundError("Order not found")
        return order

    # ----- operations -----

    def preview_order_no(self) -> str:
        return self.allocator.preview()

    def create_order(self, payload: dict) -> Order:
        if is_blank(payload.get("customerId")):
            raise ValidationError("Customer ID is required")
        lines = parse_order_lines(payload.get("orderItems"))
        discount, discount_type = validate_discount(payload.get("discount"), payload.get("discountType"))
        total = compute_total(lines, discount, discount_type, payload.get("totalAmount"))
        note = to_text(payload.get("note"))

        for attempt in range(1, self.max_attempts + 1):
            order_no = self.allocator.allocate()
            try:
                customer = self._customer(payload.get("customerId"))
                order = Order(
                    order_no=order_no,
                    customer_id=customer.id,
                    total_amount=total,
                    discount=discount,
                    discount_type=discount_type,
                    note=note,
                    status="Open",
                    created_by_id=self.user_id,
                    updated_by_id=self.user_id,
                )
                db.session.add(order)
                db.session.flush()
                self._write_lines(order, lines)
                db.session.commit()
            except IntegrityError as e:
                db.session.rollback()
                if not _is_order_no_collision(e):
                    logger.error("Order insert rejected by the database", exc_info=True)
                    raise PersistenceError("Failed to create order", details=str(e.orig)) from e
                logger.warning(f"Order number {order_no} already taken (attempt {attempt}/{self.max_attempts})")
                continue
            except Exception:
                db.session.rollback()
                raise

            logger.info(f"Created order {order.order_no} with {len(lines)} item(s), total={order.total_amount}")
            return order

        logger.error(f"Could not allocate a unique order number after {self.max_attempts} attempts")
        raise ConflictError(
            "Failed to create order",
            details=f"Could not allocate a unique order number after {self.max_attempts} attempts",
        )

    def update_order(self, payload: dict) -> Order:
        order = self._get_order(payload.get("id"))
        if order.is_shipped:
            raise ValidationError(f"Order {order.order_no} has already been shipped and cannot be edited")

        discount, discount_type = validate_discount(
            payload["discount"] if "discount" in payload else order.discount,
            payload["discountType"] if "discountType" in payload else order.discount_type,
        )
        replace_items = payload.get("orderItems") is not None
        lines = parse_order_lines(payload["orderItems"]) if replace_items else [
            OrderLine.from_item(item) for item in order.order_items
        ]

        try:
            if "customerId" in payload:
                order.customer_id = self._customer(payload.get("customerId")).id
            if "note" in payload:
                order.note = to_text(payload.get("note"))

            if replace_items:
                for unit in units_linked_to(order):
                    self.status_manager.release(unit, order)
                order.order_items.clear()
                db.session.flush()
                self._write_lines(order, lines)

            order.discount = discount
            order.discount_type = discount_type
            order.total_amount = compute_total(lines, discount, discount_type, payload.get("totalAmount"))
            order.updated_by_id = self.user_id
            db.session.commit()
        except Exception:
            db.session.rollback()
            raise

        logger.info(f"Updated order {order.order_no}, total={order.total_amount}")
        return order

    def delete_order(self, order_id) -> str:
        """
        Delete an order and undo its inventory effects.

        Sold units still carrying this order's number go back to Available
        with their sold length restored; units it reserved are released.
        Units whose order number has since changed are left as they are.
        """
        order = self._get_order(order_id)
        order_no = order.order_no

        try:
            restored = 0
            for unit in units_linked_to(order):
                if self.status_manager.revert(unit, order) is not None:
                    unit.updated_by_id = self.user_id
                    restored += 1
                if unit.order_id == order.id:
                    unit.order_id = None
            db.session.delete(order)
            db.session.commit()
        except Exception:
            db.session.rollback()
            logger.error(f"Failed to delete order {order_no}", exc_info=True)
            raise

        logger.info(f"Deleted order {order_no}; {restored} inventory unit(s) returned to stock")
        return order_no
