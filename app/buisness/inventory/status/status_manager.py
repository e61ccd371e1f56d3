from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from app.buisness.core.errors import InvalidStatusTransition, ValidationError
from app.buisness.core.payload_parsing import parse_measure
from app.buisness.inventory.status.status_validator import InventoryStatusValidator
from app.logger import get_logger

logger = get_logger("roll_erp.buisness.inventory.status")


@dataclass(frozen=True)
class StatusChange:
    unit_kind: str
    unit_id: int
    from_status: str | None
    to_status: str


class InventoryStatusManager:
    """
    Inventory-unit status manager.

    This class is responsible for:
    - validating transitions
    - setting status / is_sold and the order linkage fields together
    - moving sold length in and out of remaining_length

    It never commits; callers own the transaction.
    """

    def _set_status(self, unit, new_status: str) -> StatusChange:
        old = unit.status
        if old == new_status:
            return StatusChange(unit.unit_kind, unit.id, old, new_status)
        if not InventoryStatusValidator.can_transition("unit", old, new_status):
            raise InvalidStatusTransition(
                f"Invalid status transition for {unit.unit_kind} {unit.barcode_id}: {old} -> {new_status}"
            )
        unit.status = new_status
        unit.is_sold = new_status == InventoryStatusValidator.SOLD
        return StatusChange(unit.unit_kind, unit.id, old, new_status)

    def reserve(self, unit, order) -> StatusChange:
        if unit.status != InventoryStatusValidator.AVAILABLE:
            raise ValidationError(
                f"{unit.unit_kind.capitalize()} {unit.barcode_id} is not available (status: {unit.status})"
            )
        change = self._set_status(unit, InventoryStatusValidator.RESERVED)
        unit.order_id = order.id
        unit.order_no = order.order_no
        return change

    def release(self, unit, order) -> StatusChange | None:
        """Reserved -> Available, only when the reservation belongs to this order"""
        if unit.status != InventoryStatusValidator.RESERVED or unit.order_id != order.id:
            return None
        change = self._set_status(unit, InventoryStatusValidator.AVAILABLE)
        self._clear_sale_fields(unit)
        return change

    def mark_sold(self, unit, order, item_length=None, sold_at: datetime | None = None) -> StatusChange:
        """
        Available/Reserved -> Sold at shipment.

        The consumed length is the order line's numeric length capped by what
        is left on the roll, or the whole remaining length when the line
        carries no usable length.
        """
        if unit.status == InventoryStatusValidator.RESERVED and unit.order_id != order.id:
            raise ValidationError(f"{unit.barcode_id} is reserved by another order ({unit.order_no})")
        if unit.status == InventoryStatusValidator.SOLD:
            raise ValidationError(f"{unit.barcode_id} has already been sold (order {unit.order_no})")
        change = self._set_status(unit, InventoryStatusValidator.SOLD)

        remaining = unit.remaining_length or 0.0
        wanted = parse_measure(item_length)
        consumed = remaining if wanted is None else min(wanted, remaining)

        unit.order_id = order.id
        unit.order_no = order.order_no
        unit.sold_date = sold_at or datetime.utcnow()
        unit.customer_name = order.customer.name if order.customer else None
        unit.sold_length = consumed
        unit.remaining_length = remaining - consumed
        return change

    def restore(self, unit, order) -> StatusChange | None:
        """
        Sold -> Available when an order is deleted.

        Only a unit whose order_no still equals this order's number is reset;
        a unit that has since been reassigned is left untouched.
        """
        if unit.status != InventoryStatusValidator.SOLD or unit.order_no != order.order_no:
            return None
        change = self._set_status(unit, InventoryStatusValidator.AVAILABLE)
        unit.remaining_length = (unit.remaining_length or 0.0) + (unit.sold_length or 0.0)
        self._clear_sale_fields(unit)
        logger.debug(f"Restored {unit.unit_kind} {unit.barcode_id} from order {order.order_no}")
        return change

    def revert(self, unit, order) -> StatusChange | None:
        """Undo whatever this order did to the unit (restore a sale or drop a reservation)"""
        if unit.status == InventoryStatusValidator.SOLD:
            return self.restore(unit, order)
        return self.release(unit, order)

    @staticmethod
    def _clear_sale_fields(unit):
        unit.order_id = None
        unit.order_no = None
        unit.sold_date = None
        unit.customer_name = None
        unit.sold_length = None
