from __future__ import annotations

from dataclasses import dataclass

from app.buisness.core.errors import ValidationError
from app.buisness.core.payload_parsing import is_blank, parse_measure
from app.buisness.inventory.status.status_validator import InventoryStatusValidator
from app.buisness.inventory.stock.roll_manager import find_unit_by_barcode
from app.buisness.shipment.shipment_draft import ScanRecord, ShipmentDraft
from app.logger import get_logger

logger = get_logger("roll_erp.buisness.shipment.barcode")


def owned_by_other_order(unit, order) -> bool:
    """True when the unit is reserved or sold to some order other than this one"""
    if unit.order_id is not None and unit.order_id != order.id:
        return True
    if unit.status != InventoryStatusValidator.AVAILABLE and unit.order_no and unit.order_no != order.order_no:
        return True
    return False


def _measure_matches(wanted, actual) -> bool:
    wanted = parse_measure(wanted)
    actual = parse_measure(actual)
    if wanted is None or actual is None:
        return True
    return wanted == actual


def _type_matches(wanted, actual) -> bool:
    if is_blank(wanted) or is_blank(actual):
        return True
    return str(wanted).strip().lower() == str(actual).strip().lower()


def satisfies_line(item, unit) -> bool:
    """An order line accepts an equivalent unit of the same kind; unspecified values match anything"""
    return (
        item.unit_kind == unit.unit_kind
        and _type_matches(item.type, unit.type)
        and _measure_matches(item.gsm, unit.gsm)
        and _measure_matches(item.width, unit.width)
        and _measure_matches(item.length, unit.length)
    )


def candidate_items(order, unit) -> list:
    """Lines referencing this exact unit first, then lines whose type and measurements it satisfies"""
    exact = [
        item for item in order.order_items
        if item.unit_kind == unit.unit_kind and item.unit_id == unit.id
    ]
    similar = [item for item in order.order_items if item not in exact and satisfies_line(item, unit)]
    return exact + similar


@dataclass
class ScanResult:
    matched: bool
    message: str
    duplicate: bool = False
    order_item: object = None
    unit: object = None
    scanned_item: ScanRecord | None = None
    scanned_count: int = 0
    required_quantity: int = 0
    order_complete: bool = False

    @property
    def complete(self) -> bool:
        return self.order_item is not None and self.scanned_count >= self.required_quantity

    def to_dict(self) -> dict:
        return {
            "matched": self.matched,
            "duplicate": self.duplicate,
            "message": self.message,
            "orderItem": self.order_item.to_api_dict() if self.order_item is not None else None,
            "inventoryItem": self.unit.to_api_dict() if self.unit is not None else None,
            "scannedItem": self.scanned_item.to_payload() if self.scanned_item else None,
            "scannedCount": self.scanned_count,
            "requiredQuantity": self.required_quantity,
            "complete": self.complete,
            "orderComplete": self.order_complete,
        }


class BarcodeMatcher:
    """Validates one scan against an order and the scans collected so far"""

    def __init__(self, order):
        self.order = order

    def _order_item(self, order_item_id):
        for item in self.order.order_items:
            if item.id == order_item_id:
                return item
        raise ValidationError(f"Order item {order_item_id} does not belong to order {self.order.order_no}")

    def validate(self, barcode: str, draft: ShipmentDraft, order_item_id: int | None = None) -> ScanResult:
        if self.order.is_shipped:
            raise ValidationError(f"Order {self.order.order_no} has already been shipped", matched=False)

        barcode = (barcode or "").strip()
        unit = find_unit_by_barcode(barcode)
        if unit is None:
            return ScanResult(False, "Barcode does not match any item in inventory")

        if owned_by_other_order(unit, self.order):
            logger.info(f"Rejected {barcode} for {self.order.order_no}: belongs to order {unit.order_no}")
            return ScanResult(False, "This item is already reserved or sold to a different order", unit=unit)

        candidates = candidate_items(self.order, unit)
        if order_item_id is not None:
            target = self._order_item(order_item_id)
            candidates = [item for item in candidates if item.id == target.id]
        if not candidates:
            return ScanResult(False, "Scanned roll does not match any item in this order", unit=unit)

        for item in candidates:
            if draft.has_barcode(item.id, barcode):
                return ScanResult(
                    True,
                    "This barcode has already been scanned for this item",
                    duplicate=True,
                    order_item=item,
                    unit=unit,
                    scanned_count=draft.scanned_count(item.id),
                    required_quantity=item.required_quantity,
                    order_complete=draft.is_complete(self.order.order_items),
                )

        held_by = draft.item_for_barcode(barcode)
        if held_by is not None:
            logger.info(f"Rejected {barcode} for {self.order.order_no}: already scanned for order item {held_by}")
            return ScanResult(
                False,
                "This barcode has already been scanned for another order item",
                unit=unit,
                order_complete=draft.is_complete(self.order.order_items),
            )

        target = next(
            (item for item in candidates if draft.scanned_count(item.id) < item.required_quantity),
            None,
        )
        if target is None:
            item = candidates[0]
            return ScanResult(
                False,
                "All matching order items are already fully scanned",
                order_item=item,
                unit=unit,
                scanned_count=draft.scanned_count(item.id),
                required_quantity=item.required_quantity,
            )

        record = ScanRecord(target.id, barcode, unit.unit_kind, unit.id)
        draft.add(record)
        logger.debug(f"Matched {barcode} to order item {target.id} of {self.order.order_no}")
        return ScanResult(
            True,
            "Barcode matched",
            order_item=target,
            unit=unit,
            scanned_item=record,
            scanned_count=draft.scanned_count(target.id),
            required_quantity=target.required_quantity,
            order_complete=draft.is_complete(self.order.order_items),
        )
