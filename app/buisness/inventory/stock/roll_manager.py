from __future__ import annotations

from datetime import date, datetime

from app import db
from app.buisness.core.errors import NotFoundError, ValidationError
from app.buisness.core.payload_parsing import (
    require_fields,
    to_number,
    to_optional_int,
    to_text,
)
from app.buisness.inventory.status.status_validator import InventoryStatusValidator
from app.data.core.user_info.user import User
from app.data.inventory.stock.divided import Divided
from app.data.inventory.stock.inspection_log import InspectionLog
from app.data.inventory.stock.stock import Stock
from app.data.sales.order_item import OrderItem
from app.data.shipment.shipment_item import ShipmentItem
from app.logger import get_logger

logger = get_logger("roll_erp.buisness.inventory.rolls")

STOCK_REQUIRED_FIELDS = ("barcodeId", "type", "gsm", "width", "length", "weight", "containerNo")
STOCK_EDITABLE_FIELDS = ("type", "gsm", "width", "length", "weight", "containerNo", "arrivalDate", "note")


def _next_suffix(existing_numbers, prefix: str, digits: int, trailer: str = "") -> int:
    used = 0
    for number in existing_numbers:
        body = number[len(prefix):len(number) - len(trailer) if trailer else None]
        if len(body) == digits and body.isdigit():
            used = max(used, int(body))
    return used + 1


def jumbo_roll_number(today: date | None = None) -> str:
    """Next SHZ{yy}{mm}{NNNN} number for the month"""
    today = today or date.today()
    prefix = f"SHZ{today:%y}{today:%m}"
    existing = [row[0] for row in db.session.query(Stock.jumbo_roll_no).filter(Stock.jumbo_roll_no.like(f"{prefix}%"))]
    return f"{prefix}{_next_suffix(existing, prefix, 4):04d}"


def divided_roll_number(today: date | None = None) -> str:
    """Next SHZ-{mm}{yy}{NNNN}AA number for the month"""
    today = today or date.today()
    prefix = f"SHZ-{today:%m}{today:%y}"
    existing = [row[0] for row in db.session.query(Divided.roll_no).filter(Divided.roll_no.like(f"{prefix}%"))]
    return f"{prefix}{_next_suffix(existing, prefix, 4, 'AA'):04d}AA"


def find_unit_by_barcode(barcode: str):
    """Stock or Divided carrying this barcode, or None"""
    barcode = (barcode or "").strip()
    if not barcode:
        return None
    return (
        Stock.query.filter_by(barcode_id=barcode).first()
        or Divided.query.filter_by(barcode_id=barcode).first()
    )


class RollManager:
    """
    Intake, correction, inspection, division and deletion of rolls.

    Every public method commits its own unit of work and rolls back on failure.
    """

    def __init__(self, user_id: int | None = None):
        self.user_id = user_id

    def _ensure_barcode_free(self, barcode: str) -> None:
        if find_unit_by_barcode(barcode) is not None:
            raise ValidationError(f"Barcode {barcode} is already registered")

    def _positive(self, value, field: str) -> float:
        number = to_number(value, field)
        if number <= 0:
            raise ValidationError(f"{field} must be greater than 0")
        return number

    def _arrival_date(self, value) -> datetime:
        try:
            return datetime.fromisoformat(value) if value else datetime.utcnow()
        except (TypeError, ValueError):
            raise ValidationError(f"Invalid arrivalDate: {value}") from None

    def _ensure_deletable(self, unit, label: str) -> None:
        if unit.status != InventoryStatusValidator.AVAILABLE:
            raise ValidationError(f"{label} is {unit.status} and cannot be deleted")
        column = "stock_id" if unit.unit_kind == "stock" else "divided_id"
        referenced = (
            OrderItem.query.filter_by(**{column: unit.id}).first() is not None
            or ShipmentItem.query.filter_by(**{column: unit.id}).first() is not None
        )
        if referenced:
            raise ValidationError(f"{label} is referenced by an order and cannot be deleted")

    def _commit(self, action: str):
        try:
            db.session.commit()
        except Exception:
            db.session.rollback()
            logger.error(f"Failed to {action}", exc_info=True)
            raise

    def intake_stock(self, data: dict) -> Stock:
        require_fields(data, STOCK_REQUIRED_FIELDS)
        barcode = str(data["barcodeId"]).strip()
        self._ensure_barcode_free(barcode)

        length = self._positive(data["length"], "length")
        arrival_date = self._arrival_date(data.get("arrivalDate"))
        stock = Stock(
            jumbo_roll_no=jumbo_roll_number(),
            barcode_id=barcode,
            type=to_text(data["type"]),
            gsm=self._positive(data["gsm"], "gsm"),
            width=self._positive(data["width"], "width"),
            length=length,
            remaining_length=length,
            weight=self._positive(data["weight"], "weight"),
            container_no=to_text(data["containerNo"]),
            arrival_date=arrival_date,
            note=to_text(data.get("note")),
            status=InventoryStatusValidator.AVAILABLE,
            created_by_id=self.user_id,
            updated_by_id=self.user_id,
        )
        db.session.add(stock)
        self._commit("intake stock")
        logger.info(f"Stock intake {stock.jumbo_roll_no} barcode={stock.barcode_id} length={length}")
        return stock

    def update_stock(self, stock_id: int, data: dict) -> Stock:
        """
        Correct the intake details of an unsold stock roll.

        Only the keys present in data are changed. A new length keeps the
        amount already cut off, so remaining_length moves by the same delta.
        """
        stock = db.session.get(Stock, stock_id)
        if stock is None:
            raise NotFoundError("Stock not found")
        if stock.status != InventoryStatusValidator.AVAILABLE:
            raise ValidationError(f"Stock {stock.jumbo_roll_no} is {stock.status} and cannot be edited")
        if not any(field in data for field in STOCK_EDITABLE_FIELDS):
            raise ValidationError("No editable fields supplied", fields=list(STOCK_EDITABLE_FIELDS))

        changes = {}
        for field, column in (("type", "type"), ("containerNo", "container_no")):
            if field in data:
                require_fields(data, (field,))
                changes[column] = to_text(data[field])
        for field in ("gsm", "width", "weight"):
            if field in data:
                changes[field] = self._positive(data[field], field)
        if "length" in data:
            length = self._positive(data["length"], "length")
            consumed = (stock.length or 0.0) - (stock.remaining_length or 0.0)
            if length < consumed:
                raise ValidationError(
                    f"length cannot be less than the {consumed:g} already divided off",
                    divided=consumed,
                )
            changes["length"] = length
            changes["remaining_length"] = length - consumed
        if "arrivalDate" in data:
            changes["arrival_date"] = self._arrival_date(data["arrivalDate"])
        if "note" in data:
            changes["note"] = to_text(data["note"])

        for column, value in changes.items():
            setattr(stock, column, value)
        stock.updated_by_id = self.user_id

        self._commit(f"update stock {stock_id}")
        logger.info(f"Updated stock {stock.jumbo_roll_no} fields={sorted(set(data) & set(STOCK_EDITABLE_FIELDS))}")
        return stock

    def delete_stock(self, stock_id: int) -> str:
        """Remove an unsold stock roll that has no sub-rolls and no order history"""
        stock = db.session.get(Stock, stock_id)
        if stock is None:
            raise NotFoundError("Stock not found")
        self._ensure_deletable(stock, f"Stock {stock.jumbo_roll_no}")
        if stock.divided_rolls:
            raise ValidationError(
                f"Stock {stock.jumbo_roll_no} has divided rolls and cannot be deleted",
                dividedCount=len(stock.divided_rolls),
            )

        jumbo_roll_no = stock.jumbo_roll_no
        InspectionLog.query.filter_by(stock_id=stock.id).update({"stock_id": None})
        db.session.delete(stock)
        self._commit(f"delete stock {stock_id}")
        logger.info(f"Deleted stock {jumbo_roll_no}")
        return jumbo_roll_no

    def _inspect(self, unit, note: str | None = None):
        unit.inspected = True
        unit.inspected_at = datetime.utcnow()
        unit.inspected_by_id = self.user_id
        unit.updated_by_id = self.user_id

        user = db.session.get(User, self.user_id) if self.user_id else None
        identifier = unit.jumbo_roll_no if unit.unit_kind == "stock" else unit.roll_no
        db.session.add(InspectionLog(
            type=f"{unit.unit_kind}_inspected",
            item_type=unit.unit_kind,
            item_identifier=identifier,
            user_id=self.user_id,
            user_name=user.username if user else None,
            note=to_text(note),
            stock_id=unit.id if unit.unit_kind == "stock" else None,
            divided_id=unit.id if unit.unit_kind == "divided" else None,
            created_by_id=self.user_id,
            updated_by_id=self.user_id,
        ))
        self._commit(f"inspect {unit.unit_kind} {unit.id}")
        logger.info(f"Inspected {unit.unit_kind} {identifier} barcode={unit.barcode_id}")
        return unit

    def inspect_stock(self, stock_id: int, note: str | None = None) -> Stock:
        stock = db.session.get(Stock, stock_id)
        if stock is None:
            raise NotFoundError("Stock not found")
        return self._inspect(stock, note)

    def inspect_divided(self, divided_id: int, note: str | None = None) -> Divided:
        divided = db.session.get(Divided, divided_id)
        if divided is None:
            raise NotFoundError("Divided roll not found")
        return self._inspect(divided, note)

    def divide(self, data: dict) -> Divided:
        """
        Cut a sub-roll from a parent stock roll, or register an independent
        sub-roll when no stockId is given.
        """
        require_fields(data, ("barcodeId", "width", "length"))
        barcode = str(data["barcodeId"]).strip()
        width = self._positive(data["width"], "width")
        length = self._positive(data["length"], "length")
        stock_id = to_optional_int(data.get("stockId"), "stockId")

        stock = None
        if stock_id is not None:
            stock = db.session.get(Stock, stock_id)
            if stock is None:
                raise NotFoundError("Stock not found")
            if not stock.inspected:
                raise ValidationError("Stock must be inspected first")
            if stock.status != InventoryStatusValidator.AVAILABLE:
                raise ValidationError(f"Stock {stock.barcode_id} is {stock.status} and cannot be divided")
            if length > (stock.remaining_length or 0.0):
                raise ValidationError("Divided length cannot be greater than stock remaining length")

        self._ensure_barcode_free(barcode)

        divided = Divided(
            roll_no=divided_roll_number(),
            barcode_id=barcode,
            stock_id=stock.id if stock else None,
            width=width,
            length=length,
            remaining_length=length,
            note=to_text(data.get("note")),
            status=InventoryStatusValidator.AVAILABLE,
            created_by_id=self.user_id,
            updated_by_id=self.user_id,
        )
        db.session.add(divided)
        if stock is not None:
            stock.remaining_length = stock.remaining_length - length
            stock.updated_by_id = self.user_id
        self._commit("divide stock")
        logger.info(
            f"Divided roll {divided.roll_no} barcode={barcode} length={length}"
            + (f" from stock {stock.jumbo_roll_no}" if stock else " (independent)")
        )
        return divided

    def delete_divided(self, divided_id: int) -> str:
        """Remove an unsold sub-roll and give its length back to the parent"""
        divided = db.session.get(Divided, divided_id)
        if divided is None:
            raise NotFoundError("Divided roll not found")
        self._ensure_deletable(divided, f"Divided roll {divided.roll_no}")

        roll_no = divided.roll_no
        if divided.stock is not None:
            divided.stock.remaining_length = (divided.stock.remaining_length or 0.0) + divided.length
        InspectionLog.query.filter_by(divided_id=divided.id).update({"divided_id": None})
        db.session.delete(divided)
        self._commit(f"delete divided {divided_id}")
        logger.info(f"Deleted divided roll {roll_no}")
        return roll_no
