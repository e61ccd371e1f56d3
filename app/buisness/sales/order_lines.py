from __future__ import annotations

from dataclasses import dataclass

from app.buisness.core.errors import ValidationError
from app.buisness.core.payload_parsing import (
    is_blank,
    to_number,
    to_optional_int,
    to_optional_number,
    to_text,
)
from app.data.sales.order_item import UNIT_KINDS

DIVIDED_TYPE = "Sublimation Paper"
DIVIDED_PRODUCT = "Roll"


def resolve_unit_kind(item: dict) -> str:
    """Explicit unitKind wins; otherwise Sublimation Paper rolls are divided units, everything else stock"""
    kind = item.get("unitKind")
    if not is_blank(kind):
        kind = str(kind).strip().lower()
        if kind not in UNIT_KINDS:
            raise ValidationError(f"unitKind must be one of {', '.join(UNIT_KINDS)}")
        return kind
    if item.get("type") == DIVIDED_TYPE and item.get("product") == DIVIDED_PRODUCT:
        return "divided"
    return "stock"


@dataclass
class OrderLine:
    """A validated order line, before it is written as an OrderItem"""
    line_number: int
    type: str
    unit_kind: str
    unit_id: int
    quantity: float
    price: float
    product: str | None = None
    gsm: str | None = None
    width: str | None = None
    length: str | None = None
    weight: str | None = None
    tax: float | None = None

    @classmethod
    def from_payload(cls, item: dict, line_number: int) -> "OrderLine":
        label = f"Order item {line_number}"
        if not isinstance(item, dict):
            raise ValidationError(f"{label} is malformed")
        if is_blank(item.get("type")):
            raise ValidationError(f"{label}: type is required")
        unit_id = to_optional_int(item.get("productId"), f"{label}: productId")
        if unit_id is None:
            raise ValidationError(f"{label}: productId is required")
        if item.get("price") is None:
            raise ValidationError(f"{label}: price is required")
        if item.get("quantity") is None:
            raise ValidationError(f"{label}: quantity is required")

        price = to_number(item.get("price"), f"{label}: price")
        quantity = to_number(item.get("quantity"), f"{label}: quantity")
        if price < 0:
            raise ValidationError(f"{label}: price cannot be negative")
        if quantity <= 0:
            raise ValidationError(f"{label}: quantity must be greater than 0")

        return cls(
            line_number=line_number,
            type=to_text(item.get("type")),
            unit_kind=resolve_unit_kind(item),
            unit_id=unit_id,
            quantity=quantity,
            price=price,
            product=to_text(item.get("product")),
            gsm=to_text(item.get("gsm")),
            width=to_text(item.get("width")),
            length=to_text(item.get("length")),
            weight=to_text(item.get("weight")),
            tax=to_optional_number(item.get("tax"), f"{label}: tax"),
        )

    @classmethod
    def from_item(cls, item) -> "OrderLine":
        return cls(
            line_number=item.line_number,
            type=item.type,
            unit_kind=item.unit_kind,
            unit_id=item.unit_id,
            quantity=item.quantity,
            price=item.price,
            product=item.product,
            gsm=item.gsm,
            width=item.width,
            length=item.length,
            weight=item.weight,
            tax=item.tax,
        )


def parse_order_lines(items) -> list[OrderLine]:
    if not items or not isinstance(items, list):
        raise ValidationError("At least one order item is required")
    return [OrderLine.from_payload(item, index) for index, item in enumerate(items, start=1)]
