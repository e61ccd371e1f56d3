"""
Order total calculation.

The subtotal is the client-computed total when one is sent, otherwise the sum
of price x quantity over the lines. A discount is then subtracted (absolute for
"value", a share of the subtotal for "percentage") and the result is clamped
at zero.
"""

from __future__ import annotations

from app.buisness.core.errors import ValidationError
from app.buisness.core.payload_parsing import is_blank, to_number, to_optional_number
from app.data.sales.order import DISCOUNT_TYPES

DEFAULT_DISCOUNT_TYPE = "percentage"


def validate_discount(discount, discount_type) -> tuple[float | None, str]:
    """Normalise (discount, discountType); raises ValidationError on a bad range or type"""
    if is_blank(discount_type):
        discount_type = DEFAULT_DISCOUNT_TYPE
    if discount_type not in DISCOUNT_TYPES:
        raise ValidationError("Discount type must be 'percentage' or 'value'")

    value = to_optional_number(discount, "discount")
    if value is None:
        return None, discount_type
    if value < 0:
        raise ValidationError("Discount cannot be negative")
    if discount_type == "percentage" and value > 100:
        raise ValidationError("Percentage discount cannot be greater than 100")
    return value, discount_type


def subtotal(lines) -> float:
    return float(sum(line.price * line.quantity for line in lines))


def apply_discount(total: float, discount: float | None, discount_type: str) -> float:
    if discount:
        if discount_type == "value":
            total = total - discount
        else:
            total = total - (total * discount / 100)
    return max(0.0, float(total))


def compute_total(lines, discount, discount_type, client_total=None) -> float:
    if is_blank(client_total):
        base = subtotal(lines)
    else:
        base = to_number(client_total, "totalAmount")
    return apply_discount(base, discount, discount_type)
