"""
Helpers for reading JSON request payloads in the business layer.

Values arrive as the client typed them (numbers or numeric strings); these
helpers turn them into floats or raise ValidationError naming the field.
"""

from __future__ import annotations

from app.buisness.core.errors import ValidationError


def is_blank(value) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def to_number(value, field: str) -> float:
    """Parse a required numeric field"""
    if is_blank(value) or isinstance(value, bool):
        raise ValidationError(f"{field} is required")
    try:
        return float(value)
    except (TypeError, ValueError):
        raise ValidationError(f"{field} must be a number") from None


def to_optional_number(value, field: str) -> float | None:
    if is_blank(value):
        return None
    return to_number(value, field)


def to_optional_int(value, field: str) -> int | None:
    if is_blank(value):
        return None
    try:
        return int(value)
    except (TypeError, ValueError):
        raise ValidationError(f"{field} must be an integer") from None


def to_text(value) -> str | None:
    """Line attribute columns are stored as entered; numbers become their string form"""
    if is_blank(value):
        return None
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value).strip()


def require_fields(data: dict, fields) -> None:
    missing = [field for field in fields if is_blank(data.get(field))]
    if missing:
        raise ValidationError("Missing required fields", missing=missing)


def parse_measure(value) -> float | None:
    """Numeric value of an operator-entered measure ("100", "100m", "1,000"); None when there is none"""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return float(value)
    digits = "".join(ch for ch in str(value) if ch.isdigit() or ch == ".")
    if not digits or digits.count(".") > 1 or digits == ".":
        return None
    return float(digits)
