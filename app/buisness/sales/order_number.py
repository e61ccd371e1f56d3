from __future__ import annotations

from datetime import date
from string import ascii_uppercase

from app import db
from app.buisness.core.errors import ConflictError
from app.data.sales.order import Order
from app.logger import get_logger

logger = get_logger("roll_erp.buisness.sales.order_number")

ORDER_NO_PREFIX = "SO-"
MAX_SEQUENCE = 999


class OrderNumberAllocator:
    """
    Date-coded order numbers: SO-YYYYMMDD followed by a 3-digit sequence.

    The smallest unused sequence for the day is taken, so numbers freed by
    deleted orders are reused. Once 001-999 are taken, an alphabetic infix is
    added (SO-YYYYMMDDA001 ... SO-YYYYMMDDZ999) with the same gap filling.
    """

    def __init__(self, today: date | None = None):
        self._today = today

    @property
    def today(self) -> date:
        return self._today or date.today()

    def day_prefix(self) -> str:
        return f"{ORDER_NO_PREFIX}{self.today:%Y%m%d}"

    def used_numbers(self) -> set[str]:
        """Every order number already stored under today's prefix (rescanned on each call)"""
        prefix = self.day_prefix()
        rows = db.session.query(Order.order_no).filter(Order.order_no.like(f"{prefix}%"))
        return {row[0] for row in rows}

    @staticmethod
    def next_number(prefix: str, used: set[str]) -> str:
        for infix in ("",) + tuple(ascii_uppercase):
            for sequence in range(1, MAX_SEQUENCE + 1):
                candidate = f"{prefix}{infix}{sequence:03d}"
                if candidate not in used:
                    return candidate
        raise ConflictError(f"No order numbers left for {prefix}")

    def allocate(self) -> str:
        order_no = self.next_number(self.day_prefix(), self.used_numbers())
        logger.debug(f"Allocated order number {order_no}")
        return order_no

    def preview(self) -> str:
        return self.next_number(self.day_prefix(), self.used_numbers())
