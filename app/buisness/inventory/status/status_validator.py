from __future__ import annotations


class InventoryStatusValidator:
    """
    Centralized status transition validator for inventory units (stock and divided rolls).

    Reservation happens at order creation, the sale at shipment finalization, and
    order edits/deletes walk units back to Available.
    """

    AVAILABLE = "Available"
    RESERVED = "Reserved"
    SOLD = "Sold"

    UNIT = {AVAILABLE, RESERVED, SOLD}

    _NEXT = {
        ("unit", AVAILABLE): {RESERVED, SOLD},
        ("unit", RESERVED): {SOLD, AVAILABLE},
        ("unit", SOLD): {AVAILABLE},
    }

    @classmethod
    def can_transition(cls, entity_type: str, current_status: str, new_status: str) -> bool:
        allowed = cls._NEXT.get((entity_type, current_status))
        if allowed is None:
            return False
        return new_status in allowed
