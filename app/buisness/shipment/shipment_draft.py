from __future__ import annotations

from dataclasses import dataclass, field

from app.buisness.core.errors import ValidationError
from app.buisness.core.payload_parsing import is_blank, to_optional_int


@dataclass(frozen=True)
class ScanRecord:
    """One scanned barcode assigned to one order line"""
    order_item_id: int
    barcode: str
    unit_kind: str | None = None
    unit_id: int | None = None

    @classmethod
    def from_payload(cls, data: dict) -> "ScanRecord":
        if not isinstance(data, dict):
            raise ValidationError("Scanned item is malformed")
        order_item_id = to_optional_int(data.get("orderItemId"), "orderItemId")
        barcode = data.get("barcode") or data.get("scannedBarcode") or data.get("barcodeValue")
        if order_item_id is None or is_blank(barcode):
            raise ValidationError("Each scanned item needs an orderItemId and a barcode")
        unit_kind = data.get("unitKind")
        unit_id = data.get("unitId")
        if unit_id is None:
            unit_id = data.get("stockId") if unit_kind == "stock" else data.get("dividedId")
        return cls(
            order_item_id=order_item_id,
            barcode=str(barcode).strip(),
            unit_kind=unit_kind,
            unit_id=to_optional_int(unit_id, "unitId"),
        )

    def to_payload(self) -> dict:
        return {
            "orderItemId": self.order_item_id,
            "barcode": self.barcode,
            "unitKind": self.unit_kind,
            "unitId": self.unit_id,
        }


@dataclass
class ShipmentDraft:
    """
    Scans collected for one order before it is shipped.

    The client keeps the draft and sends it back (as scannedItems) on every
    validate call and on finalize; records are kept in arrival order and
    duplicates are preserved so the finalizer can reject them.
    """
    order_id: int
    scans: dict[int, list[ScanRecord]] = field(default_factory=dict)

    @classmethod
    def from_payload(cls, order_id: int, scanned_items) -> "ShipmentDraft":
        draft = cls(order_id=order_id)
        if scanned_items is None:
            return draft
        if not isinstance(scanned_items, list):
            raise ValidationError("scannedItems must be a list")
        for data in scanned_items:
            draft.add(ScanRecord.from_payload(data))
        return draft

    def add(self, record: ScanRecord) -> None:
        self.scans.setdefault(record.order_item_id, []).append(record)

    def records(self) -> list[ScanRecord]:
        return [record for records in self.scans.values() for record in records]

    def has_barcode(self, order_item_id: int, barcode: str) -> bool:
        return any(record.barcode == barcode for record in self.scans.get(order_item_id, []))

    def item_for_barcode(self, barcode: str) -> int | None:
        """Order item already holding this barcode, if any"""
        for order_item_id, records in self.scans.items():
            if any(record.barcode == barcode for record in records):
                return order_item_id
        return None

    def scanned_count(self, order_item_id: int) -> int:
        return len({record.barcode for record in self.scans.get(order_item_id, [])})

    def missing(self, order_items) -> list[dict]:
        """Lines still short of their required scan count"""
        return [
            {
                "orderItemId": item.id,
                "scannedCount": self.scanned_count(item.id),
                "requiredQuantity": item.required_quantity,
            }
            for item in order_items
            if self.scanned_count(item.id) < item.required_quantity
        ]

    def is_complete(self, order_items) -> bool:
        return not self.missing(order_items)

    def to_payload(self) -> list[dict]:
        return [record.to_payload() for record in self.records()]
