from __future__ import annotations

from flask import render_template

from app.logger import get_logger

logger = get_logger("roll_erp.buisness.shipment.travel_document")

TEMPLATE = "shipment/travel_document.html"


class TravelDocumentBuilder:
    """Builds the dispatch slip view model for a finalized shipment"""

    def __init__(self, shipment):
        self.shipment = shipment

    def _items(self) -> list[dict]:
        barcodes = {}
        for shipment_item in self.shipment.shipment_items:
            barcodes.setdefault(shipment_item.order_item_id, []).append(shipment_item.scanned_barcode)

        items = []
        for item in self.shipment.order.order_items:
            items.append({
                "lineNumber": item.line_number,
                "type": item.type,
                "product": item.product,
                "gsm": item.gsm,
                "width": item.width,
                "length": item.length,
                "weight": item.weight,
                "quantity": item.quantity,
                "barcodes": barcodes.get(item.id, []),
            })
        return items

    def build(self) -> dict:
        order = self.shipment.order
        customer = order.customer
        items = self._items()
        return {
            "shipmentId": self.shipment.id,
            "shipmentDate": self.shipment.shipment_date.isoformat() if self.shipment.shipment_date else None,
            "orderNo": order.order_no,
            "customer": {
                "name": customer.name if customer else None,
                "phone": customer.phone if customer else None,
                "address": customer.address if customer else None,
                "email": customer.email if customer else None,
            },
            "processedBy": self.shipment.processed_by.username if self.shipment.processed_by else None,
            "notes": self.shipment.notes,
            "items": items,
            "totalUnits": sum(len(item["barcodes"]) for item in items),
        }


class HtmlTravelDocumentRenderer:
    """Renders a travel document view model to HTML; needs an app context"""

    def __init__(self, template: str = TEMPLATE):
        self.template = template

    def render(self, document: dict) -> str:
        logger.debug(f"Rendering travel document for order {document.get('orderNo')}")
        return render_template(self.template, doc=document)

    @staticmethod
    def filename(document: dict) -> str:
        return f"travel-document-{document.get('orderNo') or document.get('shipmentId')}.html"
