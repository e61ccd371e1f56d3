"""
Shipment data models.
"""

from app.data.shipment.shipment import Shipment
from app.data.shipment.shipment_item import ShipmentItem

__all__ = [
    'Shipment',
    'ShipmentItem',
]
