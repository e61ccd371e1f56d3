"""
Shipment Services
Presentation services for the unshipped-order queue and shipment history.
"""

from .shipment_service import ShipmentService

__all__ = [
    'ShipmentService',
]
