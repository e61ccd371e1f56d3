"""
Inventory Services
Presentation services for roll listings and shipment candidate lookup.
"""

from .inventory_service import InventoryService
from .match_order_service import MatchOrderService

__all__ = [
    'InventoryService',
    'MatchOrderService',
]
