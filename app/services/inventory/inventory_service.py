"""
Inventory Service
Presentation service for stock and divided roll listings.
"""

from typing import Any, Dict, List

from app.data.inventory.stock.divided import Divided
from app.data.inventory.stock.stock import Stock


class InventoryService:
    """
    Read-only roll queries.

    Provides:
    - Stock listing (unsold first, newest first)
    - Divided listing (newest first)
    """

    @staticmethod
    def list_stock() -> List[Dict[str, Any]]:
        stock = Stock.query.order_by(Stock.is_sold.asc(), Stock.created_at.desc(), Stock.id.desc()).all()
        return [roll.to_api_dict() for roll in stock]

    @staticmethod
    def list_divided() -> List[Dict[str, Any]]:
        divided = Divided.query.order_by(Divided.created_at.desc(), Divided.id.desc()).all()
        return [roll.to_api_dict() for roll in divided]
