"""
Stock data models (inventory units).
"""

from app.data.inventory.stock.stock import Stock
from app.data.inventory.stock.divided import Divided
from app.data.inventory.stock.inspection_log import InspectionLog

__all__ = [
    "Stock",
    "Divided",
    "InspectionLog",
]
