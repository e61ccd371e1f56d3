"""
Inventory unit models.

Two kinds of sellable units share one column set:
- stock/stock.py   - whole jumbo rolls received from containers
- stock/divided.py - sub-rolls cut from a stock roll (or received on their own)
"""

from app.data.inventory.stock import Stock, Divided, InspectionLog

__all__ = [
    'Stock',
    'Divided',
    'InspectionLog',
]
