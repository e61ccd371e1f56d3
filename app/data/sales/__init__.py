"""
Sales data models: orders and their line items.
"""

from app.data.sales.order import Order
from app.data.sales.order_item import OrderItem

__all__ = [
    'Order',
    'OrderItem',
]
