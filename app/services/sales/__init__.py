"""
Sales Services
Presentation services for order and customer listings.
"""

from .order_service import OrderService
from .customer_service import CustomerService

__all__ = [
    'OrderService',
    'CustomerService',
]
