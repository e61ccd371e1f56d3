"""
Core models package: users, customers and the audit base
"""

from .user_info.user import User
from .customer import Customer

__all__ = [
    'User',
    'Customer',
]
