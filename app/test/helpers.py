"""
Shared helpers for the test modules
"""

from sqlalchemy.exc import OperationalError

ADMIN_USERNAME = 'admin'
ADMIN_PASSWORD = 'admin123456789'


def login_user(client, username=ADMIN_USERNAME, password=ADMIN_PASSWORD):
    """Helper function to login a user"""
    return client.post('/login', json={
        'username': username,
        'password': password
    })


def order_item_payload(unit, quantity=1, price=10000, **overrides):
    """Order line body for a stock or divided unit"""
    item = {
        'type': 'Sublimation Paper',
        'product': 'Roll' if unit.unit_kind == 'divided' else 'Jumbo Roll',
        'productId': unit.id,
        'unitKind': unit.unit_kind,
        'quantity': quantity,
        'price': price,
    }
    item.update(overrides)
    return item


def database_down(*args, **kwargs):
    """Stand-in for a query method while the database is unreachable"""
    raise OperationalError("SELECT 1", {}, Exception("database is down"))
