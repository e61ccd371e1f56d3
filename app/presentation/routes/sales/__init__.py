from flask import Blueprint

sales_bp = Blueprint('sales', __name__)

# Import all route modules
from . import (  # noqa: E402,F401
    customers,
    orders,
)
