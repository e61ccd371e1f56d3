from flask import Blueprint

inventory_bp = Blueprint('inventory', __name__)

# Import all route modules
from . import (  # noqa: E402,F401
    divided,
    logs,
    match_order,
    stock,
)
