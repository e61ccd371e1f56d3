from flask import Blueprint

shipment_bp = Blueprint('shipment', __name__)

# Import all route modules
from . import (  # noqa: E402,F401
    history,
    scanning,
    travel_document,
)
