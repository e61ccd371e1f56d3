"""
Routes package: JSON API blueprints for sales, inventory and shipment
"""

from app.logger import get_logger

logger = get_logger("roll_erp.routes")


def init_app(app):
    """Initialize all route blueprints with the Flask app"""
    logger.debug("Initializing route blueprints")

    from .sales import sales_bp
    from .inventory import inventory_bp
    from .shipment import shipment_bp

    app.register_blueprint(sales_bp, url_prefix='/api/sales')
    app.register_blueprint(inventory_bp, url_prefix='/api/inventory')
    app.register_blueprint(shipment_bp, url_prefix='/api/shipment')

    logger.info("Registered sales, inventory and shipment blueprints")
