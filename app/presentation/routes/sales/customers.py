from flask import jsonify
from flask_login import current_user, login_required
from sqlalchemy.exc import SQLAlchemyError

from app import db
from app.buisness.core.errors import ErpDomainError, ValidationError
from app.buisness.core.payload_parsing import is_blank, to_text
from app.data.core.customer import Customer
from app.logger import get_logger
from app.presentation.routes.api_responses import error_response, json_body, server_error
from app.presentation.routes.sales import sales_bp
from app.services.sales.customer_service import CustomerService

logger = get_logger("roll_erp.routes.sales.customers")


@sales_bp.get('/customers')
@login_required
def list_customers():
    try:
        return jsonify(CustomerService.list_customers())
    except SQLAlchemyError as e:
        logger.error(f"Error loading customers: {e}", exc_info=True)
        return jsonify([])


@sales_bp.post('/customers')
@login_required
def create_customer():
    try:
        data = json_body()
        if is_blank(data.get('name')):
            raise ValidationError("Customer name is required")
        customer = Customer.create_from_dict({
            'name': to_text(data.get('name')),
            'phone': to_text(data.get('phone')),
            'address': to_text(data.get('address')),
            'email': to_text(data.get('email')),
        }, user_id=current_user.id)
    except ErpDomainError as e:
        return error_response(e)
    except Exception as e:
        return server_error("create customer", e)

    logger.info(f"Customer {customer.id} created by {current_user.username}")
    return jsonify(customer.to_dict(include_audit_fields=False, camel_case=True)), 200
