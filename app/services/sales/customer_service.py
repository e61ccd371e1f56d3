"""
Customer Service
Presentation service for customer listings.
"""

from typing import Any, Dict, List

from app.data.core.customer import Customer


class CustomerService:

    @staticmethod
    def list_customers() -> List[Dict[str, Any]]:
        customers = Customer.query.order_by(Customer.name.asc()).all()
        return [customer.to_dict(include_audit_fields=False, camel_case=True) for customer in customers]
