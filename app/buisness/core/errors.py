"""
Domain exceptions for the sales, inventory and shipment workflow

These exceptions represent business rule violations and domain-specific errors.
They are raised by the business layer and translated to HTTP responses by the
route handlers using `status_code`.
"""


class ErpDomainError(Exception):
    """Base exception for all workflow domain errors"""
    status_code = 500

    def __init__(self, message, **details):
        super().__init__(message)
        self.message = message
        self.details = details

    def to_dict(self):
        payload = {"error": self.message}
        payload.update(self.details)
        return payload


class ValidationError(ErpDomainError):
    """Raised when a required field is missing/malformed or a business rule rejects the input"""
    status_code = 400


class NotFoundError(ErpDomainError):
    """Raised when a referenced order, customer or inventory unit does not exist"""
    status_code = 404


class ConflictError(ErpDomainError):
    """Raised when a unique order number could not be allocated within the retry bound"""
    status_code = 500


class PersistenceError(ErpDomainError):
    """Raised when the underlying store is unavailable or rejects a write"""
    status_code = 500


class InvalidStatusTransition(ValidationError):
    """Raised when an inventory unit is moved between statuses that are not linked"""
    pass
