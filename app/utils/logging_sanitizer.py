"""
Logging Sanitizer Utility

Redacts credentials from request payloads before they are logged.
Keys are compared case-insensitively and without underscores, so
"confirm_password", "confirmPassword" and "CONFIRM_PASSWORD" are all caught.
"""

from typing import Any, Dict
from werkzeug.datastructures import ImmutableMultiDict


# Fields that should never be logged
SENSITIVE_FIELDS = {
    'password',
    'password_confirm',
    'confirm_password',
    'current_password',
    'new_password',
    'pwd',
    'passwd',
    'secret',
    'secret_key',
    'token',
    'api_key',
    'auth_token',
    'access_token',
    'refresh_token',
    'session_id',
    'csrf_token',
}

_NORMALIZED = {field.replace('_', '') for field in SENSITIVE_FIELDS}

REDACTED = '[REDACTED]'


def is_sensitive(key: str) -> bool:
    return str(key).lower().replace('_', '').replace('-', '') in _NORMALIZED


def _sanitize_value(value: Any, redact_text: str) -> Any:
    if isinstance(value, dict):
        return sanitize_dict(value, redact_text)
    if isinstance(value, (list, tuple)):
        return [_sanitize_value(item, redact_text) for item in value]
    return value


def sanitize_dict(data: Dict[str, Any], redact_text: str = REDACTED) -> Dict[str, Any]:
    """
    Replace sensitive values in a (possibly nested) payload.

    Example:
        >>> sanitize_dict({'username': 'admin', 'password': 'secret123'})
        {'username': 'admin', 'password': '[REDACTED]'}
    """
    if not data:
        return data

    return {
        key: redact_text if is_sensitive(key) else _sanitize_value(value, redact_text)
        for key, value in data.items()
    }


def sanitize_form_data(form_data: ImmutableMultiDict, redact_text: str = REDACTED) -> Dict[str, Any]:
    """Sanitize Flask request.form data for safe logging"""
    return sanitize_dict(dict(form_data), redact_text)


def sanitize_payload(payload: Any, redact_text: str = REDACTED) -> Any:
    """Sanitize a decoded JSON body (object, list or scalar)"""
    return _sanitize_value(payload, redact_text)
