"""
Test the logging sanitizer utility.
Request payloads pass through it before being logged, so credentials must never survive.
"""

from app.utils.logging_sanitizer import (
    SENSITIVE_FIELDS,
    sanitize_dict,
    sanitize_form_data,
    sanitize_payload,
)
from werkzeug.datastructures import ImmutableMultiDict


def test_sanitize_dict():
    result = sanitize_dict({
        'username': 'admin',
        'password': 'secret123',
        'email': 'admin@example.com'
    })
    assert result['username'] == 'admin', "Username should not be redacted"
    assert result['password'] == '[REDACTED]', "Password should be redacted"
    assert result['email'] == 'admin@example.com', "Email should not be redacted"

    # Case insensitivity
    result = sanitize_dict({'Password': 'a', 'PASSWORD': 'b', 'PaSsWoRd': 'c'})
    assert set(result.values()) == {'[REDACTED]'}


def test_camel_case_keys_are_redacted():
    """JSON bodies use camelCase; those spellings must be caught too"""
    result = sanitize_dict({
        'confirmPassword': 'x',
        'apiKey': 'y',
        'csrfToken': 'z',
        'customerId': 4,
    })
    assert result['confirmPassword'] == '[REDACTED]'
    assert result['apiKey'] == '[REDACTED]'
    assert result['csrfToken'] == '[REDACTED]'
    assert result['customerId'] == 4


def test_nested_dicts_and_lists():
    result = sanitize_payload({
        'user': {'username': 'admin', 'password': 'secret123'},
        'orderItems': [{'productId': 1, 'token': 'abc'}, {'productId': 2}],
    })
    assert result['user']['username'] == 'admin'
    assert result['user']['password'] == '[REDACTED]'
    assert result['orderItems'][0] == {'productId': 1, 'token': '[REDACTED]'}
    assert result['orderItems'][1] == {'productId': 2}


def test_sanitize_payload_passes_scalars_through():
    assert sanitize_payload(None) is None
    assert sanitize_payload('SO-20250101001') == 'SO-20250101001'


def test_sanitize_form_data():
    form_data = ImmutableMultiDict([
        ('username', 'admin'),
        ('password', 'secret123'),
    ])
    result = sanitize_form_data(form_data)
    assert result == {'username': 'admin', 'password': '[REDACTED]'}


def test_all_sensitive_fields():
    """Verify all sensitive fields are properly configured"""
    result = sanitize_dict({field: f"sensitive_{field}_value" for field in SENSITIVE_FIELDS})
    for field in SENSITIVE_FIELDS:
        assert result[field] == '[REDACTED]', f"Field '{field}' should be redacted"
