"""Shared operator credential check.

There are no sessions: every admin request carries the secret in a header
and it is compared against ``ADMIN_PASSWORD``.
"""
import hmac
from functools import wraps

from flask import current_app, request

from paradox.errors import AuthError


def check_admin_password(password) -> bool:
    expected = current_app.config.get('ADMIN_PASSWORD') or ''
    if not isinstance(password, str) or not expected:
        return False
    return hmac.compare_digest(password.encode('utf-8'), expected.encode('utf-8'))


def admin_required(view):
    @wraps(view)
    def wrapper(*args, **kwargs):
        header = current_app.config.get('ADMIN_HEADER', 'X-Admin-Password')
        if not check_admin_password(request.headers.get(header)):
            current_app.logger.warning(f"[auth] rejected admin request to {request.path}")
            raise AuthError()
        return view(*args, **kwargs)

    return wrapper
