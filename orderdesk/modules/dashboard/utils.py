from functools import wraps

from flask import jsonify, redirect, request, session, url_for
from werkzeug.security import check_password_hash

from ...core.config import get_config_value


def verify_admin_credentials(email, password):
    """Check an email/password pair against the configured admin account"""
    admin_email = (get_config_value('ADMIN_EMAIL') or '').strip().lower()
    password_hash = get_config_value('ADMIN_PASSWORD_HASH')

    if not admin_email or not password_hash:
        return False
    if (email or '').strip().lower() != admin_email:
        return False
    return check_password_hash(password_hash, password or '')


def is_admin():
    return 'admin_id' in session


def admin_required(f=None, api=False):
    """Decorator to require an admin session.

    HTML routes redirect to the login page; api=True routes get a 401 JSON body.
    """
    def decorator(view):
        @wraps(view)
        def decorated_function(*args, **kwargs):
            if not is_admin():
                if api:
                    return jsonify({'success': False, 'error': 'Authentication required'}), 401
                return redirect(url_for('admin.login', next=request.path))
            return view(*args, **kwargs)
        return decorated_function

    if f is not None:
        return decorator(f)
    return decorator
