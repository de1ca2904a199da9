"""
Admin Dashboard Routes
======================

Admin login and logout. A successful login lands on the orders screen.
"""

from flask import render_template, request, redirect, url_for, flash, session, current_app

from ...core.logging_service import LoggingService
from . import dashboard_bp
from .utils import verify_admin_credentials, is_admin


def _safe_next(target):
    """Only follow same-site relative redirects"""
    if target and target.startswith('/') and not target.startswith('//'):
        return target
    return None


@dashboard_bp.route('/login', methods=['GET', 'POST'])
def login():
    """Admin login route"""
    if request.method == 'GET' and is_admin():
        return redirect(_safe_next(request.args.get('next')) or url_for('orders_admin.orders_manager'))

    if request.method == 'POST':
        email = request.form.get('email', '').strip().lower()
        password = request.form.get('password', '')

        if not email or not password:
            flash('Please enter both email and password', 'error')
            return render_template('dashboard/login.html'), 400

        if verify_admin_credentials(email, password):
            session['admin_id'] = email
            session['admin_email'] = email
            LoggingService.log_user_action('auth', 'admin_login', user_id=email)
            flash('Login successful', 'success')
            return redirect(_safe_next(request.args.get('next')) or url_for('orders_admin.orders_manager'))

        LoggingService.warning('auth', 'Failed admin login', {'email': email})
        flash('Invalid email or password', 'error')
        return render_template('dashboard/login.html'), 401

    return render_template('dashboard/login.html')


@dashboard_bp.route('/logout')
def logout():
    """Admin logout route"""
    admin_email = session.get('admin_email', 'Unknown')
    session.pop('admin_id', None)
    session.pop('admin_email', None)

    # Drop this operator's order screen state
    ext = current_app.extensions.get('orderdesk')
    screen_id = session.pop('screen_id', None)
    if ext is not None and screen_id:
        ext.screens.discard(screen_id)

    LoggingService.log_user_action('auth', 'admin_logout', user_id=admin_email)
    flash('You have been logged out', 'info')
    return redirect(url_for('admin.login'))
