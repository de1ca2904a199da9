"""
Orders Admin Module
===================

Admin interface for order management.
Plugs into the dashboard module's admin session.

Provides:
- Order listing with a client-side status filter
- Expandable order detail rows
- Order status updates
- Order deletion with confirmation
"""

from flask import Blueprint

orders_bp = Blueprint(
    'orders_admin',
    __name__,
    url_prefix='/admin/orders',
    template_folder='templates'
)

from . import routes

__all__ = ['orders_bp']
