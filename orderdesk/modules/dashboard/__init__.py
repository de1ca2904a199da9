"""
Dashboard Module
================

Admin authentication for OrderDesk.

Provides:
- Admin login/logout against configured credentials
- The admin_required guard used by every admin screen
"""

from flask import Blueprint

# Note: Blueprint name is 'admin' so other modules can url_for('admin.login')
dashboard_bp = Blueprint(
    'admin',
    __name__,
    url_prefix='/admin',
    template_folder='templates'
)

# Import routes after blueprint is created
from . import routes
from .utils import admin_required

__all__ = ['dashboard_bp', 'admin_required']
