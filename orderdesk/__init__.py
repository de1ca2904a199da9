"""
OrderDesk - A Flask Order Admin
===============================

Admin screen for reviewing, filtering, updating and deleting customer
orders stored in a Sanity content store:
- Admin authentication and session management
- Orders table with status filter and expandable detail rows
- Status updates and confirmed deletes against the content store

Usage:
    from orderdesk import OrderDesk

    app = Flask(__name__)
    OrderDesk(app, {'brand_name': 'My Shop'})
"""

import copy
import os

__version__ = '0.1.0'

DEFAULT_CONFIG = {
    'brand_name': 'OrderDesk',
    'features': {
        'dashboard': True,
        'orders': True,
    },
}

# Flask config keys seeded from core Config when the app leaves them unset
CONFIG_KEYS = [
    'SECRET_KEY', 'DB_DIR', 'LOG_DB',
    'SANITY_PROJECT_ID', 'SANITY_DATASET', 'SANITY_API_VERSION', 'SANITY_TOKEN',
    'SANITY_USE_CDN', 'SANITY_TIMEOUT',
    'ADMIN_EMAIL', 'ADMIN_PASSWORD_HASH', 'ORDER_DATE_FORMAT',
    'ORDER_SCREEN_IDLE_SECONDS', 'ORDER_SCREEN_MAX',
]


class OrderDesk:
    """Flask extension that wires the OrderDesk modules into an app"""

    def __init__(self, app=None, config=None, store=None):
        """
        Args:
            app: Flask app (optional, see init_app)
            config: Options dict, merged over DEFAULT_CONFIG
            store: Content store client shared by all screens. Built from
                configuration on first use when omitted.
        """
        self._config = self._merge_config(config or {})
        self._registered = []
        self.store = store
        self.screens = None
        self.app = None
        if app is not None:
            self.init_app(app)

    @staticmethod
    def _merge_config(overrides):
        merged = copy.deepcopy(DEFAULT_CONFIG)
        for key, value in overrides.items():
            if isinstance(value, dict) and isinstance(merged.get(key), dict):
                merged[key].update(value)
            else:
                merged[key] = value
        return merged

    def init_app(self, app):
        from .core.config import Config
        from .modules.orders.screen import ScreenRegistry

        self.app = app
        for key in CONFIG_KEYS:
            if app.config.get(key) is None and getattr(Config, key, None) is not None:
                app.config[key] = getattr(Config, key)

        self._setup_database_dir(app)
        self.screens = ScreenRegistry(
            self.get_store,
            idle_timeout=int(app.config.get('ORDER_SCREEN_IDLE_SECONDS') or 3600),
            max_screens=int(app.config.get('ORDER_SCREEN_MAX') or 100),
        )
        self._register_blueprints(app)
        self._register_template_helpers(app)

        app.extensions['orderdesk'] = self

    def _setup_database_dir(self, app):
        """Create the directory holding the log store"""
        log_db = app.config.get('LOG_DB')
        if log_db:
            os.makedirs(os.path.dirname(os.path.abspath(log_db)), exist_ok=True)

    def _register_blueprints(self, app):
        features = self._config['features']

        if features.get('dashboard', True):
            from .modules.dashboard import dashboard_bp
            app.register_blueprint(dashboard_bp)
            self._registered.append('dashboard')

        if features.get('orders', True):
            from .modules.orders import orders_bp
            app.register_blueprint(orders_bp)
            self._registered.append('orders')

    def _register_template_helpers(self, app):
        from .core.images import image_url
        from .modules.orders.models import format_order_date

        @app.template_filter('image_url')
        def image_url_filter(source, width=None, height=None):
            return image_url(
                source,
                app.config.get('SANITY_PROJECT_ID'),
                app.config.get('SANITY_DATASET', 'production'),
                width=width,
                height=height,
            )

        @app.template_filter('order_date')
        def order_date_filter(value):
            return format_order_date(value, app.config.get('ORDER_DATE_FORMAT') or '%m/%d/%Y')

        @app.context_processor
        def inject_orderdesk():
            return {
                'orderdesk_config': self._config,
                'brand_name': self._config.get('brand_name') or 'OrderDesk',
            }

    def get_store(self):
        """Content store client, built from configuration on first use"""
        if self.store is None:
            from .core.content_store import ContentStoreClient
            self.store = ContentStoreClient.from_config()
        return self.store

    def get_registered_modules(self):
        return list(self._registered)

    @property
    def config(self):
        return self._config


__all__ = ['OrderDesk']
