import os
from dotenv import load_dotenv

load_dotenv(override=True)

class Config:
    """
    Base configuration for OrderDesk.
    Projects should provide content store credentials via environment variables.
    """
    # Flask settings
    SECRET_KEY = os.getenv('FLASK_SECRET_KEY')

    # Get DB_DIR from environment, or use a default if not set
    DB_DIR = os.getenv('DB_DIR', os.path.join(os.getcwd(), 'databases'))

    # Log store (app_logs table)
    LOG_DB = os.getenv('LOG_DB', os.path.join(DB_DIR, "orderdesk_logs.db"))

    # Sanity content store
    SANITY_PROJECT_ID = os.getenv('SANITY_PROJECT_ID')
    SANITY_DATASET = os.getenv('SANITY_DATASET', 'production')
    SANITY_API_VERSION = os.getenv('SANITY_API_VERSION', '2023-05-03')
    SANITY_TOKEN = os.getenv('SANITY_TOKEN')
    SANITY_USE_CDN = os.getenv('SANITY_USE_CDN', '0') in ('1', 'true', 'True')
    SANITY_TIMEOUT = int(os.getenv('SANITY_TIMEOUT', '15'))

    # Admin credentials (hash from werkzeug.security.generate_password_hash)
    ADMIN_EMAIL = os.getenv('ADMIN_EMAIL')
    ADMIN_PASSWORD_HASH = os.getenv('ADMIN_PASSWORD_HASH')

    # Order screen
    ORDER_DATE_FORMAT = os.getenv('ORDER_DATE_FORMAT', '%m/%d/%Y')

    # Per-session order screens: idle expiry (seconds) and how many to keep
    ORDER_SCREEN_IDLE_SECONDS = int(os.getenv('ORDER_SCREEN_IDLE_SECONDS', '3600'))
    ORDER_SCREEN_MAX = int(os.getenv('ORDER_SCREEN_MAX', '100'))

    # Port for local server (optional, projects can set this)
    port = int(os.getenv('PORT', '5000'))


def get_config_value(key, default=None):
    """Get configuration value: Flask app config first, then Config, then env var"""
    try:
        from flask import current_app
        val = current_app.config.get(key)
        if val:
            return val
    except RuntimeError:
        pass
    val = getattr(Config, key, None)
    if val:
        return val
    return os.getenv(key, default)
