import os
from dotenv import load_dotenv

load_dotenv()

IS_PRODUCTION = (
    os.getenv('ENVIRONMENT') == 'production' or
    os.getenv('FLASK_ENV') == 'production' or
    os.getenv('PRODUCTION') == '1'
)

DB_DIR = os.path.join(os.path.dirname(os.path.abspath(__file__)), 'databases')


class Config:
    SECRET_KEY = os.getenv('FLASK_SECRET_KEY', 'dev-secret-key-change-in-production')

    # Log store
    DB_DIR = DB_DIR
    LOG_DB = os.path.join(DB_DIR, 'orderdesk_logs.db')

    # Sanity content store
    SANITY_PROJECT_ID = os.getenv('SANITY_PROJECT_ID', '')
    SANITY_DATASET = os.getenv('SANITY_DATASET', 'production')
    SANITY_API_VERSION = os.getenv('SANITY_API_VERSION', '2023-05-03')
    SANITY_TOKEN = os.getenv('SANITY_TOKEN', '')

    # Admin login (generate with werkzeug.security.generate_password_hash)
    ADMIN_EMAIL = os.getenv('ADMIN_EMAIL', '')
    ADMIN_PASSWORD_HASH = os.getenv('ADMIN_PASSWORD_HASH', '')

    BRAND_NAME = 'My Shop'
