"""
My OrderDesk Site
=================

Flask app hosting the OrderDesk order admin.

Run with:
    python main.py

Visit:
    http://localhost:5000/admin/login   - Admin login
    http://localhost:5000/admin/orders/ - Orders
"""

import os
from flask import Flask, redirect, url_for, jsonify

# ===== App Setup =====

app = Flask(__name__)

# Load config
from config import Config
app.config['SECRET_KEY'] = Config.SECRET_KEY
app.config['DB_DIR'] = Config.DB_DIR
app.config['LOG_DB'] = Config.LOG_DB
app.config['SANITY_PROJECT_ID'] = Config.SANITY_PROJECT_ID
app.config['SANITY_DATASET'] = Config.SANITY_DATASET
app.config['SANITY_API_VERSION'] = Config.SANITY_API_VERSION
app.config['SANITY_TOKEN'] = Config.SANITY_TOKEN
app.config['ADMIN_EMAIL'] = Config.ADMIN_EMAIL
app.config['ADMIN_PASSWORD_HASH'] = Config.ADMIN_PASSWORD_HASH

# Session security
app.config['SESSION_COOKIE_SECURE'] = not app.debug
app.config['SESSION_COOKIE_HTTPONLY'] = True
app.config['SESSION_COOKIE_SAMESITE'] = 'Lax'

# Ensure database directory exists
os.makedirs(Config.DB_DIR, exist_ok=True)

# ===== OrderDesk =====

from orderdesk import OrderDesk
orderdesk = OrderDesk(app, {'brand_name': Config.BRAND_NAME})


# ===== Routes =====

@app.route('/')
def home():
    """Send visitors straight to the order admin"""
    return redirect(url_for('orders_admin.orders_manager'))


@app.route('/health')
def health():
    return jsonify({'status': 'ok'})


# ===== Run =====

if __name__ == '__main__':
    print("[STARTER] Starting on port 5000...")
    app.run(debug=True, port=5000, host='0.0.0.0')
