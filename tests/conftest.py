"""
Shared fixtures for OrderDesk tests.
"""

import os
import shutil
import tempfile
from unittest.mock import MagicMock

import pytest
from flask import Flask
from werkzeug.security import generate_password_hash

from orderdesk import OrderDesk
from orderdesk.core.logging_service import LoggingService

ADMIN_EMAIL = "admin@example.com"
ADMIN_PASSWORD = "Secret123"


def order_doc(order_id, status, **extra):
    """Order document as the content store returns it."""
    doc = {
        "_id": order_id,
        "fullName": f"Customer {order_id}",
        "email": f"customer{order_id}@example.com",
        "phone": 5551234,
        "address": "1 Main St",
        "city": "Springfield",
        "zipCode": 12345,
        "totalPrice": 120,
        "discountedPrice": 100,
        "orderDate": "2024-03-05T10:15:00.000Z",
        "orderStatus": status,
        "cartItems": [
            {"productName": "Chair", "image": {"asset": {"_ref": "image-abc123-800x600-png"}}},
        ],
    }
    doc.update(extra)
    return doc


@pytest.fixture
def tmp_db_dir():
    """Create a temporary directory for the log store, cleaned up after."""
    d = tempfile.mkdtemp(prefix="orderdesk-test-")
    yield d
    shutil.rmtree(d, ignore_errors=True)


@pytest.fixture(autouse=True)
def log_db(tmp_db_dir, monkeypatch):
    """Route persistent logs to the temp directory, inside or outside an app."""
    path = os.path.join(tmp_db_dir, "logs.db")
    monkeypatch.setattr(LoggingService, "_log_db_path", staticmethod(lambda: path))
    return path


@pytest.fixture
def documents():
    return [order_doc("1", "pending"), order_doc("2", "delivered")]


@pytest.fixture
def store(documents):
    """Content store double with fetch / patch().set().commit() / delete."""
    store = MagicMock()
    store.fetch.return_value = documents
    store.patch.return_value.set.return_value.commit.return_value = {"results": []}
    store.delete.return_value = {"results": []}
    return store


@pytest.fixture
def app(tmp_db_dir, store):
    """Flask app with OrderDesk registered against the store double."""
    app = Flask(__name__)
    app.config["TESTING"] = True
    app.config["SECRET_KEY"] = "test-secret"
    app.config["LOG_DB"] = os.path.join(tmp_db_dir, "logs.db")
    app.config["SANITY_PROJECT_ID"] = "testproj"
    app.config["SANITY_DATASET"] = "production"
    app.config["ADMIN_EMAIL"] = ADMIN_EMAIL
    app.config["ADMIN_PASSWORD_HASH"] = generate_password_hash(ADMIN_PASSWORD)
    OrderDesk(app, {"brand_name": "Test Shop"}, store=store)
    return app


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def admin_client(client):
    """Test client with an admin session."""
    with client.session_transaction() as sess:
        sess["admin_id"] = ADMIN_EMAIL
        sess["admin_email"] = ADMIN_EMAIL
    return client
