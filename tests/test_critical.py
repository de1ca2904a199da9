"""
Critical Integration Tests for OrderDesk
========================================

Focused tests covering the integration points most likely to break.
Run with: pytest tests/ -v

NOTE: pytest is listed under extras_require["dev"] in setup.py.
Install with: pip install -e ".[dev]"
"""

import os
import shutil
import tempfile

from flask import Flask

from orderdesk import OrderDesk
from orderdesk.core.content_store import ContentStoreClient

from conftest import ADMIN_EMAIL, ADMIN_PASSWORD


# ---------------------------------------------------------------------------
# 1. Framework initialisation -- OrderDesk(app) stores itself on the app
# ---------------------------------------------------------------------------

def test_framework_initialisation(app):
    ext = app.extensions["orderdesk"]
    assert isinstance(ext, OrderDesk)
    assert ext.screens is not None
    assert len(ext.screens) == 0


# ---------------------------------------------------------------------------
# 2. Blueprint registration -- dashboard and orders are registered
# ---------------------------------------------------------------------------

def test_all_blueprints_registered(app):
    registered = app.extensions["orderdesk"].get_registered_modules()
    assert registered == ["dashboard", "orders"]

    rules = {rule.rule for rule in app.url_map.iter_rules()}
    for expected in ("/admin/login", "/admin/logout", "/admin/orders/",
                     "/admin/orders/api/orders", "/admin/orders/refresh"):
        assert expected in rules, f"{expected} missing. Routes: {sorted(rules)}"


def test_feature_flags_skip_modules(tmp_db_dir, store):
    app = Flask(__name__)
    app.config["SECRET_KEY"] = "test-secret"
    app.config["LOG_DB"] = os.path.join(tmp_db_dir, "logs.db")

    ext = OrderDesk(app, {"features": {"orders": False}}, store=store)

    assert ext.get_registered_modules() == ["dashboard"]
    assert ext.config["features"]["dashboard"] is True


# ---------------------------------------------------------------------------
# 3. Template context -- orderdesk_config and brand_name are injected
# ---------------------------------------------------------------------------

def test_template_context_injection(app):
    with app.test_request_context("/"):
        ctx = {}
        for func in app.template_context_processors[None]:
            ctx.update(func())

    assert isinstance(ctx["orderdesk_config"], dict)
    assert ctx["brand_name"] == "Test Shop"


def test_template_filters_registered(app):
    filters = app.jinja_env.filters
    assert filters["order_date"]("2024-03-05T10:15:00Z") == "03/05/2024"
    assert filters["image_url"]("image-abc-10x10-png", 100, 100) == (
        "https://cdn.sanity.io/images/testproj/production/abc-10x10.png?w=100&h=100"
    )


# ---------------------------------------------------------------------------
# 4. Log store directory is created on init
# ---------------------------------------------------------------------------

def test_database_dir_creation(store):
    d = tempfile.mkdtemp(prefix="orderdesk-dbtest-")
    target = os.path.join(d, "sub", "databases")

    try:
        app = Flask(__name__)
        app.config["SECRET_KEY"] = "test-secret"
        app.config["LOG_DB"] = os.path.join(target, "logs.db")
        OrderDesk(app, store=store)

        assert os.path.isdir(target), f"Log directory was not created at {target}"
    finally:
        shutil.rmtree(d, ignore_errors=True)


# ---------------------------------------------------------------------------
# 5. Store is built from config when none is injected
# ---------------------------------------------------------------------------

def test_store_built_from_config(tmp_db_dir):
    app = Flask(__name__)
    app.config["SECRET_KEY"] = "test-secret"
    app.config["LOG_DB"] = os.path.join(tmp_db_dir, "logs.db")
    app.config["SANITY_PROJECT_ID"] = "proj42"
    ext = OrderDesk(app)

    with app.app_context():
        store = ext.get_store()

    assert isinstance(store, ContentStoreClient)
    assert store.project_id == "proj42"
    assert ext.get_store() is store


# ---------------------------------------------------------------------------
# 6. Admin auth guard
# ---------------------------------------------------------------------------

def test_admin_auth_redirect(client, store):
    response = client.get("/admin/orders/", follow_redirects=False)
    assert response.status_code == 302
    assert "/admin/login" in response.headers.get("Location", "")
    store.fetch.assert_not_called()


def test_api_requires_auth(client):
    response = client.get("/admin/orders/api/orders")
    assert response.status_code == 401
    assert response.get_json() == {"success": False, "error": "Authentication required"}


def test_login_with_valid_credentials(client):
    response = client.post("/admin/login", data={"email": ADMIN_EMAIL, "password": ADMIN_PASSWORD})
    assert response.status_code == 302
    assert response.headers["Location"].endswith("/admin/orders/")

    with client.session_transaction() as sess:
        assert sess["admin_id"] == ADMIN_EMAIL


def test_login_follows_local_next(client):
    response = client.post("/admin/login?next=/admin/orders/?status=pending",
                           data={"email": ADMIN_EMAIL, "password": ADMIN_PASSWORD})
    assert response.headers["Location"].endswith("/admin/orders/?status=pending")


def test_login_ignores_external_next(client):
    response = client.post("/admin/login?next=//evil.example.com/",
                           data={"email": ADMIN_EMAIL, "password": ADMIN_PASSWORD})
    assert "evil.example.com" not in response.headers["Location"]


def test_login_with_wrong_password(client):
    response = client.post("/admin/login", data={"email": ADMIN_EMAIL, "password": "nope"})
    assert response.status_code == 401
    with client.session_transaction() as sess:
        assert "admin_id" not in sess


def test_logout_clears_session(admin_client):
    response = admin_client.get("/admin/logout")
    assert response.status_code == 302
    with admin_client.session_transaction() as sess:
        assert "admin_id" not in sess


def test_logout_discards_order_screen(app, admin_client):
    admin_client.get("/admin/orders/")
    assert len(app.extensions["orderdesk"].screens) == 1

    admin_client.get("/admin/logout")

    assert len(app.extensions["orderdesk"].screens) == 0
