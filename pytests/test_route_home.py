from __future__ import annotations

import pytest

from app import create_app
from crud.errors import ConnectionFailure
from pytests.common import app_config

def test_home_redirects_to_dashboard(client):
    resp = client.get("/")

    assert resp.status_code == 302
    assert resp.headers["Location"].endswith("/admin/")

def test_admin_mounted_at_root(make_client):
    client = make_client(ADMIN_BASE_URL="/")

    resp = client.get("/")
    assert resp.status_code == 200
    assert "<!doctype html" in resp.get_data(as_text=True).lower()
    assert client.get("/entity/users").status_code == 200

def test_custom_base_url(make_client):
    client = make_client(ADMIN_BASE_URL="panel")

    assert client.get("/panel/entity/users").status_code == 200
    assert client.get("/admin/entity/users").status_code == 404

def test_unknown_path_uses_app_404(client):
    resp = client.get("/definitely-not-here")

    assert resp.status_code == 404
    assert "Page not found" in resp.get_data(as_text=True)

def test_unreachable_database_fails_at_startup(tmp_path):
    missing = tmp_path / "missing.db"
    config = app_config(missing, DATABASE_URI=f"sqlite:///file:{missing}?mode=ro&uri=true")

    with pytest.raises(ConnectionFailure):
        create_app(config)

def test_init_db_on_startup_creates_demo_tables(tmp_path):
    app = create_app(app_config(tmp_path / "fresh.sqlite", INIT_DB_ON_STARTUP=True))

    resp = app.test_client().get("/admin/entity/tasks", headers={"Accept": "application/json"})
    assert resp.status_code == 200
    assert resp.get_json()["data"]["rows"] == []
