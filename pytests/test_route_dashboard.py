from __future__ import annotations


def test_dashboard_lists_menus_in_order(client):
    resp = client.get("/admin/")

    assert resp.status_code == 200
    assert resp.content_type.startswith("text/html")
    html = resp.get_data(as_text=True)

    positions = [
        html.index('data-entity="users"'),
        html.index('data-entity="organizations"'),
        html.index('data-entity="permissions"'),
        html.index('data-entity="api_keys"'),
        html.index('data-entity="settings"'),
        html.index('data-entity="tasks"'),
    ]
    assert positions == sorted(positions)


def test_search(client):
    resp = client.get("/admin/search/?q=key")

    assert resp.status_code == 200
    html = resp.get_data(as_text=True)
    assert "1 result " in html
    assert 'href="/admin/entity/api_keys">Api Keys</a>' in html


def test_search_without_query(client):
    resp = client.get("/admin/search/")

    assert resp.status_code == 200
    assert "0 results" in resp.get_data(as_text=True)


def test_auth_stub_pages(client):
    for path in ("/admin/login", "/admin/register", "/admin/forget-password"):
        resp = client.get(path)
        assert resp.status_code == 200, path
        assert "<html" in resp.get_data(as_text=True).lower()
