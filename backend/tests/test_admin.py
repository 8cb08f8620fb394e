"""Tests for admin support endpoints, CORS and the 404 handler."""
import json
import time

from fastapi.testclient import TestClient

from siteadmin.main import app, registered_routes


class TestCreds:
    """Tests for GET /admin/creds."""

    def test_returns_credentials_file(self, api_client: TestClient, storage_root):
        creds = {"admins": [{"user": "editor", "password": "c2VjcmV0"}]}
        (storage_root / "server-data").mkdir()
        (storage_root / "server-data" / "admins.json").write_text(json.dumps(creds), encoding="utf-8")

        resp = api_client.get("/admin/creds")

        assert resp.status_code == 200
        assert resp.json() == creds

    def test_missing_file_returns_404(self, api_client: TestClient):
        resp = api_client.get("/admin/creds")

        assert resp.status_code == 404
        assert resp.json() == {"error": "not_found"}

    def test_invalid_json_returns_500(self, api_client: TestClient, storage_root):
        (storage_root / "server-data").mkdir()
        (storage_root / "server-data" / "admins.json").write_text("{broken", encoding="utf-8")

        resp = api_client.get("/admin/creds")

        assert resp.status_code == 500
        assert resp.json() == {"error": "invalid"}


class TestPing:

    def test_ping_returns_server_time(self, api_client: TestClient):
        before = int(time.time() * 1000)
        resp = api_client.get("/admin/ping")

        body = resp.json()
        assert resp.status_code == 200
        assert body["ok"] is True
        assert body["now"] >= before


class TestAppPlumbing:

    def test_unmatched_route_returns_not_found(self, api_client: TestClient):
        resp = api_client.get("/admin/does-not-exist")

        assert resp.status_code == 404
        assert resp.json() == {"error": "not_found"}

    def test_wrong_method_is_not_a_404(self, api_client: TestClient):
        resp = api_client.get("/admin/upload-cover")

        assert resp.status_code == 405

    def test_cors_headers_present(self, api_client: TestClient):
        resp = api_client.get("/admin/ping", headers={"Origin": "http://localhost:5173"})

        assert resp.headers["access-control-allow-origin"] == "*"

    def test_cors_preflight(self, api_client: TestClient):
        resp = api_client.options(
            "/admin/save-config",
            headers={
                "Origin": "http://localhost:5173",
                "Access-Control-Request-Method": "POST",
                "Access-Control-Request-Headers": "Content-Type",
            },
        )

        assert resp.status_code == 200
        assert "POST" in resp.headers["access-control-allow-methods"]

    def test_registered_routes_lists_admin_endpoints(self):
        routes = registered_routes(app)

        assert "POST /admin/upload-cover" in routes
        assert "POST /admin/upload-event" in routes
        assert "POST /admin/save-config" in routes
        assert "GET /admin/creds" in routes
