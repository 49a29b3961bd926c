"""Tests for security headers and the JSON auth boundary."""


class TestSecurityHeaders:
    def test_main_app_headers(self, client):
        resp = client.get("/")
        assert resp.headers["X-Content-Type-Options"] == "nosniff"
        assert resp.headers["Referrer-Policy"] == "strict-origin-when-cross-origin"
        assert resp.headers["X-Frame-Options"] == "DENY"
        assert "Content-Security-Policy" in resp.headers

    def test_no_hsts_in_debug(self, client):
        """TestConfig runs with DEBUG on, so HSTS is not sent."""
        assert "Strict-Transport-Security" not in client.get("/").headers

    def test_api_401_is_json(self, client):
        resp = client.get("/api/sites")
        assert resp.status_code == 401
        assert resp.is_json
