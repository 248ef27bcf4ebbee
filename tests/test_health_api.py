"""Tests for GET /api/health and the CORS policy."""


class TestHealth:
    def test_health_is_stable_and_side_effect_free(self, client, settings, temp_files):
        before = temp_files()

        responses = [client.get("/api/health") for _ in range(3)]

        assert all(r.status_code == 200 for r in responses)
        assert all(r.json() == {"status": "ok", "message": "Server is running"} for r in responses)
        assert temp_files() == before

    def test_health_does_not_touch_remote_client(self, client, fake_client):
        client.get("/api/health")
        assert fake_client.calls == []


class TestCors:
    def test_allowed_origin_gets_cors_headers(self, client):
        response = client.get("/api/health", headers={"Origin": "http://localhost:3000"})

        assert response.headers["access-control-allow-origin"] == "http://localhost:3000"

    def test_unknown_origin_is_not_allowed(self, client):
        response = client.get("/api/health", headers={"Origin": "https://evil.example"})

        assert "access-control-allow-origin" not in response.headers

    def test_preflight_exposes_compress_endpoint(self, client):
        response = client.options(
            "/api/compress",
            headers={
                "Origin": "https://konskall.github.io",
                "Access-Control-Request-Method": "POST",
            },
        )

        assert response.status_code == 200
        assert response.headers["access-control-allow-origin"] == "https://konskall.github.io"
