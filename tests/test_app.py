# =============================================================================
# tests/test_app.py - Application Wiring Tests
# =============================================================================
# CORS, root/health endpoints, and the shape of error responses.
# =============================================================================

from app.config import Settings


class TestCors:
    """Any origin may call the API; preflight never reaches a handler."""

    def test_preflight(self, client, store, identity):
        response = client.options(
            "/api/universities/click",
            headers={
                "Origin": "https://frontend.example.com",
                "Access-Control-Request-Method": "POST",
                "Access-Control-Request-Headers": "Authorization, Content-Type",
            },
        )

        assert response.status_code == 200
        assert response.headers["access-control-allow-origin"] == "*"
        assert "POST" in response.headers["access-control-allow-methods"]
        assert store.calls == []
        assert identity.calls == []

    def test_simple_request_gets_cors_header(self, client, auth_headers):
        response = client.get(
            "/api/bursaries/click",
            headers={**auth_headers, "Origin": "https://frontend.example.com"},
        )

        assert response.headers["access-control-allow-origin"] == "*"


class TestRootAndHealth:

    def test_root(self, client):
        body = client.get("/").json()

        assert body["name"] == "ApplyTrack API"
        assert body["health"] == "/api/health"

    def test_health(self, client):
        response = client.get("/api/health")

        assert response.status_code == 200
        assert response.json()["status"] == "healthy"

    def test_liveness(self, client):
        assert client.get("/api/health/live").json()["status"] == "alive"

    def test_readiness_healthy(self, client):
        body = client.get("/api/health/ready").json()

        assert body["status"] == "ready"
        assert body["database"] == "healthy"

    def test_readiness_degraded(self, client, store):
        store.fail_on.add("get_profile")

        body = client.get("/api/health/ready").json()

        assert body["status"] == "degraded"
        assert body["database"].startswith("unhealthy")


class TestErrorShape:

    def test_validation_error_is_400_not_422(self, client, auth_headers):
        response = client.post("/api/universities/applied", json={"universityId": 5}, headers=auth_headers)

        assert response.status_code == 400
        assert response.json() == {
            "error": "universityId is required.",
            "code": "VALIDATION_ERROR",
            "details": {"fields": ["universityId"]},
        }

    def test_invalid_json(self, client, auth_headers):
        response = client.post(
            "/api/universities/applied",
            content=b"{not json",
            headers={**auth_headers, "Content-Type": "application/json"},
        )

        assert response.status_code == 400
        assert response.json()["error"] == "Request body must be a JSON object."


class TestSettings:

    def test_cors_origins_list(self):
        settings = Settings(CORS_ORIGINS="http://a.com, https://b.com ,")
        assert settings.cors_origins_list == ["http://a.com", "https://b.com"]

    def test_urls(self):
        settings = Settings(SUPABASE_URL="https://proj.supabase.co/")
        assert settings.auth_base_url == "https://proj.supabase.co/auth/v1"
        assert settings.jwks_url == "https://proj.supabase.co/auth/v1/.well-known/jwks.json"
