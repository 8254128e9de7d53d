"""
Tests for the HTTP routes: info, health, ping, detailed ping, 404 and 500.
"""

import asyncio

import httpx
import pytest
from fastapi.testclient import TestClient


def call_from(app, client_host, method, path, **kwargs):
    """Send one request to the app as if it came from client_host."""

    async def send():
        transport = httpx.ASGITransport(app=app, client=(client_host, 51000))
        async with httpx.AsyncClient(transport=transport, base_url="http://testserver") as client:
            return await client.request(method, path, **kwargs)

    return asyncio.run(send())


class TestRoot:
    """Test cases for GET /."""

    def test_info_payload(self, client):
        response = client.get("/")

        assert response.status_code == 200
        assert response.headers["content-type"] == "application/json"
        data = response.json()
        assert data["message"].startswith("Welcome")
        assert data["version"] == "1.0.0"
        assert data["endpoints"] == {
            "health": "/health",
            "ping": "/ping",
            "detailedPing": "/ping/detailed",
        }
        assert data["serverInfo"]["port"] == 3000
        assert data["serverInfo"]["environment"] == "test"
        assert data["serverInfo"]["address"]


class TestHealth:
    """Test cases for GET /health."""

    def test_health_is_always_healthy(self, client):
        response = client.get("/health")

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "healthy"
        assert data["environment"] == "test"
        assert data["uptimeSeconds"] >= 0
        assert data["timestamp"].endswith("Z")

    def test_memory_stats_reported(self, client):
        stats = client.get("/health").json()["memoryStats"]

        assert stats["rss"] > 0
        assert "systemTotal" in stats


class TestPing:
    """Test cases for GET /ping and GET /ping/detailed."""

    def test_ping_returns_pong(self, client):
        response = client.get("/ping", headers={"User-Agent": "ELB-HealthChecker/2.0"})

        assert response.status_code == 200
        data = response.json()
        assert data["message"] == "pong"
        assert data["userAgent"] == "ELB-HealthChecker/2.0"
        assert data["serverAddress"]
        assert "latencyMs" not in data
        assert "headers" not in data

    def test_ping_reports_client_address(self, app):
        response = call_from(app, "203.0.113.5", "GET", "/ping")

        assert response.status_code == 200
        assert response.json()["clientAddress"] == "203.0.113.5"

    def test_detailed_ping(self, client):
        response = client.get("/ping/detailed", headers={"X-Probe": "elb"})

        assert response.status_code == 200
        data = response.json()
        assert data["message"] == "pong"
        assert data["latencyMs"] >= 0
        assert data["headers"]["x-probe"] == "elb"

    def test_detailed_ping_latency_is_non_negative(self, client):
        for _ in range(5):
            assert client.get("/ping/detailed").json()["latencyMs"] >= 0


class TestNotFound:
    """Test cases for unmatched routes."""

    def test_unknown_route(self, client):
        response = client.delete("/nope")

        assert response.status_code == 404
        data = response.json()
        assert data["error"] == "Not Found"
        assert "DELETE" in data["message"]
        assert "/nope" in data["message"]
        assert data["timestamp"]

    def test_wrong_method_on_known_path(self, client):
        response = client.post("/ping")

        assert response.status_code == 404
        assert "POST" in response.json()["message"]
        assert "/ping" in response.json()["message"]

    def test_unknown_post_is_logged_with_body(self, client, memory_sink):
        response = client.post("/unknown", json={"a": 1})

        assert response.status_code == 404
        assert "POST" in response.json()["message"]
        assert "/unknown" in response.json()["message"]
        assert len(memory_sink.entries) == 1
        assert memory_sink.entries[0].body == {"a": 1}

    def test_query_string_is_part_of_message(self, client):
        response = client.get("/missing?x=1")

        assert response.json()["message"] == "Route GET /missing?x=1 not found"

    @pytest.mark.parametrize("path", ["/docs", "/redoc", "/openapi.json"])
    def test_docs_pages_are_not_served(self, client, path):
        response = client.get(path)

        assert response.status_code == 404
        assert response.headers["content-type"] == "application/json"
        assert response.json()["error"] == "Not Found"
        assert path in response.json()["message"]

    @pytest.mark.parametrize("path", ["/health/", "/ping/", "/ping/detailed/"])
    def test_trailing_slash_is_not_redirected(self, client, path):
        response = client.get(path, follow_redirects=False)

        assert response.status_code == 404
        assert response.json()["message"] == f"Route GET {path} not found"


class TestInternalError:
    """Test cases for unhandled handler errors."""

    def test_handler_error_becomes_500(self, app, memory_sink):
        @app.get("/boom")
        async def boom():
            raise RuntimeError("kaboom")

        client = TestClient(app)
        response = client.get("/boom")

        assert response.status_code == 500
        data = response.json()
        assert data["error"] == "Internal Server Error"
        assert data["message"] == "kaboom"
        assert "Traceback" not in response.text
        # Logged before routing, so the failing request is still recorded
        assert [e.url for e in memory_sink.entries] == ["/boom"]

        # The service keeps answering after an error
        assert client.get("/health").status_code == 200


class TestRequestLogging:
    """Every request produces exactly one log entry."""

    def test_one_entry_per_request(self, client, memory_sink):
        client.get("/")
        client.get("/health")
        client.get("/ping")
        client.get("/ping/detailed")
        client.put("/nowhere")

        assert [(e.method, e.url) for e in memory_sink.entries] == [
            ("GET", "/"),
            ("GET", "/health"),
            ("GET", "/ping"),
            ("GET", "/ping/detailed"),
            ("PUT", "/nowhere"),
        ]

    def test_malformed_json_body_degrades_to_empty(self, client, memory_sink):
        response = client.post(
            "/unknown",
            content=b"{not json",
            headers={"Content-Type": "application/json"},
        )

        assert response.status_code == 404
        assert memory_sink.entries[0].body == {}

    def test_form_body_is_logged(self, client, memory_sink):
        client.post("/submit", data={"name": "probe", "zone": "us-east-1a"})

        assert memory_sink.entries[0].body == {"name": "probe", "zone": "us-east-1a"}

    def test_concurrent_pings_write_two_lines(self, tmp_path):
        import json

        from elbprobe.core.config import Settings
        from elbprobe.main import create_app

        log_dir = tmp_path / "logs"
        app = create_app(Settings(log_dir=log_dir))

        async def send_both():
            transport = httpx.ASGITransport(app=app, client=("198.51.100.7", 40000))
            async with httpx.AsyncClient(transport=transport, base_url="http://testserver") as client:
                return await asyncio.gather(client.get("/ping"), client.get("/ping"))

        responses = asyncio.run(send_both())

        assert [r.status_code for r in responses] == [200, 200]
        lines = [line for f in log_dir.glob("*.log") for line in f.read_text(encoding="utf-8").splitlines()]
        assert len(lines) == 2
        for line in lines:
            entry = json.loads(line)
            assert entry["url"] == "/ping"
            assert entry["clientAddress"] == "198.51.100.7"

    def test_non_finite_json_constants_keep_log_lines_valid(self, tmp_path):
        import json

        from elbprobe.core.config import Settings
        from elbprobe.main import create_app

        log_dir = tmp_path / "logs"
        client = TestClient(create_app(Settings(log_dir=log_dir)))

        response = client.post(
            "/unknown",
            content=b'{"a": NaN, "b": Infinity}',
            headers={"Content-Type": "application/json"},
        )

        assert response.status_code == 404
        (log_file,) = log_dir.glob("*.log")
        line = log_file.read_text(encoding="utf-8").strip()

        def strict(name):
            raise ValueError(name)

        assert json.loads(line, parse_constant=strict)["body"] == {}


class TestRouteTags:
    """Test cases for router registration."""

    def test_ping_routes_are_tagged_ping(self, app):
        tags = {route.path: route.tags for route in app.routes if hasattr(route, "tags")}

        assert tags["/ping"] == ["ping"]
        assert tags["/ping/detailed"] == ["ping"]
        assert tags["/health"] == ["health"]
