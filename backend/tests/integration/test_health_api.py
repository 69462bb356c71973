"""
API tests for liveness, health and metrics endpoints
"""
from sqlalchemy.exc import OperationalError

from app.core.errors import PersistenceError


def test_root_returns_plain_text(client):
    response = client.get("/")

    assert response.status_code == 200
    assert response.text == "Backend is running!"
    assert response.headers["content-type"].startswith("text/plain")


def test_api_health_check(client, notifier, db):
    response = client.get("/api/some-endpoint")

    assert response.status_code == 200
    assert response.json() == {"message": "API is working properly!"}
    assert notifier.sent == []


def test_detailed_health_check(client):
    response = client.get("/health/detailed")

    assert response.status_code == 200
    body = response.json()
    assert body["status"] == "healthy"
    assert body["components"]["database"]["status"] == "healthy"


def test_detailed_health_check_reports_database_down(client, store, monkeypatch):
    def failing_ping():
        cause = OperationalError("SELECT 1", {}, Exception("connection refused"))
        raise PersistenceError("Database is unreachable") from cause

    monkeypatch.setattr(store, "ping", failing_ping)

    response = client.get("/health/detailed")

    assert response.status_code == 503
    body = response.json()
    assert body["status"] == "unhealthy"
    assert body["components"]["database"]["error"] == "OperationalError"


def test_metrics_endpoint(client):
    client.post("/api/contact", json={"name": "Ana", "email": "a@x.com", "message": "Hi"})

    response = client.get("/metrics")

    assert response.status_code == 200
    assert "records_saved_total" in response.text
    assert "notifications_total" in response.text
    assert "http_requests_total" in response.text


def test_metrics_label_requests_by_route_template(client):
    client.post("/api/contact", json={"name": "Ana", "email": "a@x.com", "message": "Hi"})
    assert client.get("/wp-admin/setup-config.php").status_code == 404

    text = client.get("/metrics").text

    assert 'endpoint="/api/contact"' in text
    assert 'endpoint="unmatched"' in text
    assert "/wp-admin/setup-config.php" not in text
