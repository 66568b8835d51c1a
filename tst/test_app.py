"""
Tests for app-level routes, error rendering and startup
"""
import pytest
from fastapi.testclient import TestClient
from sqlalchemy.exc import OperationalError

from src.app import app
from src.shared import config
from src.shared.errors import NotFound


def test_root(client):
    response = client.get("/")

    assert response.status_code == 200
    assert response.json()["status"] == "ok"


def test_health(client):
    response = client.get("/api/health")

    assert response.status_code == 200
    body = response.json()
    assert body["success"] is True
    assert body["environment"] == "test"
    assert body["uptime"] >= 0
    assert "T" in body["timestamp"]


def test_unmatched_route(client):
    response = client.get("/api/does-not-exist")

    assert response.status_code == 404
    assert response.json() == {"success": False, "error": "Route not found"}


def test_not_found_error_kind():
    error = NotFound()

    assert error.status_code == 404
    assert error.detail == "Route not found"


def test_wrong_method_uses_error_envelope(client):
    response = client.get("/api/send-email")

    assert response.status_code == 405
    assert response.json()["success"] is False


def test_malformed_json_is_a_client_error(client):
    response = client.post("/api/send-email", content="{not json", headers={"Content-Type": "application/json"})

    assert response.status_code == 400
    assert response.json()["success"] is False


def test_unexpected_exception_is_generic_500(monkeypatch, db_session):
    def exploding_send(**kwargs):
        raise RuntimeError("smtp password is hunter2")

    monkeypatch.setattr("src.shared.contact.routes.send_contact_notification", exploding_send)

    with TestClient(app, raise_server_exceptions=False) as test_client:
        response = test_client.post(
            "/api/send-email",
            json={"name": "Ann", "email": "ann@example.com", "message": "Hi"},
        )

    assert response.status_code == 500
    assert response.json() == {"success": False, "error": "Internal server error"}


def test_error_responses_carry_cors_headers(client):
    response = client.post(
        "/api/send-email",
        json={"name": "", "email": "ann@example.com", "message": "Hi"},
        headers={"Origin": "http://localhost:3000"},
    )

    assert response.status_code == 400
    assert response.headers["access-control-allow-origin"] == "http://localhost:3000"


def test_disallowed_origin_gets_no_cors_headers(client):
    response = client.get("/api/health", headers={"Origin": "https://evil.example"})

    assert "access-control-allow-origin" not in response.headers


def test_startup_fails_fast_without_database(monkeypatch):
    def unreachable():
        raise OperationalError("SELECT 1", {}, Exception("could not connect to server"))

    monkeypatch.setattr("src.app.init_db", unreachable)

    with pytest.raises(OperationalError):
        with TestClient(app):
            pass


class TestConfig:

    def test_allowed_origins_from_env(self, monkeypatch):
        monkeypatch.setenv("ALLOWED_ORIGINS", "https://portfolio.example/, http://localhost:5173 ,")

        assert config.get_allowed_origins() == ["https://portfolio.example", "http://localhost:5173"]

    def test_allowed_origins_default(self, monkeypatch):
        monkeypatch.delenv("ALLOWED_ORIGINS", raising=False)

        assert config.get_allowed_origins() == ["http://localhost:3000"]

    def test_port(self, monkeypatch):
        monkeypatch.setenv("PORT", "8080")
        assert config.get_port() == 8080

        monkeypatch.setenv("PORT", "eighty")
        assert config.get_port() == 5000

    @pytest.mark.parametrize("raw,expected", [("3", 3.0), ("0", 10.0), ("-1", 10.0), ("soon", 10.0)])
    def test_smtp_timeout(self, monkeypatch, raw, expected):
        monkeypatch.setenv("SMTP_TIMEOUT", raw)

        assert config.get_smtp_timeout() == expected

    def test_contact_recipient_falls_back_to_smtp_user(self, monkeypatch):
        monkeypatch.setenv("SMTP_USER", "owner@example.com")

        assert config.get_contact_recipient() == "owner@example.com"

        monkeypatch.setenv("CONTACT_RECIPIENT", "inbox@example.com")
        assert config.get_contact_recipient() == "inbox@example.com"

    def test_missing_mail_settings(self, monkeypatch):
        monkeypatch.setenv("SMTP_USER", "owner@example.com")
        monkeypatch.delenv("SMTP_PASSWORD", raising=False)

        assert config.missing_mail_settings() == ["SMTP_PASSWORD"]
