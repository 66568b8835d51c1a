"""Pytest configuration and shared fixtures"""
import os
import tempfile

# The database module reads DATABASE_URL at import time
_DB_DIR = tempfile.mkdtemp(prefix="portfolio-tests-")
os.environ["DATABASE_URL"] = f"sqlite:///{os.path.join(_DB_DIR, 'portfolio.db')}"

import pytest
from fastapi.testclient import TestClient

from src.app import app
from src.shared.database import Base, SessionLocal, engine, init_db


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch):
    """Keep the developer's shell settings out of the tests"""
    monkeypatch.delenv("ADMIN_SECRET", raising=False)
    monkeypatch.delenv("CONTACT_RECIPIENT", raising=False)
    monkeypatch.setenv("ENVIRONMENT", "test")


@pytest.fixture(autouse=True)
def reset_database():
    """Fresh tables for every test"""
    init_db()
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture(autouse=True)
def sent_emails(monkeypatch):
    """Replace the SMTP notification with a recorder that always succeeds"""
    sent = []

    def fake_send(name, email, message, received_at):
        sent.append({"name": name, "email": email, "message": message, "received_at": received_at})
        return True

    monkeypatch.setattr("src.shared.contact.routes.send_contact_notification", fake_send)
    return sent


@pytest.fixture
def failing_mail(monkeypatch):
    """Notification dispatch that always fails"""
    attempts = []

    def fake_send(name, email, message, received_at):
        attempts.append(email)
        return False

    monkeypatch.setattr("src.shared.contact.routes.send_contact_notification", fake_send)
    return attempts


@pytest.fixture
def client():
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def db_session():
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()
