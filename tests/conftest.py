import pytest
from unittest.mock import MagicMock
from fastapi.testclient import TestClient

from booking_api.core.config import Settings
from booking_api.main import create_app
from booking_api.services.notification_service import SmsNotifier

ADMIN_PASSWORD = "clean-fade-2026"


@pytest.fixture
def settings():
    return Settings(
        DATABASE_URL="sqlite:///:memory:",
        ADMIN_PASSWORD=ADMIN_PASSWORD,
        JWT_SECRET="test-signing-key",
        ENVIRONMENT="test",
        ERROR_LOG_FILE="",
        LOG_LEVEL="WARNING",
        TWILIO_ACCOUNT_SID="ACtest",
        TWILIO_AUTH_TOKEN="auth-token",
        TWILIO_PHONE_NUMBER="+15550000000",
        BUSINESS_TIMEZONE="America/Los_Angeles",
    )


@pytest.fixture
def twilio_client():
    mock_client = MagicMock()
    mock_client.messages.create.return_value = MagicMock(sid="SM123")
    return mock_client


@pytest.fixture
def app(settings, twilio_client):
    return create_app(settings, notifier=SmsNotifier(settings, client=twilio_client))


@pytest.fixture
def client(app):
    # Context manager runs the lifespan, which creates the tables
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def admin_headers(client):
    response = client.post("/api/admin/login", json={"password": ADMIN_PASSWORD})
    assert response.status_code == 200
    return {"Authorization": f"Bearer {response.json()['token']}"}
