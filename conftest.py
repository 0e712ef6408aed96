"""
Global pytest configuration and fixtures.
"""
import os
from typing import Dict
from unittest.mock import Mock

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import sessionmaker

from expense_tracker.api.app import create_app
from expense_tracker.api.dependencies import get_email_service
from expense_tracker.config import TrackerConfig, reload_config
from expense_tracker.db.session import build_engine, configure_engine, reset_engine
from expense_tracker.db.tables import Base
from expense_tracker.models.user import RegisterRequest
from expense_tracker.services.auth_service import AuthService
from expense_tracker.services.email_service import EmailService


@pytest.fixture(scope="session")
def test_env_vars() -> Dict[str, str]:
    """Test environment variables for configuration."""
    return {
        "DATABASE_URL": "sqlite://",
        "JWT_SECRET": "test-secret-key-that-is-long-enough-for-hs256",
        "SMTP_HOST": "smtp.test.local",
        "SMTP_PORT": "2525",
        "SMTP_USE_TLS": "false",
        "EMAIL_FROM_ADDRESS": "no-reply@test.local",
        "ENVIRONMENT": "testing",
        "DEBUG": "true",
        "LOG_LEVEL": "DEBUG",
    }


@pytest.fixture
def mock_env(test_env_vars, monkeypatch):
    """Mock environment variables for testing."""
    for key, value in test_env_vars.items():
        monkeypatch.setenv(key, value)

    # Clear the global config to force reload with test values
    import expense_tracker.config.settings
    expense_tracker.config.settings._config = None

    yield test_env_vars

    expense_tracker.config.settings._config = None


@pytest.fixture
def test_config(mock_env) -> TrackerConfig:
    """Test configuration instance."""
    return reload_config()


@pytest.fixture
def engine(test_config):
    """In-memory SQLite engine shared by the app and the test."""
    test_engine = build_engine("sqlite://")
    Base.metadata.create_all(bind=test_engine)
    configure_engine(test_engine)
    yield test_engine
    reset_engine()


@pytest.fixture
def db_session(engine):
    """Session on the test engine."""
    session = sessionmaker(bind=engine, autoflush=False, expire_on_commit=False)()
    yield session
    session.close()


@pytest.fixture
def email_service():
    """Email service double; no SMTP traffic leaves the tests."""
    return Mock(spec=EmailService)


@pytest.fixture
def user(db_session, test_config, email_service):
    """A registered account."""
    service = AuthService(db_session, test_config, email_service=email_service)
    return service.register(
        RegisterRequest(email="owner@example.com", password="secret123", name="Owner")
    ).user


@pytest.fixture
def other_user(db_session, test_config, email_service):
    """A second account, for ownership checks."""
    service = AuthService(db_session, test_config, email_service=email_service)
    return service.register(
        RegisterRequest(email="other@example.com", password="secret456", name="Other")
    ).user


@pytest.fixture
def app(engine, test_config, email_service):
    """API application wired to the test engine and email double."""
    application = create_app(test_config)
    application.dependency_overrides[get_email_service] = lambda: email_service
    yield application
    application.dependency_overrides.clear()


@pytest.fixture
def client(app) -> TestClient:
    return TestClient(app)


@pytest.fixture
def auth_headers(client) -> Dict[str, str]:
    """Authorization header of a freshly registered account."""
    response = client.post(
        "/api/auth/register",
        json={"email": "api@example.com", "password": "secret123", "name": "Api"},
    )
    assert response.status_code == 201
    return {"Authorization": f"Bearer {response.json()['token']}"}


@pytest.fixture(autouse=True)
def cleanup_test_files():
    """Clean up any test files created during testing."""
    yield

    test_files = ["coverage.xml", ".coverage"]
    for file in test_files:
        if os.path.exists(file):
            os.remove(file)


# Pytest configuration for different test types
def pytest_configure(config):
    """Configure pytest with custom markers and settings."""
    config.addinivalue_line("markers", "unit: mark test as a unit test")
    config.addinivalue_line("markers", "integration: mark test as an integration test")
    config.addinivalue_line("markers", "api: mark test as exercising the HTTP API")


def pytest_collection_modifyitems(config, items):
    """Modify test collection to add markers based on location."""
    for item in items:
        path = str(item.fspath)
        if "tests/unit/" in path:
            item.add_marker(pytest.mark.unit)
        elif "tests/integration/" in path:
            item.add_marker(pytest.mark.integration)

        if "tests/unit/api/" in path or "client" in getattr(item, "fixturenames", []):
            item.add_marker(pytest.mark.api)
