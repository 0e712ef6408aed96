"""
Integration test fixtures and configuration.

Integration tests run the whole application against a SQLite database
file, so data goes through real connections and survives across sessions
the way it does in a deployment.
"""

from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from expense_tracker.api.app import create_app
from expense_tracker.api.dependencies import get_email_service
from expense_tracker.db.session import get_engine, reset_engine


@pytest.fixture
def database_file(tmp_path, mock_env, monkeypatch) -> Path:
    """Point DATABASE_URL at a fresh database file."""
    path = tmp_path / "tracker.db"
    monkeypatch.setenv("DATABASE_URL", f"sqlite:///{path}")
    import expense_tracker.config.settings

    expense_tracker.config.settings._config = None
    reset_engine()
    yield path
    reset_engine()


@pytest.fixture
def live_client(database_file, email_service):
    """Client for an app started through its lifespan (creates the tables)."""
    app = create_app()
    app.dependency_overrides[get_email_service] = lambda: email_service
    with TestClient(app) as client:
        yield client
    app.dependency_overrides.clear()


@pytest.fixture
def file_engine(live_client):
    """Engine the running app uses."""
    return get_engine()
