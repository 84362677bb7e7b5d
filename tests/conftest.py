"""Pytest configuration and fixtures."""

import sqlite3
from collections.abc import Generator
from typing import Any

import pytest
from flask import Flask
from flask.testing import FlaskClient
from prometheus_client import REGISTRY
from sqlalchemy.orm import Session
from sqlalchemy.pool import StaticPool

from petfeeder import create_app
from petfeeder.config import Settings
from petfeeder.consts import (
    DEFAULT_ADMIN_PASSWORD,
    DEFAULT_ADMIN_USERNAME,
    DEVICE_API_KEY_HEADER,
)
from petfeeder.database import upgrade_database
from petfeeder.services.container import ServiceContainer

TEST_DEVICE_API_KEY = "test-device-key"


@pytest.fixture(autouse=True)
def clear_prometheus_registry() -> Generator[None, None, None]:
    """Clear Prometheus registry before and after each test to ensure isolation.

    Every app instance gets its own MetricsService, and metrics cannot be
    registered twice in the same registry.
    """
    collectors = list(REGISTRY._collector_to_names.keys())
    for collector in collectors:
        try:
            REGISTRY.unregister(collector)
        except (KeyError, ValueError):
            # Collector may have already been unregistered or not exist
            pass
    yield
    collectors = list(REGISTRY._collector_to_names.keys())
    for collector in collectors:
        try:
            REGISTRY.unregister(collector)
        except (KeyError, ValueError):
            pass


def build_test_settings(**overrides: Any) -> Settings:
    """Construct Settings for tests without reading the .env file."""
    values: dict[str, Any] = {
        "SECRET_KEY": "test-secret-key",
        "FLASK_ENV": "testing",
        "DEBUG": True,
        "DATABASE_URL": "sqlite://",
        "CORS_ORIGINS": ["http://localhost:3000"],
        "DEVICE_API_KEY": TEST_DEVICE_API_KEY,
    }
    values.update(overrides)
    return Settings(_env_file=None, **values)  # type: ignore[call-arg]


def _configure_for_sqlite(settings: Settings, conn: sqlite3.Connection) -> Settings:
    """Point the engine at an existing SQLite connection through a static pool."""
    settings.set_engine_options_override(
        {
            "poolclass": StaticPool,
            "creator": lambda: conn,
        }
    )
    return settings


@pytest.fixture(scope="session")
def template_connection() -> Generator[sqlite3.Connection, None, None]:
    """Create a template SQLite database once and apply migrations."""
    conn = sqlite3.connect(":memory:", check_same_thread=False)

    settings = _configure_for_sqlite(build_test_settings(), conn)

    template_app = create_app(settings)
    with template_app.app_context():
        upgrade_database(recreate=True)

    yield conn

    conn.close()


@pytest.fixture
def test_settings() -> Settings:
    """Create test settings with in-memory database."""
    return build_test_settings()


@pytest.fixture
def app(
    test_settings: Settings, template_connection: sqlite3.Connection
) -> Generator[Flask, None, None]:
    """Create Flask app for testing using a fresh copy of the template database."""
    clone_conn = sqlite3.connect(":memory:", check_same_thread=False)
    template_connection.backup(clone_conn)

    settings = _configure_for_sqlite(test_settings, clone_conn)

    app = create_app(settings)

    try:
        yield app
    finally:
        with app.app_context():
            from petfeeder.extensions import db as flask_db

            flask_db.session.remove()

        clone_conn.close()


@pytest.fixture
def container(app: Flask) -> ServiceContainer:
    """Access to the DI container for testing."""
    return app.container  # type: ignore[attr-defined,no-any-return]


@pytest.fixture
def session(app: Flask, container: ServiceContainer) -> Generator[Session, None, None]:
    """Database session shared with the services built by the container."""
    with app.app_context():
        session = container.db_session()

        exc = None
        try:
            yield session
        except Exception as e:
            exc = e

        if exc:
            session.rollback()
        else:
            session.commit()
        session.close()

        container.db_session.reset()


@pytest.fixture
def client(app: Flask) -> FlaskClient:
    """Create an anonymous test client."""
    return app.test_client()


@pytest.fixture
def auth_client(app: Flask) -> FlaskClient:
    """Create a test client logged in as the seeded administrator."""
    client = app.test_client()
    response = client.post(
        "/api/auth/login",
        json={"username": DEFAULT_ADMIN_USERNAME, "password": DEFAULT_ADMIN_PASSWORD},
    )
    assert response.status_code == 200
    return client


@pytest.fixture
def device_headers() -> dict[str, str]:
    """Headers the feeder sends to authenticate itself."""
    return {DEVICE_API_KEY_HEADER: TEST_DEVICE_API_KEY}


@pytest.fixture
def set_weight(app: Flask, container: ServiceContainer) -> Any:
    """Factory fixture to store a hopper weight and commit it.

    Usage:
        set_weight(40)
    """
    from petfeeder.services.device_state import KEY_CURRENT_WEIGHT

    def _set(grams: int) -> None:
        with app.app_context():
            container.settings_service().set(KEY_CURRENT_WEIGHT, str(grams))
            session = container.db_session()
            session.commit()
            session.close()
            container.db_session.reset()

    return _set
