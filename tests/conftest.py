"""Shared pytest fixtures for Legal Suite test suites."""

from __future__ import annotations

from collections.abc import Callable
from collections.abc import Generator
from collections.abc import Mapping
from dataclasses import replace
from pathlib import Path
from typing import Any
import logging
import sys
import uuid

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from legal_suite.core.config import Settings  # noqa: E402
from legal_suite.core.error_types import StructuredError  # noqa: E402
from legal_suite.core.logging import LOGGER_NAME  # noqa: E402

TEST_SETTINGS = Settings(
    environment="test",
    service_name="legal-suite-test",
    log_level="DEBUG",
    database_url="sqlite+pysqlite:///:memory:",
    jwt_secret="test-secret",
    jwt_expires_seconds=3600,
    bcrypt_rounds=4,
    alert_webhook_url=None,
    alert_timeout_seconds=1.0,
)


class RecordingNotifier:
    """Collects critical notifications instead of delivering them."""

    def __init__(self) -> None:
        self.calls: list[tuple[StructuredError, Mapping[str, Any]]] = []

    def notify(self, error: StructuredError, metadata: Mapping[str, Any]) -> None:
        self.calls.append((error, metadata))


def build_test_app(notifier: RecordingNotifier | None = None, **overrides: Any) -> FastAPI:
    """Build an app on a fresh in-memory database with its tables created."""
    from legal_suite.db.models import Base
    from legal_suite.main import create_app

    app = create_app(replace(TEST_SETTINGS, **overrides), notifier=notifier)
    if app.state.settings.database_url == TEST_SETTINGS.database_url:
        Base.metadata.create_all(app.state.engine)
    # Let caplog see the JSON lines.
    logging.getLogger(LOGGER_NAME).propagate = True
    return app


def bearer(app: FastAPI, role: str, username: str | None = None) -> dict[str, str]:
    token = app.state.auth_service.generate_token(str(uuid.uuid4()), username or role, role)
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def notifier() -> RecordingNotifier:
    return RecordingNotifier()


@pytest.fixture
def app(notifier: RecordingNotifier) -> FastAPI:
    return build_test_app(notifier)


@pytest.fixture
def client(app: FastAPI) -> Generator[TestClient, None, None]:
    """Provide an API test client for contract suites."""
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def admin_headers(app: FastAPI) -> dict[str, str]:
    return bearer(app, "admin")


@pytest.fixture
def operator_headers(app: FastAPI) -> dict[str, str]:
    return bearer(app, "operator")


@pytest.fixture
def app_factory() -> Callable[..., FastAPI]:
    """Build extra apps with overridden settings inside a test."""
    return build_test_app


@pytest.fixture
def token_headers() -> Callable[..., dict[str, str]]:
    return bearer
