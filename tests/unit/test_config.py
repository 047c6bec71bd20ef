"""Unit tests for environment-driven settings."""

from __future__ import annotations

import pytest

from legal_suite.core.config import DEFAULT_JWT_SECRET
from legal_suite.core.config import load_settings


def test_defaults_are_production_and_quiet(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in ("LEGAL_SUITE_ENV", "LEGAL_SUITE_JWT_SECRET", "LEGAL_SUITE_ALERT_WEBHOOK_URL"):
        monkeypatch.delenv(name, raising=False)

    settings = load_settings()

    assert settings.environment == "production"
    assert settings.verbose_errors is False
    assert settings.jwt_secret == DEFAULT_JWT_SECRET
    assert settings.alert_webhook_url is None


def test_environment_overrides(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("LEGAL_SUITE_ENV", "development")
    monkeypatch.setenv("LEGAL_SUITE_JWT_EXPIRES_SECONDS", "60")
    monkeypatch.setenv("LEGAL_SUITE_ALERT_WEBHOOK_URL", "https://alerts.example/hook")
    monkeypatch.setenv("LEGAL_SUITE_ALERT_TIMEOUT_SECONDS", "2.5")

    settings = load_settings()

    assert settings.verbose_errors is True
    assert settings.jwt_expires_seconds == 60
    assert settings.alert_webhook_url == "https://alerts.example/hook"
    assert settings.alert_timeout_seconds == 2.5


def test_safe_for_logging_hides_secrets(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("LEGAL_SUITE_JWT_SECRET", "super-secret")
    monkeypatch.setenv("LEGAL_SUITE_DATABASE_URL", "postgresql+psycopg://u:pw@db/legal")

    logged = load_settings().safe_for_logging()

    assert "super-secret" not in logged.values()
    assert logged["database_url"] == "<redacted>"
