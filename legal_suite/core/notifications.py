"""Side channel for CRITICAL errors."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any
from typing import Protocol

import requests

from legal_suite.core.error_types import StructuredError
from legal_suite.core.logging import StructuredLogger
from legal_suite.core.logging import sanitize_data


class CriticalErrorNotifier(Protocol):
    def notify(self, error: StructuredError, metadata: Mapping[str, Any]) -> None:
        """Deliver a notification for a CRITICAL error. Must not raise."""


class LoggingNotifier:
    """Record the notification as a dedicated error-level log line."""

    def __init__(self, logger: StructuredLogger) -> None:
        self._logger = logger

    def notify(self, error: StructuredError, metadata: Mapping[str, Any]) -> None:
        self._logger.error(
            "CRITICAL ERROR NOTIFICATION",
            {**metadata, "notificationSent": True},
            {"requestId": error.request_id, "userId": error.user_id},
        )


class WebhookNotifier:
    """POST a sanitized summary of the error to an alerting webhook."""

    def __init__(
        self,
        *,
        url: str,
        logger: StructuredLogger,
        timeout_seconds: float = 5.0,
        session: requests.Session | None = None,
    ) -> None:
        if not url:
            raise ValueError("url is required")
        if timeout_seconds <= 0:
            raise ValueError("timeout_seconds must be positive")

        self._url = url
        self._logger = logger
        self._timeout_seconds = timeout_seconds
        self._session = session or requests.Session()

    def notify(self, error: StructuredError, metadata: Mapping[str, Any]) -> None:
        payload = {
            "service": self._logger.service_name,
            "code": error.code,
            "category": error.category.value,
            "severity": error.severity.value,
            "message": error.message,
            "requestId": error.request_id,
            "metadata": sanitize_data({key: value for key, value in metadata.items() if key != "stack"}),
        }
        try:
            response = self._session.post(self._url, json=payload, timeout=self._timeout_seconds)
            response.raise_for_status()
        except requests.RequestException as exc:
            self._logger.error(
                "Critical error notification failed",
                {"code": error.code, "reason": type(exc).__name__},
                {"requestId": error.request_id},
            )
            return

        self._logger.info(
            "CRITICAL ERROR NOTIFICATION",
            {"code": error.code, "notificationSent": True, "channel": "webhook"},
            {"requestId": error.request_id},
        )
