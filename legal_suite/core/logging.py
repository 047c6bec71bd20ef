"""Structured JSON logging with recursive redaction of sensitive context."""

from __future__ import annotations

from collections.abc import Mapping
from collections.abc import Sequence
from typing import Any
import json
import logging
import sys

from legal_suite.core.error_types import isoformat_utc
from legal_suite.core.error_types import utc_now

LOGGER_NAME = "legal_suite"
REDACTED = "[REDACTED]"

SENSITIVE_FIELDS: tuple[str, ...] = (
    "password",
    "token",
    "authorization",
    "secret",
    "key",
    "hash",
    "contraseña",
    "clave",
    "secreto",
    "auth",
    "jwt",
)

_LEVELS: Mapping[str, int] = {
    "INFO": logging.INFO,
    "WARN": logging.WARNING,
    "ERROR": logging.ERROR,
    "DEBUG": logging.DEBUG,
}


def configure_logging(level: str = "INFO") -> None:
    """Send application log lines to stdout, one JSON document per line."""
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter("%(message)s"))

    logger = logging.getLogger(LOGGER_NAME)
    logger.handlers = [handler]
    logger.setLevel(getattr(logging, level.upper(), logging.INFO))
    logger.propagate = False

    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)


def is_sensitive_key(key: str) -> bool:
    lowered = key.lower()
    return any(field in lowered for field in SENSITIVE_FIELDS)


def sanitize_data(data: Any) -> Any:
    """Return a copy of `data` with values under sensitive keys replaced.

    Mappings and sequences are walked recursively. Bare strings are returned
    unchanged: only a value stored under a sensitive key is redacted.
    """
    if data is None or isinstance(data, (str, bytes)):
        return data
    if isinstance(data, Mapping):
        sanitized: dict[Any, Any] = {}
        for key, value in data.items():
            if isinstance(key, str) and is_sensitive_key(key):
                sanitized[key] = REDACTED
            else:
                sanitized[key] = sanitize_data(value)
        return sanitized
    if isinstance(data, Sequence):
        return [sanitize_data(item) for item in data]
    return data


class StructuredLogger:
    """JSON-line logger that stamps standard metadata on every entry."""

    def __init__(
        self,
        service_name: str,
        *,
        logger: logging.Logger | None = None,
    ) -> None:
        self._service_name = service_name
        self._logger = logger or logging.getLogger(LOGGER_NAME)

    @property
    def service_name(self) -> str:
        return self._service_name

    def log(self, entry: Mapping[str, Any]) -> None:
        """Sanitize the entry's context and emit it as one JSON line."""
        metadata = dict(entry.get("metadata") or {})
        level = str(metadata.get("log_level", "INFO")).upper()

        payload: dict[str, Any] = {"message": entry.get("message", ""), "metadata": metadata}

        try:
            if entry.get("context") is not None:
                payload["context"] = sanitize_data(entry["context"])
            line = json.dumps(payload, default=_json_default, ensure_ascii=False)
        except (TypeError, ValueError, RecursionError) as exc:
            line = json.dumps(
                {
                    "message": str(payload["message"]),
                    "metadata": {
                        "timestamp": str(metadata.get("timestamp", "")),
                        "log_level": level,
                        "service_name": self._service_name,
                    },
                    "serialization_error": type(exc).__name__,
                },
                ensure_ascii=False,
            )

        self._logger.log(_LEVELS.get(level, logging.INFO), line)

    log_structured = log

    def info(self, message: str, context: Mapping[str, Any] | None = None, metadata: Mapping[str, Any] | None = None) -> None:
        self.log(self._entry("INFO", message, context, metadata))

    def warn(self, message: str, context: Mapping[str, Any] | None = None, metadata: Mapping[str, Any] | None = None) -> None:
        self.log(self._entry("WARN", message, context, metadata))

    def error(self, message: str, context: Mapping[str, Any] | None = None, metadata: Mapping[str, Any] | None = None) -> None:
        self.log(self._entry("ERROR", message, context, metadata))

    def debug(self, message: str, context: Mapping[str, Any] | None = None, metadata: Mapping[str, Any] | None = None) -> None:
        self.log(self._entry("DEBUG", message, context, metadata))

    def _entry(
        self,
        level: str,
        message: str,
        context: Mapping[str, Any] | None,
        metadata: Mapping[str, Any] | None,
    ) -> dict[str, Any]:
        full_metadata: dict[str, Any] = {
            "timestamp": isoformat_utc(utc_now()),
            "log_level": level,
            "service_name": self._service_name,
        }
        if metadata:
            full_metadata.update({key: value for key, value in metadata.items() if value is not None})
        # Overrides may not relabel the level the entry is routed by.
        full_metadata["log_level"] = level
        return {"message": message, "metadata": full_metadata, "context": context}


def _json_default(value: Any) -> Any:
    if hasattr(value, "isoformat"):
        return value.isoformat()
    if isinstance(value, (set, frozenset)):
        return list(value)
    if isinstance(value, Mapping):
        return dict(value)
    return str(value)
