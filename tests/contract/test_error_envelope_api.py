"""Contract tests for the error envelope, request ids and auth rejections."""

from __future__ import annotations

import json
import logging
import uuid

from fastapi.testclient import TestClient

from legal_suite.core.logging import LOGGER_NAME
from legal_suite.core.request_context import REQUEST_ID_HEADER


def _assert_error_envelope(response, code: str, status_code: int) -> dict:
    assert response.status_code == status_code
    payload = response.json()
    assert payload["success"] is False
    error = payload["error"]
    assert error["code"] == code
    assert isinstance(error["message"], str) and error["message"]
    assert isinstance(error["category"], str)
    assert error["timestamp"].endswith("Z")
    assert error["requestId"] == response.headers[REQUEST_ID_HEADER]
    uuid.UUID(error["requestId"])
    return error


def _log_lines(caplog) -> list[dict]:
    return [json.loads(record.getMessage()) for record in caplog.records if record.name == LOGGER_NAME]


def test_health_is_public(client: TestClient) -> None:
    response = client.get("/health")

    assert response.status_code == 200
    assert response.json() == {"status": "ok", "service": "legal-suite-test"}
    assert REQUEST_ID_HEADER in response.headers


def test_each_request_gets_its_own_request_id(client: TestClient) -> None:
    first = client.get("/health").headers[REQUEST_ID_HEADER]
    second = client.get("/health").headers[REQUEST_ID_HEADER]

    assert first != second
    uuid.UUID(first)
    uuid.UUID(second)


def test_missing_token_is_rejected(client: TestClient) -> None:
    error = _assert_error_envelope(client.get("/api/lawyers"), "TOKEN_MISSING", 401)

    assert error["category"] == "AUTHENTICATION"
    assert "details" not in error


def test_invalid_token_is_rejected(client: TestClient) -> None:
    response = client.get("/api/lawyers", headers={"Authorization": "Bearer nope"})

    _assert_error_envelope(response, "TOKEN_INVALID", 401)


def test_operator_cannot_use_admin_routes(client: TestClient, operator_headers: dict[str, str]) -> None:
    response = client.post("/api/lawyers", json={"name": "x"}, headers=operator_headers)

    error = _assert_error_envelope(response, "INSUFFICIENT_PERMISSIONS", 403)
    assert error["category"] == "AUTHORIZATION"


def test_auth_is_checked_before_body_validation(client: TestClient) -> None:
    response = client.post("/api/lawsuits", json={})

    _assert_error_envelope(response, "TOKEN_MISSING", 401)


def test_all_invalid_fields_are_reported_together(client: TestClient, admin_headers: dict[str, str]) -> None:
    response = client.post("/api/lawyers", json={"name": "", "email": "bad"}, headers=admin_headers)

    error = _assert_error_envelope(response, "VALIDATION_ERROR", 400)
    assert error["category"] == "VALIDATION"
    assert error["message"] == "Errores de validación en los datos proporcionados"
    assert error["validationErrors"] == [
        {"field": "name", "message": "name es requerido", "value": ""},
        {"field": "phone", "message": "phone es requerido", "value": None},
        {"field": "specialization", "message": "specialization es requerido", "value": None},
        {"field": "status", "message": "status es requerido", "value": None},
        {"field": "email", "message": "email debe tener un formato válido", "value": "bad"},
    ]


def test_framework_query_validation_uses_the_same_envelope(
    client: TestClient,
    admin_headers: dict[str, str],
) -> None:
    response = client.get("/api/lawyers", params={"page": 0}, headers=admin_headers)

    error = _assert_error_envelope(response, "VALIDATION_ERROR", 400)
    assert [item["field"] for item in error["validationErrors"]] == ["page"]


def test_unknown_route_uses_the_envelope(client: TestClient) -> None:
    error = _assert_error_envelope(client.get("/api/nothing-here"), "RESOURCE_NOT_FOUND", 404)

    assert error["category"] == "NOT_FOUND"


def test_unexpected_failure_hides_message_in_production(app_factory) -> None:
    app = app_factory()

    @app.get("/boom")
    def boom() -> None:
        raise RuntimeError("secret connection string")

    with TestClient(app) as client:
        response = client.get("/boom")

    error = _assert_error_envelope(response, "INTERNAL_SERVER_ERROR", 500)
    assert error["message"] == "Error interno del servidor"
    assert "details" not in error
    assert "secret connection string" not in response.text


def test_unexpected_failure_shows_detail_in_development(app_factory) -> None:
    app = app_factory(environment="development")

    @app.get("/boom")
    def boom() -> None:
        raise RuntimeError("division failed")

    with TestClient(app) as client:
        response = client.get("/boom")

    error = _assert_error_envelope(response, "INTERNAL_SERVER_ERROR", 500)
    assert error["message"] == "division failed"
    assert error["details"]["originalError"] == "RuntimeError"


def test_database_outage_is_critical_and_notified(app_factory, token_headers, notifier, caplog) -> None:
    app = app_factory(notifier, database_url="sqlite+pysqlite:////nonexistent-dir/legal.db")

    with TestClient(app) as client, caplog.at_level(logging.DEBUG, logger=LOGGER_NAME):
        response = client.get("/api/lawyers", headers=token_headers(app, "admin"))

    error = _assert_error_envelope(response, "DATABASE_CONNECTION_ERROR", 500)
    assert error["category"] == "DATABASE"
    assert len(notifier.calls) == 1
    notified, metadata = notifier.calls[0]
    assert notified.request_id == error["requestId"]
    assert metadata["severity"] == "CRITICAL"
    critical_lines = [line for line in _log_lines(caplog) if line["message"].startswith("CRITICAL ERROR:")]
    assert len(critical_lines) == 1
    assert critical_lines[0]["metadata"]["requestId"] == error["requestId"]


def test_log_lines_of_one_request_share_its_request_id(
    client: TestClient,
    admin_headers: dict[str, str],
    caplog,
) -> None:
    with caplog.at_level(logging.DEBUG, logger=LOGGER_NAME):
        response = client.get(f"/api/lawyers/{uuid.uuid4()}", headers=admin_headers)

    request_id = response.headers[REQUEST_ID_HEADER]
    lines = _log_lines(caplog)
    assert response.status_code == 404
    assert {line["metadata"].get("requestId") for line in lines} == {request_id}
    assert [line["message"] for line in lines] == [
        "LOW ERROR: Abogado no encontrado",
        "Request completed",
    ]
