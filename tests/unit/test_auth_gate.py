"""Unit tests for bearer-token verification and role checks."""

from __future__ import annotations

from datetime import timedelta
from typing import Any

import jwt
import pytest
from starlette.requests import Request

from legal_suite.core.auth import AuthGate
from legal_suite.core.error_types import StructuredError
from legal_suite.core.error_types import utc_now
from legal_suite.core.request_context import get_current_user
from legal_suite.core.tokens import JWT_ALGORITHM
from legal_suite.core.tokens import JwtAuthService
from legal_suite.core.tokens import TokenExpiredError
from legal_suite.core.tokens import TokenInvalidError

SECRET = "unit-test-secret"


@pytest.fixture
def auth_service() -> JwtAuthService:
    return JwtAuthService(secret_key=SECRET, expires_seconds=60, bcrypt_rounds=4)


def _request(authorization: str | None = None) -> Request:
    headers = []
    if authorization is not None:
        headers.append((b"authorization", authorization.encode("latin-1")))
    request = Request({"type": "http", "method": "GET", "path": "/", "query_string": b"", "headers": headers})
    request.state.request_id = "req-auth"
    return request


def _rejection(gate: AuthGate, request: Request, roles: tuple[str, ...] = ()) -> StructuredError:
    with pytest.raises(StructuredError) as exc_info:
        gate.authenticate(request, roles)
    return exc_info.value


def test_token_round_trip_returns_claims(auth_service: JwtAuthService) -> None:
    token = auth_service.generate_token("u-1", "ana", "admin")

    claims = auth_service.verify_token(token)

    assert (claims.user_id, claims.username, claims.role) == ("u-1", "ana", "admin")


def test_expired_and_tampered_tokens_are_distinguished(auth_service: JwtAuthService) -> None:
    now = utc_now()
    expired = jwt.encode(
        {"userId": "u", "username": "a", "role": "admin", "iat": now - timedelta(hours=2), "exp": now - timedelta(hours=1)},
        SECRET,
        algorithm=JWT_ALGORITHM,
    )
    foreign = jwt.encode(
        {"userId": "u", "username": "a", "role": "admin", "exp": now + timedelta(hours=1)},
        "another-secret",
        algorithm=JWT_ALGORITHM,
    )

    with pytest.raises(TokenExpiredError):
        auth_service.verify_token(expired)
    with pytest.raises(TokenInvalidError):
        auth_service.verify_token(foreign)
    with pytest.raises(TokenInvalidError):
        auth_service.verify_token("not.a.jwt")


def test_token_without_identity_claims_is_invalid(auth_service: JwtAuthService) -> None:
    token = jwt.encode({"exp": utc_now() + timedelta(hours=1)}, SECRET, algorithm=JWT_ALGORITHM)

    with pytest.raises(TokenInvalidError):
        auth_service.verify_token(token)


def test_password_hashing(auth_service: JwtAuthService) -> None:
    hashed = auth_service.hash_password("admin123")

    assert hashed != "admin123"
    assert auth_service.compare_password("admin123", hashed)
    assert not auth_service.compare_password("admin124", hashed)
    assert not auth_service.compare_password("admin123", "not-a-bcrypt-hash")


@pytest.mark.parametrize("header", [None, "", "Token abc", "Bearer ", "bearer abc"])
def test_missing_or_malformed_header_is_token_missing(auth_service: JwtAuthService, header: str | None) -> None:
    error = _rejection(AuthGate(auth_service), _request(header))

    assert error.code == "TOKEN_MISSING"
    assert error.status_code == 401
    assert error.request_id == "req-auth"


def test_expired_token_is_rejected_with_token_expired(auth_service: JwtAuthService) -> None:
    now = utc_now()
    expired = jwt.encode(
        {"userId": "u", "username": "a", "role": "admin", "exp": now - timedelta(seconds=5)},
        SECRET,
        algorithm=JWT_ALGORITHM,
    )

    error = _rejection(AuthGate(auth_service), _request(f"Bearer {expired}"))

    assert error.code == "TOKEN_EXPIRED"
    assert error.status_code == 401


def test_garbage_token_is_rejected_with_token_invalid(auth_service: JwtAuthService) -> None:
    error = _rejection(AuthGate(auth_service), _request("Bearer garbage"))

    assert error.code == "TOKEN_INVALID"
    assert isinstance(error.__cause__, TokenInvalidError)


def test_unexpected_verifier_failure_rejects_with_internal_error() -> None:
    class BrokenService:
        def verify_token(self, token: str) -> Any:
            raise RuntimeError("key store unavailable")

    error = _rejection(AuthGate(BrokenService()), _request("Bearer abc"))  # type: ignore[arg-type]

    assert error.code == "INTERNAL_SERVER_ERROR"
    assert error.status_code == 500
    assert error.context == {"stage": "token_verification", "originalError": "RuntimeError"}


def test_valid_token_attaches_user(auth_service: JwtAuthService) -> None:
    request = _request(f"Bearer {auth_service.generate_token('u-9', 'ana', 'operator')}")

    user = AuthGate(auth_service).authenticate(request)

    assert user.id == "u-9"
    assert get_current_user(request) == user


def test_role_outside_allowed_set_is_forbidden(auth_service: JwtAuthService) -> None:
    request = _request(f"Bearer {auth_service.generate_token('u-2', 'op', 'operator')}")

    error = _rejection(AuthGate(auth_service), request, ("admin",))

    assert error.code == "INSUFFICIENT_PERMISSIONS"
    assert error.status_code == 403
    assert error.user_id == "u-2"
    assert error.context == {"requiredRoles": ["admin"], "role": "operator"}


def test_allowed_role_passes(auth_service: JwtAuthService) -> None:
    request = _request(f"Bearer {auth_service.generate_token('u-3', 'boss', 'admin')}")

    assert AuthGate(auth_service).authenticate(request, ("admin",)).role == "admin"
