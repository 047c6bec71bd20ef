"""JWT issuing/verification and bcrypt password hashing."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import timedelta
from typing import Any

import bcrypt
import jwt

from legal_suite.core.error_types import utc_now

JWT_ALGORITHM = "HS256"


class TokenVerificationError(Exception):
    """Raised when a bearer token cannot be trusted."""


class TokenExpiredError(TokenVerificationError):
    """Signature is valid but the token is past its expiry."""


class TokenInvalidError(TokenVerificationError):
    """Malformed token, bad signature or missing claims."""


@dataclass(frozen=True)
class TokenClaims:
    user_id: str
    username: str
    role: str


class JwtAuthService:
    """Token and password primitives consumed by login and the auth gate."""

    def __init__(
        self,
        *,
        secret_key: str,
        expires_seconds: int = 24 * 60 * 60,
        bcrypt_rounds: int = 10,
    ) -> None:
        if not secret_key:
            raise ValueError("secret_key is required")
        if expires_seconds <= 0:
            raise ValueError("expires_seconds must be positive")

        self._secret_key = secret_key
        self._expires_seconds = expires_seconds
        self._bcrypt_rounds = bcrypt_rounds

    def generate_token(self, user_id: str, username: str, role: str) -> str:
        issued_at = utc_now()
        payload: dict[str, Any] = {
            "userId": str(user_id),
            "username": username,
            "role": role,
            "iat": issued_at,
            "exp": issued_at + timedelta(seconds=self._expires_seconds),
        }
        return jwt.encode(payload, self._secret_key, algorithm=JWT_ALGORITHM)

    def verify_token(self, token: str) -> TokenClaims:
        try:
            decoded = jwt.decode(
                token,
                self._secret_key,
                algorithms=[JWT_ALGORITHM],
                options={"require": ["exp"]},
            )
        except jwt.ExpiredSignatureError as exc:
            raise TokenExpiredError("Token expired") from exc
        except jwt.InvalidTokenError as exc:
            raise TokenInvalidError("Token invalid") from exc

        try:
            return TokenClaims(
                user_id=str(decoded["userId"]),
                username=str(decoded["username"]),
                role=str(decoded["role"]),
            )
        except KeyError as exc:
            raise TokenInvalidError(f"Token is missing claim {exc.args[0]}") from exc

    def hash_password(self, password: str) -> str:
        salt = bcrypt.gensalt(rounds=self._bcrypt_rounds)
        return bcrypt.hashpw(password.encode("utf-8"), salt).decode("utf-8")

    def compare_password(self, password: str, hashed_password: str) -> bool:
        try:
            return bcrypt.checkpw(password.encode("utf-8"), hashed_password.encode("utf-8"))
        except ValueError:
            return False
