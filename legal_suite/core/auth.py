"""Bearer-token authentication and role-based authorization for routes."""

from __future__ import annotations

from collections.abc import Callable
from collections.abc import Collection

from fastapi import Request

from legal_suite.core.error_types import CommonErrors
from legal_suite.core.request_context import AuthenticatedUser
from legal_suite.core.request_context import get_request_id
from legal_suite.core.request_context import set_current_user
from legal_suite.core.tokens import JwtAuthService
from legal_suite.core.tokens import TokenExpiredError
from legal_suite.core.tokens import TokenInvalidError

BEARER_PREFIX = "Bearer "


class AuthGate:
    """Verify the bearer credential of a request and enforce allowed roles.

    Rejections are raised as `StructuredError` so the route's error handler
    writes the 401/403/500 response. Any unexpected failure while verifying
    rejects the request rather than letting it through.
    """

    def __init__(self, auth_service: JwtAuthService) -> None:
        self._auth_service = auth_service

    def authenticate(
        self,
        request: Request,
        required_roles: Collection[str] = (),
    ) -> AuthenticatedUser:
        request_id = get_request_id(request)

        header = request.headers.get("authorization")
        if not header or not header.startswith(BEARER_PREFIX):
            raise CommonErrors.TOKEN_MISSING.instantiate(request_id=request_id)
        token = header[len(BEARER_PREFIX):].strip()
        if not token:
            raise CommonErrors.TOKEN_MISSING.instantiate(request_id=request_id)

        try:
            claims = self._auth_service.verify_token(token)
        except TokenExpiredError as exc:
            raise CommonErrors.TOKEN_EXPIRED.instantiate(request_id=request_id) from exc
        except TokenInvalidError as exc:
            raise CommonErrors.TOKEN_INVALID.instantiate(request_id=request_id) from exc
        except Exception as exc:
            raise CommonErrors.INTERNAL_SERVER_ERROR.instantiate(
                context={"stage": "token_verification", "originalError": type(exc).__name__},
                request_id=request_id,
            ) from exc

        user = AuthenticatedUser(id=claims.user_id, username=claims.username, role=claims.role)
        set_current_user(request, user)

        if required_roles and user.role not in required_roles:
            raise CommonErrors.INSUFFICIENT_PERMISSIONS.instantiate(
                context={"requiredRoles": sorted(required_roles), "role": user.role},
                request_id=request_id,
                user_id=user.id,
            )
        return user


def require_auth(*roles: str) -> Callable[[Request], AuthenticatedUser]:
    """Build a route dependency admitting any authenticated user, or only `roles`."""
    required_roles = frozenset(roles)

    def dependency(request: Request) -> AuthenticatedUser:
        gate: AuthGate = request.app.state.auth_gate
        return gate.authenticate(request, required_roles)

    return dependency
