"""Per-request correlation id and authenticated identity.

State lives on `request.state` only, so concurrent requests never observe
each other's values.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any
import time
import uuid

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.middleware.base import RequestResponseEndpoint
from starlette.requests import HTTPConnection
from starlette.requests import Request
from starlette.responses import Response

REQUEST_ID_HEADER = "X-Request-ID"


@dataclass(frozen=True)
class AuthenticatedUser:
    """Identity decoded from a verified bearer token."""

    id: str
    username: str
    role: str


def new_request_id() -> str:
    return str(uuid.uuid4())


def get_request_id(request: HTTPConnection) -> str | None:
    return getattr(request.state, "request_id", None)


def get_current_user(request: HTTPConnection) -> AuthenticatedUser | None:
    return getattr(request.state, "user", None)


def set_current_user(request: HTTPConnection, user: AuthenticatedUser) -> None:
    request.state.user = user


def set_error_context(request: HTTPConnection, **context: Any) -> None:
    """Record diagnostic context reported if the request later fails."""
    existing = getattr(request.state, "error_context", None) or {}
    request.state.error_context = {**existing, **context}


def get_error_context(request: HTTPConnection) -> dict[str, Any] | None:
    return getattr(request.state, "error_context", None)


class RequestIdMiddleware(BaseHTTPMiddleware):
    """Assign a fresh correlation id to every inbound request and log its completion."""

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        request_id = new_request_id()
        request.state.request_id = request_id
        started = time.perf_counter()
        response = await call_next(request)
        response.headers[REQUEST_ID_HEADER] = request_id

        logger = getattr(request.app.state, "logger", None)
        if logger is not None:
            user = get_current_user(request)
            logger.info(
                "Request completed",
                {
                    "method": request.method,
                    "path": request.url.path,
                    "statusCode": response.status_code,
                    "durationMs": round((time.perf_counter() - started) * 1000, 2),
                },
                {"requestId": request_id, "userId": user.id if user else None},
            )
        return response
