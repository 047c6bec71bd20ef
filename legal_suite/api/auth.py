"""Authentication API routes."""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter
from fastapi import Body
from fastapi import Depends
from fastapi import Request
from sqlalchemy.orm import Session

from legal_suite.core.errors import ErrorFunnelRoute
from legal_suite.core.errors import ErrorHandler
from legal_suite.core.errors import RequestValidationFailed
from legal_suite.core.errors import get_error_handler
from legal_suite.core.request_context import set_error_context
from legal_suite.db.base import get_db_session
from legal_suite.schemas.auth import LOGIN_REQUIRED_FIELDS
from legal_suite.schemas.auth import LoginRequest
from legal_suite.schemas.auth import LoginResponse
from legal_suite.services.auth import login_service

router = APIRouter(prefix="/api/auth", tags=["auth"], route_class=ErrorFunnelRoute)


@router.post("/login", response_model=LoginResponse)
def login_endpoint(
    request: Request,
    payload: dict[str, Any] | None = Body(default=None),
    session: Session = Depends(get_db_session),
    error_handler: ErrorHandler = Depends(get_error_handler),
) -> LoginResponse:
    """Exchange a username and password for a bearer token."""
    set_error_context(request, action="login", username=(payload or {}).get("username"))
    errors = error_handler.validate_required_fields(payload, LOGIN_REQUIRED_FIELDS)
    if errors:
        raise RequestValidationFailed(errors)
    return login_service(session, request.app.state.auth_service, LoginRequest.model_validate(payload))
