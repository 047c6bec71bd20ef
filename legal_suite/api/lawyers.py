"""Lawyer API routes."""

from __future__ import annotations

from typing import Any
from uuid import UUID

from fastapi import APIRouter
from fastapi import Body
from fastapi import Depends
from fastapi import Query
from fastapi import Request
from sqlalchemy.orm import Session

from legal_suite.core.auth import require_auth
from legal_suite.core.errors import ErrorFunnelRoute
from legal_suite.core.errors import ErrorHandler
from legal_suite.core.errors import RequestValidationFailed
from legal_suite.core.errors import get_error_handler
from legal_suite.core.request_context import set_error_context
from legal_suite.db.base import get_db_session
from legal_suite.db.models.user import UserRoleEnum
from legal_suite.schemas.lawyer import LAWYER_REQUIRED_FIELDS
from legal_suite.schemas.lawyer import Lawyer
from legal_suite.schemas.lawyer import LawyerCreate
from legal_suite.schemas.lawyer import LawyerListResponse
from legal_suite.services.lawyers import create_lawyer_service
from legal_suite.services.lawyers import get_lawyer_service
from legal_suite.services.lawyers import list_lawyers_service

router = APIRouter(prefix="/api/lawyers", tags=["lawyers"], route_class=ErrorFunnelRoute)


@router.post(
    "",
    response_model=Lawyer,
    status_code=201,
    dependencies=[Depends(require_auth(UserRoleEnum.ADMIN.value))],
)
def create_lawyer_endpoint(
    request: Request,
    payload: dict[str, Any] | None = Body(default=None),
    session: Session = Depends(get_db_session),
    error_handler: ErrorHandler = Depends(get_error_handler),
) -> Lawyer:
    """Create a lawyer."""
    set_error_context(request, action="create_lawyer", data=payload)

    errors = error_handler.validate_required_fields(payload, LAWYER_REQUIRED_FIELDS)
    if payload and payload.get("email"):
        email_error = error_handler.validate_email(payload["email"])
        if email_error is not None:
            errors.append(email_error)
    if errors:
        raise RequestValidationFailed(errors)

    return create_lawyer_service(session, LawyerCreate.model_validate(payload))


@router.get(
    "",
    response_model=LawyerListResponse,
    dependencies=[Depends(require_auth())],
)
def list_lawyers_endpoint(
    request: Request,
    page: int = Query(default=1, ge=1),
    limit: int = Query(default=10, ge=1, le=100),
    session: Session = Depends(get_db_session),
) -> LawyerListResponse:
    """List lawyers one page at a time."""
    set_error_context(request, action="list_lawyers", page=page, limit=limit)
    return list_lawyers_service(session, page=page, limit=limit)


@router.get(
    "/{lawyer_id}",
    response_model=Lawyer,
    dependencies=[Depends(require_auth())],
)
def get_lawyer_endpoint(
    request: Request,
    lawyer_id: str,
    session: Session = Depends(get_db_session),
    error_handler: ErrorHandler = Depends(get_error_handler),
) -> Lawyer:
    """Get a lawyer by id."""
    set_error_context(request, action="get_lawyer", lawyerId=lawyer_id)
    uuid_error = error_handler.validate_uuid(lawyer_id, "lawyer_id")
    if uuid_error is not None:
        raise RequestValidationFailed([uuid_error])
    return get_lawyer_service(session, UUID(lawyer_id))
