"""Lawsuit API routes."""

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
from legal_suite.schemas.lawsuit import ASSIGN_REQUIRED_FIELDS
from legal_suite.schemas.lawsuit import LAWSUIT_REQUIRED_FIELDS
from legal_suite.schemas.lawsuit import Lawsuit
from legal_suite.schemas.lawsuit import LawsuitAssignResponse
from legal_suite.schemas.lawsuit import LawsuitCreate
from legal_suite.schemas.lawsuit import LawsuitListResponse
from legal_suite.services.lawsuits import assign_lawyer_service
from legal_suite.services.lawsuits import create_lawsuit_service
from legal_suite.services.lawsuits import get_lawsuit_service
from legal_suite.services.lawsuits import list_lawsuits_service

ASSIGN_SUCCESS_MESSAGE = "Abogado asignado correctamente a la demanda"

router = APIRouter(prefix="/api/lawsuits", tags=["lawsuits"], route_class=ErrorFunnelRoute)


@router.post(
    "",
    response_model=Lawsuit,
    status_code=201,
    dependencies=[Depends(require_auth(UserRoleEnum.ADMIN.value))],
)
def create_lawsuit_endpoint(
    request: Request,
    payload: dict[str, Any] | None = Body(default=None),
    session: Session = Depends(get_db_session),
    error_handler: ErrorHandler = Depends(get_error_handler),
) -> Lawsuit:
    """Create a lawsuit."""
    set_error_context(request, action="create_lawsuit", data=payload)
    errors = error_handler.validate_required_fields(payload, LAWSUIT_REQUIRED_FIELDS)
    if errors:
        raise RequestValidationFailed(errors)
    return create_lawsuit_service(session, LawsuitCreate.model_validate(payload))


@router.get(
    "",
    response_model=LawsuitListResponse,
    dependencies=[Depends(require_auth())],
)
def list_lawsuits_endpoint(
    request: Request,
    status: str | None = None,
    lawyer_id: str | None = None,
    page: int = Query(default=1, ge=1),
    limit: int = Query(default=10, ge=1, le=100),
    session: Session = Depends(get_db_session),
    error_handler: ErrorHandler = Depends(get_error_handler),
) -> LawsuitListResponse:
    """List lawsuits with optional status and lawyer filters."""
    set_error_context(request, action="list_lawsuits", status=status, lawyerId=lawyer_id)
    if lawyer_id is not None:
        uuid_error = error_handler.validate_uuid(lawyer_id, "lawyer_id")
        if uuid_error is not None:
            raise RequestValidationFailed([uuid_error])
    return list_lawsuits_service(
        session,
        status=status,
        lawyer_id=UUID(lawyer_id) if lawyer_id is not None else None,
        page=page,
        limit=limit,
    )


@router.get(
    "/{lawsuit_id}",
    response_model=Lawsuit,
    dependencies=[Depends(require_auth())],
)
def get_lawsuit_endpoint(
    request: Request,
    lawsuit_id: str,
    session: Session = Depends(get_db_session),
    error_handler: ErrorHandler = Depends(get_error_handler),
) -> Lawsuit:
    """Get a lawsuit by id."""
    set_error_context(request, action="get_lawsuit", lawsuitId=lawsuit_id)
    uuid_error = error_handler.validate_uuid(lawsuit_id, "lawsuit_id")
    if uuid_error is not None:
        raise RequestValidationFailed([uuid_error])
    return get_lawsuit_service(session, UUID(lawsuit_id))


@router.put(
    "/{lawsuit_id}/assign",
    response_model=LawsuitAssignResponse,
    dependencies=[Depends(require_auth(UserRoleEnum.ADMIN.value))],
)
def assign_lawyer_endpoint(
    request: Request,
    lawsuit_id: str,
    payload: dict[str, Any] | None = Body(default=None),
    session: Session = Depends(get_db_session),
    error_handler: ErrorHandler = Depends(get_error_handler),
) -> LawsuitAssignResponse:
    """Assign an active lawyer to a lawsuit."""
    lawyer_id = (payload or {}).get("lawyer_id")
    set_error_context(request, action="assign_lawyer", lawsuitId=lawsuit_id, lawyerId=lawyer_id)

    errors = []
    uuid_error = error_handler.validate_uuid(lawsuit_id, "lawsuit_id")
    if uuid_error is not None:
        errors.append(uuid_error)
    required_errors = error_handler.validate_required_fields(payload, ASSIGN_REQUIRED_FIELDS)
    errors.extend(required_errors)
    if not required_errors:
        lawyer_uuid_error = error_handler.validate_uuid(lawyer_id, "lawyer_id")
        if lawyer_uuid_error is not None:
            errors.append(lawyer_uuid_error)
    if errors:
        raise RequestValidationFailed(errors)

    lawsuit = assign_lawyer_service(session, UUID(lawsuit_id), UUID(lawyer_id))
    return LawsuitAssignResponse(
        message=ASSIGN_SUCCESS_MESSAGE,
        data=Lawsuit.model_validate(lawsuit),
    )
