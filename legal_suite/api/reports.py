"""Reporting API routes."""

from __future__ import annotations

from uuid import UUID

from fastapi import APIRouter
from fastapi import Depends
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
from legal_suite.schemas.lawsuit import LawyerLawsuitsReport
from legal_suite.services.reports import lawyer_lawsuits_report_service

router = APIRouter(
    prefix="/api/reports",
    tags=["reports"],
    route_class=ErrorFunnelRoute,
    dependencies=[Depends(require_auth(UserRoleEnum.ADMIN.value))],
)


@router.get("/lawyers/{lawyer_id}/lawsuits", response_model=LawyerLawsuitsReport)
def lawyer_lawsuits_report_endpoint(
    request: Request,
    lawyer_id: str,
    session: Session = Depends(get_db_session),
    error_handler: ErrorHandler = Depends(get_error_handler),
) -> LawyerLawsuitsReport:
    """Report the lawsuits assigned to one lawyer."""
    set_error_context(request, action="lawyer_lawsuits_report", lawyerId=lawyer_id)
    uuid_error = error_handler.validate_uuid(lawyer_id, "lawyer_id")
    if uuid_error is not None:
        raise RequestValidationFailed([uuid_error])
    return lawyer_lawsuits_report_service(session, UUID(lawyer_id))
