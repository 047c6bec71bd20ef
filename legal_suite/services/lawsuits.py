"""Service helpers for lawsuit API operations."""

from __future__ import annotations

from uuid import UUID

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from legal_suite.db.models.lawsuit import LawsuitCaseTypeEnum
from legal_suite.db.models.lawsuit import LawsuitStatusEnum
from legal_suite.db.models.lawyer import LawyerStatusEnum
from legal_suite.db.repository.lawsuits import assign_lawyer
from legal_suite.db.repository.lawsuits import create_lawsuit
from legal_suite.db.repository.lawsuits import get_lawsuit
from legal_suite.db.repository.lawsuits import get_lawsuit_by_case_number
from legal_suite.db.repository.lawsuits import list_lawsuits
from legal_suite.db.repository.lawyers import get_lawyer
from legal_suite.domain.errors import DuplicateResource
from legal_suite.domain.errors import LawsuitNotFound
from legal_suite.domain.errors import LawyerAlreadyAssigned
from legal_suite.domain.errors import LawyerNotAvailable
from legal_suite.domain.errors import LawyerNotFound
from legal_suite.schemas.lawsuit import LawsuitCreate
from legal_suite.schemas.lawsuit import LawsuitListResponse
from legal_suite.schemas.lawsuit import Pagination
from legal_suite.services.common import page_offset
from legal_suite.services.common import parse_choice
from legal_suite.services.common import total_pages


def create_lawsuit_service(session: Session, payload: LawsuitCreate):
    """Create and persist a new lawsuit."""
    case_type = parse_choice(LawsuitCaseTypeEnum, payload.case_type, field="case_type", label="Tipo de caso")
    status = parse_choice(LawsuitStatusEnum, payload.status, field="status", label="Estado")
    if get_lawsuit_by_case_number(session, payload.case_number) is not None:
        raise DuplicateResource("Demanda", "case_number", payload.case_number)
    try:
        lawsuit = create_lawsuit(
            session,
            case_number=payload.case_number,
            plaintiff=payload.plaintiff,
            defendant=payload.defendant,
            case_type=case_type,
            status=status,
        )
        session.commit()
        return lawsuit
    except IntegrityError as exc:
        session.rollback()
        raise DuplicateResource("Demanda", "case_number", payload.case_number) from exc


def list_lawsuits_service(
    session: Session,
    *,
    status: str | None = None,
    lawyer_id: UUID | None = None,
    page: int = 1,
    limit: int = 10,
) -> LawsuitListResponse:
    """List lawsuits with optional status and lawyer filters."""
    status_filter = None
    if status is not None:
        status_filter = parse_choice(LawsuitStatusEnum, status, field="status", label="Estado")
    lawsuits, total = list_lawsuits(
        session,
        status=status_filter,
        lawyer_id=lawyer_id,
        limit=limit,
        offset=page_offset(page, limit),
    )
    return LawsuitListResponse(
        data=lawsuits,
        pagination=Pagination(
            total=total,
            page=page,
            limit=limit,
            total_pages=total_pages(total, limit),
        ),
    )


def get_lawsuit_service(session: Session, lawsuit_id: UUID):
    """Fetch a lawsuit or raise not found."""
    lawsuit = get_lawsuit(session, lawsuit_id)
    if lawsuit is None:
        raise LawsuitNotFound(lawsuit_id)
    return lawsuit


def assign_lawyer_service(session: Session, lawsuit_id: UUID, lawyer_id: UUID):
    """Assign an active lawyer to a lawsuit that does not already have them."""
    lawsuit = get_lawsuit_service(session, lawsuit_id)
    lawyer = get_lawyer(session, lawyer_id)
    if lawyer is None:
        raise LawyerNotFound(lawyer_id)
    if lawyer.status != LawyerStatusEnum.ACTIVE:
        raise LawyerNotAvailable(lawyer_id, lawyer.status.value)
    if lawsuit.lawyer_id == lawyer.id:
        raise LawyerAlreadyAssigned(lawsuit_id, lawyer_id)

    lawsuit = assign_lawyer(session, lawsuit, lawyer.id)
    session.commit()
    return lawsuit
