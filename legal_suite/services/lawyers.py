"""Service helpers for lawyer API operations."""

from __future__ import annotations

from uuid import UUID

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from legal_suite.db.models.lawyer import LawyerStatusEnum
from legal_suite.db.repository.lawyers import create_lawyer
from legal_suite.db.repository.lawyers import get_lawyer
from legal_suite.db.repository.lawyers import get_lawyer_by_email
from legal_suite.db.repository.lawyers import list_lawyers
from legal_suite.domain.errors import DuplicateResource
from legal_suite.domain.errors import LawyerNotFound
from legal_suite.schemas.lawyer import LawyerCreate
from legal_suite.schemas.lawyer import LawyerListResponse
from legal_suite.services.common import page_offset
from legal_suite.services.common import parse_choice


def create_lawyer_service(session: Session, payload: LawyerCreate):
    """Create and persist a new lawyer."""
    status = parse_choice(LawyerStatusEnum, payload.status, field="status", label="Estado")
    if get_lawyer_by_email(session, payload.email) is not None:
        raise DuplicateResource("Abogado", "email", payload.email)
    try:
        lawyer = create_lawyer(
            session,
            name=payload.name,
            email=payload.email,
            phone=payload.phone,
            specialization=payload.specialization,
            status=status,
        )
        session.commit()
        return lawyer
    except IntegrityError as exc:
        session.rollback()
        raise DuplicateResource("Abogado", "email", payload.email) from exc


def list_lawyers_service(session: Session, *, page: int = 1, limit: int = 10) -> LawyerListResponse:
    """List one page of lawyers."""
    lawyers, total = list_lawyers(session, limit=limit, offset=page_offset(page, limit))
    return LawyerListResponse(lawyers=lawyers, total=total, page=page, limit=limit)


def get_lawyer_service(session: Session, lawyer_id: UUID):
    """Fetch a lawyer or raise not found."""
    lawyer = get_lawyer(session, lawyer_id)
    if lawyer is None:
        raise LawyerNotFound(lawyer_id)
    return lawyer
