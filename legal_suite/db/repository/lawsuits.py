"""Repository primitives for lawsuit entities."""

from __future__ import annotations

from uuid import UUID

from sqlalchemy import Select
from sqlalchemy import func
from sqlalchemy import select
from sqlalchemy.orm import Session

from legal_suite.db.models.lawsuit import Lawsuit
from legal_suite.db.models.lawsuit import LawsuitCaseTypeEnum
from legal_suite.db.models.lawsuit import LawsuitStatusEnum


def create_lawsuit(
    session: Session,
    *,
    case_number: str,
    plaintiff: str,
    defendant: str,
    case_type: LawsuitCaseTypeEnum,
    status: LawsuitStatusEnum = LawsuitStatusEnum.PENDING,
) -> Lawsuit:
    """Create and return a lawsuit row."""
    lawsuit = Lawsuit(
        case_number=case_number,
        plaintiff=plaintiff,
        defendant=defendant,
        case_type=case_type,
        status=status,
    )
    session.add(lawsuit)
    session.flush()
    session.refresh(lawsuit)
    return lawsuit


def get_lawsuit(session: Session, lawsuit_id: UUID) -> Lawsuit | None:
    """Fetch a lawsuit by id."""
    return session.get(Lawsuit, lawsuit_id)


def get_lawsuit_by_case_number(session: Session, case_number: str) -> Lawsuit | None:
    return session.scalars(select(Lawsuit).where(Lawsuit.case_number == case_number)).first()


def _apply_filters(
    stmt: Select,
    *,
    status: LawsuitStatusEnum | None,
    lawyer_id: UUID | None,
) -> Select:
    if status is not None:
        stmt = stmt.where(Lawsuit.status == status)
    if lawyer_id is not None:
        stmt = stmt.where(Lawsuit.lawyer_id == lawyer_id)
    return stmt


def list_lawsuits(
    session: Session,
    *,
    status: LawsuitStatusEnum | None = None,
    lawyer_id: UUID | None = None,
    limit: int = 10,
    offset: int = 0,
) -> tuple[list[Lawsuit], int]:
    """Return one filtered page of lawsuits, newest first, and the filtered total."""
    count_stmt = _apply_filters(select(func.count(Lawsuit.id)), status=status, lawyer_id=lawyer_id)
    total = session.scalar(count_stmt) or 0

    stmt = _apply_filters(select(Lawsuit), status=status, lawyer_id=lawyer_id)
    stmt = stmt.order_by(Lawsuit.created_at.desc(), Lawsuit.id).limit(limit).offset(offset)
    return list(session.scalars(stmt)), total


def list_lawsuits_for_lawyer(session: Session, lawyer_id: UUID) -> list[Lawsuit]:
    stmt = (
        select(Lawsuit)
        .where(Lawsuit.lawyer_id == lawyer_id)
        .order_by(Lawsuit.created_at.desc(), Lawsuit.id)
    )
    return list(session.scalars(stmt))


def assign_lawyer(session: Session, lawsuit: Lawsuit, lawyer_id: UUID) -> Lawsuit:
    """Attach a lawyer and move the lawsuit to the assigned state."""
    lawsuit.lawyer_id = lawyer_id
    lawsuit.status = LawsuitStatusEnum.ASSIGNED
    session.flush()
    session.refresh(lawsuit)
    return lawsuit
