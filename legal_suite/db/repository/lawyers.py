"""Repository primitives for lawyer entities."""

from __future__ import annotations

from uuid import UUID

from sqlalchemy import func
from sqlalchemy import select
from sqlalchemy.orm import Session

from legal_suite.db.models.lawyer import Lawyer
from legal_suite.db.models.lawyer import LawyerStatusEnum


def create_lawyer(
    session: Session,
    *,
    name: str,
    email: str,
    phone: str,
    specialization: str,
    status: LawyerStatusEnum = LawyerStatusEnum.ACTIVE,
) -> Lawyer:
    """Create and return a lawyer row."""
    lawyer = Lawyer(
        name=name,
        email=email,
        phone=phone,
        specialization=specialization,
        status=status,
    )
    session.add(lawyer)
    session.flush()
    session.refresh(lawyer)
    return lawyer


def get_lawyer(session: Session, lawyer_id: UUID) -> Lawyer | None:
    """Fetch a lawyer by id."""
    return session.get(Lawyer, lawyer_id)


def get_lawyer_by_email(session: Session, email: str) -> Lawyer | None:
    return session.scalars(select(Lawyer).where(Lawyer.email == email)).first()


def list_lawyers(
    session: Session,
    *,
    limit: int = 10,
    offset: int = 0,
) -> tuple[list[Lawyer], int]:
    """Return one page of lawyers, newest first, and the total row count."""
    total = session.scalar(select(func.count(Lawyer.id))) or 0
    stmt = (
        select(Lawyer)
        .order_by(Lawyer.created_at.desc(), Lawyer.id)
        .limit(limit)
        .offset(offset)
    )
    return list(session.scalars(stmt)), total
