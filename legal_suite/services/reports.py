"""Service helpers for report queries."""

from __future__ import annotations

from uuid import UUID

from sqlalchemy.orm import Session

from legal_suite.db.repository.lawsuits import list_lawsuits_for_lawyer
from legal_suite.schemas.lawsuit import LawyerLawsuitsReport
from legal_suite.schemas.lawsuit import ReportLawsuit
from legal_suite.schemas.lawsuit import ReportLawyer
from legal_suite.services.lawyers import get_lawyer_service


def lawyer_lawsuits_report_service(session: Session, lawyer_id: UUID) -> LawyerLawsuitsReport:
    """Return the lawsuits assigned to one lawyer."""
    lawyer = get_lawyer_service(session, lawyer_id)
    lawsuits = list_lawsuits_for_lawyer(session, lawyer.id)
    return LawyerLawsuitsReport(
        lawyer=ReportLawyer.model_validate(lawyer),
        lawsuits=[ReportLawsuit.model_validate(lawsuit) for lawsuit in lawsuits],
    )
