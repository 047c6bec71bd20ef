"""Pydantic schemas for lawyer API payloads."""

from __future__ import annotations

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel
from pydantic import ConfigDict

from legal_suite.db.models.lawyer import LawyerStatusEnum

LAWYER_REQUIRED_FIELDS = ("name", "email", "phone", "specialization", "status")


class LawyerCreate(BaseModel):
    """Payload to create a lawyer."""

    name: str
    email: str
    phone: str
    specialization: str
    status: str


class Lawyer(BaseModel):
    """Lawyer response payload."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    name: str
    email: str
    phone: str
    specialization: str
    status: LawyerStatusEnum
    created_at: datetime
    updated_at: datetime


class LawyerListResponse(BaseModel):
    """Paginated list of lawyers."""

    lawyers: list[Lawyer]
    total: int
    page: int
    limit: int
