"""Pydantic schemas for lawsuit and report API payloads."""

from __future__ import annotations

from datetime import datetime
from typing import Literal
from uuid import UUID

from pydantic import BaseModel
from pydantic import ConfigDict
from pydantic import Field

from legal_suite.db.models.lawsuit import LawsuitCaseTypeEnum
from legal_suite.db.models.lawsuit import LawsuitStatusEnum

LAWSUIT_REQUIRED_FIELDS = ("case_number", "plaintiff", "defendant", "case_type", "status")
ASSIGN_REQUIRED_FIELDS = ("lawyer_id",)


class LawsuitCreate(BaseModel):
    """Payload to create a lawsuit."""

    case_number: str
    plaintiff: str
    defendant: str
    case_type: str
    status: str


class Lawsuit(BaseModel):
    """Lawsuit response payload."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    case_number: str
    plaintiff: str
    defendant: str
    case_type: LawsuitCaseTypeEnum
    status: LawsuitStatusEnum
    lawyer_id: UUID | None = None
    created_at: datetime
    updated_at: datetime


class Pagination(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    total: int
    page: int
    limit: int
    total_pages: int = Field(alias="totalPages")


class LawsuitListResponse(BaseModel):
    """Filtered, paginated list of lawsuits."""

    data: list[Lawsuit]
    pagination: Pagination


class LawsuitAssignResponse(BaseModel):
    success: Literal[True] = True
    message: str
    data: Lawsuit


class ReportLawyer(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    name: str


class ReportLawsuit(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    case_number: str
    status: LawsuitStatusEnum


class LawyerLawsuitsReport(BaseModel):
    """Lawsuits currently assigned to one lawyer."""

    lawyer: ReportLawyer
    lawsuits: list[ReportLawsuit]
