"""SQLAlchemy model for lawsuits."""

from __future__ import annotations

import uuid
from datetime import datetime
from enum import Enum
from typing import TYPE_CHECKING

from sqlalchemy import DateTime
from sqlalchemy import Enum as SAEnum
from sqlalchemy import ForeignKey
from sqlalchemy import Index
from sqlalchemy import PrimaryKeyConstraint
from sqlalchemy import String
from sqlalchemy import UniqueConstraint
from sqlalchemy import Uuid
from sqlalchemy import func
from sqlalchemy.orm import Mapped
from sqlalchemy.orm import mapped_column
from sqlalchemy.orm import relationship

from legal_suite.db.models.lawyer import Base
from legal_suite.db.models.lawyer import enum_values


class LawsuitCaseTypeEnum(str, Enum):
    CIVIL = "civil"
    CRIMINAL = "criminal"
    LABOR = "laboral"
    COMMERCIAL = "comercial"


class LawsuitStatusEnum(str, Enum):
    PENDING = "pending"
    ASSIGNED = "assigned"
    RESOLVED = "resolved"


if TYPE_CHECKING:
    from legal_suite.db.models.lawyer import Lawyer


class Lawsuit(Base):
    """Legal case, optionally assigned to one lawyer."""

    __tablename__ = "lawsuits"
    __table_args__ = (
        PrimaryKeyConstraint("id", name="pk_lawsuits"),
        UniqueConstraint("case_number", name="uq_lawsuits_case_number"),
        Index("ix_lawsuits_lawyer_id", "lawyer_id"),
        Index("ix_lawsuits_status", "status"),
    )

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True),
        primary_key=True,
        default=uuid.uuid4,
    )
    case_number: Mapped[str] = mapped_column(String(64), nullable=False)
    plaintiff: Mapped[str] = mapped_column(String(255), nullable=False)
    defendant: Mapped[str] = mapped_column(String(255), nullable=False)
    case_type: Mapped[LawsuitCaseTypeEnum] = mapped_column(
        SAEnum(LawsuitCaseTypeEnum, name="lawsuit_case_type", values_callable=enum_values),
        nullable=False,
    )
    status: Mapped[LawsuitStatusEnum] = mapped_column(
        SAEnum(LawsuitStatusEnum, name="lawsuit_status", values_callable=enum_values),
        nullable=False,
        default=LawsuitStatusEnum.PENDING,
    )
    lawyer_id: Mapped[uuid.UUID | None] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("lawyers.id", name="fk_lawsuits_lawyer_id_lawyers", ondelete="SET NULL"),
        nullable=True,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
        onupdate=func.now(),
    )

    lawyer: Mapped["Lawyer"] = relationship("Lawyer", back_populates="lawsuits")
