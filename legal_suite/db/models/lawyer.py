"""SQLAlchemy model for lawyers."""

from __future__ import annotations

import uuid
from datetime import datetime
from enum import Enum
from typing import TYPE_CHECKING

from sqlalchemy import DateTime
from sqlalchemy import Enum as SAEnum
from sqlalchemy import PrimaryKeyConstraint
from sqlalchemy import String
from sqlalchemy import UniqueConstraint
from sqlalchemy import Uuid
from sqlalchemy import func
from sqlalchemy.orm import DeclarativeBase
from sqlalchemy.orm import Mapped
from sqlalchemy.orm import mapped_column
from sqlalchemy.orm import relationship


class Base(DeclarativeBase):
    """Declarative base for Legal Suite ORM models."""


class LawyerStatusEnum(str, Enum):
    ACTIVE = "active"
    INACTIVE = "inactive"


def enum_values(enum_cls: type[Enum]) -> list[str]:
    return [member.value for member in enum_cls]


if TYPE_CHECKING:
    from legal_suite.db.models.lawsuit import Lawsuit


class Lawyer(Base):
    """Lawyer available for lawsuit assignment."""

    __tablename__ = "lawyers"
    __table_args__ = (
        PrimaryKeyConstraint("id", name="pk_lawyers"),
        UniqueConstraint("email", name="uq_lawyers_email"),
    )

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True),
        primary_key=True,
        default=uuid.uuid4,
    )
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    email: Mapped[str] = mapped_column(String(255), nullable=False)
    phone: Mapped[str] = mapped_column(String(64), nullable=False)
    specialization: Mapped[str] = mapped_column(String(255), nullable=False)
    status: Mapped[LawyerStatusEnum] = mapped_column(
        SAEnum(LawyerStatusEnum, name="lawyer_status", values_callable=enum_values),
        nullable=False,
        default=LawyerStatusEnum.ACTIVE,
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

    lawsuits: Mapped[list["Lawsuit"]] = relationship("Lawsuit", back_populates="lawyer")
