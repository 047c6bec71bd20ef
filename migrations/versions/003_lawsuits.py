"""Add lawsuits table with the lawyer assignment FK."""

from typing import Sequence
from typing import Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

# revision identifiers, used by Alembic.
revision: str = "003_lawsuits"
down_revision: Union[str, None] = "002_users_lawyers"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Create lawsuits and the indexes used by list and report queries."""
    case_type_enum = postgresql.ENUM(name="lawsuit_case_type", create_type=False)
    status_enum = postgresql.ENUM(name="lawsuit_status", create_type=False)

    op.create_table(
        "lawsuits",
        sa.Column("id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("case_number", sa.String(length=64), nullable=False),
        sa.Column("plaintiff", sa.String(length=255), nullable=False),
        sa.Column("defendant", sa.String(length=255), nullable=False),
        sa.Column("case_type", case_type_enum, nullable=False),
        sa.Column(
            "status",
            status_enum,
            nullable=False,
            server_default=sa.text("'pending'"),
        ),
        sa.Column("lawyer_id", postgresql.UUID(as_uuid=True), nullable=True),
        sa.Column(
            "created_at",
            sa.TIMESTAMP(timezone=True),
            nullable=False,
            server_default=sa.text("now()"),
        ),
        sa.Column(
            "updated_at",
            sa.TIMESTAMP(timezone=True),
            nullable=False,
            server_default=sa.text("now()"),
        ),
        sa.ForeignKeyConstraint(
            ["lawyer_id"],
            ["lawyers.id"],
            name="fk_lawsuits_lawyer_id_lawyers",
            ondelete="SET NULL",
        ),
        sa.PrimaryKeyConstraint("id", name="pk_lawsuits"),
        sa.UniqueConstraint("case_number", name="uq_lawsuits_case_number"),
    )
    op.create_index("ix_lawsuits_lawyer_id", "lawsuits", ["lawyer_id"])
    op.create_index("ix_lawsuits_status", "lawsuits", ["status"])


def downgrade() -> None:
    """Drop lawsuits and their indexes."""
    op.drop_index("ix_lawsuits_status", table_name="lawsuits")
    op.drop_index("ix_lawsuits_lawyer_id", table_name="lawsuits")
    op.drop_table("lawsuits")
