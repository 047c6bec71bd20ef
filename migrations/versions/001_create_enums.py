"""Create enum types used by Legal Suite tables."""

from typing import Sequence
from typing import Union

from alembic import op
from sqlalchemy.dialects import postgresql

# revision identifiers, used by Alembic.
revision: str = "001_create_enums"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

user_role_enum = postgresql.ENUM("admin", "operator", name="user_role")

lawyer_status_enum = postgresql.ENUM("active", "inactive", name="lawyer_status")

lawsuit_case_type_enum = postgresql.ENUM(
    "civil",
    "criminal",
    "laboral",
    "comercial",
    name="lawsuit_case_type",
)

lawsuit_status_enum = postgresql.ENUM(
    "pending",
    "assigned",
    "resolved",
    name="lawsuit_status",
)


def upgrade() -> None:
    """Create all enum types before dependent tables are introduced."""
    bind = op.get_bind()
    user_role_enum.create(bind, checkfirst=True)
    lawyer_status_enum.create(bind, checkfirst=True)
    lawsuit_case_type_enum.create(bind, checkfirst=True)
    lawsuit_status_enum.create(bind, checkfirst=True)


def downgrade() -> None:
    """Drop enum types in reverse order."""
    bind = op.get_bind()
    lawsuit_status_enum.drop(bind, checkfirst=True)
    lawsuit_case_type_enum.drop(bind, checkfirst=True)
    lawyer_status_enum.drop(bind, checkfirst=True)
    user_role_enum.drop(bind, checkfirst=True)
