"""Model module imports for SQLAlchemy relationship registration."""

from legal_suite.db.models.lawsuit import Lawsuit
from legal_suite.db.models.lawyer import Base
from legal_suite.db.models.lawyer import Lawyer
from legal_suite.db.models.user import User

__all__ = [
    "Base",
    "Lawsuit",
    "Lawyer",
    "User",
]
