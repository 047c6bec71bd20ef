"""Integration test for the demo-data seeder on an in-memory database."""

from __future__ import annotations

from sqlalchemy import func
from sqlalchemy import select

from legal_suite.core.tokens import JwtAuthService
from legal_suite.db.base import build_engine
from legal_suite.db.base import build_session_factory
from legal_suite.db.base import session_scope
from legal_suite.db.models import Base
from legal_suite.db.models import Lawsuit
from legal_suite.db.models import Lawyer
from legal_suite.db.models import User
from legal_suite.db.models.user import UserRoleEnum
from legal_suite.db.repository.users import get_user_by_username
from legal_suite.seed import DEMO_LAWSUITS
from legal_suite.seed import DEMO_LAWYERS
from legal_suite.seed import DEMO_USERS
from legal_suite.seed import seed_demo_data


def test_seed_is_idempotent_and_hashes_passwords() -> None:
    engine = build_engine("sqlite+pysqlite:///:memory:")
    Base.metadata.create_all(engine)
    session_factory = build_session_factory(engine)
    auth_service = JwtAuthService(secret_key="seed-secret", bcrypt_rounds=4)

    with session_scope(session_factory) as session:
        first = seed_demo_data(session, auth_service)
    with session_scope(session_factory) as session:
        second = seed_demo_data(session, auth_service)

    assert first == {"users": len(DEMO_USERS), "lawyers": len(DEMO_LAWYERS), "lawsuits": len(DEMO_LAWSUITS)}
    assert second == {"users": 0, "lawyers": 0, "lawsuits": 0}

    with session_scope(session_factory) as session:
        assert session.scalar(select(func.count(User.id))) == len(DEMO_USERS)
        assert session.scalar(select(func.count(Lawyer.id))) == len(DEMO_LAWYERS)
        assert session.scalar(select(func.count(Lawsuit.id))) == len(DEMO_LAWSUITS)
        admin = get_user_by_username(session, "admin")
        assert admin is not None
        assert admin.password != "admin123"
        assert auth_service.compare_password("admin123", admin.password)
        operator = get_user_by_username(session, "operator1")
        assert operator is not None
        assert operator.role is UserRoleEnum.OPERATOR
        assert auth_service.compare_password("operator123", operator.password)
        labor_case = session.scalar(select(Lawsuit).where(Lawsuit.case_number == "CASE-2025-003"))
        assert labor_case.case_type.value == "laboral"
