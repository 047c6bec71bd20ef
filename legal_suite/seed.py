"""Create the schema and load demo accounts, lawyers and lawsuits.

Usage: ``python -m legal_suite.seed [--database-url URL] [--skip-create]``
"""

from __future__ import annotations

import argparse

from sqlalchemy.orm import Session

from legal_suite.core.config import get_settings
from legal_suite.core.tokens import JwtAuthService
from legal_suite.db.base import build_engine
from legal_suite.db.base import build_session_factory
from legal_suite.db.base import session_scope
from legal_suite.db.models import Base
from legal_suite.db.models.lawsuit import LawsuitCaseTypeEnum
from legal_suite.db.models.lawsuit import LawsuitStatusEnum
from legal_suite.db.models.lawyer import LawyerStatusEnum
from legal_suite.db.models.user import UserRoleEnum
from legal_suite.db.repository.lawsuits import create_lawsuit
from legal_suite.db.repository.lawsuits import get_lawsuit_by_case_number
from legal_suite.db.repository.lawyers import create_lawyer
from legal_suite.db.repository.lawyers import get_lawyer_by_email
from legal_suite.db.repository.users import get_user_by_username
from legal_suite.services.auth import create_user_service

DEMO_USERS = [
    ("admin", "admin123", UserRoleEnum.ADMIN),
    ("operator1", "operator123", UserRoleEnum.OPERATOR),
    ("operator2", "operator456", UserRoleEnum.OPERATOR),
    ("admin2", "admin456", UserRoleEnum.ADMIN),
]

DEMO_LAWYERS = [
    ("Carlos Pérez", "carlos.perez@example.com", "3001234567", "civil", LawyerStatusEnum.ACTIVE),
    ("María González", "maria.gonzalez@example.com", "3009876543", "civil", LawyerStatusEnum.ACTIVE),
    ("Juan Rodríguez", "juan.rodriguez@example.com", "3005551234", "civil", LawyerStatusEnum.ACTIVE),
    ("Ana Martínez", "ana.martinez@example.com", "3007778888", "comercial", LawyerStatusEnum.ACTIVE),
    ("Luis Fernández", "luis.fernandez@example.com", "3002223333", "civil", LawyerStatusEnum.INACTIVE),
    ("Carmen López", "carmen.lopez@example.com", "3004445555", "criminal", LawyerStatusEnum.ACTIVE),
    ("Roberto Silva", "roberto.silva@example.com", "3006667777", "comercial", LawyerStatusEnum.ACTIVE),
    ("Patricia Herrera", "patricia.herrera@example.com", "3008889999", "laboral", LawyerStatusEnum.INACTIVE),
    ("Diego Martínez", "diego.martinez@example.com", "3003334444", "laboral", LawyerStatusEnum.ACTIVE),
]

DEMO_LAWSUITS = [
    ("CASE-2025-001", "Empresa ABC S.A.S.", "Juan García", LawsuitCaseTypeEnum.CIVIL),
    ("CASE-2025-002", "María Torres", "Constructora XYZ Ltda.", LawsuitCaseTypeEnum.COMMERCIAL),
    ("CASE-2025-003", "Pedro Ramírez", "Transportes del Norte", LawsuitCaseTypeEnum.LABOR),
    ("CASE-2025-004", "Fiscalía General", "Andrés Castro", LawsuitCaseTypeEnum.CRIMINAL),
    ("CASE-2025-005", "Laura Méndez", "Inversiones Delta S.A.", LawsuitCaseTypeEnum.CIVIL),
]


def seed_demo_data(session: Session, auth_service: JwtAuthService) -> dict[str, int]:
    """Insert demo rows that are not present yet and return how many were added."""
    created = {"users": 0, "lawyers": 0, "lawsuits": 0}

    for username, password, role in DEMO_USERS:
        if get_user_by_username(session, username) is None:
            create_user_service(session, auth_service, username=username, password=password, role=role)
            created["users"] += 1

    for name, email, phone, specialization, status in DEMO_LAWYERS:
        if get_lawyer_by_email(session, email) is None:
            create_lawyer(
                session,
                name=name,
                email=email,
                phone=phone,
                specialization=specialization,
                status=status,
            )
            created["lawyers"] += 1

    for case_number, plaintiff, defendant, case_type in DEMO_LAWSUITS:
        if get_lawsuit_by_case_number(session, case_number) is None:
            create_lawsuit(
                session,
                case_number=case_number,
                plaintiff=plaintiff,
                defendant=defendant,
                case_type=case_type,
                status=LawsuitStatusEnum.PENDING,
            )
            created["lawsuits"] += 1

    return created


def _cli(argv: list[str] | None = None) -> int:
    settings = get_settings()
    parser = argparse.ArgumentParser(description="Create tables and load Legal Suite demo data.")
    parser.add_argument(
        "--database-url",
        default=settings.database_url,
        help="SQLAlchemy database URL (defaults to LEGAL_SUITE_DATABASE_URL)",
    )
    parser.add_argument(
        "--skip-create",
        action="store_true",
        help="Do not create tables; use when the schema is managed by Alembic",
    )
    args = parser.parse_args(argv)

    engine = build_engine(args.database_url)
    if not args.skip_create:
        Base.metadata.create_all(engine)

    auth_service = JwtAuthService(
        secret_key=settings.jwt_secret,
        expires_seconds=settings.jwt_expires_seconds,
        bcrypt_rounds=settings.bcrypt_rounds,
    )
    with session_scope(build_session_factory(engine)) as session:
        created = seed_demo_data(session, auth_service)

    print(f"users created: {created['users']}")
    print(f"lawyers created: {created['lawyers']}")
    print(f"lawsuits created: {created['lawsuits']}")
    return 0


def main() -> None:
    """CLI entrypoint."""
    raise SystemExit(_cli())


if __name__ == "__main__":
    main()
