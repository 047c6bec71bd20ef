"""Service helpers for login and account provisioning."""

from __future__ import annotations

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from legal_suite.core.tokens import JwtAuthService
from legal_suite.db.models.user import UserRoleEnum
from legal_suite.db.repository.users import create_user
from legal_suite.db.repository.users import get_user_by_username
from legal_suite.domain.errors import DuplicateResource
from legal_suite.domain.errors import InvalidCredentials
from legal_suite.schemas.auth import LoginRequest
from legal_suite.schemas.auth import LoginResponse
from legal_suite.schemas.auth import LoginUser


def login_service(session: Session, auth_service: JwtAuthService, payload: LoginRequest) -> LoginResponse:
    """Check credentials and issue a signed token.

    Unknown usernames and wrong passwords fail the same way so callers cannot
    tell which accounts exist.
    """
    user = get_user_by_username(session, payload.username)
    if user is None or not auth_service.compare_password(payload.password, user.password):
        raise InvalidCredentials(payload.username)

    token = auth_service.generate_token(str(user.id), user.username, user.role.value)
    return LoginResponse(
        token=token,
        user=LoginUser(id=user.id, username=user.username, role=user.role),
    )


def create_user_service(
    session: Session,
    auth_service: JwtAuthService,
    *,
    username: str,
    password: str,
    role: UserRoleEnum = UserRoleEnum.OPERATOR,
):
    """Hash the password and persist a new account."""
    if get_user_by_username(session, username) is not None:
        raise DuplicateResource("Usuario", "username", username)
    try:
        user = create_user(
            session,
            username=username,
            password_hash=auth_service.hash_password(password),
            role=role,
        )
        session.commit()
        return user
    except IntegrityError as exc:
        session.rollback()
        raise DuplicateResource("Usuario", "username", username) from exc
