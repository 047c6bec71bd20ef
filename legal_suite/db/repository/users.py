"""Repository primitives for user accounts."""

from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.orm import Session

from legal_suite.db.models.user import User
from legal_suite.db.models.user import UserRoleEnum


def create_user(
    session: Session,
    *,
    username: str,
    password_hash: str,
    role: UserRoleEnum,
) -> User:
    """Create and return a user row."""
    user = User(username=username, password=password_hash, role=role)
    session.add(user)
    session.flush()
    session.refresh(user)
    return user


def get_user_by_username(session: Session, username: str) -> User | None:
    return session.scalars(select(User).where(User.username == username)).first()
