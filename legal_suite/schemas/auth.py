"""Pydantic schemas for authentication payloads."""

from __future__ import annotations

from uuid import UUID

from pydantic import BaseModel

from legal_suite.db.models.user import UserRoleEnum

LOGIN_REQUIRED_FIELDS = ("username", "password")


class LoginRequest(BaseModel):
    username: str
    password: str


class LoginUser(BaseModel):
    id: UUID
    username: str
    role: UserRoleEnum


class LoginResponse(BaseModel):
    """Signed bearer token plus the identity it carries."""

    token: str
    user: LoginUser
