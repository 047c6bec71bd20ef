"""Small helpers shared by the service modules."""

from __future__ import annotations

import math
from enum import Enum
from typing import TypeVar

from legal_suite.domain.errors import DomainValidationError

EnumT = TypeVar("EnumT", bound=Enum)


def parse_choice(enum_cls: type[EnumT], value: str, *, field: str, label: str) -> EnumT:
    """Map a raw string onto an enum member or raise a field-level validation error."""
    try:
        return enum_cls(value)
    except ValueError as exc:
        allowed = ", ".join(member.value for member in enum_cls)
        raise DomainValidationError(
            field,
            f"{label} no válido. Valores permitidos: {allowed}",
            value=value,
        ) from exc


def page_offset(page: int, limit: int) -> int:
    return (page - 1) * limit


def total_pages(total: int, limit: int) -> int:
    if limit <= 0:
        return 0
    return math.ceil(total / limit)
