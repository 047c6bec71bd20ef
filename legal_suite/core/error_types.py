"""Error taxonomy: categories, severities, structured errors and templates."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from dataclasses import field
from datetime import datetime
from datetime import timezone
from enum import Enum
from types import MappingProxyType
from typing import Any


class ErrorCategory(str, Enum):
    VALIDATION = "VALIDATION"
    AUTHENTICATION = "AUTHENTICATION"
    AUTHORIZATION = "AUTHORIZATION"
    NOT_FOUND = "NOT_FOUND"
    BUSINESS_LOGIC = "BUSINESS_LOGIC"
    EXTERNAL_SERVICE = "EXTERNAL_SERVICE"
    DATABASE = "DATABASE"
    INTERNAL_SERVER = "INTERNAL_SERVER"


class ErrorSeverity(str, Enum):
    LOW = "LOW"
    MEDIUM = "MEDIUM"
    HIGH = "HIGH"
    CRITICAL = "CRITICAL"

    @property
    def rank(self) -> int:
        return _SEVERITY_ORDER.index(self)


_SEVERITY_ORDER = (
    ErrorSeverity.LOW,
    ErrorSeverity.MEDIUM,
    ErrorSeverity.HIGH,
    ErrorSeverity.CRITICAL,
)

STATUS_BY_CATEGORY: Mapping[ErrorCategory, int] = MappingProxyType(
    {
        ErrorCategory.VALIDATION: 400,
        ErrorCategory.AUTHENTICATION: 401,
        ErrorCategory.AUTHORIZATION: 403,
        ErrorCategory.NOT_FOUND: 404,
        ErrorCategory.BUSINESS_LOGIC: 400,
        ErrorCategory.EXTERNAL_SERVICE: 503,
        ErrorCategory.DATABASE: 500,
        ErrorCategory.INTERNAL_SERVER: 500,
    }
)


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def isoformat_utc(value: datetime) -> str:
    """Render an instant as ISO 8601 with millisecond precision and a `Z` suffix."""
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    rendered = value.astimezone(timezone.utc).isoformat(timespec="milliseconds")
    return rendered.replace("+00:00", "Z")


@dataclass(frozen=True)
class ErrorDetails:
    """Full description of a classified failure."""

    code: str
    message: str
    category: ErrorCategory
    severity: ErrorSeverity
    status_code: int
    context: Mapping[str, Any] | None = None
    timestamp: datetime = field(default_factory=utc_now)
    request_id: str | None = None
    user_id: str | None = None

    def __post_init__(self) -> None:
        expected = STATUS_BY_CATEGORY[self.category]
        if self.status_code != expected:
            raise ValueError(
                f"status_code {self.status_code} is inconsistent with category "
                f"{self.category.value} (expected {expected})"
            )
        if self.context is not None:
            object.__setattr__(self, "context", MappingProxyType(dict(self.context)))


class StructuredError(Exception):
    """Raisable, read-only wrapper around `ErrorDetails`."""

    def __init__(self, details: ErrorDetails) -> None:
        super().__init__(details.message)
        self._details = details

    @property
    def details(self) -> ErrorDetails:
        return self._details

    @property
    def code(self) -> str:
        return self._details.code

    @property
    def message(self) -> str:
        return self._details.message

    @property
    def category(self) -> ErrorCategory:
        return self._details.category

    @property
    def severity(self) -> ErrorSeverity:
        return self._details.severity

    @property
    def status_code(self) -> int:
        return self._details.status_code

    @property
    def context(self) -> dict[str, Any] | None:
        if self._details.context is None:
            return None
        return dict(self._details.context)

    @property
    def timestamp(self) -> datetime:
        return self._details.timestamp

    @property
    def request_id(self) -> str | None:
        return self._details.request_id

    @property
    def user_id(self) -> str | None:
        return self._details.user_id

    def __repr__(self) -> str:
        return f"StructuredError(code={self.code!r}, status_code={self.status_code})"


@dataclass(frozen=True)
class ErrorTemplate:
    """Named, pre-filled error pattern."""

    code: str
    message: str
    category: ErrorCategory
    severity: ErrorSeverity

    @property
    def status_code(self) -> int:
        return STATUS_BY_CATEGORY[self.category]

    def instantiate(
        self,
        context: Mapping[str, Any] | None = None,
        request_id: str | None = None,
        user_id: str | None = None,
    ) -> StructuredError:
        return StructuredError(
            ErrorDetails(
                code=self.code,
                message=self.message,
                category=self.category,
                severity=self.severity,
                status_code=self.status_code,
                context=context,
                request_id=request_id,
                user_id=user_id,
            )
        )


class CommonErrors:
    """Catalog of the templates used across the API."""

    INVALID_UUID = ErrorTemplate(
        "INVALID_UUID",
        "El ID proporcionado no es un UUID válido",
        ErrorCategory.VALIDATION,
        ErrorSeverity.LOW,
    )
    MISSING_REQUIRED_FIELD = ErrorTemplate(
        "MISSING_REQUIRED_FIELD",
        "Campo requerido faltante",
        ErrorCategory.VALIDATION,
        ErrorSeverity.LOW,
    )
    INVALID_INPUT_FORMAT = ErrorTemplate(
        "INVALID_INPUT_FORMAT",
        "Formato de entrada inválido",
        ErrorCategory.VALIDATION,
        ErrorSeverity.LOW,
    )

    INVALID_CREDENTIALS = ErrorTemplate(
        "INVALID_CREDENTIALS",
        "Credenciales inválidas",
        ErrorCategory.AUTHENTICATION,
        ErrorSeverity.MEDIUM,
    )
    TOKEN_MISSING = ErrorTemplate(
        "TOKEN_MISSING",
        "No se proporcionó token de autenticación",
        ErrorCategory.AUTHENTICATION,
        ErrorSeverity.LOW,
    )
    TOKEN_EXPIRED = ErrorTemplate(
        "TOKEN_EXPIRED",
        "Token expirado",
        ErrorCategory.AUTHENTICATION,
        ErrorSeverity.MEDIUM,
    )
    TOKEN_INVALID = ErrorTemplate(
        "TOKEN_INVALID",
        "Token inválido",
        ErrorCategory.AUTHENTICATION,
        ErrorSeverity.MEDIUM,
    )

    INSUFFICIENT_PERMISSIONS = ErrorTemplate(
        "INSUFFICIENT_PERMISSIONS",
        "Permisos insuficientes",
        ErrorCategory.AUTHORIZATION,
        ErrorSeverity.MEDIUM,
    )

    RESOURCE_NOT_FOUND = ErrorTemplate(
        "RESOURCE_NOT_FOUND",
        "Recurso no encontrado",
        ErrorCategory.NOT_FOUND,
        ErrorSeverity.LOW,
    )
    USER_NOT_FOUND = ErrorTemplate(
        "USER_NOT_FOUND",
        "Usuario no encontrado",
        ErrorCategory.NOT_FOUND,
        ErrorSeverity.LOW,
    )
    LAWYER_NOT_FOUND = ErrorTemplate(
        "LAWYER_NOT_FOUND",
        "Abogado no encontrado",
        ErrorCategory.NOT_FOUND,
        ErrorSeverity.LOW,
    )
    LAWSUIT_NOT_FOUND = ErrorTemplate(
        "LAWSUIT_NOT_FOUND",
        "Demanda no encontrada",
        ErrorCategory.NOT_FOUND,
        ErrorSeverity.LOW,
    )

    LAWYER_ALREADY_ASSIGNED = ErrorTemplate(
        "LAWYER_ALREADY_ASSIGNED",
        "El abogado ya está asignado a esta demanda",
        ErrorCategory.BUSINESS_LOGIC,
        ErrorSeverity.LOW,
    )
    LAWYER_NOT_AVAILABLE = ErrorTemplate(
        "LAWYER_NOT_AVAILABLE",
        "El abogado no está disponible",
        ErrorCategory.BUSINESS_LOGIC,
        ErrorSeverity.LOW,
    )
    DUPLICATE_RESOURCE = ErrorTemplate(
        "DUPLICATE_RESOURCE",
        "El recurso ya existe",
        ErrorCategory.BUSINESS_LOGIC,
        ErrorSeverity.LOW,
    )

    DATABASE_CONNECTION_ERROR = ErrorTemplate(
        "DATABASE_CONNECTION_ERROR",
        "Error de conexión a la base de datos",
        ErrorCategory.DATABASE,
        ErrorSeverity.CRITICAL,
    )
    DATABASE_QUERY_ERROR = ErrorTemplate(
        "DATABASE_QUERY_ERROR",
        "Error en la consulta a la base de datos",
        ErrorCategory.DATABASE,
        ErrorSeverity.HIGH,
    )

    INTERNAL_SERVER_ERROR = ErrorTemplate(
        "INTERNAL_SERVER_ERROR",
        "Error interno del servidor",
        ErrorCategory.INTERNAL_SERVER,
        ErrorSeverity.HIGH,
    )
    SERVICE_UNAVAILABLE = ErrorTemplate(
        "SERVICE_UNAVAILABLE",
        "Servicio no disponible",
        ErrorCategory.EXTERNAL_SERVICE,
        ErrorSeverity.HIGH,
    )

    @classmethod
    def all(cls) -> tuple[ErrorTemplate, ...]:
        return tuple(value for value in vars(cls).values() if isinstance(value, ErrorTemplate))
