"""Tagged failures raised by the use-case layer.

Services report *which* failure occurred through the exception type; the
HTTP layer maps each type to an error template instead of parsing messages.
"""

from __future__ import annotations

from typing import Any


class DomainError(Exception):
    """Base class for expected business failures."""

    def __init__(self, message: str, **context: Any) -> None:
        super().__init__(message)
        self.message = message
        self.context = {key: value for key, value in context.items() if value is not None}


class LawyerNotFound(DomainError):
    def __init__(self, lawyer_id: Any) -> None:
        super().__init__(f"No se encontró un abogado con el ID: {lawyer_id}", lawyerId=str(lawyer_id))


class LawsuitNotFound(DomainError):
    def __init__(self, lawsuit_id: Any) -> None:
        super().__init__(f"No se encontró una demanda con el ID: {lawsuit_id}", lawsuitId=str(lawsuit_id))


class UserNotFound(DomainError):
    def __init__(self, username: str) -> None:
        super().__init__("Usuario no encontrado", username=username)


class LawyerAlreadyAssigned(DomainError):
    def __init__(self, lawsuit_id: Any, lawyer_id: Any) -> None:
        super().__init__(
            f"El abogado {lawyer_id} ya está asignado a la demanda {lawsuit_id}",
            lawsuitId=str(lawsuit_id),
            lawyerId=str(lawyer_id),
        )


class LawyerNotAvailable(DomainError):
    def __init__(self, lawyer_id: Any, status: str) -> None:
        super().__init__(
            f"El abogado con ID {lawyer_id} no está activo (estado actual: {status})",
            lawyerId=str(lawyer_id),
            status=status,
        )


class InvalidCredentials(DomainError):
    def __init__(self, username: str | None = None) -> None:
        super().__init__("Credenciales inválidas", username=username)


class DuplicateResource(DomainError):
    def __init__(self, resource: str, field: str, value: Any) -> None:
        super().__init__(f"{resource} con {field} '{value}' ya existe", resource=resource, field=field)


class DomainValidationError(DomainError):
    """A value passed the request shape checks but breaks a business rule."""

    def __init__(self, field: str, message: str, value: Any = None) -> None:
        super().__init__(message, field=field)
        self.field = field
        self.value = value
