"""Central error handling: classification, logging and the JSON error envelope.

One `ErrorHandler` is built per application and stored on `app.state`. Every
failure raised while serving a route, including the auth dependencies, is
funnelled through it by `ErrorFunnelRoute`; the exception handlers registered by
`register_error_handlers` cover whatever happens outside a route.
"""

from __future__ import annotations

from collections.abc import Callable
from collections.abc import Coroutine
from collections.abc import Mapping
from collections.abc import Sequence
from dataclasses import replace
from typing import Any
import re
import traceback

from fastapi import FastAPI
from fastapi import Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from fastapi.routing import APIRoute
from pydantic import ValidationError as PydanticValidationError
from sqlalchemy.exc import InterfaceError
from sqlalchemy.exc import OperationalError
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.requests import HTTPConnection
from starlette.responses import Response

from legal_suite.core.error_types import CommonErrors
from legal_suite.core.error_types import ErrorCategory
from legal_suite.core.error_types import ErrorDetails
from legal_suite.core.error_types import ErrorSeverity
from legal_suite.core.error_types import ErrorTemplate
from legal_suite.core.error_types import StructuredError
from legal_suite.core.error_types import isoformat_utc
from legal_suite.core.error_types import utc_now
from legal_suite.core.logging import REDACTED
from legal_suite.core.logging import StructuredLogger
from legal_suite.core.logging import is_sensitive_key
from legal_suite.core.logging import sanitize_data
from legal_suite.core.notifications import CriticalErrorNotifier
from legal_suite.core.notifications import LoggingNotifier
from legal_suite.core.request_context import REQUEST_ID_HEADER
from legal_suite.core.request_context import get_current_user
from legal_suite.core.request_context import get_error_context
from legal_suite.core.request_context import get_request_id
from legal_suite.core.request_context import new_request_id
from legal_suite.domain import errors as domain_errors
from legal_suite.schemas.error import ErrorObject
from legal_suite.schemas.error import ErrorResponse
from legal_suite.schemas.error import ValidationErrorDetail
from legal_suite.schemas.error import ValidationErrorObject
from legal_suite.schemas.error import ValidationErrorResponse

UUID_PATTERN = re.compile(
    r"^[0-9a-f]{8}-[0-9a-f]{4}-[1-5][0-9a-f]{3}-[89ab][0-9a-f]{3}-[0-9a-f]{12}$",
    re.IGNORECASE,
)
EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")

VALIDATION_ERROR_CODE = "VALIDATION_ERROR"
VALIDATION_ERROR_MESSAGE = "Errores de validación en los datos proporcionados"
GENERIC_ERROR_MESSAGE = CommonErrors.INTERNAL_SERVER_ERROR.message

DOMAIN_TEMPLATES: Mapping[type[domain_errors.DomainError], ErrorTemplate] = {
    domain_errors.LawyerNotFound: CommonErrors.LAWYER_NOT_FOUND,
    domain_errors.LawsuitNotFound: CommonErrors.LAWSUIT_NOT_FOUND,
    domain_errors.UserNotFound: CommonErrors.USER_NOT_FOUND,
    domain_errors.LawyerAlreadyAssigned: CommonErrors.LAWYER_ALREADY_ASSIGNED,
    domain_errors.LawyerNotAvailable: CommonErrors.LAWYER_NOT_AVAILABLE,
    domain_errors.InvalidCredentials: CommonErrors.INVALID_CREDENTIALS,
    domain_errors.DuplicateResource: CommonErrors.DUPLICATE_RESOURCE,
}


class RequestValidationFailed(Exception):
    """Raised by routes once every field of a payload has been checked."""

    def __init__(self, validation_errors: Sequence[ValidationErrorDetail]) -> None:
        super().__init__("Request validation failed")
        self.validation_errors = list(validation_errors)


def classify_message(message: str) -> ErrorTemplate | None:
    """Pick a template from the wording of an untagged exception.

    Only used for exceptions that do not carry a domain type; a reworded
    message silently falls through to INTERNAL_SERVER_ERROR.
    """
    lowered = message.lower()
    if "no encontrad" in lowered:
        if "demanda" in lowered:
            return CommonErrors.LAWSUIT_NOT_FOUND
        if "abogado" in lowered:
            return CommonErrors.LAWYER_NOT_FOUND
        if "usuario" in lowered:
            return CommonErrors.USER_NOT_FOUND
        return CommonErrors.RESOURCE_NOT_FOUND
    if "ya está asignado" in lowered:
        return CommonErrors.LAWYER_ALREADY_ASSIGNED
    if "no está disponible" in lowered or "no está activo" in lowered:
        return CommonErrors.LAWYER_NOT_AVAILABLE
    if "credenciales" in lowered or "invalid credentials" in lowered:
        return CommonErrors.INVALID_CREDENTIALS
    return None


def _format_location(location: Any) -> str:
    if not isinstance(location, (tuple, list)):
        return str(location)

    prefixes = {"body", "query", "path", "header", "cookie"}
    filtered = [str(part) for part in location if part not in prefixes]
    if filtered:
        return ".".join(filtered)

    if not location:
        return "request"

    return str(location[0])


def _validation_details(exc: RequestValidationError | PydanticValidationError) -> list[ValidationErrorDetail]:
    details: list[ValidationErrorDetail] = []
    for issue in exc.errors():
        missing = issue.get("type") == "missing"
        details.append(
            ValidationErrorDetail(
                field=_format_location(issue.get("loc", ())),
                message=str(issue.get("msg", "Invalid value")),
                value=None if missing else issue.get("input"),
            )
        )
    return details


def _http_error_code(status_code: int) -> str:
    if status_code == 404:
        return "RESOURCE_NOT_FOUND"
    if status_code == 405:
        return "METHOD_NOT_ALLOWED"
    if status_code == 401:
        return "UNAUTHORIZED"
    if status_code == 403:
        return "FORBIDDEN"
    if status_code >= 500:
        return "INTERNAL_SERVER_ERROR"
    return "BAD_REQUEST"


def _http_error_category(status_code: int) -> ErrorCategory:
    if status_code == 401:
        return ErrorCategory.AUTHENTICATION
    if status_code == 403:
        return ErrorCategory.AUTHORIZATION
    if status_code == 404:
        return ErrorCategory.NOT_FOUND
    if status_code >= 500:
        return ErrorCategory.INTERNAL_SERVER
    return ErrorCategory.VALIDATION


def _stack_of(error: BaseException) -> str | None:
    source = error.__cause__ or error
    if source.__traceback__ is None:
        return None
    return "".join(traceback.format_exception(type(source), source, source.__traceback__))


class ErrorHandler:
    """Façade every route uses to turn a failure into a logged JSON response."""

    def __init__(
        self,
        logger: StructuredLogger,
        *,
        verbose: bool = False,
        notifier: CriticalErrorNotifier | None = None,
    ) -> None:
        self._logger = logger
        self._verbose = verbose
        self._notifier = notifier or LoggingNotifier(logger)

    def should_include_details(self) -> bool:
        return self._verbose

    def create_error(self, details: ErrorDetails) -> StructuredError:
        return StructuredError(details)

    def create_from_template(
        self,
        template: ErrorTemplate,
        context: Mapping[str, Any] | None = None,
        request_id: str | None = None,
        user_id: str | None = None,
    ) -> StructuredError:
        return template.instantiate(context=context, request_id=request_id, user_id=user_id)

    def format_error_response(
        self,
        error: BaseException,
        request_id: str | None = None,
    ) -> ErrorResponse:
        if isinstance(error, StructuredError):
            return ErrorResponse(
                error=ErrorObject(
                    code=error.code,
                    message=error.message,
                    category=error.category.value,
                    timestamp=isoformat_utc(error.timestamp),
                    request_id=error.request_id or request_id,
                    details=sanitize_data(error.context) if self.should_include_details() else None,
                )
            )

        return ErrorResponse(
            error=ErrorObject(
                code=CommonErrors.INTERNAL_SERVER_ERROR.code,
                message=str(error) if self.should_include_details() else GENERIC_ERROR_MESSAGE,
                category=ErrorCategory.INTERNAL_SERVER.value,
                timestamp=isoformat_utc(utc_now()),
                request_id=request_id,
            )
        )

    def format_validation_error_response(
        self,
        validation_errors: Sequence[ValidationErrorDetail],
        request_id: str | None = None,
    ) -> ValidationErrorResponse:
        return ValidationErrorResponse(
            error=ValidationErrorObject(
                code=VALIDATION_ERROR_CODE,
                message=VALIDATION_ERROR_MESSAGE,
                category=ErrorCategory.VALIDATION.value,
                timestamp=isoformat_utc(utc_now()),
                request_id=request_id,
                validation_errors=list(validation_errors),
            )
        )

    def classify(
        self,
        error: BaseException,
        *,
        request_id: str | None = None,
        user_id: str | None = None,
        context: Mapping[str, Any] | None = None,
    ) -> StructuredError:
        """Map any exception onto a `StructuredError` bound to the request."""
        if isinstance(error, StructuredError):
            if (error.request_id or not request_id) and (error.user_id or not user_id):
                return error
            bound = StructuredError(
                replace(
                    error.details,
                    request_id=error.request_id or request_id,
                    user_id=error.user_id or user_id,
                )
            )
            bound.__cause__ = error.__cause__
            bound.__traceback__ = error.__traceback__
            return bound

        merged = dict(context or {})
        template: ErrorTemplate | None = None

        if isinstance(error, domain_errors.DomainError):
            merged.update(error.context)
            for error_type in type(error).__mro__:
                template = DOMAIN_TEMPLATES.get(error_type)
                if template is not None:
                    break
        elif isinstance(error, (OperationalError, InterfaceError)):
            template = CommonErrors.DATABASE_CONNECTION_ERROR
        elif isinstance(error, SQLAlchemyError):
            template = CommonErrors.DATABASE_QUERY_ERROR
        elif isinstance(error, TimeoutError):
            template = CommonErrors.SERVICE_UNAVAILABLE
        else:
            template = classify_message(str(error))

        if template is not None:
            structured = self.create_from_template(template, merged or None, request_id, user_id)
        else:
            merged["originalError"] = type(error).__name__
            merged["originalMessage"] = str(error)
            structured = self.create_error(
                ErrorDetails(
                    code=CommonErrors.INTERNAL_SERVER_ERROR.code,
                    message=str(error) if self.should_include_details() else GENERIC_ERROR_MESSAGE,
                    category=ErrorCategory.INTERNAL_SERVER,
                    severity=ErrorSeverity.HIGH,
                    status_code=500,
                    context=merged,
                    request_id=request_id,
                    user_id=user_id,
                )
            )
        structured.__cause__ = error
        return structured

    def handle_controller_error(
        self,
        error: BaseException,
        request: HTTPConnection,
        context: Mapping[str, Any] | None = None,
    ) -> JSONResponse:
        """Classify, log and render a failure. Never raises."""
        request_id = get_request_id(request) or new_request_id()
        try:
            user = get_current_user(request)
            structured = self.classify(
                error,
                request_id=request_id,
                user_id=user.id if user else None,
                context=context,
            )
            self.log_error(structured, request)
            payload = self.format_error_response(structured, request_id).to_wire()
            return JSONResponse(
                status_code=structured.status_code,
                content=jsonable_encoder(payload),
                headers={REQUEST_ID_HEADER: request_id},
            )
        except Exception:
            payload = self.format_error_response(RuntimeError(GENERIC_ERROR_MESSAGE), request_id).to_wire()
            return JSONResponse(status_code=500, content=payload, headers={REQUEST_ID_HEADER: request_id})

    def handle_validation_error(
        self,
        validation_errors: Sequence[ValidationErrorDetail],
        request: HTTPConnection,
    ) -> JSONResponse:
        request_id = get_request_id(request) or new_request_id()
        logged_errors = [
            {**detail.model_dump(), "value": REDACTED} if is_sensitive_key(detail.field) else detail.model_dump()
            for detail in validation_errors
        ]
        self._logger.warn(
            "Validation error",
            {
                "requestId": request_id,
                "url": _request_url(request),
                "method": getattr(request, "method", None),
                "validationErrors": logged_errors,
                "timestamp": isoformat_utc(utc_now()),
            },
            {"requestId": request_id},
        )
        payload = self.format_validation_error_response(validation_errors, request_id).to_wire()
        return JSONResponse(status_code=400, content=jsonable_encoder(payload), headers={REQUEST_ID_HEADER: request_id})

    def handle_http_exception(self, exc: StarletteHTTPException, request: HTTPConnection) -> JSONResponse:
        """Render framework-level HTTP errors (unknown route, bad method) in the envelope."""
        request_id = get_request_id(request) or new_request_id()
        message = exc.detail if isinstance(exc.detail, str) and exc.detail else "Request failed"
        response = ErrorResponse(
            error=ErrorObject(
                code=_http_error_code(exc.status_code),
                message=message,
                category=_http_error_category(exc.status_code).value,
                timestamp=isoformat_utc(utc_now()),
                request_id=request_id,
            )
        )
        self._logger.info(
            f"HTTP {exc.status_code}: {message}",
            {"method": getattr(request, "method", None), "url": _request_url(request)},
            {"requestId": request_id},
        )
        headers = dict(exc.headers or {})
        headers[REQUEST_ID_HEADER] = request_id
        return JSONResponse(status_code=exc.status_code, content=response.to_wire(), headers=headers)

    def dispatch(self, error: BaseException, request: HTTPConnection) -> Response:
        """Route an exception to the matching handler."""
        if isinstance(error, RequestValidationFailed):
            return self.handle_validation_error(error.validation_errors, request)
        if isinstance(error, (RequestValidationError, PydanticValidationError)):
            return self.handle_validation_error(_validation_details(error), request)
        if isinstance(error, domain_errors.DomainValidationError):
            detail = ValidationErrorDetail(field=error.field, message=error.message, value=error.value)
            return self.handle_validation_error([detail], request)
        if isinstance(error, StarletteHTTPException):
            return self.handle_http_exception(error, request)
        return self.handle_controller_error(error, request, get_error_context(request))

    def log_error(self, error: StructuredError, request: HTTPConnection | None = None) -> None:
        """Log at a level matching the error's severity."""
        metadata: dict[str, Any] = {
            "code": error.code,
            "category": error.category.value,
            "severity": error.severity.value,
            "statusCode": error.status_code,
            "timestamp": isoformat_utc(error.timestamp),
            "requestId": error.request_id,
            "userId": error.user_id,
            "context": error.context,
            "stack": _stack_of(error),
        }
        if request is not None:
            metadata["request"] = {
                "method": getattr(request, "method", None),
                "url": _request_url(request),
                "userAgent": request.headers.get("user-agent"),
                "ip": request.client.host if request.client else None,
            }

        overrides = {"requestId": error.request_id, "userId": error.user_id}
        message = f"{error.severity.value} ERROR: {error.message}"

        if error.severity.rank >= ErrorSeverity.HIGH.rank:
            self._logger.error(message, metadata, overrides)
            if error.severity is ErrorSeverity.CRITICAL:
                self._notify_critical(error, metadata)
        elif error.severity is ErrorSeverity.MEDIUM:
            self._logger.warn(message, metadata, overrides)
        else:
            self._logger.info(message, metadata, overrides)

    def validate_uuid(self, value: Any, field_name: str = "id") -> ValidationErrorDetail | None:
        return validate_uuid(value, field_name)

    def validate_required_fields(
        self,
        data: Mapping[str, Any] | None,
        fields: Sequence[str],
    ) -> list[ValidationErrorDetail]:
        return validate_required_fields(data, fields)

    def validate_email(self, value: Any, field_name: str = "email") -> ValidationErrorDetail | None:
        return validate_email(value, field_name)

    def _notify_critical(self, error: StructuredError, metadata: Mapping[str, Any]) -> None:
        try:
            self._notifier.notify(error, metadata)
        except Exception as exc:
            self._logger.error(
                "Critical error notifier raised",
                {"code": error.code, "reason": type(exc).__name__},
                {"requestId": error.request_id},
            )


def validate_uuid(value: Any, field_name: str = "id") -> ValidationErrorDetail | None:
    """Return a detail unless `value` is an RFC 4122 version 1-5 UUID string."""
    if not isinstance(value, str) or not UUID_PATTERN.match(value):
        return ValidationErrorDetail(
            field=field_name,
            message=f"{field_name} debe ser un UUID válido",
            value=value,
        )
    return None


def validate_required_fields(
    data: Mapping[str, Any] | None,
    fields: Sequence[str],
) -> list[ValidationErrorDetail]:
    """Report every field that is absent, null or an empty string, in input order."""
    data = data or {}
    errors: list[ValidationErrorDetail] = []
    for field_name in fields:
        value = data.get(field_name)
        if value is None or value == "":
            errors.append(
                ValidationErrorDetail(
                    field=field_name,
                    message=f"{field_name} es requerido",
                    value=value,
                )
            )
    return errors


def validate_email(value: Any, field_name: str = "email") -> ValidationErrorDetail | None:
    if not isinstance(value, str) or not EMAIL_PATTERN.match(value):
        return ValidationErrorDetail(
            field=field_name,
            message=f"{field_name} debe tener un formato válido",
            value=value,
        )
    return None


def _request_url(request: HTTPConnection) -> str:
    url = request.url
    return f"{url.path}?{url.query}" if url.query else url.path


def get_error_handler(request: HTTPConnection) -> ErrorHandler:
    """Dependency returning the application's error handler."""
    return request.app.state.error_handler


class ErrorFunnelRoute(APIRoute):
    """Route class that sends every failure of a route through the `ErrorHandler`."""

    def get_route_handler(self) -> Callable[[Request], Coroutine[Any, Any, Response]]:
        original_route_handler = super().get_route_handler()

        async def route_handler(request: Request) -> Response:
            try:
                return await original_route_handler(request)
            except Exception as exc:
                return get_error_handler(request).dispatch(exc, request)

        return route_handler


async def _dispatch_exception(request: Request, exc: Exception) -> Response:
    return get_error_handler(request).dispatch(exc, request)


def register_error_handlers(app: FastAPI) -> None:
    """Attach the envelope handlers for failures raised outside a route."""

    app.add_exception_handler(RequestValidationError, _dispatch_exception)
    app.add_exception_handler(StarletteHTTPException, _dispatch_exception)
    app.add_exception_handler(RequestValidationFailed, _dispatch_exception)
    app.add_exception_handler(StructuredError, _dispatch_exception)
    app.add_exception_handler(domain_errors.DomainError, _dispatch_exception)
    app.add_exception_handler(Exception, _dispatch_exception)
