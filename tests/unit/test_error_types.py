"""Unit tests for the error taxonomy."""

from __future__ import annotations

from datetime import datetime
from datetime import timezone

import pytest

from legal_suite.core.error_types import STATUS_BY_CATEGORY
from legal_suite.core.error_types import CommonErrors
from legal_suite.core.error_types import ErrorCategory
from legal_suite.core.error_types import ErrorDetails
from legal_suite.core.error_types import ErrorSeverity
from legal_suite.core.error_types import StructuredError
from legal_suite.core.error_types import isoformat_utc


@pytest.mark.parametrize(
    ("category", "status_code"),
    [
        (ErrorCategory.VALIDATION, 400),
        (ErrorCategory.AUTHENTICATION, 401),
        (ErrorCategory.AUTHORIZATION, 403),
        (ErrorCategory.NOT_FOUND, 404),
        (ErrorCategory.BUSINESS_LOGIC, 400),
        (ErrorCategory.EXTERNAL_SERVICE, 503),
        (ErrorCategory.DATABASE, 500),
        (ErrorCategory.INTERNAL_SERVER, 500),
    ],
)
def test_each_category_has_one_status(category: ErrorCategory, status_code: int) -> None:
    assert STATUS_BY_CATEGORY[category] == status_code


def test_every_template_status_matches_its_category() -> None:
    templates = CommonErrors.all()

    assert len({template.code for template in templates}) == len(templates)
    for template in templates:
        error = template.instantiate()
        assert error.status_code == STATUS_BY_CATEGORY[template.category]
        assert error.code == template.code


def test_lawyer_not_found_template_values() -> None:
    template = CommonErrors.LAWYER_NOT_FOUND

    assert template.message == "Abogado no encontrado"
    assert template.category is ErrorCategory.NOT_FOUND
    assert template.severity is ErrorSeverity.LOW
    assert template.status_code == 404


def test_error_details_rejects_inconsistent_status() -> None:
    with pytest.raises(ValueError, match="inconsistent"):
        ErrorDetails(
            code="X",
            message="x",
            category=ErrorCategory.NOT_FOUND,
            severity=ErrorSeverity.LOW,
            status_code=500,
        )


def test_instantiate_binds_context_request_and_user() -> None:
    error = CommonErrors.LAWSUIT_NOT_FOUND.instantiate(
        context={"lawsuitId": "abc"},
        request_id="req-1",
        user_id="user-1",
    )

    assert isinstance(error, StructuredError)
    assert isinstance(error, Exception)
    assert error.context == {"lawsuitId": "abc"}
    assert error.request_id == "req-1"
    assert error.user_id == "user-1"
    assert error.timestamp.tzinfo is not None
    assert str(error) == "Demanda no encontrada"


def test_structured_error_context_cannot_be_mutated_through_accessor() -> None:
    error = CommonErrors.RESOURCE_NOT_FOUND.instantiate(context={"id": 1})

    error.context["id"] = 2

    assert error.context == {"id": 1}
    with pytest.raises(TypeError):
        error.details.context["id"] = 3  # type: ignore[index]


def test_instantiate_does_not_share_context_with_caller() -> None:
    context = {"field": "name"}
    error = CommonErrors.MISSING_REQUIRED_FIELD.instantiate(context=context)

    context["field"] = "email"

    assert error.context == {"field": "name"}


def test_severity_ranks_are_ordered() -> None:
    ranks = [severity.rank for severity in (ErrorSeverity.LOW, ErrorSeverity.MEDIUM, ErrorSeverity.HIGH, ErrorSeverity.CRITICAL)]

    assert ranks == sorted(ranks)


def test_isoformat_utc_uses_milliseconds_and_z_suffix() -> None:
    value = datetime(2025, 9, 22, 10, 30, 5, 123456, tzinfo=timezone.utc)

    assert isoformat_utc(value) == "2025-09-22T10:30:05.123Z"
