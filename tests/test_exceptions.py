"""Tests for service error kinds."""
import pytest

from surveygenie.utils.exceptions import (
    BadRequestError,
    ForbiddenError,
    NotFoundError,
    StoreError,
    SurveyGenieError,
    UnauthorizedError,
    ValidationError,
)


@pytest.mark.parametrize(
    "error_class, status_code, default_message",
    [
        (BadRequestError, 400, "Bad Request"),
        (UnauthorizedError, 401, "Unauthorized"),
        (ForbiddenError, 403, "Forbidden"),
        (NotFoundError, 404, "Not Found"),
    ],
)
def test_default_message_and_status(error_class, status_code, default_message):
    error = error_class()

    assert error.status_code == status_code
    assert error.message == default_message
    assert isinstance(error, SurveyGenieError)


def test_custom_message():
    error = NotFoundError("No survey found with id: 7")

    assert str(error) == "No survey found with id: 7"
    assert error.status_code == 404


def test_validation_error_is_bad_request():
    assert ValidationError is BadRequestError


def test_store_error_appends_cause():
    cause = ValueError("constraint failed")
    error = StoreError("Failed to create survey.", cause=cause)

    assert error.message == "Failed to create survey. constraint failed"
    assert error.cause is cause
    assert error.status_code == 500
