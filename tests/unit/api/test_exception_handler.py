"""
Unit tests for the REST exception handler.
"""
import pytest
from rest_framework import status
from rest_framework.exceptions import NotAuthenticated, ValidationError

from api.exceptions import GENERIC_ERROR_MESSAGE, custom_exception_handler
from core.domain.exceptions import (
    AccountAlreadyExistsError,
    ActiveLicenseExistsError,
    ForbiddenError,
    InfrastructureError,
    InvalidArgumentError,
    InvalidFormatError,
    KeyspaceExhaustedError,
    LicenseNotFoundError,
    UnauthenticatedError,
)


@pytest.mark.parametrize(
    "exc,status_code",
    [
        (UnauthenticatedError(), status.HTTP_401_UNAUTHORIZED),
        (ForbiddenError(), status.HTTP_403_FORBIDDEN),
        (LicenseNotFoundError(), status.HTTP_404_NOT_FOUND),
        (InvalidFormatError(), status.HTTP_400_BAD_REQUEST),
        (InvalidArgumentError(), status.HTTP_400_BAD_REQUEST),
        (ActiveLicenseExistsError(), status.HTTP_400_BAD_REQUEST),
        (AccountAlreadyExistsError(), status.HTTP_400_BAD_REQUEST),
        (KeyspaceExhaustedError(), status.HTTP_500_INTERNAL_SERVER_ERROR),
        (InfrastructureError(), status.HTTP_500_INTERNAL_SERVER_ERROR),
    ],
)
def test_domain_exceptions_map_to_status(exc, status_code):
    response = custom_exception_handler(exc, {})

    assert response.status_code == status_code
    assert response.data == {"status": False, "message": exc.message, "code": exc.code}


def test_validation_error_is_flattened():
    response = custom_exception_handler(
        ValidationError({"license_key": ["This field is required."]}), {}
    )

    assert response.status_code == status.HTTP_400_BAD_REQUEST
    assert response.data["message"] == "license_key: This field is required."
    assert response.data["code"] == "VALIDATION_ERROR"


def test_drf_exception_keeps_status():
    response = custom_exception_handler(NotAuthenticated(), {})

    assert response.status_code == status.HTTP_401_UNAUTHORIZED
    assert response.data["status"] is False
    assert response.data["code"] == "NOT_AUTHENTICATED"


def test_unexpected_exception_hides_details():
    response = custom_exception_handler(RuntimeError("db password is hunter2"), {})

    assert response.status_code == status.HTTP_500_INTERNAL_SERVER_ERROR
    assert response.data == {
        "status": False,
        "message": GENERIC_ERROR_MESSAGE,
        "code": "INTERNAL_ERROR",
    }
