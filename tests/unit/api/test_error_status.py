import pytest
from libs.result import Error
from src.api.error import ClientError, error_status


@pytest.mark.parametrize(
    "code,expected",
    [
        ("PROJECT_NOT_FOUND", 404),
        ("USER_NOT_FOUND", 404),
        ("CONFLICT", 409),
        ("EMAIL_ALREADY_EXISTS", 409),
        ("UNAUTHORIZED", 401),
        ("FORBIDDEN", 403),
        ("VALIDATION_ERROR", 400),
        ("INVALID_TRANSITION", 400),
        ("INVALID_PAGINATION", 400),
        ("PROTECTED_FIELD", 400),
    ],
)
def test_error_status(code, expected):
    assert error_status(code) == expected


def test_client_error_explicit_status_wins():
    error = ClientError(Error(code="VALIDATION_ERROR", message="bad"), status_code=422)

    assert error.status_code == 422
