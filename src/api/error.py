from fastapi import status
from libs.result import Error

# Result error codes that are not plain 400s
STATUS_BY_CODE = {
    "CONFLICT": status.HTTP_409_CONFLICT,
    "EMAIL_ALREADY_EXISTS": status.HTTP_409_CONFLICT,
    "UNAUTHORIZED": status.HTTP_401_UNAUTHORIZED,
    "FORBIDDEN": status.HTTP_403_FORBIDDEN,
}


def error_status(code: str) -> int:
    """HTTP status for a use case error code"""
    if code.endswith("_NOT_FOUND"):
        return status.HTTP_404_NOT_FOUND
    return STATUS_BY_CODE.get(code, status.HTTP_400_BAD_REQUEST)


class ClientError(Exception):
    """Error caused by the request; rendered as {"error": {code, message}}"""

    def __init__(self, base_error: Error, status_code: int = None):
        self.base_error = base_error
        self.status_code = status_code or error_status(base_error.code)
        super().__init__(base_error.message)


class ServerError(Exception):
    """Unexpected failure; details are logged, not returned"""

    def __init__(self, base_error: Error):
        self.base_error = base_error
        super().__init__(base_error.message)
