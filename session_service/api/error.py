from fastapi import status

from session_service.domain.errors import ErrorKind
from session_service.libs.result import Error

STATUS_BY_ERROR_KIND = {
    ErrorKind.NOT_FOUND.value: status.HTTP_404_NOT_FOUND,
    ErrorKind.FORBIDDEN.value: status.HTTP_403_FORBIDDEN,
    ErrorKind.INVALID_STATE.value: status.HTTP_409_CONFLICT,
    ErrorKind.EXPIRED.value: status.HTTP_410_GONE,
    ErrorKind.VALIDATION_ERROR.value: status.HTTP_400_BAD_REQUEST,
    ErrorKind.CONFLICT.value: status.HTTP_409_CONFLICT,
}


class ClientError(Exception):
    def __init__(self, base_error: Error, status_code: int = status.HTTP_400_BAD_REQUEST):
        self.base_error = base_error
        self.status_code = status_code
        super().__init__(base_error.message)


class ServerError(Exception):
    def __init__(self, base_error: Error):
        self.base_error = base_error
        super().__init__(base_error.message)


def raise_for_error(error: Error):
    """Translate a use case Error into the matching HTTP exception"""
    status_code = STATUS_BY_ERROR_KIND.get(error.code)
    if status_code is None:
        raise ServerError(error)
    raise ClientError(error, status_code=status_code)
