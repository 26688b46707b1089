"""
Error kinds returned by every use case.

The kind is stored in ``Error.code``; the message names the violated
precondition.
"""

from enum import Enum

from session_service.libs.result import Error


class ErrorKind(str, Enum):
    """Error taxonomy shared by the API layer and the use cases"""

    NOT_FOUND = "NOT_FOUND"
    FORBIDDEN = "FORBIDDEN"
    INVALID_STATE = "INVALID_STATE"
    EXPIRED = "EXPIRED"
    VALIDATION_ERROR = "VALIDATION_ERROR"
    CONFLICT = "CONFLICT"


def not_found(message: str) -> Error:
    return Error(ErrorKind.NOT_FOUND.value, message)


def forbidden(message: str) -> Error:
    return Error(ErrorKind.FORBIDDEN.value, message)


def invalid_state(message: str) -> Error:
    return Error(ErrorKind.INVALID_STATE.value, message)


def expired(message: str) -> Error:
    return Error(ErrorKind.EXPIRED.value, message)


def validation_error(message: str) -> Error:
    return Error(ErrorKind.VALIDATION_ERROR.value, message)


def conflict(message: str) -> Error:
    return Error(ErrorKind.CONFLICT.value, message)
