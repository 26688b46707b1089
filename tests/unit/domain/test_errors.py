from dataclasses import fields

import pytest

from session_service.domain.errors import (
    ErrorKind,
    conflict,
    expired,
    forbidden,
    invalid_state,
    not_found,
    validation_error,
)
from session_service.libs.result import Error


@pytest.mark.parametrize(
    "build, kind",
    [
        (not_found, ErrorKind.NOT_FOUND),
        (forbidden, ErrorKind.FORBIDDEN),
        (invalid_state, ErrorKind.INVALID_STATE),
        (expired, ErrorKind.EXPIRED),
        (validation_error, ErrorKind.VALIDATION_ERROR),
        (conflict, ErrorKind.CONFLICT),
    ],
)
def test_helpers_carry_kind_and_message(build, kind):
    assert build("Nope") == Error(kind.value, "Nope")


def test_error_is_just_code_and_message():
    assert [field.name for field in fields(Error)] == ["code", "message"]
