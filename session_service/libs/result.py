"""
Result type shared by all use cases.

Use cases return ``Result[T]`` instead of raising for business rule
violations. Routes inspect ``is_err()`` and translate ``error.code``.
"""

from dataclasses import dataclass
from typing import Generic, Optional, TypeVar

T = TypeVar("T")


@dataclass(frozen=True)
class Error:
    """Business error with a machine readable code and a human message"""

    code: str
    message: str


class Result(Generic[T]):
    """Either a value or an Error, never both"""

    __slots__ = ("_value", "_error")

    def __init__(self, value: Optional[T] = None, error: Optional[Error] = None):
        self._value = value
        self._error = error

    def is_ok(self) -> bool:
        return self._error is None

    def is_err(self) -> bool:
        return self._error is not None

    @property
    def value(self) -> T:
        if self._error is not None:
            raise ValueError(f"Result holds an error: {self._error.code}")
        return self._value

    @property
    def error(self) -> Error:
        if self._error is None:
            raise ValueError("Result holds a value, not an error")
        return self._error

    def __repr__(self) -> str:
        if self.is_ok():
            return f"Result(value={self._value!r})"
        return f"Result(error={self._error!r})"


class Return:
    """Factory for Result instances"""

    @staticmethod
    def ok(value: Optional[T] = None) -> Result[T]:
        return Result(value=value)

    @staticmethod
    def err(error: Error) -> Result:
        return Result(error=error)
