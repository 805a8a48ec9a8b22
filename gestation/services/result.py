"""
Result type and error hierarchy for expected failures.

Validation failures are part of normal operation (users mistype dates), so the
services return them as values instead of raising. Exceptions are reserved for
programming errors such as asking for an exam period that does not exist.
"""

from typing import Generic, TypeVar

ValueT = TypeVar("ValueT")
ErrorT = TypeVar("ErrorT", bound=BaseException)


class GestationError(Exception):
    """Base class for errors raised by the gestation package."""


class InputValidationError(GestationError):
    """User input was rejected; the message is meant for the end user."""


class UnknownPeriodError(GestationError, KeyError):
    """An exam period key outside the fixed nine periods."""


class ScheduleFormatError(GestationError):
    """An exam schedule document could not be interpreted."""


class AuthenticationError(GestationError):
    """Admin credentials were missing, wrong or not configured."""


class Result(Generic[ValueT, ErrorT]):
    """
    Outcome of a calculation or login: a value, or the error to show the user.

    The calculator returns ``Result[CalculationReport, InputValidationError]``
    and ``issue_token`` returns ``Result[AdminToken, AuthenticationError]``;
    callers branch on ``is_err()`` and display ``str(unwrap_err())``.
    ``unwrap()`` re-raises the stored error for code paths that cannot
    continue without a value.
    """

    def __init__(self, value: ValueT | None = None, error: ErrorT | None = None) -> None:
        if value is not None and error is not None:
            raise ValueError("Result cannot have both value and error")
        if value is None and error is None:
            raise ValueError("Result must have either value or error")
        self._value: ValueT | None = value
        self._error: ErrorT | None = error

    @classmethod
    def ok(cls, value: ValueT) -> "Result[ValueT, ErrorT]":
        return cls(value=value)

    @classmethod
    def err(cls, error: ErrorT) -> "Result[ValueT, ErrorT]":
        return cls(error=error)

    def is_ok(self) -> bool:
        return self._error is None

    def is_err(self) -> bool:
        return self._error is not None

    def unwrap(self) -> ValueT:
        if self._error is not None:
            raise self._error
        return self._value  # type: ignore

    def unwrap_or(self, default: ValueT) -> ValueT:
        return self._value if self._error is None else default  # type: ignore

    def unwrap_err(self) -> ErrorT:
        if self._error is None:
            raise ValueError("Called unwrap_err() on an Ok value")
        return self._error

    def __repr__(self) -> str:
        if self._error is not None:
            return f"Result.err({self._error!r})"
        return f"Result.ok({self._value!r})"
