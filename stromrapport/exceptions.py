"""Exceptions raised by the report computations."""

from __future__ import annotations


class StromrapportError(Exception):
    """Base exception for report computation errors."""

    pass


class InvalidDateComponentError(StromrapportError, ValueError):
    """Raised when a month or day cannot be written with two digits."""

    def __init__(self, value: int):
        self.value = value
        super().__init__(
            f"Cannot zero pad {value}: only one or two digit values are supported"
        )


class DivisionByZeroError(StromrapportError, ZeroDivisionError):
    """Raised when an average is requested over zero days or zero usage."""

    def __init__(self, figure: str):
        self.figure = figure
        super().__init__(f"Cannot compute {figure}: divisor is zero")


class MalformedInputError(StromrapportError, ValueError):
    """Raised when source data is missing fields or has the wrong shape."""

    def __init__(self, message: str, field: str | None = None):
        super().__init__(message)
        self.field = field
