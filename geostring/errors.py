"""
Base exceptions for coordinate parsing.

Every error caused by the input text (or by a user supplied configuration)
inherits from GeoStringError, so callers can treat all of them as
"this is not a valid coordinate" at a single boundary.

Programming errors and bugs should NOT inherit from GeoStringError;
they will propagate with full tracebacks.
"""

from __future__ import annotations

from typing import Any, Optional


class GeoStringError(ValueError):
    """
    Base class for all user-facing errors in geostring.

    Carries the original input so the message can be reported
    without extra context from the caller.
    """

    def __init__(self, message: str, input_value: Optional[str] = None):
        self.message = message
        self.input_value = input_value
        super().__init__(message)


class CoordinateSyntaxError(GeoStringError):
    """The next token does not fit the grammar, or tokens remain after a complete point."""

    def __init__(self, expected: str, found: Any, position: int, input_value: str):
        self.expected = expected
        self.found = found
        self.position = position

        if found is None:
            got = "end of string."
        else:
            got = f'"{found}"'

        message = (
            f"[Syntax Error] line 0, col {position}: "
            f"Error: Expected {expected}, got {got} in value \"{input_value}\""
        )
        super().__init__(message, input_value)


class CoordinateRangeError(GeoStringError):
    """
    A numeric component is outside its domain.

    Minutes and seconds only have an upper bound (low is None),
    degrees are checked against a symmetric range.
    """

    def __init__(self, component: str, high: int, input_value: str, low: Optional[int] = None):
        self.component = component
        self.high = high
        self.low = low

        if low is None:
            bound = f"greater than {high}"
        else:
            bound = f"out of range {low} to {high}"

        message = f"[Range Error] Error: {component} {bound} in value \"{input_value}\""
        super().__init__(message, input_value)


class ConfigError(GeoStringError):
    """Invalid lexer configuration (bad glyph lists, malformed YAML document)."""
    pass


__all__ = [
    "GeoStringError",
    "CoordinateSyntaxError",
    "CoordinateRangeError",
    "ConfigError",
]
