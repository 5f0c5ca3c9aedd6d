"""
Exceptions raised by human_size parsing, construction and conversion.

All exceptions derive from SizeError, which is a ValueError, so callers that
already guard size handling with ``except ValueError`` keep working.
"""

# Standard library -----------------------------------------------------------------------------------------------------
from enum import StrEnum, unique
from typing import Any

# Local ----------------------------------------------------------------------------------------------------------------
from .formatters import fmt_value


# Classes --------------------------------------------------------------------------------------------------------------

@unique
class ParsingErrorKind(StrEnum):
    """
    The step of text parsing that failed.

    Values are the short human-readable descriptions used in error messages.
    """
    EMPTY_INPUT = "input is empty"
    MISSING_VALUE = "no value"
    INVALID_VALUE = "invalid value"
    MISSING_MULTIPLE = "no multiple"
    INVALID_MULTIPLE = "invalid multiple"


class SizeError(ValueError):
    """Base class for all human_size errors."""


class ParsingError(SizeError):
    """
    Text could not be parsed into a size.

    Attributes:
        kind: Which parsing step failed.
        text: The offending input (or input fragment), None if not available.
    """

    def __init__(self, kind: ParsingErrorKind | str, text: str | None = None):
        self.kind = ParsingErrorKind(kind)
        self.text = text
        if text is None:
            super().__init__(str(self.kind))
        else:
            super().__init__(f"{self.kind}: {text!r}")


class InvalidValueError(SizeError):
    """
    Magnitude is not usable as a size value.

    Raised on construction for NaN, infinite and subnormal magnitudes. Zero is a valid magnitude.
    """

    def __init__(self, value: Any, reason: str = "must be zero or a normal finite number"):
        self.value = value
        super().__init__(f"size value {reason}, got {fmt_value(value)}")


class ConversionError(SizeError):
    """Size can not be represented as an integer byte count, e.g. it overflows the requested integer width."""
