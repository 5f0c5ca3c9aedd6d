"""
Text parser for sizes.

Grammar: ``<magnitude><optional whitespace><multiple token>``, where the magnitude
matches ``[0-9]*\\.?[0-9]*`` and the token is one of the registered multiple tokens.
Whitespace around the input and around the token is ignored.

Trailing text after the token is rejected: the whole remainder after the
magnitude must be a single token, so "10 B extra" is an invalid multiple.
"""

# Standard library -----------------------------------------------------------------------------------------------------
import string

# Local ----------------------------------------------------------------------------------------------------------------
from .errors import ParsingError, ParsingErrorKind
from .multiples import Multiple
from .numeric import validate_magnitude

MAGNITUDE_CHARS = frozenset(string.digits + ".")


# Methods --------------------------------------------------------------------------------------------------------------

def parse_parts(text: str) -> tuple[float, Multiple]:
    """
    Split text into a validated magnitude and its multiple.

    Args:
        text: Human-readable size, e.g. "1.5 GiB", "100B", " 12 kB ".

    Returns:
        tuple[float, Multiple]: The magnitude and the multiple it is expressed in.

    Raises:
        ParsingError: With kind
            EMPTY_INPUT if text is empty or blank,
            MISSING_MULTIPLE if text holds only magnitude characters,
            MISSING_VALUE if no magnitude precedes the multiple,
            INVALID_VALUE if the magnitude is malformed, NaN, infinite or subnormal,
            INVALID_MULTIPLE if the multiple token is unknown.
        TypeError: If text is not a str.

    Examples:
        >>> parse_parts("1.5 GiB")
        (1.5, <Multiple.GIBIBYTE: 'GiB'>)
        >>> parse_parts(".512YB")
        (0.512, <Multiple.YOTTABYTE: 'YB'>)
    """
    if not isinstance(text, str):
        raise TypeError(f"size text must be a str, got {type(text).__name__}")

    stripped = text.strip()
    if not stripped:
        raise ParsingError(ParsingErrorKind.EMPTY_INPUT)

    split_at = next((i for i, ch in enumerate(stripped) if ch not in MAGNITUDE_CHARS), None)
    if split_at is None:
        raise ParsingError(ParsingErrorKind.MISSING_MULTIPLE, text)

    value_text = stripped[:split_at].strip()
    if not value_text:
        raise ParsingError(ParsingErrorKind.MISSING_VALUE, text)

    try:
        value = validate_magnitude(float(value_text))
    except ValueError as e:
        raise ParsingError(ParsingErrorKind.INVALID_VALUE, value_text) from e

    multiple_text = stripped[split_at:].strip()
    multiple = Multiple.from_str(multiple_text)

    return value, multiple
