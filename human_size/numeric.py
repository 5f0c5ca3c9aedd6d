"""
Normalize size magnitudes from Python stdlib and third-party numeric types.

Sizes store their magnitude as a Python float. This module converts incoming
numbers (int, float, Decimal, Fraction, NumPy scalars and other duck-typed
numerics) to float and enforces the magnitude validity rule.
"""

# Standard library -----------------------------------------------------------------------------------------------------
import math
import operator
import sys
from typing import Protocol, runtime_checkable

# Local ----------------------------------------------------------------------------------------------------------------
from .errors import InvalidValueError
from .formatters import fmt_type


@runtime_checkable
class SupportsFloat(Protocol):
    """Protocol for duck-typed numeric conversion."""

    def __float__(self) -> float: ...


def std_magnitude(value) -> float:
    """
    Convert a numeric value to a standard Python float.

    Detection priority:
        1. float, int fast path
        2. __index__() for exact integers (NumPy integer scalars)
        3. .item() for array scalars returning a Python number
        4. __float__() general fallback (Decimal, Fraction, NumPy floats)

    Integers too large for a float are mapped to infinity, so they are rejected later
    by the validity rule rather than raising OverflowError here.

    Raises:
        TypeError: For bool, None, str and any other non-numeric type.

    Examples:
        >>> std_magnitude(3)
        3.0
        >>> from fractions import Fraction
        >>> std_magnitude(Fraction(1, 4))
        0.25
    """
    if isinstance(value, bool):
        raise TypeError(f"boolean values not supported as size magnitude, got {value}")

    if isinstance(value, float):
        return float(value)

    if isinstance(value, int):
        return _int_to_float(value)

    if isinstance(value, (str, bytes)) or value is None:
        raise TypeError(f"size magnitude must be a number, got {fmt_type(value)}")

    # Exact integers, NumPy integer scalars implement this
    if hasattr(value, "__index__"):
        try:
            return _int_to_float(operator.index(value))
        except (TypeError, ValueError) as e:
            raise TypeError(f"cannot convert {fmt_type(value)} to int via __index__: {e}") from e

    # Array and tensor scalars
    if hasattr(value, "item") and callable(value.item):
        try:
            result = value.item()
        except (TypeError, ValueError, AttributeError):
            result = None
        if isinstance(result, (int, float)) and not isinstance(result, bool):
            return std_magnitude(result)

    if isinstance(value, SupportsFloat):
        try:
            return float(value)
        except OverflowError:
            return math.inf
        except (TypeError, ValueError) as e:
            raise TypeError(f"cannot convert {fmt_type(value)} to float: {e}") from e

    raise TypeError(
        f"unsupported size magnitude type: {fmt_type(value)}. "
        f"Expected int, float, or types implementing __index__, __float__ or .item()"
    )


def is_valid_magnitude(value: float) -> bool:
    """
    True if value is exactly zero or a normal finite float.

    NaN, infinities and subnormal numbers (non-zero values smaller in magnitude than
    sys.float_info.min) are not valid.
    """
    if value == 0:
        return True
    return math.isfinite(value) and abs(value) >= sys.float_info.min


def validate_magnitude(value) -> float:
    """
    Normalize value to float and check it is a valid size magnitude.

    Returns:
        float: The normalized magnitude.

    Raises:
        TypeError: If value is not a number.
        InvalidValueError: If value is NaN, infinite or subnormal.
    """
    magnitude = std_magnitude(value)

    if math.isnan(magnitude):
        raise InvalidValueError(value, "must not be NaN")
    if math.isinf(magnitude):
        raise InvalidValueError(value, "must be finite")
    if not is_valid_magnitude(magnitude):
        raise InvalidValueError(value, "must not be subnormal")

    # Zero is stored unsigned
    return magnitude if magnitude != 0 else 0.0


# Private Methods ------------------------------------------------------------------------------------------------------

def _int_to_float(value: int) -> float:
    try:
        return float(value)
    except OverflowError:
        return math.inf if value > 0 else -math.inf
