"""
Formatting helpers for size magnitudes and exception messages.

fmt_magnitude() renders a size magnitude as plain positional text, the format
understood by the size parser. fmt_type() and fmt_value() give robust one-line
descriptions of arbitrary objects for error messages.
"""

# Standard library -----------------------------------------------------------------------------------------------------
import math
from decimal import Decimal
from typing import Any

PRIMITIVE_TYPES = (
    type(None),
    bool,  # Comes before int (is subclass of int)
    int,
    float,
    complex,
    str,
    bytes,
)

# Longest repr shown in a message before truncation
MAX_REPR = 120


# Methods --------------------------------------------------------------------------------------------------------------

def fmt_magnitude(value: int | float, precision: int | None = None) -> str:
    """
    Format a size magnitude in positional notation.

    Without precision the shortest text that round-trips to the same float is used and
    whole numbers are shown without a fractional part. Exponent notation is never produced,
    so the result can always be read back by the size parser.

    Args:
        value: The magnitude to render.
        precision: Number of digits after the decimal point; rounds the displayed text only.

    Returns:
        str: Positional representation of the value.

    Raises:
        ValueError: If precision is negative or value is not finite.

    Examples:
        >>> fmt_magnitude(100.0)
        '100'
        >>> fmt_magnitude(0.512)
        '0.512'
        >>> fmt_magnitude(1e24)
        '1000000000000000000000000'
        >>> fmt_magnitude(1.123456789, precision=4)
        '1.1235'
    """
    if precision is not None and precision < 0:
        raise ValueError(f"precision must be >= 0, got {precision}")

    value = float(value)
    if not math.isfinite(value):
        raise ValueError(f"can not format non-finite magnitude {fmt_value(value)}")

    if precision is not None:
        return f"{value:.{precision}f}"

    # repr() is the shortest round-tripping text, Decimal expands any exponent
    text = format(Decimal(repr(value)), "f")
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return text




def fmt_type(obj: Any) -> str:
    """Format type information of an object or a type for exception messages.

    Examples:
        >>> fmt_type(42)
        '<int>'
        >>> fmt_type(int)
        '<int>'
    """
    cls = obj if isinstance(obj, type) else type(obj)
    type_name = _fmt_truncate(getattr(cls, "__name__", "?"), MAX_REPR)
    return _fmt_type_value(type_name)


def fmt_value(obj: Any) -> str:
    """
    Format a single value for exception messages.

    Primitives are rendered as-is, other objects as a type-value pair. Broken __repr__
    methods and very long representations are handled gracefully.

    Examples:
        >>> fmt_value(42)
        '42'
        >>> fmt_value(float("nan"))
        'nan'
        >>> from decimal import Decimal
        >>> fmt_value(Decimal("1.5"))
        "<Decimal: Decimal('1.5')>"
    """
    if type(obj) is str:
        repr_ = obj
    else:
        repr_ = _safe_repr(obj)

    r = _fmt_truncate(repr_.replace(">", "\\>"), MAX_REPR)

    if type(obj) in PRIMITIVE_TYPES:
        return r

    return _fmt_type_value(type(obj).__name__, r)


# Private Methods ------------------------------------------------------------------------------------------------------

def _fmt_truncate(repr_: str, max_len: int, ellipsis: str = "...") -> str:
    """Truncate repr_ to at most max_len characters before appending the ellipsis."""
    if len(repr_) <= max_len:
        return repr_
    return repr_[:max_len] + ellipsis


def _fmt_type_value(type_name: str, value_repr: str | None = None) -> str:
    return f"<{type_name}>" if value_repr is None else f"<{type_name}: {value_repr}>"


def _safe_repr(obj) -> str:
    """repr() that survives broken __repr__ methods."""
    try:
        repr_ = repr(obj)
    except Exception as e:
        exc_type = type(e).__name__
        repr_ = f"<{type(obj).__name__} object (repr failed: {exc_type})>"
    return repr_
