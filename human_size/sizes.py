#
# Human Size Sizes - byte quantities tagged with a scale multiple
#

# Sizes store a float magnitude and a Multiple. Comparing sizes rescales the left
# operand into the multiple of the right one. Equality then allows an absolute
# tolerance of SizeConf.EPSILON, ordering compares the floats as they are.
# The tolerance absorbs float rounding of unit conversions, but it is not transitive
# for long chains of nearly equal values. It is also measured in the multiple of the
# right operand, so == is not symmetric across multiples of very different scale:
# Bytes(1e15) == Yobibytes(0) holds while Yobibytes(0) == Bytes(1e15) does not.
#
# Two flavors share the conversion protocol of BaseSize:
#   Size(1.5, Multiple.KILOBYTE)   multiple carried at runtime
#   Kilobytes(1.5)                 multiple fixed by the class
#
# Any class is built from and decomposed into the canonical (float, Multiple) pair
# with from_any() and into_any(), so no pairwise conversion tables are needed.

# Standard library -----------------------------------------------------------------------------------------------------
import abc
import math
import re
import warnings
from dataclasses import dataclass
from decimal import Decimal, localcontext
from typing import ClassVar, Literal, Self

# Local ----------------------------------------------------------------------------------------------------------------
from .errors import ConversionError, ParsingError
from .formatters import fmt_magnitude, fmt_type, fmt_value
from .multiples import Multiple
from .numeric import validate_magnitude
from .parsing import parse_parts


# @formatter:off

class SizeConf:
    """
    Configuration constants for sizes.

    Attributes:
        EPSILON: Absolute tolerance for equal magnitudes after rescaling to a common multiple.
        BYTE_COUNT_PRECISION: Decimal digits used for exact integer byte counts, enough for
            the largest multiple (25 digits) times a 17 significant digits magnitude.
    """
    EPSILON = 1e-8
    BYTE_COUNT_PRECISION = 64

# @formatter:on

_FORMAT_SPEC = re.compile(r"(?:(?P<fill>.)?(?P<align>[<>^]))?(?P<width>\d+)?(?:\.(?P<precision>\d+))?")

_specific_sizes: dict[Multiple, type["SpecificSize"]] = {}


def _as_multiple(multiple: Multiple | str) -> Multiple:
    """Accept a Multiple or its text token."""
    if isinstance(multiple, Multiple):
        return multiple
    if isinstance(multiple, str):
        return Multiple.from_str(multiple)
    raise TypeError(f"multiple must be a Multiple or str, got {fmt_type(multiple)}")


# Classes --------------------------------------------------------------------------------------------------------------

class BaseSize(abc.ABC):
    """
    Common behavior of byte sizes: conversion, comparison and display.

    Subclasses implement the conversion protocol:
        from_any(value, multiple): build an instance from the canonical pair
        into_any(): decompose an instance into the canonical pair, unchanged
    """

    # ----- Conversion protocol -----

    @classmethod
    @abc.abstractmethod
    def from_any(cls, value: float, multiple: Multiple) -> Self:
        """Create an instance of this class from a canonical (value, multiple) pair."""

    @abc.abstractmethod
    def into_any(self) -> tuple[float, Multiple]:
        """Canonical (value, multiple) pair of this size."""

    # ----- Construction -----

    @classmethod
    def parse(cls, text: str, *, on_error: Literal["raise", "none"] = "raise") -> Self | None:
        """Parse text into an instance of this class, see parse_size()."""
        return parse_size(text, into=cls, on_error=on_error)

    @classmethod
    def _new(cls, **fields) -> Self:
        """Create an instance without validation, conversion results are valid by construction."""
        obj = object.__new__(cls)
        for name, value in fields.items():
            object.__setattr__(obj, name, value)
        return obj

    # ----- Conversion -----

    def convert(self, target: "Multiple | str | type[BaseSize]") -> "BaseSize":
        """
        Express the same size in another multiple.

        Args:
            target: A Multiple or its token, returns a Size in that multiple;
                    or a size class, returns an instance of that class.

        Returns:
            A new size, self is left unchanged.

        Warns:
            RuntimeWarning: If the converted magnitude overflows to infinity.

        Examples:
            >>> Size(1, "kB").convert(Multiple.BYTE)
            Size(value=1000.0, multiple=<Multiple.BYTE: 'B'>)
            >>> Bytes(1024).convert(Kibibytes)
            Kibibytes(value=1.0)
        """
        value, multiple = self.into_any()

        if isinstance(target, type) and issubclass(target, BaseSize):
            result = target.from_any(value, multiple)
        else:
            target = _as_multiple(target)
            ratio = multiple.multiple_of_bytes / target.multiple_of_bytes
            result = Size._new(value=value * ratio, multiple=target)

        converted, to_multiple = result.into_any()
        if math.isinf(converted):
            warnings.warn(
                f"Converting {self} to {to_multiple} overflows the float range",
                RuntimeWarning,
                stacklevel=2
            )
        return result

    def byte_count(self, bits: int | None = None) -> int:
        """
        Total number of bytes as an exact integer, fractional bytes are truncated.

        The magnitude is taken as its shortest decimal text, so 0.1 ZB is exactly
        10^20 bytes.

        Args:
            bits: If given, the count must fit in an unsigned integer of this width.

        Raises:
            ConversionError: If the count overflows the requested width, is negative
                             with a width given, or the magnitude is not finite.
        """
        value, multiple = self.into_any()
        if not math.isfinite(value):
            raise ConversionError(f"size magnitude {fmt_value(value)} has no integer byte count")

        with localcontext() as ctx:
            ctx.prec = SizeConf.BYTE_COUNT_PRECISION
            count = int(Decimal(repr(value)) * multiple.as_int)

        if bits is not None:
            if bits <= 0:
                raise ValueError(f"bits must be > 0, got {bits}")
            if count < 0 or count >= 2 ** bits:
                raise ConversionError(f"overflow: {count} bytes does not fit in an unsigned {bits}-bit integer")
        return count

    def __int__(self) -> int:
        return self.byte_count()

    def __float__(self) -> float:
        value, multiple = self.into_any()
        return value * multiple.multiple_of_bytes

    # ----- Comparison -----

    def _rescaled(self, other: "BaseSize") -> tuple[float, float]:
        """Magnitudes of self and other, both in the multiple of other."""
        left_value, left_multiple = self.into_any()
        right_value, right_multiple = other.into_any()
        return left_value * (left_multiple.multiple_of_bytes / right_multiple.multiple_of_bytes), right_value

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, BaseSize):
            return NotImplemented
        left, right = self._rescaled(other)
        return abs(left - right) < SizeConf.EPSILON

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, BaseSize):
            return NotImplemented
        left, right = self._rescaled(other)
        return left < right

    def __le__(self, other: object) -> bool:
        if not isinstance(other, BaseSize):
            return NotImplemented
        left, right = self._rescaled(other)
        return left <= right

    def __gt__(self, other: object) -> bool:
        if not isinstance(other, BaseSize):
            return NotImplemented
        left, right = self._rescaled(other)
        return left > right

    def __ge__(self, other: object) -> bool:
        if not isinstance(other, BaseSize):
            return NotImplemented
        left, right = self._rescaled(other)
        return left >= right

    # Equality is approximate, equal sizes can not share a hash
    __hash__ = None

    # ----- Display -----

    def __str__(self) -> str:
        return self._as_str()

    def __format__(self, format_spec: str) -> str:
        """
        Format with an optional precision for the magnitude and padding for the whole text.

        Examples:
            >>> f"{Size(1.123456789, 'B'):.4}"
            '1.1235 B'
            >>> f"{Kilobytes(1.5):>8}"
            '  1.5 kB'
        """
        if not format_spec:
            return self._as_str()

        match = _FORMAT_SPEC.fullmatch(format_spec)
        if match is None:
            raise ValueError(f"Invalid format specifier {format_spec!r} for object of type {fmt_type(self)}")

        precision = match["precision"]
        text = self._as_str(None if precision is None else int(precision))
        padding = f"{match['fill'] or ''}{match['align'] or ''}{match['width'] or ''}"
        return format(text, padding)

    def _as_str(self, precision: int | None = None) -> str:
        value, multiple = self.into_any()
        if math.isfinite(value):
            number = fmt_magnitude(value, precision=precision)
        else:
            number = repr(value)
        return f"{number} {multiple}"


@dataclass(frozen=True, eq=False)
class Size(BaseSize):
    """
    Size with the multiple carried at runtime.

    Attributes:
        value: Magnitude, zero or a normal finite float.
        multiple: Scale of the magnitude, a Multiple or its token.

    Raises:
        InvalidValueError: If value is NaN, infinite or subnormal.
        ParsingError: If multiple is an unknown token.
        TypeError: If value is not a number or multiple is neither a Multiple nor a str.

    Examples:
        >>> Size(1, Multiple.KIBIBYTE) == Size(1024, "B")
        True
        >>> str(Size(1.5, "kB"))
        '1.5 kB'
    """
    value: float
    multiple: Multiple

    def __post_init__(self):
        object.__setattr__(self, "multiple", _as_multiple(self.multiple))
        object.__setattr__(self, "value", validate_magnitude(self.value))

    @classmethod
    def from_any(cls, value: float, multiple: Multiple) -> Self:
        return cls._new(value=value, multiple=multiple)

    def into_any(self) -> tuple[float, Multiple]:
        return self.value, self.multiple


@dataclass(frozen=True, eq=False)
class SpecificSize(BaseSize):
    """
    Size with the multiple fixed by its class; instances store the magnitude only.

    Concrete classes are declared with the class keyword ``multiple``, one per Multiple:

        class Kilobytes(SpecificSize, multiple=Multiple.KILOBYTE): ...

    Instances built from another multiple via from_any() are rescaled into the class multiple.
    """
    value: float

    MULTIPLE: ClassVar[Multiple]

    def __init_subclass__(cls, /, multiple: Multiple | str | None = None, **kwargs):
        super().__init_subclass__(**kwargs)
        if multiple is None:
            return
        multiple = _as_multiple(multiple)
        if multiple in _specific_sizes:
            raise TypeError(f"{multiple!r} is already fixed by {_specific_sizes[multiple].__name__}")
        cls.MULTIPLE = multiple
        _specific_sizes[multiple] = cls

    def __post_init__(self):
        if not hasattr(type(self), "MULTIPLE"):
            raise TypeError(f"{fmt_type(self)} has no fixed multiple, subclass it with multiple=...")
        object.__setattr__(self, "value", validate_magnitude(self.value))

    @property
    def multiple(self) -> Multiple:
        return type(self).MULTIPLE

    @classmethod
    def for_multiple(cls, multiple: Multiple | str) -> type["SpecificSize"]:
        """The SpecificSize subclass fixed to multiple."""
        return _specific_sizes[_as_multiple(multiple)]

    @classmethod
    def from_any(cls, value: float, multiple: Multiple) -> Self:
        if not hasattr(cls, "MULTIPLE"):
            raise TypeError(f"{fmt_type(cls)} has no fixed multiple, subclass it with multiple=...")
        ratio = multiple.multiple_of_bytes / cls.MULTIPLE.multiple_of_bytes
        return cls._new(value=value * ratio)

    def into_any(self) -> tuple[float, Multiple]:
        return self.value, type(self).MULTIPLE


# @formatter:off

class Bytes(SpecificSize, multiple=Multiple.BYTE):
    """Size in bytes, "B"."""

class Kilobytes(SpecificSize, multiple=Multiple.KILOBYTE):
    """Size in kilobytes (1000 bytes), "kB"."""

class Megabytes(SpecificSize, multiple=Multiple.MEGABYTE):
    """Size in megabytes (1000^2 bytes), "MB"."""

class Gigabytes(SpecificSize, multiple=Multiple.GIGABYTE):
    """Size in gigabytes (1000^3 bytes), "GB"."""

class Terabytes(SpecificSize, multiple=Multiple.TERABYTE):
    """Size in terabytes (1000^4 bytes), "TB"."""

class Petabytes(SpecificSize, multiple=Multiple.PETABYTE):
    """Size in petabytes (1000^5 bytes), "PB"."""

class Exabytes(SpecificSize, multiple=Multiple.EXABYTE):
    """Size in exabytes (1000^6 bytes), "EB"."""

class Zettabytes(SpecificSize, multiple=Multiple.ZETTABYTE):
    """Size in zettabytes (1000^7 bytes), "ZB"."""

class Yottabytes(SpecificSize, multiple=Multiple.YOTTABYTE):
    """Size in yottabytes (1000^8 bytes), "YB"."""

class Kibibytes(SpecificSize, multiple=Multiple.KIBIBYTE):
    """Size in kibibytes (1024 bytes), "KiB"."""

class Mebibytes(SpecificSize, multiple=Multiple.MEBIBYTE):
    """Size in mebibytes (1024^2 bytes), "MiB"."""

class Gibibytes(SpecificSize, multiple=Multiple.GIBIBYTE):
    """Size in gibibytes (1024^3 bytes), "GiB"."""

class Tebibytes(SpecificSize, multiple=Multiple.TEBIBYTE):
    """Size in tebibytes (1024^4 bytes), "TiB"."""

class Pebibytes(SpecificSize, multiple=Multiple.PEBIBYTE):
    """Size in pebibytes (1024^5 bytes), "PiB"."""

class Exbibytes(SpecificSize, multiple=Multiple.EXBIBYTE):
    """Size in exbibytes (1024^6 bytes), "EiB"."""

class Zebibytes(SpecificSize, multiple=Multiple.ZEBIBYTE):
    """Size in zebibytes (1024^7 bytes), "ZiB"."""

class Yobibytes(SpecificSize, multiple=Multiple.YOBIBYTE):
    """Size in yobibytes (1024^8 bytes), "YiB"."""

# @formatter:on


# Methods --------------------------------------------------------------------------------------------------------------

def parse_size(
        text: str,
        into: type[BaseSize] = Size,
        *,
        on_error: Literal["raise", "none"] = "raise"
) -> BaseSize | None:
    """
    Parse human-readable text into a size.

    Args:
        text: Size text, e.g. "100 MiB", "1.5kB", ".512 YB".
        into: Size class of the result. Size keeps the parsed multiple,
              SpecificSize subclasses rescale into their own multiple.
        on_error: How to handle PARSING ERRORS:
            - "raise": Raise ParsingError (default)
            - "none": Return None, e.g. to fall back to a default size

    Returns:
        An instance of into, or None on a parsing error when on_error="none".

    Raises:
        ParsingError: On malformed text when on_error="raise", see parse_parts().
        TypeError: If into is not a size class or text is not a str.
        ValueError: If on_error is not a supported mode.

    Examples:
        >>> parse_size("1.5 kB")
        Size(value=1.5, multiple=<Multiple.KILOBYTE: 'kB'>)
        >>> parse_size("12 kB", into=Bytes)
        Bytes(value=12000.0)
        >>> parse_size("10 B extra", on_error="none") is None
        True
    """
    if on_error not in ("raise", "none"):
        raise ValueError(f"on_error must be 'raise' or 'none', got {fmt_value(on_error)}")
    if not (isinstance(into, type) and issubclass(into, BaseSize)):
        raise TypeError(f"into must be a size class, got {fmt_type(into)}")

    try:
        value, multiple = parse_parts(text)
    except ParsingError:
        if on_error == "none":
            return None
        raise

    return into.from_any(value, multiple)
