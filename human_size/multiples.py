#
# Human Size Multiples - the registry of byte scale units
#

# Standard library -----------------------------------------------------------------------------------------------------
from collections.abc import Iterator, Mapping
from enum import StrEnum, unique
from typing import Self

# Local ----------------------------------------------------------------------------------------------------------------
from .errors import ParsingError, ParsingErrorKind
from .formatters import fmt_type


# Classes --------------------------------------------------------------------------------------------------------------

# @formatter:off
@unique
class Multiple(StrEnum):
    """
    Scale multiple of a size: a byte, or a decimal (1000^n) or binary (1024^n) step.

    The member value is the canonical text token, so ``str(Multiple.KIBIBYTE) == "KiB"``.
    Use Multiple.from_str() to look up a token, it also accepts the "KB" alias of KiB.

    Attributes:
        BYTE      : 1 byte, "B"
        KILOBYTE  : 1000^1 bytes, "kB"
        MEGABYTE  : 1000^2 bytes, "MB"
        GIGABYTE  : 1000^3 bytes, "GB"
        TERABYTE  : 1000^4 bytes, "TB"
        PETABYTE  : 1000^5 bytes, "PB"
        EXABYTE   : 1000^6 bytes, "EB"
        ZETTABYTE : 1000^7 bytes, "ZB"
        YOTTABYTE : 1000^8 bytes, "YB"
        KIBIBYTE  : 1024^1 bytes, "KiB" or "KB"
        MEBIBYTE  : 1024^2 bytes, "MiB"
        GIBIBYTE  : 1024^3 bytes, "GiB"
        TEBIBYTE  : 1024^4 bytes, "TiB"
        PEBIBYTE  : 1024^5 bytes, "PiB"
        EXBIBYTE  : 1024^6 bytes, "EiB"
        ZEBIBYTE  : 1024^7 bytes, "ZiB"
        YOBIBYTE  : 1024^8 bytes, "YiB"
    """
    BYTE = "B"

    KILOBYTE = "kB"
    MEGABYTE = "MB"
    GIGABYTE = "GB"
    TERABYTE = "TB"
    PETABYTE = "PB"
    EXABYTE = "EB"
    ZETTABYTE = "ZB"
    YOTTABYTE = "YB"

    KIBIBYTE = "KiB"
    MEBIBYTE = "MiB"
    GIBIBYTE = "GiB"
    TEBIBYTE = "TiB"
    PEBIBYTE = "PiB"
    EXBIBYTE = "EiB"
    ZEBIBYTE = "ZiB"
    YOBIBYTE = "YiB"
# @formatter:on

    @classmethod
    def from_str(cls, token: str) -> Self:
        """
        Look up a multiple by its text token.

        Matching is exact and case-sensitive, "KB" is the only accepted alias (of "KiB").

        Raises:
            ParsingError: of kind INVALID_MULTIPLE if the token is unknown.
            TypeError: If token is not a str.
        """
        if not isinstance(token, str):
            raise TypeError(f"multiple token must be a str, got {fmt_type(token)}")
        try:
            return multiple_tokens[token]
        except KeyError:
            raise ParsingError(ParsingErrorKind.INVALID_MULTIPLE, token) from None

    @property
    def base(self) -> int:
        """1024 for binary multiples, 1000 for decimal ones and BYTE."""
        return MultiplesConf.BINARY_BASE if self.is_binary else MultiplesConf.DECIMAL_BASE

    @property
    def exponent(self) -> int:
        """Power of base, from 0 for BYTE to 8 for YOTTABYTE and YOBIBYTE."""
        if self.is_binary:
            return MultiplesConf.BINARY_MULTIPLES.get_key(self)
        return MultiplesConf.DECIMAL_MULTIPLES.get_key(self)

    @property
    def is_binary(self) -> bool:
        return MultiplesConf.BINARY_MULTIPLES.has_value(self) and self is not Multiple.BYTE

    @property
    def as_int(self) -> int:
        """Exact number of bytes in this multiple."""
        return self.base ** self.exponent

    @property
    def multiple_of_bytes(self) -> float:
        """
        Number of bytes in this multiple as a float.

        YOBIBYTE (1024^8) exceeds the 64-bit integer range, sizes use float arithmetic throughout.
        """
        return _MULTIPLES_OF_BYTES[self]


class ExponentMap(Mapping[int, Multiple]):
    """
    Read-only exponent -> Multiple map of one multiple family with reverse lookup.

    Both exponents and multiples are unique within a family.
    """

    def __init__(self, multiples: Mapping[int, Multiple]) -> None:
        self._forward_map: dict[int, Multiple] = dict(multiples)
        self._backward_map: dict[Multiple, int] = {}
        for exponent, multiple in self._forward_map.items():
            if multiple in self._backward_map:
                raise ValueError(f"Multiple {multiple!r} already mapped from exponent {self._backward_map[multiple]}")
            self._backward_map[multiple] = exponent

    def __getitem__(self, exponent: int) -> Multiple:
        return self._forward_map[exponent]

    def __iter__(self) -> Iterator[int]:
        return iter(self._forward_map)

    def __len__(self) -> int:
        return len(self._forward_map)

    def get_key(self, multiple: Multiple) -> int:
        """Lookup exponent by multiple."""
        return self._backward_map[multiple]

    def has_value(self, multiple: Multiple) -> bool:
        return multiple in self._backward_map

    def __repr__(self) -> str:
        return f"ExponentMap({self._forward_map!r})"


class TokenRegistry(Mapping[str, Multiple]):
    """
    Read-only text token -> Multiple registry.

    Implements the Mapping protocol over every accepted token, canonical tokens
    and aliases alike. Membership applies to tokens.
    """

    def __init__(self, aliases: Mapping[str, Multiple] | None = None) -> None:
        self._forward_map: dict[str, Multiple] = {m.value: m for m in Multiple}
        for alias, multiple in (aliases or {}).items():
            if alias in self._forward_map:
                raise ValueError(f"Alias {alias!r} clashes with token of {self._forward_map[alias]!r}")
            self._forward_map[alias] = Multiple(multiple)

    def __getitem__(self, token: str) -> Multiple:
        return self._forward_map[token]

    def __iter__(self) -> Iterator[str]:
        return iter(self._forward_map)

    def __len__(self) -> int:
        return len(self._forward_map)

    def __repr__(self) -> str:
        return f"TokenRegistry({self._forward_map!r})"


# @formatter:off

class MultiplesConf:
    """
    Configuration constants of the multiples registry.

    Attributes:
        DECIMAL_BASE: Base of decimal (SI) multiples.
        BINARY_BASE: Base of binary (IEC) multiples.
        ALIASES: Extra accepted tokens; "KB" is a widespread spelling of kibibyte.
        DECIMAL_MULTIPLES: Exponent of 1000 -> Multiple, BYTE at 0.
        BINARY_MULTIPLES: Exponent of 1024 -> Multiple, BYTE at 0.
    """
    DECIMAL_BASE = 1000
    BINARY_BASE = 1024

    ALIASES = {"KB": Multiple.KIBIBYTE}

    DECIMAL_MULTIPLES = ExponentMap({
        0: Multiple.BYTE,
        1: Multiple.KILOBYTE,   2: Multiple.MEGABYTE,   3: Multiple.GIGABYTE,
        4: Multiple.TERABYTE,   5: Multiple.PETABYTE,   6: Multiple.EXABYTE,
        7: Multiple.ZETTABYTE,  8: Multiple.YOTTABYTE,
    })

    BINARY_MULTIPLES = ExponentMap({
        0: Multiple.BYTE,
        1: Multiple.KIBIBYTE,   2: Multiple.MEBIBYTE,   3: Multiple.GIBIBYTE,
        4: Multiple.TEBIBYTE,   5: Multiple.PEBIBYTE,   6: Multiple.EXBIBYTE,
        7: Multiple.ZEBIBYTE,   8: Multiple.YOBIBYTE,
    })

# @formatter:on

multiple_tokens = TokenRegistry(MultiplesConf.ALIASES)

_MULTIPLES_OF_BYTES = {m: float(m.as_int) for m in Multiple}


# Module Sanity Checks -------------------------------------------------------------------------------------------------

# Every multiple belongs to exactly one family, BYTE to both.
if set(MultiplesConf.DECIMAL_MULTIPLES.values()) | set(MultiplesConf.BINARY_MULTIPLES.values()) != set(Multiple):
    raise AssertionError(
        "Configuration Error: DECIMAL_MULTIPLES and BINARY_MULTIPLES must cover every Multiple."
    )
