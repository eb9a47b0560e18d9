"""
RU: Чистые функции расчёта контрольных символов для всех семейств символогий.
EN: Pure check digit/character functions, one per algorithm family.

Every function takes an ordered sequence of small integers and returns the
check value(s). Numeric families reject empty or non-digit input with
InvalidChecksumInput; nothing is coerced to zero.

Example:
    >>> gs1_mod10(digits_of("12345678901"))
    2
    >>> msi_mod10(digits_of("1234"))
    4
"""

from __future__ import annotations

from typing import Final, Iterable, List, Sequence, Tuple

from src.barcodegen.errors import InvalidChecksumInput

__all__ = [
    "digits_of",
    "gs1_mod10",
    "upc5_addon",
    "msi_mod10",
    "msi_2mod10",
    "msi_mod11",
    "msi_mod11_mod10",
    "code39_mod43",
    "code93_mod47",
    "code11_mod11",
    "code128_mod103",
    "Mod103Accumulator",
    "postnet_mod10",
    "telepen_mod127",
]

_DIGITS: Final[str] = "0123456789"

CODE93_C_WEIGHT: Final[int] = 20
CODE93_K_WEIGHT: Final[int] = 15
CODE11_C_WEIGHT: Final[int] = 10
CODE11_K_WEIGHT: Final[int] = 9


def digits_of(text: str) -> List[int]:
    """Convert an ASCII digit string to ints, rejecting anything else."""
    if not isinstance(text, str) or not text:
        raise InvalidChecksumInput("Checksum input must be a non-empty digit string")
    bad = [c for c in text if c not in _DIGITS]
    if bad:
        raise InvalidChecksumInput(f"Checksum input contains non-digits: {bad[0]!r}")
    return [ord(c) - 48 for c in text]


def _require_digits(digits: Sequence[int], family: str) -> None:
    if not digits:
        raise InvalidChecksumInput(f"{family}: empty input")
    for d in digits:
        if isinstance(d, bool) or not isinstance(d, int) or not 0 <= d <= 9:
            raise InvalidChecksumInput(f"{family}: {d!r} is not a decimal digit")


def _require_values(values: Sequence[int], family: str, modulus: int) -> None:
    if not values:
        raise InvalidChecksumInput(f"{family}: empty input")
    for v in values:
        if isinstance(v, bool) or not isinstance(v, int) or not 0 <= v < modulus:
            raise InvalidChecksumInput(f"{family}: value {v!r} out of range")


def gs1_mod10(digits: Sequence[int]) -> int:
    """
    GS1 weighted mod-10 (UPC-A, EAN-8/13, ITF-14, Bookland, 2 of 5 Mod10).

    Weights alternate 3/1 starting with 3 at the rightmost data digit, so the
    same function serves every data length.
    """
    _require_digits(digits, "gs1_mod10")
    total = sum(d * (3 if i % 2 == 0 else 1) for i, d in enumerate(reversed(digits)))
    return (10 - total % 10) % 10


def upc5_addon(digits: Sequence[int]) -> int:
    """5-digit add-on check: 3 x (odd positions) + 9 x (even positions), mod 10."""
    _require_digits(digits, "upc5_addon")
    total = sum(d * (3 if i % 2 == 0 else 9) for i, d in enumerate(digits))
    return total % 10


def msi_mod10(digits: Sequence[int]) -> int:
    """MSI mod 10 (Luhn): every other digit from the right is doubled."""
    _require_digits(digits, "msi_mod10")
    total = 0
    for i, d in enumerate(reversed(digits)):
        if i % 2 == 0:
            d *= 2
            if d > 9:
                d -= 9
        total += d
    return (10 - total % 10) % 10


def msi_2mod10(digits: Sequence[int]) -> Tuple[int, int]:
    first = msi_mod10(digits)
    return first, msi_mod10([*digits, first])


def msi_mod11(digits: Sequence[int]) -> Tuple[int, ...]:
    """
    MSI mod 11, IBM weights 2..7 repeating from the right.

    A check value of 10 is written as the two digits ``1 0``.
    """
    _require_digits(digits, "msi_mod11")
    total = sum(d * (2 + i % 6) for i, d in enumerate(reversed(digits)))
    check = (11 - total % 11) % 11
    return (1, 0) if check == 10 else (check,)


def msi_mod11_mod10(digits: Sequence[int]) -> Tuple[int, ...]:
    first = msi_mod11(digits)
    return (*first, msi_mod10([*digits, *first]))


def code39_mod43(values: Sequence[int]) -> int:
    _require_values(values, "code39_mod43", 43)
    return sum(values) % 43


def _weighted_from_right(values: Sequence[int], max_weight: int) -> int:
    return sum(v * (i % max_weight + 1) for i, v in enumerate(reversed(values)))


def code93_mod47(values: Sequence[int], max_weight: int = CODE93_C_WEIGHT) -> int:
    """Code 93 check: weights 1..max_weight cycling from the right, mod 47."""
    _require_values(values, "code93_mod47", 47)
    return _weighted_from_right(values, max_weight) % 47


def code11_mod11(values: Sequence[int], max_weight: int = CODE11_C_WEIGHT) -> int:
    """Code 11 check: weights 1..max_weight cycling from the right, mod 11."""
    _require_values(values, "code11_mod11", 11)
    return _weighted_from_right(values, max_weight) % 11


class Mod103Accumulator:
    """
    Running Code 128 checksum.

    The start code counts with weight 1; every following symbol value,
    subset switches included, counts with its 1-based position.
    """

    __slots__ = ("_total", "_position")

    def __init__(self, start_value: int) -> None:
        _require_values([start_value], "code128_mod103", 106)
        self._total = start_value
        self._position = 0

    def add(self, value: int) -> None:
        if isinstance(value, bool) or not isinstance(value, int) or not 0 <= value < 106:
            raise InvalidChecksumInput(f"code128_mod103: value {value!r} out of range")
        self._position += 1
        self._total += value * self._position

    @property
    def value(self) -> int:
        return self._total % 103


def code128_mod103(values: Iterable[int]) -> int:
    """values[0] is the start code, the rest are data/switch symbol values."""
    it = iter(values)
    try:
        acc = Mod103Accumulator(next(it))
    except StopIteration:
        raise InvalidChecksumInput("code128_mod103: empty input") from None
    for v in it:
        acc.add(v)
    return acc.value


def postnet_mod10(digits: Sequence[int]) -> int:
    _require_digits(digits, "postnet_mod10")
    return (10 - sum(digits) % 10) % 10


def telepen_mod127(codes: Sequence[int]) -> int:
    """Telepen check: 127 minus (sum of ASCII codes mod 127); 127 becomes 0."""
    _require_values(codes, "telepen_mod127", 128)
    check = 127 - sum(codes) % 127
    return 0 if check == 127 else check
