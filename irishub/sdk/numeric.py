"""Fixed-point decimals with 18 places and bounded integers."""

from __future__ import annotations

import re
from dataclasses import dataclass

PRECISION = 18
MAX_INT_BITS = 256
_MAX_DEC_BITS = MAX_INT_BITS + 59
_ONE = 10**PRECISION
_DEC_RE = re.compile(r"(-)?(\d*)(?:\.(\d+))?")


def _check_int(value: int) -> int:
    if value.bit_length() > MAX_INT_BITS:
        raise OverflowError("integer out of range")
    return value


def _quo_trunc(numerator: int, denominator: int) -> int:
    if denominator == 0:
        raise ZeroDivisionError("division by zero")
    quotient = abs(numerator) // abs(denominator)
    return quotient if (numerator < 0) == (denominator < 0) else -quotient


def int_with_decimal(value: int, decimals: int) -> int:
    """Return ``value * 10**decimals``, bounded to 256 bits."""
    if decimals < 0:
        raise ValueError("decimals must not be negative")
    return _check_int(value * 10**decimals)


@dataclass(frozen=True, order=True)
class Dec:
    """A signed decimal stored as an integer scaled by 10**18."""

    raw: int = 0

    @classmethod
    def from_prec(cls, value: int, prec: int) -> Dec:
        """Return ``value * 10**-prec``."""
        if not 0 <= prec <= PRECISION:
            raise ValueError(f"too much precision, maximum {PRECISION}, provided {prec}")
        return cls(value * 10 ** (PRECISION - prec))

    @classmethod
    def parse(cls, text: str) -> Dec:
        """Parse decimal text such as ``"0.04"`` or ``"-12"``."""
        match = _DEC_RE.fullmatch(text)
        if not text or match is None:
            raise ValueError(f"invalid decimal string {text!r}")
        sign, whole, fraction = match.groups()
        fraction = fraction or ""
        if not whole and not fraction:
            raise ValueError(f"invalid decimal string {text!r}")
        if len(fraction) > PRECISION:
            raise ValueError(
                f"value {text!r} exceeds max precision by {len(fraction) - PRECISION} decimal places"
            )
        raw = int((whole or "0") + fraction.ljust(PRECISION, "0"))
        if raw.bit_length() > _MAX_DEC_BITS:
            raise ValueError("decimal out of range")
        return cls(-raw if sign else raw)

    def mul_int(self, value: int) -> Dec:
        return Dec(self.raw * value)

    def quo_int(self, value: int) -> Dec:
        """Divide by an integer, truncating toward zero."""
        return Dec(_quo_trunc(self.raw, value))

    def truncate_int(self) -> int:
        """Drop the fractional part, truncating toward zero."""
        return _quo_trunc(self.raw, _ONE)

    def is_positive(self) -> bool:
        return self.raw > 0

    def __str__(self) -> str:
        sign = "-" if self.raw < 0 else ""
        whole, fraction = divmod(abs(self.raw), _ONE)
        return f"{sign}{whole}.{fraction:0{PRECISION}d}"