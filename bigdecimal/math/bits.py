"""Integer helpers: truncating division, powers of ten, digit text and bit scans."""

from __future__ import annotations

from functools import cache

from bigdecimal.errors import DivisionByZero, NegativeValueError


def div_trunc(a: int, b: int) -> int:
    """Integer division with truncation toward zero.

    Python's // operator rounds toward negative infinity; on-chain integer
    math truncates toward zero. This matters for negative operands.

    Args:
        a: Dividend (can be positive or negative)
        b: Divisor (must be non-zero)

    Returns:
        a / b truncated toward zero

    Raises:
        DivisionByZero: If b is zero

    Examples:
        Python: -7 // 3 = -3 (rounds toward -inf)
        div_trunc(-7, 3) = -2 (truncates toward zero)
    """
    if b == 0:
        raise DivisionByZero(f"Division by zero: {a} / 0")
    if (a >= 0) == (b >= 0):
        return a // b
    return -(abs(a) // abs(b))


def rem_trunc(a: int, b: int) -> int:
    """Remainder matching div_trunc: the result takes the sign of a."""
    return a - div_trunc(a, b) * b


@cache
def pow10(exponent: int) -> int:
    """Return 10**exponent, memoized per exponent."""
    if exponent < 0:
        raise NegativeValueError(f"Negative power of ten: {exponent}")
    return 10**exponent


# Below CPython's int/str digit limit (sys.int_info.default_max_str_digits)
_CHUNK_DIGITS = 4000
_CHUNK_BITS = 13000
_LOG10_2 = 0.30102999566398120


def int_to_text(x: int) -> str:
    """Decimal text of x for any magnitude.

    Values too large for a single str() call are split at a power of ten
    and the halves converted separately, the low half zero-padded.
    """
    if x < 0:
        return "-" + _digits_of(-x, 0)
    return _digits_of(x, 0)


def _digits_of(x: int, width: int) -> str:
    if x.bit_length() <= _CHUNK_BITS:
        return str(x).rjust(width, "0")
    split = int(x.bit_length() * _LOG10_2) // 2
    high, low = divmod(x, pow10(split))
    return _digits_of(high, max(width - split, 0)) + _digits_of(low, split)


def text_to_int(digits: str) -> int:
    """Parse optionally signed decimal digits of any length."""
    if digits[:1] in ("+", "-"):
        magnitude = text_to_int(digits[1:])
        return -magnitude if digits[0] == "-" else magnitude
    if len(digits) <= _CHUNK_DIGITS:
        return int(digits)
    split = len(digits) // 2
    return text_to_int(digits[:-split]) * pow10(split) + text_to_int(digits[-split:])


def most_significant_bit(x: int) -> int:
    """Index of the most significant set bit of x.

    The result satisfies 2**msb <= x < 2**(msb + 1). By convention
    msb(0) == 0.

    Raises:
        NegativeValueError: If x is negative
    """
    if x < 0:
        raise NegativeValueError(f"Most significant bit of negative number: {x}")
    if x == 0:
        return 0
    return x.bit_length() - 1


def least_significant_bit(x: int) -> int:
    """Index of the least significant set bit of x.

    Binary search: if the low half of the remaining window is all zeros the
    set bit lies in the high half, otherwise in the low half. By convention
    lsb(0) == 0.

    Raises:
        NegativeValueError: If x is negative
    """
    if x < 0:
        raise NegativeValueError(f"Least significant bit of negative number: {x}")
    if x == 0:
        return 0

    lsb = 0
    width = x.bit_length()
    while width > 1:
        half = width >> 1
        if x & ((1 << half) - 1) == 0:
            lsb += half
            x >>= half
            width -= half
        else:
            width = half
    return lsb
