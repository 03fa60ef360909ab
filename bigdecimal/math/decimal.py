"""Immutable fixed-point decimal with explicit rounding.

A Decimal is an unscaled integer plus a precision p in [0, MAX_PRECISION];
its value is ``unscaled / 10**p``. Every binary operation first rescales
both operands up to the larger precision (always exact), so values with
different precisions combine without loss. Multiplication and division
take an explicit RoundingMode and round exactly once, at the operands'
common precision, from full-resolution intermediate digits.

The uint128/uint256 wraparound variants mirror fixed-width on-chain
arithmetic.

Usage:
    from bigdecimal import Decimal, RoundingMode

    price = Decimal.from_string("1.333")
    price.mul(price, RoundingMode.UP)        # Decimal('1.777')
    price.quo_down(Decimal(3))               # Decimal('0.444')
    Decimal.scaled(2, 18).log2()             # Decimal('1.000000000000000000')
"""

from __future__ import annotations

import re
from fractions import Fraction
from typing import Any

import numpy as np
import structlog
from pydantic import GetCoreSchemaHandler
from pydantic_core import core_schema

from bigdecimal.config import DEFAULT_MATH_CONFIG, MathConfig
from bigdecimal.constants import MAX_PRECISION, NIL_STRING, PRECISION_FIXED_SIZE
from bigdecimal.errors import (
    ContractViolation,
    DecodeError,
    InexactResultError,
    InvalidArgumentError,
    InvalidDecimalString,
    InvalidRoundingModeError,
    NegativeValueError,
    NilValueError,
    NonPositiveLogarithmError,
    PrecisionOutOfRangeError,
    RootApproximationError,
)
from bigdecimal.marshal import decode_int, decode_json_token, encode_int, unquote_if_quoted
from bigdecimal.math.bigint import BigInt
from bigdecimal.math.bit_len import BitLen
from bigdecimal.math.bits import div_trunc, int_to_text, pow10, text_to_int
from bigdecimal.math.rounding import RoundingMode

__all__ = ["Decimal", "max_decimal", "min_decimal", "ZERO", "ONE", "TEN"]

logger = structlog.get_logger()

_DIGITS = re.compile(r"[0-9]+")
_EXPONENT = re.compile(r"[+-]?[0-9]+")

# Exponents must fit a signed 32-bit integer
_MAX_EXPONENT = 2**31 - 1
_MIN_EXPONENT = -(2**31)


def _require_precision(precision: int) -> None:
    if not 0 <= precision <= MAX_PRECISION:
        raise PrecisionOutOfRangeError(
            f"Precision must be in [0, {MAX_PRECISION}], got {precision}"
        )


def _round_scaled(value: int, digits: int, mode: RoundingMode) -> int:
    """Divide value by 10**digits, disposing of the dropped digits with mode.

    This is the single dispatch point for decimal rounding; every rescale,
    multiply and divide goes through it.

    Raises:
        InexactResultError: If mode is UNNECESSARY and a dropped digit is non-zero
        InvalidRoundingModeError: If mode is not a RoundingMode
    """
    if not isinstance(mode, RoundingMode):
        raise InvalidRoundingModeError(f"Invalid rounding mode: {mode!r}")
    if digits == 0:
        return value
    if mode is RoundingMode.DOWN:
        return div_trunc(value, pow10(digits))
    if mode is RoundingMode.CEILING:
        mode = RoundingMode.DOWN if value < 0 else RoundingMode.UP
        return _round_scaled(value, digits, mode)
    # The remaining modes are symmetric around zero
    if value < 0:
        return -_round_scaled(-value, digits, mode)

    quotient, remainder = divmod(value, pow10(digits))
    if mode is RoundingMode.UP:
        return quotient + 1 if remainder else quotient
    if mode is RoundingMode.UNNECESSARY:
        if remainder:
            raise InexactResultError(
                f"Expected zero remainder dropping {digits} digits of {value}"
            )
        return quotient

    half = 5 * pow10(digits - 1)
    if mode is RoundingMode.HALF_UP:
        return quotient + 1 if remainder >= half else quotient
    if mode is RoundingMode.HALF_DOWN:
        return quotient + 1 if remainder > half else quotient
    # HALF_EVEN: ties go to the even neighbor
    if remainder > half or (remainder == half and quotient & 1):
        return quotient + 1
    return quotient


def _float_text(value: float) -> str:
    """Shortest positional text that round-trips value (``1.0`` -> ``"1"``)."""
    return np.format_float_positional(value, unique=True, trim="-")


class Decimal:
    """Fixed-point decimal value, or nil.

    Attributes:
        unscaled: The integer before applying the 10**-precision scale
            (None when nil)
        precision: Number of digits after the decimal point
    """

    __slots__ = ("_value", "_precision")
    _value: int | None
    _precision: int

    def __init__(self, value: int | BigInt, precision: int = 0) -> None:
        """Create a Decimal equal to value / 10**precision.

        Raises:
            PrecisionOutOfRangeError: If precision is outside [0, MAX_PRECISION]
            NilValueError: If value is a nil BigInt
            TypeError: If value is not an int or BigInt
        """
        _require_precision(precision)
        if isinstance(value, BigInt):
            value = value.to_int()
        elif not isinstance(value, int) or isinstance(value, bool):
            raise TypeError(f"Decimal requires int, got {type(value).__name__}")
        self._value = value
        self._precision = precision

    @classmethod
    def _from_parts(cls, value: int | None, precision: int) -> Decimal:
        d = object.__new__(cls)
        d._value = value
        d._precision = precision
        return d

    # --- Construction ---

    @classmethod
    def nil(cls) -> Decimal:
        """Create a nil Decimal (distinct from zero)."""
        return cls._from_parts(None, 0)

    @classmethod
    def scaled(cls, value: int, precision: int) -> Decimal:
        """Create value at precision with zeros appended: ``scaled(1, 2)`` is ``1.00``."""
        _require_precision(precision)
        return cls(value * pow10(precision), precision)

    @classmethod
    def from_bigint(cls, value: BigInt, precision: int = 0) -> Decimal:
        return cls(value, precision)

    @classmethod
    def from_float(cls, value: float) -> Decimal:
        """Create from the shortest decimal text of value, never from its binary expansion.

        Raises:
            ContractViolation: If value is not finite or needs more than
                MAX_PRECISION digits
        """
        return cls.must_from_string(_float_text(value))

    @classmethod
    def from_string(cls, text: str) -> Decimal:
        """Parse ``[-]digits[.digits][(e|E)[+-]digits]``.

        The exponent shifts the precision: ``3.7154e3`` has precision 1 and
        ``3.7154e5`` has precision 0 (the digits are scaled up instead).

        Raises:
            InvalidDecimalString: If text is malformed or needs a precision
                above MAX_PRECISION
        """
        precision = 0
        body = text.strip()
        if not body:
            raise InvalidDecimalString("Decimal string cannot be empty")

        e_index = next((i for i, ch in enumerate(body) if ch in "eE"), -1)
        if e_index != -1:
            exponent_text = body[e_index + 1 :]
            if not _EXPONENT.fullmatch(exponent_text):
                raise InvalidDecimalString(f"Can't convert {text} to decimal: exponent is not numeric")
            exponent = text_to_int(exponent_text)
            if not _MIN_EXPONENT <= exponent <= _MAX_EXPONENT:
                raise InvalidDecimalString(f"Can't convert {text} to decimal: exponent out of range")
            body = body[:e_index]
            precision -= exponent

        negative = body.startswith("-")
        if negative:
            body = body[1:]
        if not body:
            raise InvalidDecimalString(f"Invalid decimal string: '{text}'")

        parts = body.split(".")
        if len(parts) > 2:
            raise InvalidDecimalString(f"Invalid decimal string: '{text}'")
        digits = parts[0]
        if len(parts) == 2:
            fraction = parts[1]
            if not digits or not fraction:
                raise InvalidDecimalString(f"Invalid decimal string: '{text}'")
            precision += len(fraction)
            digits += fraction

        if precision > MAX_PRECISION:
            raise InvalidDecimalString(f"Invalid precision; max: {MAX_PRECISION}, got: {precision}")
        if not _DIGITS.fullmatch(digits):
            raise InvalidDecimalString(f"Failed to set decimal string: '{digits}'")

        value = text_to_int(digits)
        if negative:
            value = -value
        if precision < 0:
            value *= pow10(-precision)
            precision = 0
        return cls._from_parts(value, precision)

    @classmethod
    def must_from_string(cls, text: str) -> Decimal:
        """Parse like from_string, treating bad input as a contract violation."""
        try:
            return cls.from_string(text)
        except InvalidDecimalString as err:
            raise ContractViolation(str(err)) from err

    # --- Accessors ---

    @property
    def unscaled(self) -> int | None:
        return self._value

    @property
    def precision(self) -> int:
        return self._precision

    def _int(self) -> int:
        if self._value is None:
            raise NilValueError("Operation on nil Decimal")
        return self._value

    def is_nil(self) -> bool:
        return self._value is None

    def to_bigint(self) -> BigInt:
        """The unscaled integer as a BigInt (nil for a nil Decimal)."""
        return BigInt(self._value)

    def as_fraction(self) -> Fraction:
        """Exact rational value."""
        return Fraction(self._int(), pow10(self._precision))

    def int_part(self) -> BigInt:
        """Integer part, truncated toward zero."""
        return BigInt(div_trunc(self._int(), pow10(self._precision)))

    def remainder(self) -> tuple[BigInt, BigInt]:
        """Integer part and unscaled fractional part; both carry the sign of self."""
        value = self._int()
        int_part = div_trunc(value, pow10(self._precision))
        return BigInt(int_part), BigInt(value - int_part * pow10(self._precision))

    def bit_len(self) -> int:
        """Bit length of the absolute unscaled value."""
        return self._int().bit_length()

    # --- Addition and subtraction ---

    def add(self, other: Decimal) -> Decimal:
        a, b, precision = _rescale_pair(self, other)
        return Decimal._from_parts(a + b, precision)

    def sub(self, other: Decimal) -> Decimal:
        a, b, precision = _rescale_pair(self, other)
        return Decimal._from_parts(a - b, precision)

    def safe_add(self, other: Decimal) -> Decimal:
        """Add, requiring a non-negative result.

        Raises:
            NegativeValueError: If the sum is negative
        """
        return self.add(other).must_non_negative()

    def safe_sub(self, other: Decimal) -> Decimal:
        """Subtract, requiring a non-negative result.

        Raises:
            NegativeValueError: If the difference is negative
        """
        return self.sub(other).must_non_negative()

    def add_raw(self, value: int) -> Decimal:
        """Add value to the unscaled integer, keeping the precision."""
        return Decimal._from_parts(self._int() + value, self._precision)

    def sub_raw(self, value: int) -> Decimal:
        """Subtract value from the unscaled integer, keeping the precision."""
        return Decimal._from_parts(self._int() - value, self._precision)

    # --- Multiplication and division ---

    def mul(self, other: Decimal, mode: RoundingMode) -> Decimal:
        """Multiply, rounding the product back to the common precision with mode."""
        a, b, precision = _rescale_pair(self, other)
        return Decimal._from_parts(_round_scaled(a * b, precision, mode), precision)

    def mul_down(self, other: Decimal) -> Decimal:
        return self.mul(other, RoundingMode.DOWN)

    def quo(self, other: Decimal, mode: RoundingMode) -> Decimal:
        """Divide, rounding to the common precision with mode.

        The dividend is scaled by 10**(2p) so the truncated integer quotient
        carries p extra digits, and a single rounding step brings it back to
        precision p. Two integers (p == 0) are first promoted to precision 1
        so the rounding decision still sees a fractional digit.

        Raises:
            DivisionByZero: If other is zero
        """
        if self._precision == 0 and other._precision == 0:
            dividend = self._int() * 10 * pow10(1) * pow10(1)
            divisor = other._int() * 10
            return Decimal._from_parts(div_trunc(dividend, divisor), 2).rescale(0, mode)

        a, b, precision = _rescale_pair(self, other)
        quotient = div_trunc(a * pow10(precision) * pow10(precision), b)
        return Decimal._from_parts(_round_scaled(quotient, precision, mode), precision)

    def quo_down(self, other: Decimal) -> Decimal:
        return self.quo(other, RoundingMode.DOWN)

    # --- Fixed-width unsigned arithmetic ---

    def unsigned_add(self, other: Decimal, bit_len: BitLen) -> Decimal:
        return _wrap(self.add(other), bit_len)

    def unsigned_add_overflow(self, other: Decimal, bit_len: BitLen) -> tuple[Decimal, bool]:
        return _wrap_overflow(self.add(other), bit_len)

    def unsigned_sub(self, other: Decimal, bit_len: BitLen) -> Decimal:
        return _wrap(self.sub(other), bit_len)

    def unsigned_sub_overflow(self, other: Decimal, bit_len: BitLen) -> tuple[Decimal, bool]:
        return _wrap_overflow(self.sub(other), bit_len)

    def unsigned_mul(self, other: Decimal, mode: RoundingMode, bit_len: BitLen) -> Decimal:
        return _wrap(self.mul(other, mode), bit_len)

    def unsigned_mul_down(self, other: Decimal, bit_len: BitLen) -> Decimal:
        return self.unsigned_mul(other, RoundingMode.DOWN, bit_len)

    def unsigned_mul_overflow(
        self, other: Decimal, mode: RoundingMode, bit_len: BitLen
    ) -> tuple[Decimal, bool]:
        return _wrap_overflow(self.mul(other, mode), bit_len)

    def unsigned_quo(self, other: Decimal, mode: RoundingMode, bit_len: BitLen) -> Decimal:
        return _wrap(self.quo(other, mode), bit_len)

    def unsigned_quo_down(self, other: Decimal, bit_len: BitLen) -> Decimal:
        return self.unsigned_quo(other, RoundingMode.DOWN, bit_len)

    def unsigned_quo_overflow(
        self, other: Decimal, mode: RoundingMode, bit_len: BitLen
    ) -> tuple[Decimal, bool]:
        return _wrap_overflow(self.quo(other, mode), bit_len)

    # --- Powers, roots and logarithms ---

    def power(self, exponent: int) -> Decimal:
        """Raise to an integer power at the receiver's precision.

        Positive exponents use square-and-multiply with HALF_EVEN rounding at
        every step. Negative exponents return ``1 / self**-exponent`` rounded
        UP.

        Raises:
            DivisionByZero: If self is zero and exponent is negative
        """
        self._int()
        if exponent == 0:
            return ONE.rescale(self._precision, RoundingMode.UNNECESSARY)
        if exponent < 0:
            return ONE.quo(self.power(-exponent), RoundingMode.UP)

        acc = Decimal.scaled(1, self._precision)
        result = self
        i = exponent
        while i > 1:
            if i % 2 != 0:
                acc = acc.mul(result, RoundingMode.HALF_EVEN)
            i //= 2
            result = result.mul(result, RoundingMode.HALF_EVEN)
        return result.mul(acc, RoundingMode.HALF_EVEN)

    def sqrt(self, config: MathConfig = DEFAULT_MATH_CONFIG) -> Decimal:
        """Square root at the receiver's precision; see approx_root."""
        return self.approx_root(2, config)

    def approx_root(self, root: int, config: MathConfig = DEFAULT_MATH_CONFIG) -> Decimal:
        """Approximate the root-th root with Newton's method.

        Negative inputs return the negated root of the absolute value. Roots
        <= 1, zero and one are returned unchanged, except that root 0 yields
        exactly one.

        Raises:
            RootApproximationError: If an arithmetic fault occurs while iterating
            NilValueError: If the receiver is nil
        """
        self._int()
        try:
            return self._approx_root(root, config)
        except ContractViolation as err:
            logger.warning("approx_root_failed", root=root, value=str(self), error=str(err))
            raise RootApproximationError(f"Root approximation failed: {err}") from err

    def _approx_root(self, root: int, config: MathConfig) -> Decimal:
        if self.is_negative():
            return self.neg()._approx_root(root, config).neg()
        if root == 1 or root < 0 or self.is_zero() or self == ONE:
            return self
        if root == 0:
            return ONE.rescale(self._precision, RoundingMode.UNNECESSARY)

        precision = self._precision
        guess = Decimal.scaled(1, precision)
        for _ in range(config.max_iterations):
            prev = guess.power(root - 1)
            if prev.is_zero():
                prev = ONE
            step = self.quo(prev, RoundingMode.HALF_EVEN).sub(guess)
            delta = div_trunc(step._int(), root)
            guess = guess.add(Decimal._from_parts(delta, precision))
            if abs(delta) <= config.root_tolerance:
                break
        else:
            logger.warning(
                "approx_root_max_iterations",
                root=root,
                precision=precision,
                max_iterations=config.max_iterations,
            )
        return guess

    def log2(self, config: MathConfig = DEFAULT_MATH_CONFIG) -> Decimal:
        """Base-2 logarithm at the receiver's precision.

        Values below one are first multiplied by 2**(4p) and the exponent is
        subtracted at the end. The integer part of the result is the index of
        the most significant bit; the fraction is produced one binary digit
        per iteration by repeatedly squaring the normalized remainder.

        Raises:
            NonPositiveLogarithmError: If self <= 0
        """
        if self.sign() <= 0:
            raise NonPositiveLogarithmError(f"Logarithm of non-positive value: {self}")

        precision = self._precision
        one = Decimal.scaled(1, precision)
        two = Decimal.scaled(2, precision)

        less_than_one = self < one
        x = self
        exponent = 4 * precision
        if less_than_one:
            x = x.mul(Decimal(2).power(exponent), RoundingMode.HALF_EVEN)

        n = x.int_part().most_significant_bit()
        result = Decimal.scaled(n, precision)

        rem = x.quo(Decimal(2).power(n), RoundingMode.HALF_EVEN)
        for i in range(config.max_iterations):
            if rem.sign() <= 0:
                break
            if rem >= two:
                result = result.add(one.quo(two.power(i), RoundingMode.HALF_EVEN))
                rem = rem.quo(two, RoundingMode.HALF_EVEN)
            rem = rem.power(2)

        if less_than_one:
            result = result.sub(Decimal(exponent))
        return result

    # --- Rescaling and formatting ---

    def rescale(self, precision: int, mode: RoundingMode) -> Decimal:
        """Convert to precision: exact when increasing, rounded with mode when decreasing.

        Raises:
            PrecisionOutOfRangeError: If precision is outside [0, MAX_PRECISION]
            InexactResultError: If mode is UNNECESSARY and digits would be lost
        """
        value = self._int()
        if precision == self._precision:
            return self
        _require_precision(precision)
        diff = self._precision - precision
        if diff < 0:
            return Decimal._from_parts(value * pow10(-diff), precision)
        return Decimal._from_parts(_round_scaled(value, diff, mode), precision)

    def rescale_down(self, precision: int) -> Decimal:
        return self.rescale(precision, RoundingMode.DOWN)

    def strip_trailing_zeros(self) -> Decimal:
        """Numerically equal value without trailing fractional zeros."""
        if self._precision == 0:
            return self
        whole, fraction = str(self).split(".")
        fraction = fraction.rstrip("0")
        if not fraction:
            return Decimal.must_from_string(whole)
        return Decimal.must_from_string(f"{whole}.{fraction}")

    def significant_figures(self, figures: int, mode: RoundingMode) -> Decimal:
        """Round to the given number of significant figures.

        Leading zeros after the decimal point do not count. Integer digits
        are never dropped; the precision never increases.

        Raises:
            InvalidArgumentError: If figures <= 0
        """
        if figures <= 0:
            raise InvalidArgumentError(f"figures must be greater than 0, got {figures}")
        if self._precision == 0 or self._precision <= figures:
            return self

        whole, fraction = str(self.abs()).split(".")
        if whole != "0":
            figures = max(figures - len(whole), 0)
            return self.rescale(min(figures, self._precision), mode)
        for i, digit in enumerate(fraction):
            if digit != "0":
                return self.rescale(min(figures + i, self._precision), mode)
        return self

    # --- Sign and comparison ---

    def must_non_negative(self) -> Decimal:
        """Return self, or raise NegativeValueError if self is negative."""
        if self.sign() < 0:
            raise NegativeValueError(f"Negative value: {self}")
        return self

    def cmp(self, other: Decimal) -> int:
        """Return -1, 0 or +1 as self is less than, equal to or greater than other."""
        a, b, _ = _rescale_pair(self, other)
        return (a > b) - (a < b)

    def sign(self) -> int:
        value = self._int()
        return (value > 0) - (value < 0)

    def is_zero(self) -> bool:
        return self.sign() == 0

    def is_negative(self) -> bool:
        return self.sign() < 0

    def is_positive(self) -> bool:
        return self.sign() > 0

    def neg(self) -> Decimal:
        return Decimal._from_parts(-self._int(), self._precision)

    def abs(self) -> Decimal:
        if self.is_negative():
            return self.neg()
        return self

    def __add__(self, other: object) -> Decimal:
        if not isinstance(other, Decimal):
            return NotImplemented
        return self.add(other)

    def __sub__(self, other: object) -> Decimal:
        if not isinstance(other, Decimal):
            return NotImplemented
        return self.sub(other)

    def __neg__(self) -> Decimal:
        return self.neg()

    def __pos__(self) -> Decimal:
        return self

    def __abs__(self) -> Decimal:
        return self.abs()

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Decimal):
            return NotImplemented
        if self._value is None or other._value is None:
            return self._value is None and other._value is None
        return self.cmp(other) == 0

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, Decimal):
            return NotImplemented
        return self.cmp(other) < 0

    def __le__(self, other: object) -> bool:
        if not isinstance(other, Decimal):
            return NotImplemented
        return self.cmp(other) <= 0

    def __gt__(self, other: object) -> bool:
        if not isinstance(other, Decimal):
            return NotImplemented
        return self.cmp(other) > 0

    def __ge__(self, other: object) -> bool:
        if not isinstance(other, Decimal):
            return NotImplemented
        return self.cmp(other) >= 0

    def __hash__(self) -> int:
        # Equal values hash equally regardless of precision
        if self._value is None:
            return hash(None)
        return hash(self.as_fraction())

    def __repr__(self) -> str:
        if self._value is None:
            return "Decimal(None)"
        return f"Decimal('{self}')"

    def __str__(self) -> str:
        """Canonical text: exactly `precision` digits after the point, zero-padded."""
        if self._value is None:
            return NIL_STRING
        if self._precision == 0:
            return int_to_text(self._value)

        digits = int_to_text(abs(self._value))
        if len(digits) <= self._precision:
            text = "0." + digits.rjust(self._precision, "0")
        else:
            point = len(digits) - self._precision
            text = f"{digits[:point]}.{digits[point:]}"
        return "-" + text if self._value < 0 else text

    # --- Serialization ---

    def to_json(self) -> str:
        """Quoted canonical string, or ``null`` when nil."""
        if self._value is None:
            return "null"
        return f'"{self}"'

    @classmethod
    def from_json(cls, data: str | bytes) -> Decimal:
        """Decode a quoted string or bare JSON number. ``null`` decodes to zero.

        Raises:
            DecodeError: If data is not a JSON string, number or null
            InvalidDecimalString: If the token is not a valid decimal
        """
        text = decode_json_token(data)
        if text is None:
            return cls(0)
        return cls.from_string(text)

    def marshal_binary(self) -> bytes:
        """Big-endian uint32 precision followed by the encoded unscaled integer.

        A nil Decimal encodes to empty bytes.
        """
        if self._value is None:
            return b""
        return self._precision.to_bytes(PRECISION_FIXED_SIZE, "big") + encode_int(self._value)

    @classmethod
    def unmarshal_binary(cls, data: bytes) -> Decimal:
        """Decode marshal_binary output. Empty input decodes to zero (not nil).

        Raises:
            DecodeError: If data is truncated, malformed, or carries a
                precision above MAX_PRECISION
        """
        if len(data) == 0:
            return cls(0)
        if len(data) < PRECISION_FIXED_SIZE:
            logger.debug("decode_failed", reason="short_binary", size=len(data))
            raise DecodeError(
                f"Error decoding binary {data!r}: expected at least "
                f"{PRECISION_FIXED_SIZE} bytes, got {len(data)}"
            )
        precision = int.from_bytes(data[:PRECISION_FIXED_SIZE], "big")
        if precision > MAX_PRECISION:
            logger.debug("decode_failed", reason="precision_out_of_range", precision=precision)
            raise DecodeError(f"Encoded precision {precision} exceeds {MAX_PRECISION}")
        return cls._from_parts(decode_int(data[PRECISION_FIXED_SIZE:]), precision)

    def binary_size(self) -> int:
        return len(self.marshal_binary())

    def to_sql(self) -> str | None:
        """Database column value: canonical text, None (NULL) when nil."""
        if self._value is None:
            return None
        return str(self)

    @classmethod
    def from_sql(cls, value: Any) -> Decimal:
        """Read a database column value.

        Numeric columns arrive as int or float (sqlite3 returns 0 as int);
        text columns as possibly-quoted str or bytes. SQL NULL reads back as
        nil.
        """
        if value is None:
            return cls.nil()
        if isinstance(value, (float, np.floating)):
            return cls.from_float(float(value))
        if isinstance(value, (int, np.integer)) and not isinstance(value, bool):
            return cls(int(value))
        return cls.from_string(unquote_if_quoted(value))

    @classmethod
    def __get_pydantic_core_schema__(
        cls, source_type: Any, handler: GetCoreSchemaHandler
    ) -> core_schema.CoreSchema:
        return core_schema.no_info_plain_validator_function(
            _validate_decimal,
            serialization=core_schema.plain_serializer_function_ser_schema(
                _serialize_decimal, when_used="json"
            ),
        )


def _rescale_pair(a: Decimal, b: Decimal) -> tuple[int, int, int]:
    """Unscaled values of a and b at their common (larger) precision."""
    a_value, b_value = a._int(), b._int()
    precision = max(a._precision, b._precision)
    a_value *= pow10(precision - a._precision)
    b_value *= pow10(precision - b._precision)
    return a_value, b_value, precision


def _wrap(result: Decimal, bit_len: BitLen) -> Decimal:
    return Decimal._from_parts(bit_len.wrap(result._int()), result._precision)


def _wrap_overflow(result: Decimal, bit_len: BitLen) -> tuple[Decimal, bool]:
    overflow = bit_len.overflows(result._int())
    return _wrap(result, bit_len), overflow


def _validate_decimal(value: Any) -> Decimal:
    if isinstance(value, Decimal):
        return value
    if value is None:
        return Decimal(0)
    if isinstance(value, bool):
        raise ValueError("Decimal cannot be built from a boolean")
    if isinstance(value, int):
        return Decimal(value)
    if isinstance(value, float):
        return Decimal.from_string(_float_text(value))
    if isinstance(value, str):
        return Decimal.from_string(value)
    raise ValueError(f"Decimal must be string or number, got {type(value).__name__}")


def _serialize_decimal(value: Decimal) -> str | None:
    return value.to_sql()


def max_decimal(a: Decimal, b: Decimal) -> Decimal:
    """Return the larger of a and b (a on ties)."""
    if a.cmp(b) >= 0:
        return a
    return b


def min_decimal(a: Decimal, b: Decimal) -> Decimal:
    """Return the smaller of a and b (a on ties)."""
    if a.cmp(b) <= 0:
        return a
    return b


ZERO = Decimal(0)
ONE = Decimal(1)
TEN = Decimal(10)
