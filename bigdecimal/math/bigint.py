"""Immutable arbitrary-precision signed integer.

BigInt wraps a Python int and adds the operations on-chain integer math
needs on top of it: truncating and mode-aware division, bit scans, and the
canonical text/JSON/binary/SQL codecs. Every operation returns a new
instance.

A BigInt constructed without a value is *nil*. Nil is distinct from zero:
it serializes as JSON ``null``, empty bytes and SQL NULL, and any
arithmetic on it is a contract violation.

Usage:
    from bigdecimal.math.bigint import BigInt
    from bigdecimal.math.rounding import RoundingMode

    a = BigInt(5)
    a.quo(BigInt(-2), RoundingMode.UP)   # BigInt(-3)
    a.quo_down(-2)                       # BigInt(-2)
"""

from __future__ import annotations

import math
import re
from typing import Any

from pydantic import GetCoreSchemaHandler
from pydantic_core import core_schema

from bigdecimal.constants import NIL_STRING
from bigdecimal.errors import (
    ContractViolation,
    DivisionByZero,
    InexactResultError,
    InvalidBigIntString,
    InvalidRoundingModeError,
    NegativeValueError,
    NilValueError,
)
from bigdecimal.marshal import decode_int, decode_json_token, encode_int, unquote_if_quoted
from bigdecimal.math.bits import (
    div_trunc,
    int_to_text,
    least_significant_bit,
    most_significant_bit,
    text_to_int,
)
from bigdecimal.math.rounding import RoundingMode

__all__ = ["BigInt", "max_bigint", "min_bigint", "ZERO", "ONE", "TEN"]

_DIGITS_BY_BASE = {
    10: re.compile(r"[+-]?[0-9]+"),
    16: re.compile(r"[+-]?[0-9a-fA-F]+"),
    2: re.compile(r"[+-]?[01]+"),
}


class BigInt:
    """Arbitrary-precision signed integer, or nil.

    Attributes:
        value: The underlying integer (read-only; None when nil)
    """

    __slots__ = ("_value",)
    _value: int | None

    def __init__(self, value: int | BigInt | None = None) -> None:
        """Create a BigInt from an int, another BigInt, or nothing (nil).

        Raises:
            TypeError: If value is not an int, BigInt or None
        """
        if isinstance(value, BigInt):
            self._value = value._value
        elif value is None or (isinstance(value, int) and not isinstance(value, bool)):
            self._value = value
        else:
            raise TypeError(f"BigInt requires int, got {type(value).__name__}")

    @classmethod
    def nil(cls) -> BigInt:
        """Create a nil BigInt."""
        return cls()

    @classmethod
    def from_string(cls, text: str) -> BigInt:
        """Parse decimal, ``0x``-prefixed hex or ``0b``-prefixed binary text.

        Raises:
            InvalidBigIntString: If text is not a valid integer
        """
        base = 10
        digits = text
        if text[:2] in ("0x", "0X"):
            base, digits = 16, text[2:]
        elif text[:2] in ("0b", "0B"):
            base, digits = 2, text[2:]

        if not _DIGITS_BY_BASE[base].fullmatch(digits):
            raise InvalidBigIntString(f"Invalid integer string: '{text}'")
        if base == 10:
            return cls(text_to_int(digits))
        return cls(int(digits, base))

    @classmethod
    def must_from_string(cls, text: str) -> BigInt:
        """Parse like from_string, treating bad input as a contract violation."""
        try:
            return cls.from_string(text)
        except InvalidBigIntString as err:
            raise ContractViolation(str(err)) from err

    @property
    def value(self) -> int | None:
        """The underlying integer value, None when nil."""
        return self._value

    def _int(self) -> int:
        if self._value is None:
            raise NilValueError("Operation on nil BigInt")
        return self._value

    def is_nil(self) -> bool:
        return self._value is None

    def to_int(self) -> int:
        """Return the underlying int.

        Raises:
            NilValueError: If self is nil
        """
        return self._int()

    # --- Arithmetic ---

    def add(self, other: BigInt | int) -> BigInt:
        return BigInt(self._int() + _extract_value(other))

    def sub(self, other: BigInt | int) -> BigInt:
        return BigInt(self._int() - _extract_value(other))

    def mul(self, other: BigInt | int) -> BigInt:
        return BigInt(self._int() * _extract_value(other))

    def mod(self, other: BigInt | int) -> BigInt:
        """Euclidean modulus: the result is always in [0, |other|).

        Raises:
            DivisionByZero: If other is zero
        """
        divisor = _extract_value(other)
        if divisor == 0:
            raise DivisionByZero(f"Modulo by zero: {self._int()} % 0")
        return BigInt(self._int() % abs(divisor))

    def power(self, exponent: int) -> BigInt:
        """Raise to a non-negative integer power.

        Raises:
            NegativeValueError: If exponent is negative
        """
        if exponent < 0:
            raise NegativeValueError(f"Negative exponent: {exponent}")
        return BigInt(self._int() ** exponent)

    def quo_down(self, other: BigInt | int) -> BigInt:
        """Quotient truncated toward zero."""
        return self.quo(other, RoundingMode.DOWN)

    def quo(self, other: BigInt | int, mode: RoundingMode) -> BigInt:
        """Quotient rounded with mode.

        Only DOWN, UP, CEILING and UNNECESSARY are meaningful for integer
        division; the half-rounding modes are rejected.

        Raises:
            DivisionByZero: If other is zero
            InexactResultError: If mode is UNNECESSARY and there is a remainder
            InvalidRoundingModeError: For any other mode
        """
        dividend = self._int()
        divisor = _extract_value(other)
        if mode is RoundingMode.DOWN:
            return BigInt(div_trunc(dividend, divisor))
        if mode is RoundingMode.UP:
            return BigInt(_quo_up(dividend, divisor))
        if mode is RoundingMode.CEILING:
            if (dividend < 0) == (divisor < 0):
                return BigInt(_quo_up(dividend, divisor))
            return BigInt(div_trunc(dividend, divisor))
        if mode is RoundingMode.UNNECESSARY:
            quotient = div_trunc(dividend, divisor)
            if quotient * divisor != dividend:
                raise InexactResultError(f"Expected zero remainder: {dividend} / {divisor}")
            return BigInt(quotient)
        raise InvalidRoundingModeError(f"Rounding mode {mode!r} not supported for integer division")

    def sqrt(self) -> BigInt:
        """Integer square root, rounded down.

        Raises:
            NegativeValueError: If self is negative
        """
        value = self._int()
        if value < 0:
            raise NegativeValueError(f"Square root of negative number: {value}")
        return BigInt(math.isqrt(value))

    def shift_left(self, n: int) -> BigInt:
        return BigInt(self._int() << n)

    def shift_right(self, n: int) -> BigInt:
        return BigInt(self._int() >> n)

    def neg(self) -> BigInt:
        return BigInt(-self._int())

    def abs(self) -> BigInt:
        if self.is_negative():
            return self.neg()
        return self

    # --- Inspection ---

    def cmp(self, other: BigInt | int) -> int:
        """Return -1, 0 or +1 as self is less than, equal to or greater than other."""
        a, b = self._int(), _extract_value(other)
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

    def bit_len(self) -> int:
        """Bit length of the absolute value."""
        return self._int().bit_length()

    def most_significant_bit(self) -> int:
        return most_significant_bit(self._int())

    def least_significant_bit(self) -> int:
        return least_significant_bit(self._int())

    # --- Operators ---

    def __add__(self, other: BigInt | int) -> BigInt:
        return self.add(other)

    def __radd__(self, other: int) -> BigInt:
        return BigInt(other + self._int())

    def __sub__(self, other: BigInt | int) -> BigInt:
        return self.sub(other)

    def __rsub__(self, other: int) -> BigInt:
        return BigInt(other - self._int())

    def __mul__(self, other: BigInt | int) -> BigInt:
        return self.mul(other)

    def __rmul__(self, other: int) -> BigInt:
        return BigInt(other * self._int())

    def __mod__(self, other: BigInt | int) -> BigInt:
        return self.mod(other)

    def __pow__(self, exponent: int) -> BigInt:
        return self.power(exponent)

    def __lshift__(self, n: int) -> BigInt:
        return self.shift_left(n)

    def __rshift__(self, n: int) -> BigInt:
        return self.shift_right(n)

    def __neg__(self) -> BigInt:
        return self.neg()

    def __pos__(self) -> BigInt:
        return self

    def __abs__(self) -> BigInt:
        return self.abs()

    def __eq__(self, other: object) -> bool:
        if isinstance(other, BigInt):
            return self._value == other._value
        if isinstance(other, int) and not isinstance(other, bool):
            return self._value == other
        return NotImplemented

    def __ne__(self, other: object) -> bool:
        result = self.__eq__(other)
        if result is NotImplemented:
            return NotImplemented
        return not result

    def __lt__(self, other: BigInt | int) -> bool:
        return self.cmp(other) < 0

    def __le__(self, other: BigInt | int) -> bool:
        return self.cmp(other) <= 0

    def __gt__(self, other: BigInt | int) -> bool:
        return self.cmp(other) > 0

    def __ge__(self, other: BigInt | int) -> bool:
        return self.cmp(other) >= 0

    def __hash__(self) -> int:
        return hash(self._value)

    def __int__(self) -> int:
        return self._int()

    def __index__(self) -> int:
        return self._int()

    def __bool__(self) -> bool:
        """True if non-nil and non-zero."""
        return bool(self._value)

    def __repr__(self) -> str:
        if self._value is None:
            return "BigInt(None)"
        return f"BigInt({int_to_text(self._value)})"

    def __str__(self) -> str:
        if self._value is None:
            return NIL_STRING
        return int_to_text(self._value)

    # --- Serialization ---

    def to_json(self) -> str:
        """Quoted decimal string, or ``null`` when nil."""
        if self._value is None:
            return "null"
        return f'"{int_to_text(self._value)}"'

    @classmethod
    def from_json(cls, data: str | bytes) -> BigInt:
        """Decode a quoted string or bare JSON number. ``null`` decodes to zero.

        Raises:
            DecodeError: If data is not a JSON string, number or null
            InvalidBigIntString: If the token is not an integer
        """
        text = decode_json_token(data)
        if text is None:
            return cls(0)
        return cls.from_string(text)

    def marshal_binary(self) -> bytes:
        """Sign-magnitude encoding; nil encodes to empty bytes."""
        if self._value is None:
            return b""
        return encode_int(self._value)

    @classmethod
    def unmarshal_binary(cls, data: bytes) -> BigInt:
        """Decode marshal_binary output. Empty input decodes to zero (not nil)."""
        return cls(decode_int(data))

    def binary_size(self) -> int:
        return len(self.marshal_binary())

    def to_sql(self) -> str | None:
        """Database column value: canonical text, None (NULL) when nil."""
        if self._value is None:
            return None
        return int_to_text(self._value)

    @classmethod
    def from_sql(cls, value: Any) -> BigInt:
        """Read a database column value: int, or possibly-quoted text/bytes.

        SQL NULL reads back as nil.
        """
        if value is None:
            return cls()
        if isinstance(value, int) and not isinstance(value, bool):
            return cls(value)
        return cls.from_string(unquote_if_quoted(value))

    @classmethod
    def __get_pydantic_core_schema__(
        cls, source_type: Any, handler: GetCoreSchemaHandler
    ) -> core_schema.CoreSchema:
        return core_schema.no_info_plain_validator_function(
            _validate_bigint,
            serialization=core_schema.plain_serializer_function_ser_schema(
                _serialize_bigint, when_used="json"
            ),
        )


def _extract_value(x: BigInt | int) -> int:
    """Extract integer value from BigInt or int."""
    if isinstance(x, BigInt):
        return x._int()
    return x


def _quo_up(dividend: int, divisor: int) -> int:
    """Quotient rounded away from zero."""
    quotient = div_trunc(dividend, divisor)
    if quotient * divisor == dividend:
        return quotient
    if (dividend < 0) != (divisor < 0):
        return quotient - 1
    return quotient + 1


def _validate_bigint(value: Any) -> BigInt:
    if isinstance(value, BigInt):
        return value
    if value is None:
        return BigInt(0)
    if isinstance(value, int) and not isinstance(value, bool):
        return BigInt(value)
    if isinstance(value, str):
        return BigInt.from_string(value)
    raise ValueError(f"BigInt must be string or int, got {type(value).__name__}")


def _serialize_bigint(value: BigInt) -> str | None:
    return value.to_sql()


def max_bigint(a: BigInt, b: BigInt) -> BigInt:
    """Return the larger of a and b (a on ties)."""
    if a.cmp(b) >= 0:
        return a
    return b


def min_bigint(a: BigInt, b: BigInt) -> BigInt:
    """Return the smaller of a and b (a on ties)."""
    if a.cmp(b) <= 0:
        return a
    return b


ZERO = BigInt(0)
ONE = BigInt(1)
TEN = BigInt(10)
