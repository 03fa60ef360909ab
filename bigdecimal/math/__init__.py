"""Numeric types for the bigdecimal package.

This package provides the arithmetic primitives:
- BigInt: arbitrary-precision integer with mode-aware division
- Decimal: fixed-point decimal with explicit rounding
- RoundingMode: the seven rounding policies
- BitLen: unsigned widths for wraparound arithmetic
"""

from bigdecimal.math.bigint import BigInt, max_bigint, min_bigint
from bigdecimal.math.bit_len import UINT128_BIT_LEN, UINT256_BIT_LEN, BitLen
from bigdecimal.math.decimal import Decimal, max_decimal, min_decimal
from bigdecimal.math.rounding import RoundingMode

__all__ = [
    "BigInt",
    "BitLen",
    "Decimal",
    "RoundingMode",
    "UINT128_BIT_LEN",
    "UINT256_BIT_LEN",
    "max_bigint",
    "max_decimal",
    "min_bigint",
    "min_decimal",
]
