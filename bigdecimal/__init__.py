"""Arbitrary-precision fixed-point decimals - Python Implementation."""

from bigdecimal.config import DEFAULT_MATH_CONFIG, MathConfig
from bigdecimal.errors import ContractViolation, DecimalError
from bigdecimal.math import (
    UINT128_BIT_LEN,
    UINT256_BIT_LEN,
    BigInt,
    BitLen,
    Decimal,
    RoundingMode,
    max_bigint,
    max_decimal,
    min_bigint,
    min_decimal,
)

__version__ = "0.1.0"
__all__ = [
    "BigInt",
    "BitLen",
    "ContractViolation",
    "DEFAULT_MATH_CONFIG",
    "Decimal",
    "DecimalError",
    "MathConfig",
    "RoundingMode",
    "UINT128_BIT_LEN",
    "UINT256_BIT_LEN",
    "max_bigint",
    "max_decimal",
    "min_bigint",
    "min_decimal",
    "__version__",
]
