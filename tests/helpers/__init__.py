"""Test helpers module for shared test utilities.

This module consolidates common test utilities to reduce duplication:
- constants: Boundary integers and their decimal text
- factories: Decimal factory functions
"""

from tests.helpers.constants import (
    MAX_UINT128,
    MAX_UINT128_TEXT,
    MAX_UINT256,
    MAX_UINT256_TEXT,
)
from tests.helpers.factories import D, make_decimal, make_scaled

__all__ = [
    # Constants
    "MAX_UINT128",
    "MAX_UINT128_TEXT",
    "MAX_UINT256",
    "MAX_UINT256_TEXT",
    # Factories
    "D",
    "make_decimal",
    "make_scaled",
]
