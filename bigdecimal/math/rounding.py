"""Rounding policies shared by BigInt division and Decimal rescaling."""

from enum import Enum


class RoundingMode(Enum):
    """How to dispose of digits that do not fit the target precision."""

    # Toward zero
    DOWN = 0
    # Away from zero
    UP = 1
    # Toward positive infinity
    CEILING = 2
    # Nearest neighbor, ties away from zero
    HALF_UP = 3
    # Nearest neighbor, ties toward zero
    HALF_DOWN = 4
    # Nearest neighbor, ties to the even neighbor (banker's rounding)
    HALF_EVEN = 5
    # Assert the result is exact
    UNNECESSARY = 6
