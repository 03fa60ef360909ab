"""Fixed-width unsigned overflow descriptors.

A BitLen describes an unsigned integer width (uint128, uint256) and the
wrap used to emulate on-chain overflow: any signed result is reduced into
[0, 2**bit_len) exactly as two's-complement wraparound would.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class BitLen:
    """Unsigned integer width used by the Decimal.unsigned_* operations.

    Attributes:
        bit_len: Width in bits (128 or 256 for the predefined instances)
    """

    bit_len: int

    def __post_init__(self) -> None:
        if self.bit_len <= 0:
            raise ValueError(f"bit_len must be positive, got {self.bit_len}")

    @property
    def max_value(self) -> int:
        """Largest representable value, 2**bit_len - 1."""
        return (1 << self.bit_len) - 1

    def wrap(self, value: int) -> int:
        """Reduce value to (value + 2**bit_len) mod 2**bit_len."""
        return (value + (1 << self.bit_len)) & self.max_value

    def overflows(self, value: int) -> bool:
        """True if value needs more than bit_len bits (sign ignored)."""
        return value.bit_length() > self.bit_len


UINT128_BIT_LEN = BitLen(128)
UINT256_BIT_LEN = BitLen(256)
