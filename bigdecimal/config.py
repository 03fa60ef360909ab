"""Iteration settings for the approximation algorithms."""

from __future__ import annotations

import os
from dataclasses import dataclass

from bigdecimal.constants import MAX_ITERATIONS

MAX_ITERATIONS_ENV = "BIGDECIMAL_MAX_ITERATIONS"


@dataclass(frozen=True)
class MathConfig:
    """Configuration for approx_root, sqrt and log2.

    The defaults give the full-precision results; tests and
    callers that need faster (less precise) approximations can pass a
    custom instance.

    Attributes:
        max_iterations: Hard cap on Newton and binary-expansion loops
            (default: 300)
        root_tolerance: Newton stops once |delta| <= this many unscaled
            units (default: 1)
    """

    max_iterations: int = MAX_ITERATIONS
    root_tolerance: int = 1

    def __post_init__(self) -> None:
        if self.max_iterations < 0:
            raise ValueError(f"max_iterations must be non-negative, got {self.max_iterations}")
        if self.root_tolerance < 0:
            raise ValueError(f"root_tolerance must be non-negative, got {self.root_tolerance}")

    @classmethod
    def from_env(cls) -> MathConfig:
        """Build a config from BIGDECIMAL_MAX_ITERATIONS, falling back to defaults."""
        raw = os.environ.get(MAX_ITERATIONS_ENV)
        if raw is None or raw.strip() == "":
            return cls()
        try:
            max_iterations = int(raw)
        except ValueError as err:
            raise ValueError(f"{MAX_ITERATIONS_ENV} must be an integer, got '{raw}'") from err
        return cls(max_iterations=max_iterations)


# Default configuration instance
DEFAULT_MATH_CONFIG = MathConfig()
