"""Error classes for BigInt and Decimal arithmetic.

Errors fall into two tiers:

- DecimalError: recoverable problems with caller-supplied input (malformed
  text, undecodable bytes, values outside a function's domain). Callers may
  correct the input and retry.
- ContractViolation: programmer errors (bad precision, inexact UNNECESSARY
  rounding, division by zero, negative results from safe operations). These
  abort the current call and must not be converted into default values.
"""


class DecimalError(Exception):
    """Base class for recoverable decimal errors."""

    pass


class InvalidDecimalString(DecimalError, ValueError):
    """Decimal text could not be parsed."""

    pass


class InvalidBigIntString(DecimalError, ValueError):
    """Integer text could not be parsed in any supported base."""

    pass


class NonPositiveLogarithmError(DecimalError, ValueError):
    """Logarithm requested for a value <= 0."""

    pass


class RootApproximationError(DecimalError):
    """Newton iteration for an n-th root failed."""

    pass


class DecodeError(DecimalError, ValueError):
    """Binary, JSON or SQL payload could not be decoded."""

    pass


class ContractViolation(ArithmeticError):
    """Base class for fatal contract violations."""

    pass


class PrecisionOutOfRangeError(ContractViolation):
    """Precision outside [0, MAX_PRECISION]."""

    pass


class InexactResultError(ContractViolation):
    """UNNECESSARY rounding requested but the result has a remainder."""

    pass


class NegativeValueError(ContractViolation):
    """Operation is undefined for, or must not produce, a negative value."""

    pass


class DivisionByZero(ContractViolation, ZeroDivisionError):
    """Division or modulo by zero."""

    pass


class InvalidRoundingModeError(ContractViolation, ValueError):
    """Rounding mode is not supported by the operation."""

    pass


class NilValueError(ContractViolation):
    """Arithmetic on a nil (uninitialized) value."""

    pass


class InvalidArgumentError(ContractViolation, ValueError):
    """Argument violates the operation's precondition."""

    pass
