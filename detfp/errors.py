"""Fixed-point arithmetic error classes.

Every error is an ArithmeticError so callers can catch the whole family
without importing this module.
"""


class FixedPointError(ArithmeticError):
    """Base class for fixed-point and fixed-width integer errors."""

    pass


class DivideByZero(FixedPointError):
    """Division or modulo by zero."""

    pass


class Underflow(FixedPointError):
    """Result would be negative in an unsigned type."""

    pass


class Overflow(FixedPointError):
    """Result or widened intermediate exceeds its bit width."""

    pass
