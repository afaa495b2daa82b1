"""Unsigned fixed-point decimal arithmetic.

Values are stored as fixed-width unsigned integers scaled by 10^D:
- UFixed256: 256-bit backing integer, 18 decimal places
- UFixed64: 64-bit backing integer, 6 decimal places (adds sqrt)

Example: with D = 18, 1.5 is stored as 1_500_000_000_000_000_000.

All rounding is round-half-up. Multiplication and division go through an
explicit double-width intermediate (U512 / U128) and are narrowed back to
the native width only after rescaling, so the result is bit-identical on
every platform. Nothing wraps silently: results that do not fit raise
Overflow, negative results raise Underflow.
"""

from __future__ import annotations

import re
from decimal import Decimal
from typing import ClassVar, Self

import structlog

from detfp.config import NARROW, WIDE, Precision
from detfp.constants import SQRT_ITERATIONS
from detfp.errors import DivideByZero, Overflow
from detfp.safe_int import U64, U256, SafeUint

logger = structlog.get_logger()

__all__ = [
    "UnsignedFixedPoint",
    "UFixed256",
    "UFixed64",
    "scale_fraction",
    "parse_decimal",
    "format_decimal",
]

_DECIMAL_RE = re.compile(r"^\s*([+-]?)(\d+)(?:\.(\d+))?\s*$")


def scale_fraction(frac: int, frac_digits: int, decimals: int) -> int:
    """Rescale a fractional part with frac_digits digits to decimals digits.

    Extra digits beyond `decimals` are truncated, not rounded. Fewer digits
    are zero-padded on the right.

    Examples:
        scale_fraction(5, 1, 6) == 500_000          # 0.5
        scale_fraction(1234567, 7, 6) == 123_456    # 0.1234567 -> 0.123456

    Raises:
        ValueError: If frac or frac_digits is negative, or frac has more
            than frac_digits digits
    """
    if frac < 0:
        raise ValueError(f"Fractional part must be non-negative, got {frac}")
    if frac_digits < 0:
        raise ValueError(f"frac_digits must be non-negative, got {frac_digits}")
    if frac >= 10**frac_digits:
        raise ValueError(f"Fractional part {frac} has more than {frac_digits} digits")
    if frac_digits >= decimals:
        return frac // 10 ** (frac_digits - decimals)
    return frac * 10 ** (decimals - frac_digits)


def parse_decimal(text: str) -> tuple[bool, int, int, int]:
    """Split a decimal string into (negative, whole, frac, frac_digits).

    Accepts an optional sign, digits, and an optional fractional part:
    "12", "-0.5", "+3.1415".

    Raises:
        ValueError: If text is not a plain decimal number
    """
    match = _DECIMAL_RE.match(text)
    if match is None:
        raise ValueError(f"Not a decimal number: {text!r}")
    sign, whole, frac = match.groups()
    frac = frac or ""
    return sign == "-", int(whole), int(frac or "0"), len(frac)


def format_decimal(whole: int, frac: int, decimals: int) -> str:
    """Render whole and scaled fractional parts, trimming trailing zeros."""
    if decimals == 0 or frac == 0:
        return str(whole)
    digits = f"{frac:0{decimals}d}".rstrip("0")
    return f"{whole}.{digits}"


class UnsignedFixedPoint:
    """Unsigned fixed-point number over a fixed-width integer.

    Subclasses bind a Precision and the matching native and widened
    integer types. Instances are immutable.
    """

    PRECISION: ClassVar[Precision]
    INT: ClassVar[type[SafeUint]]
    SCALE: ClassVar[int]
    HALF_SCALE: ClassVar[int]
    DECIMALS: ClassVar[int]

    __slots__ = ("_raw",)
    _raw: SafeUint

    def __init_subclass__(cls, **kwargs: object) -> None:
        super().__init_subclass__(**kwargs)
        precision = cls.__dict__.get("PRECISION")
        if precision is not None:
            cls.SCALE = precision.scale
            cls.HALF_SCALE = precision.half_scale
            cls.DECIMALS = precision.decimals

    def __init__(self, raw: int | SafeUint) -> None:
        """Create from a raw scaled value.

        Raises:
            Underflow: If raw is negative
            Overflow: If raw exceeds the native width
        """
        object.__setattr__(self, "_raw", self.INT(raw))

    def __setattr__(self, name: str, value: object) -> None:
        raise AttributeError(f"{type(self).__name__} is immutable")

    def __reduce__(self) -> tuple[type[Self], tuple[int]]:
        return type(self), (self._raw.value,)

    # --- Construction ---

    @classmethod
    def from_raw(cls, raw: int | SafeUint) -> Self:
        """Wrap a pre-scaled integer as-is."""
        return cls(raw)

    @classmethod
    def from_integer(cls, n: int) -> Self:
        """Create from a whole number (raw = n * SCALE).

        Raises:
            Overflow: If n * SCALE exceeds the native width
        """
        return cls(cls.INT(n) * cls.SCALE)

    @classmethod
    def from_parts(cls, whole: int, frac: int, frac_digits: int) -> Self:
        """Create from a whole part and a fractional part of frac_digits digits.

        from_parts(23, 1, 1) is 23.1; from_parts(6, 4789374, 7) is 6.4789374.
        Digits beyond DECIMALS are truncated.

        Raises:
            Overflow: If the result exceeds the native width
            ValueError: If frac or frac_digits is negative, or frac has more
                than frac_digits digits
        """
        scaled = scale_fraction(frac, frac_digits, cls.DECIMALS)
        return cls(cls.INT(whole) * cls.SCALE + cls.INT(scaled))

    @classmethod
    def from_decimal_str(cls, text: str) -> Self:
        """Parse a non-negative decimal string such as "246.1996212".

        Raises:
            ValueError: If text is malformed or negative
        """
        negative, whole, frac, frac_digits = parse_decimal(text)
        if negative:
            raise ValueError(f"{cls.__name__} requires non-negative input, got {text!r}")
        return cls.from_parts(whole, frac, frac_digits)

    @classmethod
    def zero(cls) -> Self:
        return cls(cls.INT.zero())

    @classmethod
    def one(cls) -> Self:
        return cls(cls.SCALE)

    # --- Accessors ---

    @property
    def raw(self) -> int:
        """The underlying scaled integer."""
        return self._raw.value

    def floor(self) -> int:
        """Whole part, rounded down."""
        return self._raw.value // self.SCALE

    def fractional_part(self) -> int:
        """Scaled fractional remainder, in [0, SCALE)."""
        return self._raw.value % self.SCALE

    def round(self) -> int:
        """Nearest whole number, ties rounded up.

        Raises:
            Overflow: If floor() + 1 exceeds the native width
        """
        whole = self.INT(self.floor())
        if self.fractional_part() >= self.HALF_SCALE:
            whole = whole + 1
        return whole.value

    def is_zero(self) -> bool:
        return self._raw.value == 0

    def to_decimal(self) -> Decimal:
        """Convert to an exact Decimal for display."""
        return Decimal(str(self))

    # --- Arithmetic ---

    def _check_operand(self, other: object) -> None:
        if type(other) is not type(self):
            raise TypeError(
                f"Cannot combine {type(self).__name__} with {type(other).__name__}"
            )

    def _narrow(self, wide: SafeUint, op: str, other: Self) -> Self:
        if wide.value > self.INT.MAX:
            logger.debug(
                "fixed_point_overflow",
                type=type(self).__name__,
                op=op,
                a=self.raw,
                b=other.raw,
            )
            raise Overflow(f"{type(self).__name__} {op} overflow: {self.raw} {op} {other.raw}")
        return type(self)(wide.narrow_to(self.INT))

    def add(self, other: Self) -> Self:
        """Add two values.

        Raises:
            Overflow: If the sum exceeds the native width
        """
        self._check_operand(other)
        return type(self)(self._raw + other._raw)

    def sub(self, other: Self) -> Self:
        """Subtract other from self.

        Raises:
            Underflow: If other > self
        """
        self._check_operand(other)
        return type(self)(self._raw - other._raw)

    def mul(self, other: Self) -> Self:
        """Multiply, rounding half up: (a * b + HALF_SCALE) // SCALE.

        Raises:
            Overflow: If the rescaled product exceeds the native width
        """
        self._check_operand(other)
        product = self._raw.widen() * other._raw.widen()
        return self._narrow((product + self.HALF_SCALE) // self.SCALE, "*", other)

    def div(self, other: Self) -> Self:
        """Divide: (a * SCALE + HALF_SCALE) // b.

        Raises:
            DivideByZero: If other is zero
            Overflow: If the quotient exceeds the native width
        """
        self._check_operand(other)
        if other.is_zero():
            logger.debug("fixed_point_divide_by_zero", type=type(self).__name__, a=self.raw)
            raise DivideByZero(f"{type(self).__name__} division by zero: {self.raw} / 0")
        numerator = self._raw.widen() * self.SCALE + self.HALF_SCALE
        return self._narrow(numerator // other._raw.value, "/", other)

    def gt(self, other: Self) -> bool:
        self._check_operand(other)
        return self._raw.value > other._raw.value

    def lt(self, other: Self) -> bool:
        self._check_operand(other)
        return self._raw.value < other._raw.value

    def eq(self, other: Self) -> bool:
        self._check_operand(other)
        return self._raw.value == other._raw.value

    def min(self, other: Self) -> Self:
        return other if self.gt(other) else self

    def max(self, other: Self) -> Self:
        return other if self.lt(other) else self

    # --- Operators ---

    def __add__(self, other: object) -> Self:
        if type(other) is not type(self):
            return NotImplemented
        return self.add(other)

    def __sub__(self, other: object) -> Self:
        if type(other) is not type(self):
            return NotImplemented
        return self.sub(other)

    def __mul__(self, other: object) -> Self:
        if type(other) is not type(self):
            return NotImplemented
        return self.mul(other)

    def __truediv__(self, other: object) -> Self:
        if type(other) is not type(self):
            return NotImplemented
        return self.div(other)

    def __eq__(self, other: object) -> bool:
        if type(other) is not type(self):
            return NotImplemented
        return self.eq(other)

    def __lt__(self, other: object) -> bool:
        if type(other) is not type(self):
            return NotImplemented
        return self.lt(other)

    def __le__(self, other: object) -> bool:
        if type(other) is not type(self):
            return NotImplemented
        return not self.gt(other)

    def __gt__(self, other: object) -> bool:
        if type(other) is not type(self):
            return NotImplemented
        return self.gt(other)

    def __ge__(self, other: object) -> bool:
        if type(other) is not type(self):
            return NotImplemented
        return not self.lt(other)

    def __hash__(self) -> int:
        return hash((type(self).__name__, self._raw.value))

    def __bool__(self) -> bool:
        return not self.is_zero()

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._raw.value})"

    def __str__(self) -> str:
        return format_decimal(self.floor(), self.fractional_part(), self.DECIMALS)


class UFixed256(UnsignedFixedPoint):
    """18-decimal unsigned fixed-point over a 256-bit integer."""

    PRECISION = WIDE
    INT = U256
    __slots__ = ()


class UFixed64(UnsignedFixedPoint):
    """6-decimal unsigned fixed-point over a 64-bit integer."""

    PRECISION = NARROW
    INT = U64
    __slots__ = ()

    def sqrt(self) -> UFixed64 | None:
        """Square root by Newton-Raphson, or None for exactly zero.

        The seed is isqrt(raw * SCALE), which is already the root in
        fixed-point units. It is refined SQRT_ITERATIONS times with
        guess = (guess + x / guess + 1) // 2 on raw values; the +1 biases
        the halving up by at most one unit. There is no convergence check.
        """
        if self.is_zero():
            logger.debug("sqrt_zero_sentinel", type=type(self).__name__)
            return None
        seed = (self._raw.widen() * self.SCALE).isqrt()
        guess = UFixed64(seed.narrow_to(U64))
        for _ in range(SQRT_ITERATIONS):
            quotient = self.div(guess)
            guess = UFixed64((guess._raw + quotient._raw + 1) // 2)
        return guess
