"""Signed 18-decimal fixed-point arithmetic (sign-magnitude).

IFixed256 holds a sign flag and a UFixed256 magnitude. Its packed 256-bit
form puts the sign in bit 255 (1 = negative) and the magnitude, scaled
exactly like UFixed256, in bits 0..254.

Zero has exactly one representation: whenever the magnitude is zero the
sign is cleared. This is enforced in the constructor, which every factory
and every arithmetic result goes through, so equality can compare packed
raw values directly.
"""

from __future__ import annotations

from decimal import Decimal
from typing import ClassVar

from detfp.config import WIDE, Precision
from detfp.constants import MAGNITUDE_MASK, SIGN_BIT
from detfp.errors import DivideByZero, Overflow
from detfp.math.unsigned import UFixed256, format_decimal, parse_decimal
from detfp.safe_int import U256

__all__ = ["IFixed256"]


class IFixed256:
    """Signed 18-decimal fixed-point number.

    Attributes:
        magnitude: Absolute value as UFixed256 (read-only)
        is_negative: True iff the value is strictly below zero (read-only)
    """

    PRECISION: ClassVar[Precision] = WIDE
    SCALE: ClassVar[int] = WIDE.scale
    HALF_SCALE: ClassVar[int] = WIDE.half_scale
    DECIMALS: ClassVar[int] = WIDE.decimals
    MAX_MAGNITUDE: ClassVar[int] = MAGNITUDE_MASK

    __slots__ = ("_negative", "_magnitude")
    _negative: bool
    _magnitude: UFixed256

    def __init__(self, magnitude: UFixed256, negative: bool = False) -> None:
        """Create from a magnitude and a sign.

        A zero magnitude always produces the non-negative zero.

        Raises:
            TypeError: If magnitude is not a UFixed256
            Overflow: If magnitude does not fit in 255 bits
        """
        if not isinstance(magnitude, UFixed256):
            raise TypeError(
                f"IFixed256 magnitude must be UFixed256, got {type(magnitude).__name__}"
            )
        if magnitude.raw > self.MAX_MAGNITUDE:
            raise Overflow(f"IFixed256 magnitude exceeds 255 bits: {magnitude.raw}")
        object.__setattr__(self, "_magnitude", magnitude)
        object.__setattr__(self, "_negative", bool(negative) and not magnitude.is_zero())

    def __setattr__(self, name: str, value: object) -> None:
        raise AttributeError("IFixed256 is immutable")

    def __reduce__(self) -> tuple[type[IFixed256], tuple[UFixed256, bool]]:
        return IFixed256, (self._magnitude, self._negative)

    # --- Construction ---

    @classmethod
    def from_raw(cls, raw: int | U256) -> IFixed256:
        """Unpack a 256-bit sign-magnitude integer.

        Raises:
            Underflow: If raw is negative
            Overflow: If raw exceeds 256 bits
        """
        packed = U256(raw).value
        return cls(UFixed256(packed & MAGNITUDE_MASK), bool(packed & SIGN_BIT))

    @classmethod
    def from_magnitude(cls, magnitude: UFixed256, negative: bool = False) -> IFixed256:
        return cls(magnitude, negative)

    @classmethod
    def from_integer(cls, value: int, negative: bool = False) -> IFixed256:
        """Create from a non-negative whole number and a sign.

        Raises:
            Overflow: If value * SCALE does not fit in 255 bits
        """
        return cls(UFixed256.from_integer(value), negative)

    @classmethod
    def from_parts(
        cls, whole: int, frac: int, frac_digits: int, negative: bool = False
    ) -> IFixed256:
        """Create from whole and fractional parts, as UFixed256.from_parts."""
        return cls(UFixed256.from_parts(whole, frac, frac_digits), negative)

    @classmethod
    def from_decimal_str(cls, text: str) -> IFixed256:
        """Parse a decimal string with an optional sign, e.g. "-0.5".

        Raises:
            ValueError: If text is malformed
        """
        negative, whole, frac, frac_digits = parse_decimal(text)
        return cls.from_parts(whole, frac, frac_digits, negative)

    @classmethod
    def zero(cls) -> IFixed256:
        return cls(UFixed256.zero())

    @classmethod
    def one(cls) -> IFixed256:
        return cls(UFixed256.one())

    # --- Accessors ---

    @property
    def raw(self) -> int:
        """Packed 256-bit representation: sign in bit 255."""
        return self._magnitude.raw | (SIGN_BIT if self._negative else 0)

    @property
    def magnitude(self) -> UFixed256:
        return self._magnitude

    @property
    def is_negative(self) -> bool:
        return self._negative

    def is_zero(self) -> bool:
        return self._magnitude.is_zero()

    def floor(self) -> int:
        """Whole part of the magnitude."""
        return self._magnitude.floor()

    def fractional_part(self) -> int:
        """Scaled fractional remainder of the magnitude, in [0, SCALE)."""
        return self._magnitude.fractional_part()

    def round(self) -> tuple[int, bool]:
        """Round the magnitude half up; returns (whole, negative).

        A value that rounds to 0 is reported as non-negative.
        """
        whole = self._magnitude.round()
        return whole, self._negative and whole != 0

    def to_decimal(self) -> Decimal:
        """Convert to an exact Decimal for display."""
        return Decimal(str(self))

    # --- Arithmetic ---

    def _check_operand(self, other: object) -> None:
        if not isinstance(other, IFixed256):
            raise TypeError(f"Cannot combine IFixed256 with {type(other).__name__}")

    def negate(self) -> IFixed256:
        """Flip the sign; zero stays non-negative."""
        return IFixed256(self._magnitude, not self._negative)

    def abs_gt(self, other: IFixed256) -> bool:
        """True if |self| > |other|."""
        self._check_operand(other)
        return self._magnitude.gt(other._magnitude)

    def add(self, other: IFixed256) -> IFixed256:
        """Add two values.

        Raises:
            Overflow: If the magnitude sum does not fit in 255 bits
        """
        self._check_operand(other)
        if self.is_zero():
            return other
        if other.is_zero():
            return self
        if self._negative == other._negative:
            return IFixed256(self._magnitude.add(other._magnitude), self._negative)
        if self.abs_gt(other):
            return IFixed256(self._magnitude.sub(other._magnitude), self._negative)
        if other.abs_gt(self):
            return IFixed256(other._magnitude.sub(self._magnitude), other._negative)
        return IFixed256.zero()

    def sub(self, other: IFixed256) -> IFixed256:
        self._check_operand(other)
        return self.add(other.negate())

    def mul(self, other: IFixed256) -> IFixed256:
        """Multiply magnitudes (rounding half up); sign is the XOR of signs.

        Raises:
            Overflow: If the product does not fit in 255 bits
        """
        self._check_operand(other)
        if self.is_zero() or other.is_zero():
            return IFixed256.zero()
        return IFixed256(
            self._magnitude.mul(other._magnitude), self._negative != other._negative
        )

    def div(self, other: IFixed256) -> IFixed256:
        """Divide magnitudes (rounding half up); sign is the XOR of signs.

        A zero dividend gives zero before the divisor is inspected.

        Raises:
            DivideByZero: If other is zero
            Overflow: If the quotient does not fit in 255 bits
        """
        self._check_operand(other)
        if self.is_zero():
            return IFixed256.zero()
        if other.is_zero():
            raise DivideByZero(f"IFixed256 division by zero: {self} / 0")
        return IFixed256(
            self._magnitude.div(other._magnitude), self._negative != other._negative
        )

    def gt(self, other: IFixed256) -> bool:
        self._check_operand(other)
        if self._negative != other._negative:
            return other._negative
        if self._negative:
            return other.abs_gt(self)
        return self.abs_gt(other)

    def eq(self, other: IFixed256) -> bool:
        self._check_operand(other)
        return self.raw == other.raw

    def lt(self, other: IFixed256) -> bool:
        self._check_operand(other)
        return not self.gt(other) and not self.eq(other)

    # --- Operators ---

    def __neg__(self) -> IFixed256:
        return self.negate()

    def __pos__(self) -> IFixed256:
        return self

    def __abs__(self) -> IFixed256:
        return IFixed256(self._magnitude)

    def __add__(self, other: object) -> IFixed256:
        if not isinstance(other, IFixed256):
            return NotImplemented
        return self.add(other)

    def __sub__(self, other: object) -> IFixed256:
        if not isinstance(other, IFixed256):
            return NotImplemented
        return self.sub(other)

    def __mul__(self, other: object) -> IFixed256:
        if not isinstance(other, IFixed256):
            return NotImplemented
        return self.mul(other)

    def __truediv__(self, other: object) -> IFixed256:
        if not isinstance(other, IFixed256):
            return NotImplemented
        return self.div(other)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, IFixed256):
            return NotImplemented
        return self.eq(other)

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, IFixed256):
            return NotImplemented
        return self.lt(other)

    def __le__(self, other: object) -> bool:
        if not isinstance(other, IFixed256):
            return NotImplemented
        return not self.gt(other)

    def __gt__(self, other: object) -> bool:
        if not isinstance(other, IFixed256):
            return NotImplemented
        return self.gt(other)

    def __ge__(self, other: object) -> bool:
        if not isinstance(other, IFixed256):
            return NotImplemented
        return not self.lt(other)

    def __hash__(self) -> int:
        return hash(("IFixed256", self.raw))

    def __bool__(self) -> bool:
        return not self.is_zero()

    def __repr__(self) -> str:
        return f"IFixed256({'-' if self._negative else ''}{self._magnitude.raw})"

    def __str__(self) -> str:
        text = format_decimal(self.floor(), self.fractional_part(), self.DECIMALS)
        return f"-{text}" if self._negative else text
