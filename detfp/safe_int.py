"""Fixed-width unsigned integers with checked arithmetic.

Python integers are unbounded, so this module models the fixed-width
unsigned integers the fixed-point types are built on. Every operation
checks its result against the width:
- Results above 2^bits - 1 raise Overflow
- Negative results raise Underflow
- Division or modulo by zero raises DivideByZero

Widths never mix implicitly. Widening and narrowing are explicit:

    from detfp.safe_int import U256, U512

    a, b = U256(x), U256(y)
    product = a.widen() * b.widen()      # U512, cannot overflow
    result = (product // 10**18).narrow_to(U256)  # Overflow if too large
"""

from __future__ import annotations

from math import isqrt
from typing import ClassVar

from detfp.constants import UINT64_MAX, UINT128_MAX, UINT256_MAX, UINT512_MAX
from detfp.errors import DivideByZero, Overflow, Underflow


class SafeUint:
    """Unsigned integer of a fixed bit width.

    Subclasses set BITS and MAX. Instances are immutable.

    Attributes:
        value: The underlying integer value (read-only)
    """

    BITS: ClassVar[int] = 0
    MAX: ClassVar[int] = 0

    __slots__ = ("_value",)
    _value: int

    def __init__(self, value: int | SafeUint) -> None:
        """Create from an int or another SafeUint of the same width.

        Raises:
            TypeError: If value is not an int (bool excluded) or same-width SafeUint
            Underflow: If value is negative
            Overflow: If value exceeds MAX
        """
        if isinstance(value, SafeUint):
            if type(value) is not type(self):
                raise TypeError(
                    f"{type(self).__name__} cannot wrap {type(value).__name__}; "
                    "use widen() or narrow_to()"
                )
            value = value._value
        elif isinstance(value, bool) or not isinstance(value, int):
            raise TypeError(f"{type(self).__name__} requires int, got {type(value).__name__}")
        if value < 0:
            raise Underflow(f"Negative value cannot be {type(self).__name__}: {value}")
        if value > self.MAX:
            raise Overflow(f"Value exceeds {type(self).__name__} max: {value}")
        object.__setattr__(self, "_value", value)

    def __setattr__(self, name: str, value: object) -> None:
        raise AttributeError(f"{type(self).__name__} is immutable")

    def __reduce__(self) -> tuple[type[SafeUint], tuple[int]]:
        return type(self), (self._value,)

    @property
    def value(self) -> int:
        """The underlying integer value."""
        return self._value

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._value})"

    def __str__(self) -> str:
        return str(self._value)

    def __hash__(self) -> int:
        return hash(self._value)

    def _operand(self, other: SafeUint | int) -> int:
        if isinstance(other, SafeUint):
            if type(other) is not type(self):
                raise TypeError(
                    f"Cannot mix {type(self).__name__} and {type(other).__name__}"
                )
            return other._value
        if isinstance(other, bool) or not isinstance(other, int):
            raise TypeError(f"Unsupported operand type: {type(other).__name__}")
        return other

    def _wrap(self, result: int, op: str, other: int) -> SafeUint:
        if result < 0:
            raise Underflow(f"Underflow: {self._value} {op} {other} = {result}")
        if result > self.MAX:
            raise Overflow(f"{type(self).__name__} overflow: {self._value} {op} {other}")
        return type(self)(result)

    # --- Arithmetic operations ---

    def __add__(self, other: SafeUint | int) -> SafeUint:
        """Add two values.

        Raises:
            Overflow: If the sum exceeds MAX
        """
        other_val = self._operand(other)
        return self._wrap(self._value + other_val, "+", other_val)

    def __radd__(self, other: int) -> SafeUint:
        return self.__add__(other)

    def __sub__(self, other: SafeUint | int) -> SafeUint:
        """Subtract other from self.

        Raises:
            Underflow: If result would be negative
        """
        other_val = self._operand(other)
        return self._wrap(self._value - other_val, "-", other_val)

    def __rsub__(self, other: int) -> SafeUint:
        other_val = self._operand(other)
        return type(self)(other_val)._wrap(other_val - self._value, "-", self._value)

    def __mul__(self, other: SafeUint | int) -> SafeUint:
        """Multiply two values.

        Raises:
            Overflow: If the product exceeds MAX
        """
        other_val = self._operand(other)
        return self._wrap(self._value * other_val, "*", other_val)

    def __rmul__(self, other: int) -> SafeUint:
        return self.__mul__(other)

    def __floordiv__(self, other: SafeUint | int) -> SafeUint:
        """Integer division.

        Raises:
            DivideByZero: If other is zero
        """
        other_val = self._operand(other)
        if other_val == 0:
            raise DivideByZero(f"Division by zero: {self._value} // 0")
        return type(self)(self._value // other_val)

    def __mod__(self, other: SafeUint | int) -> SafeUint:
        """Modulo operation.

        Raises:
            DivideByZero: If other is zero
        """
        other_val = self._operand(other)
        if other_val == 0:
            raise DivideByZero(f"Modulo by zero: {self._value} % 0")
        return type(self)(self._value % other_val)

    def __truediv__(self, other: object) -> SafeUint:
        raise TypeError(f"{type(self).__name__} does not support true division; use //")

    # --- Bitwise operations ---

    def __and__(self, other: SafeUint | int) -> SafeUint:
        return type(self)(self._value & self._operand(other))

    def __or__(self, other: SafeUint | int) -> SafeUint:
        return type(self)(self._value | self._operand(other))

    def __xor__(self, other: SafeUint | int) -> SafeUint:
        return type(self)(self._value ^ self._operand(other))

    def __invert__(self) -> SafeUint:
        return type(self)(self.MAX ^ self._value)

    def __lshift__(self, shift: int) -> SafeUint:
        """Shift left, discarding bits shifted past the width."""
        if shift < 0:
            raise ValueError(f"Negative shift count: {shift}")
        return type(self)((self._value << shift) & self.MAX)

    def __rshift__(self, shift: int) -> SafeUint:
        if shift < 0:
            raise ValueError(f"Negative shift count: {shift}")
        return type(self)(self._value >> shift)

    # --- Comparison operations ---

    def __eq__(self, other: object) -> bool:
        if isinstance(other, SafeUint):
            return type(other) is type(self) and self._value == other._value
        if isinstance(other, int):
            return self._value == other
        return NotImplemented

    def __lt__(self, other: SafeUint | int) -> bool:
        return self._value < self._operand(other)

    def __le__(self, other: SafeUint | int) -> bool:
        return self._value <= self._operand(other)

    def __gt__(self, other: SafeUint | int) -> bool:
        return self._value > self._operand(other)

    def __ge__(self, other: SafeUint | int) -> bool:
        return self._value >= self._operand(other)

    # --- Conversion ---

    def __int__(self) -> int:
        return self._value

    def __index__(self) -> int:
        return self._value

    def __bool__(self) -> bool:
        """True if non-zero."""
        return self._value != 0

    # --- Named operations ---

    def isqrt(self) -> SafeUint:
        """Integer square root, rounded down."""
        return type(self)(isqrt(self._value))

    def widen(self) -> SafeUint:
        """Convert to the integer type of double width.

        Raises:
            TypeError: If there is no wider type
        """
        wider = _WIDER.get(type(self))
        if wider is None:
            raise TypeError(f"No integer type wider than {type(self).__name__}")
        return wider(self._value)

    def narrow_to(self, cls: type[SafeUint]) -> SafeUint:
        """Convert to a (usually narrower) integer type.

        Raises:
            Overflow: If the value does not fit in cls
        """
        if self._value > cls.MAX:
            raise Overflow(f"Value {self._value} does not fit in {cls.__name__}")
        return cls(self._value)

    @classmethod
    def zero(cls) -> SafeUint:
        """Create the value 0."""
        return cls(0)


class U64(SafeUint):
    """64-bit unsigned integer."""

    BITS = 64
    MAX = UINT64_MAX
    __slots__ = ()


class U128(SafeUint):
    """128-bit unsigned integer (widened intermediate for U64)."""

    BITS = 128
    MAX = UINT128_MAX
    __slots__ = ()


class U256(SafeUint):
    """256-bit unsigned integer."""

    BITS = 256
    MAX = UINT256_MAX
    __slots__ = ()


class U512(SafeUint):
    """512-bit unsigned integer (widened intermediate for U256)."""

    BITS = 512
    MAX = UINT512_MAX
    __slots__ = ()


_WIDER: dict[type[SafeUint], type[SafeUint]] = {
    U64: U128,
    U128: U256,
    U256: U512,
}
