"""Tests for the fixed-width unsigned integer primitive."""

import pickle

import pytest

from detfp.constants import UINT64_MAX, UINT128_MAX, UINT256_MAX
from detfp.errors import DivideByZero, FixedPointError, Overflow, Underflow
from detfp.safe_int import U64, U128, U256, U512, SafeUint


class TestSafeUintConstruction:
    """Tests for SafeUint construction."""

    def test_from_int(self):
        """U256 can be constructed from int."""
        assert U256(42).value == 42

    def test_from_same_width(self):
        """A SafeUint can be copied from the same width."""
        assert U64(U64(7)).value == 7

    def test_from_other_width_raises(self):
        """Widths never convert implicitly."""
        with pytest.raises(TypeError, match="widen"):
            U256(U64(7))

    def test_max_values(self):
        """Each width accepts exactly its maximum."""
        assert U64(UINT64_MAX).value == UINT64_MAX
        assert U128(UINT128_MAX).value == UINT128_MAX
        assert U256(UINT256_MAX).value == UINT256_MAX

    def test_above_max_raises(self):
        """One past the maximum raises Overflow."""
        with pytest.raises(Overflow):
            U64(UINT64_MAX + 1)
        with pytest.raises(Overflow):
            U256(UINT256_MAX + 1)

    def test_negative_raises(self):
        """Negative values raise Underflow."""
        with pytest.raises(Underflow):
            U64(-1)

    def test_invalid_type_raises(self):
        """Non-int values are rejected."""
        with pytest.raises(TypeError):
            U64("42")  # type: ignore[arg-type]
        with pytest.raises(TypeError):
            U64(3.14)  # type: ignore[arg-type]
        with pytest.raises(TypeError):
            U64(True)

    def test_zero(self):
        assert U256.zero().value == 0

    def test_immutable(self):
        """Attributes cannot be reassigned."""
        x = U64(1)
        with pytest.raises(AttributeError):
            x._value = 2  # type: ignore[misc]

    def test_pickle(self):
        """Values survive pickling."""
        x = U256(10**40)
        assert pickle.loads(pickle.dumps(x)) == x

    def test_errors_are_arithmetic_errors(self):
        """The error family derives from ArithmeticError."""
        assert issubclass(FixedPointError, ArithmeticError)
        for err in (DivideByZero, Underflow, Overflow):
            assert issubclass(err, FixedPointError)


class TestSafeUintArithmetic:
    """Tests for checked arithmetic."""

    def test_add(self):
        assert (U64(10) + U64(5)).value == 15
        assert (U64(10) + 5).value == 15
        assert (5 + U64(10)).value == 15

    def test_add_overflow_raises(self):
        with pytest.raises(Overflow, match="U64 overflow"):
            U64(UINT64_MAX) + 1

    def test_sub(self):
        assert (U64(10) - U64(3)).value == 7
        assert (10 - U64(3)).value == 7
        assert (U64(5) - U64(5)).value == 0

    def test_sub_underflow_raises(self):
        with pytest.raises(Underflow, match="5 - 10"):
            U64(5) - U64(10)
        with pytest.raises(Underflow):
            5 - U64(10)

    def test_mul(self):
        assert (U64(6) * U64(7)).value == 42
        assert (6 * U64(7)).value == 42

    def test_mul_overflow_raises(self):
        with pytest.raises(Overflow):
            U64(2**32) * U64(2**32)

    def test_floordiv_and_mod(self):
        assert (U64(10) // U64(3)).value == 3
        assert (U64(10) % 3).value == 1

    def test_divide_by_zero_raises(self):
        with pytest.raises(DivideByZero, match="Division by zero"):
            U64(10) // U64(0)
        with pytest.raises(DivideByZero, match="Modulo by zero"):
            U64(10) % 0

    def test_truediv_raises_typeerror(self):
        """True division is not available on integers."""
        with pytest.raises(TypeError):
            U64(10) / U64(2)

    def test_mixed_widths_raise(self):
        with pytest.raises(TypeError, match="Cannot mix"):
            U64(1) + U128(1)

    def test_isqrt(self):
        assert U64(16).isqrt().value == 4
        assert U64(17).isqrt().value == 4
        assert U128(2 * 10**12).isqrt().value == 1_414_213


class TestSafeUintBitwise:
    """Tests for bitwise operations."""

    def test_and_or_xor(self):
        assert (U64(0b1100) & 0b1010).value == 0b1000
        assert (U64(0b1100) | 0b1010).value == 0b1110
        assert (U64(0b1100) ^ 0b1010).value == 0b0110

    def test_invert(self):
        assert (~U64(0)).value == UINT64_MAX

    def test_shifts(self):
        assert (U256(1) << 255).value == 1 << 255
        assert (U256(1) << 256).value == 0
        assert (U256(1 << 255) >> 255).value == 1

    def test_negative_shift_raises(self):
        with pytest.raises(ValueError):
            U64(1) << -1


class TestSafeUintWidening:
    """Tests for explicit widening and narrowing."""

    def test_widen_chain(self):
        assert isinstance(U64(1).widen(), U128)
        assert isinstance(U256(1).widen(), U512)

    def test_widened_product_does_not_overflow(self):
        product = U256(UINT256_MAX).widen() * U256(UINT256_MAX).widen()
        assert product.value == UINT256_MAX * UINT256_MAX

    def test_no_wider_than_512(self):
        with pytest.raises(TypeError):
            U512(1).widen()

    def test_narrow_to(self):
        assert U512(5).narrow_to(U256) == U256(5)

    def test_narrow_to_overflow_raises(self):
        with pytest.raises(Overflow, match="does not fit in U256"):
            U512(UINT256_MAX + 1).narrow_to(U256)


class TestSafeUintComparison:
    def test_comparisons(self):
        assert U64(5) == U64(5)
        assert U64(5) == 5
        assert U64(5) != U64(6)
        assert U64(5) < U64(6)
        assert U64(6) >= 6

    def test_different_widths_not_equal(self):
        assert U64(5) != U128(5)

    def test_hash_matches_int(self):
        assert hash(U64(5)) == hash(5)

    def test_bool_and_int(self):
        assert not U64(0)
        assert U64(3)
        assert int(U64(3)) == 3
        assert [10, 20, 30][U64(1)] == 20

    def test_subclass_of_base(self):
        assert isinstance(U64(1), SafeUint)
