"""Tests for UFixed64.sqrt (Newton-Raphson, 4 refinements)."""

from detfp.constants import UINT64_MAX
from detfp.math.unsigned import UFixed64, UFixed256
from tests.helpers import narrow


class TestSqrtExactSquares:
    def test_sqrt_of_four_is_exactly_two(self):
        assert UFixed64.from_integer(4).sqrt() == UFixed64.from_integer(2)

    def test_sqrt_of_nine(self):
        assert UFixed64.from_integer(9).sqrt() == UFixed64.from_integer(3)

    def test_sqrt_of_large_square(self):
        assert UFixed64.from_integer(10**12).sqrt() == UFixed64.from_integer(10**6)

    def test_sqrt_of_one(self):
        assert UFixed64.one().sqrt() == UFixed64.one()


class TestSqrtApproximation:
    def test_sqrt_of_two(self):
        """sqrt(2) lands within 100 raw units of 1.414213."""
        result = UFixed64.from_integer(2).sqrt()
        assert result is not None
        assert abs(result.raw - UFixed64.from_parts(1, 414213, 6).raw) <= 100

    def test_sqrt_of_quarter_biased_up_one_unit(self):
        """The +1 before halving settles sqrt(0.25) one unit above 0.5."""
        result = narrow("0.25").sqrt()
        assert result is not None
        assert result.raw == 500_001

    def test_sqrt_of_largest_value(self):
        result = UFixed64.from_raw(UINT64_MAX).sqrt()
        assert result is not None
        assert result.floor() == 4_294_967

    def test_deterministic(self):
        x = narrow("123.456789")
        assert x.sqrt() == x.sqrt()


class TestSqrtZero:
    def test_sqrt_of_zero_returns_none(self):
        assert UFixed64.zero().sqrt() is None

    def test_sqrt_of_zero_is_logged(self, log_events):
        UFixed64.from_integer(0).sqrt()
        assert log_events == [
            {"event": "sqrt_zero_sentinel", "log_level": "debug", "type": "UFixed64"}
        ]

    def test_smallest_nonzero_has_root(self):
        assert UFixed64.from_raw(1).sqrt() is not None


def test_sqrt_only_on_narrow_type():
    assert not hasattr(UFixed256, "sqrt")
