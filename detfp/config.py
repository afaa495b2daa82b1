"""Precision configuration for the fixed-point types."""

from dataclasses import dataclass


@dataclass(frozen=True)
class Precision:
    """Width and decimal scale of a fixed-point representation.

    Each value type binds exactly one Precision at class definition time.
    Scale is never configurable at runtime.

    Attributes:
        bits: Width of the backing unsigned integer
        decimals: Number of decimal places (D), so SCALE = 10^D
    """

    bits: int
    decimals: int

    def __post_init__(self) -> None:
        if self.bits <= 0:
            raise ValueError(f"Precision bits must be positive, got {self.bits}")
        if self.decimals < 0:
            raise ValueError(f"Precision decimals must be non-negative, got {self.decimals}")

    @property
    def scale(self) -> int:
        """10^decimals."""
        return 10**self.decimals

    @property
    def half_scale(self) -> int:
        """Threshold for round-half-up."""
        return self.scale // 2

    @property
    def max_raw(self) -> int:
        """Largest raw value representable in the width."""
        return (1 << self.bits) - 1


# 256-bit backing integer, 18 decimal places
WIDE = Precision(bits=256, decimals=18)

# 64-bit backing integer, 6 decimal places
NARROW = Precision(bits=64, decimals=6)

# Signed wide type reserves the top bit for the sign
SIGNED_MAGNITUDE_BITS = WIDE.bits - 1
