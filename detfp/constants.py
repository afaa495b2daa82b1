"""Scale constants for the fixed-point types.

Derived once from the Precision instances in detfp.config.
"""

from detfp.config import NARROW, SIGNED_MAGNITUDE_BITS, WIDE

# Wide types: 18 decimal places
SCALE_18 = WIDE.scale  # 10^18
HALF_SCALE_18 = WIDE.half_scale  # 5 * 10^17

# Narrow type: 6 decimal places
SCALE_6 = NARROW.scale  # 10^6
HALF_SCALE_6 = NARROW.half_scale  # 5 * 10^5

# Integer maxima: native widths and the double-width intermediates
UINT64_MAX = NARROW.max_raw
UINT128_MAX = (1 << (2 * NARROW.bits)) - 1
UINT256_MAX = WIDE.max_raw
UINT512_MAX = (1 << (2 * WIDE.bits)) - 1

# Signed layout: bit 255 is the sign, bits 0..254 the magnitude
SIGN_BIT = 1 << SIGNED_MAGNITUDE_BITS
MAGNITUDE_MASK = SIGN_BIT - 1

# Newton-Raphson refinements for UFixed64.sqrt (not adaptive)
SQRT_ITERATIONS = 4
