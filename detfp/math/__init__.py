"""Fixed-point value types.

- UFixed256: 18-decimal unsigned over 256 bits
- UFixed64: 6-decimal unsigned over 64 bits, with sqrt
- IFixed256: 18-decimal signed (sign-magnitude) over 256 bits
"""

from detfp.math.signed import IFixed256
from detfp.math.unsigned import UFixed64, UFixed256, UnsignedFixedPoint

__all__ = ["IFixed256", "UFixed64", "UFixed256", "UnsignedFixedPoint"]
