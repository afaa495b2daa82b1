"""Deterministic fixed-point decimal arithmetic over fixed-width integers."""

from detfp.config import NARROW, WIDE, Precision
from detfp.constants import HALF_SCALE_6, HALF_SCALE_18, SCALE_6, SCALE_18
from detfp.errors import DivideByZero, FixedPointError, Overflow, Underflow
from detfp.math import IFixed256, UFixed64, UFixed256
from detfp.safe_int import U64, U128, U256, U512, SafeUint

__all__ = [
    # Value types
    "UFixed256",
    "UFixed64",
    "IFixed256",
    # Integer primitive
    "SafeUint",
    "U64",
    "U128",
    "U256",
    "U512",
    # Errors
    "FixedPointError",
    "DivideByZero",
    "Underflow",
    "Overflow",
    # Configuration
    "Precision",
    "WIDE",
    "NARROW",
    # Constants
    "SCALE_18",
    "HALF_SCALE_18",
    "SCALE_6",
    "HALF_SCALE_6",
]
