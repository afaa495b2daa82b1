"""Test helpers module for shared test utilities.

- factories: short constructors for fixed-point values from decimal strings
"""

from tests.helpers.factories import narrow, signed, wide

__all__ = ["narrow", "signed", "wide"]
