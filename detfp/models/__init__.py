"""Pydantic field types for fixed-point values."""

from detfp.models.types import IFixed256Field, UFixed64Field, UFixed256Field

__all__ = ["IFixed256Field", "UFixed64Field", "UFixed256Field"]
