"""Pydantic field types for fixed-point values.

Fields accept a decimal string ("12.5", "-0.25" for signed), a whole-number
int, or an instance of the target type, and serialize to the canonical
decimal string in JSON mode. Floats are rejected: they would make the
parsed value depend on binary rounding.

    from pydantic import BaseModel

    class Quote(BaseModel):
        price: UFixed256Field
        delta: IFixed256Field

    Quote.model_validate({"price": "1.5", "delta": "-0.25"})
"""

from typing import Annotated, Any

from pydantic import Field, PlainSerializer, PlainValidator

from detfp.errors import FixedPointError
from detfp.math.signed import IFixed256
from detfp.math.unsigned import UFixed64, UFixed256, UnsignedFixedPoint


def _validate_unsigned(cls: type[UnsignedFixedPoint], value: Any) -> UnsignedFixedPoint:
    if isinstance(value, cls):
        return value
    if isinstance(value, bool) or isinstance(value, float):
        raise ValueError(
            f"{cls.__name__} must be a decimal string or int, got {type(value).__name__}"
        )
    try:
        if isinstance(value, int):
            return cls.from_integer(value)
        if isinstance(value, str):
            return cls.from_decimal_str(value)
    except FixedPointError as err:
        raise ValueError(f"{cls.__name__} out of range: {value!r}") from err
    raise ValueError(f"{cls.__name__} must be a decimal string or int, got {type(value).__name__}")


def validate_ufixed256(value: Any) -> UFixed256:
    """Validate a value into UFixed256.

    Raises:
        ValueError: If value is malformed, negative, or out of range
    """
    return _validate_unsigned(UFixed256, value)  # type: ignore[return-value]


def validate_ufixed64(value: Any) -> UFixed64:
    """Validate a value into UFixed64.

    Raises:
        ValueError: If value is malformed, negative, or out of range
    """
    return _validate_unsigned(UFixed64, value)  # type: ignore[return-value]


def validate_ifixed256(value: Any) -> IFixed256:
    """Validate a value into IFixed256.

    Negative ints are accepted and become negative values.

    Raises:
        ValueError: If value is malformed or out of range
    """
    if isinstance(value, IFixed256):
        return value
    if isinstance(value, bool) or isinstance(value, float):
        raise ValueError(f"IFixed256 must be a decimal string or int, got {type(value).__name__}")
    try:
        if isinstance(value, int):
            return IFixed256.from_integer(abs(value), negative=value < 0)
        if isinstance(value, str):
            return IFixed256.from_decimal_str(value)
    except FixedPointError as err:
        raise ValueError(f"IFixed256 out of range: {value!r}") from err
    raise ValueError(f"IFixed256 must be a decimal string or int, got {type(value).__name__}")


_to_str = PlainSerializer(str, return_type=str, when_used="json")

# 18-decimal unsigned fixed-point as decimal string
UFixed256Field = Annotated[
    UFixed256,
    PlainValidator(validate_ufixed256),
    _to_str,
    Field(description="18-decimal unsigned fixed-point as decimal string"),
]

# 6-decimal unsigned fixed-point as decimal string
UFixed64Field = Annotated[
    UFixed64,
    PlainValidator(validate_ufixed64),
    _to_str,
    Field(description="6-decimal unsigned fixed-point as decimal string"),
]

# 18-decimal signed fixed-point as decimal string
IFixed256Field = Annotated[
    IFixed256,
    PlainValidator(validate_ifixed256),
    _to_str,
    Field(description="18-decimal signed fixed-point as decimal string"),
]
