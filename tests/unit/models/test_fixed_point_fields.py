"""Tests for pydantic fixed-point field types."""

import pytest
from pydantic import BaseModel, ValidationError

from detfp import IFixed256, UFixed64, UFixed256
from detfp.models import IFixed256Field, UFixed64Field, UFixed256Field


class Quote(BaseModel):
    price: UFixed256Field
    size: UFixed64Field
    delta: IFixed256Field


def make_quote(**overrides):
    data = {"price": "246.1996212", "size": "1.5", "delta": "-0.25"}
    data.update(overrides)
    return Quote.model_validate(data)


class TestValidation:
    def test_decimal_strings(self):
        quote = make_quote()
        assert quote.price == UFixed256.from_parts(246, 1996212, 7)
        assert quote.size == UFixed64.from_parts(1, 5, 1)
        assert quote.delta == IFixed256.from_parts(0, 25, 2, negative=True)

    def test_ints_are_whole_numbers(self):
        quote = make_quote(price=3, size=2, delta=-4)
        assert quote.price == UFixed256.from_integer(3)
        assert quote.size == UFixed64.from_integer(2)
        assert quote.delta == IFixed256.from_integer(4, negative=True)

    def test_instances_pass_through(self):
        price = UFixed256.one()
        assert make_quote(price=price).price is price

    @pytest.mark.parametrize("bad", [1.5, True, "1.2.3", "abc", None, [1]])
    def test_rejects_invalid(self, bad):
        with pytest.raises(ValidationError):
            make_quote(price=bad)

    def test_rejects_negative_unsigned(self):
        with pytest.raises(ValidationError, match="non-negative"):
            make_quote(size="-1")

    def test_rejects_out_of_range(self):
        with pytest.raises(ValidationError, match="out of range"):
            make_quote(size=str(2**64))

    def test_rejects_wrong_fixed_point_type(self):
        with pytest.raises(ValidationError):
            make_quote(size=UFixed256.one())


class TestSerialization:
    def test_json_mode_emits_decimal_strings(self):
        assert make_quote().model_dump(mode="json") == {
            "price": "246.1996212",
            "size": "1.5",
            "delta": "-0.25",
        }

    def test_python_mode_keeps_values(self):
        dumped = make_quote().model_dump()
        assert isinstance(dumped["price"], UFixed256)

    def test_json_round_trip(self):
        quote = make_quote()
        assert Quote.model_validate_json(quote.model_dump_json()) == quote
