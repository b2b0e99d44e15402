"""Tests for weight unit conversion."""

import pytest
from gold_api.services.errors import InvalidParameterError
from gold_api.services.units import convert_price, get_unit_label, validate_unit


def test_validate_unit_case_insensitive():
    assert validate_unit("OZ") == "oz"
    assert validate_unit("Kg") == "kg"


def test_validate_unit_rejects_unknown():
    with pytest.raises(InvalidParameterError, match="oz, g, kg"):
        validate_unit("lb")


def test_convert_price():
    assert convert_price(2000.0, "oz") == 2000.0
    assert convert_price(2000.0, "g") == pytest.approx(64.30)
    assert convert_price(2000.0, "kg") == pytest.approx(64301.45)


def test_convert_none_passes_through():
    assert convert_price(None, "g") is None


def test_unit_labels():
    assert get_unit_label("oz") == "per troy ounce"
    assert get_unit_label("g") == "per gram"
    assert get_unit_label("kg") == "per kilogram"
