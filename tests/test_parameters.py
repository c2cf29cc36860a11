from decimal import Decimal

import pytest

from benchtime.parameters import (
    ParameterScanError,
    ParameterValue,
    RangeStep,
    format_number,
    tokenize,
)


@pytest.mark.parametrize(
    "text, expected",
    [
        ("", [""]),
        ("foo", ["foo"]),
        (" ", [" "]),
        (r"hello\, world!", ["hello, world!"]),
        (r"\,", [","]),
        (r"\,\,\,", [",,,"]),
        (r"\n", [r"\n"]),
        ("\\\\", ["\\"]),
        ("\\\\\\,", ["\\,"]),
    ],
)
def test_tokenize_single_value(text, expected):
    assert tokenize(text) == expected


@pytest.mark.parametrize(
    "text, expected",
    [
        ("foo,bar,baz", ["foo", "bar", "baz"]),
        ("hello world,foo", ["hello world", "foo"]),
        (r"hello\,world!,baz", ["hello,world!", "baz"]),
    ],
)
def test_tokenize_multiple_values(text, expected):
    assert tokenize(text) == expected


@pytest.mark.parametrize(
    "text, expected",
    [
        ("foo,,bar", ["foo", "", "bar"]),
        (",bar", ["", "bar"]),
        ("bar,", ["bar", ""]),
        (",,", ["", "", ""]),
    ],
)
def test_tokenize_empty_values(text, expected):
    assert tokenize(text) == expected


def test_tokenize_trailing_backslash_kept():
    assert tokenize("a\\") == ["a\\"]


def test_integer_range():
    values = list(RangeStep(0, 10, 3))
    assert len(values) == 4
    assert values[0] == 0
    assert values[3] == 9
    assert len(RangeStep(0, 10, 3)) == len(values)


def test_decimal_range():
    rng = RangeStep(Decimal(0), Decimal(1), Decimal("0.1"))
    values = list(rng)
    assert len(values) == 11
    assert values[0] == Decimal(0)
    assert values[10] == Decimal(1)
    assert len(rng) == 11


def test_range_is_reiterable():
    rng = RangeStep(1, 5, 2)
    assert list(rng) == [1, 3, 5]
    assert list(rng) == [1, 3, 5]


def test_range_step_validate():
    assert list(RangeStep(0, 10, 3)) == [0, 3, 6, 9]
    assert len(RangeStep(Decimal(0), Decimal(1), Decimal("0.1"))) == 11

    with pytest.raises(ParameterScanError, match="^Empty parameter range$"):
        RangeStep(11, 10, 1)
    with pytest.raises(ParameterScanError, match="^Zero is not a valid parameter step$"):
        RangeStep(0, 10, 0)
    with pytest.raises(ParameterScanError, match="^Parameter range is too large$"):
        RangeStep(0, 100_001, 1)


def test_format_number():
    assert format_number(42) == "42"
    assert format_number(Decimal("0.0000001")) == "0.0000001"
    assert format_number(Decimal("1.0")) == "1.0"


def test_parameter_value_str():
    assert str(ParameterValue("master")) == "master"
    assert str(ParameterValue(7)) == "7"
    assert str(ParameterValue(Decimal("0.5"))) == "0.5"
    assert ParameterValue("a") == ParameterValue("a")