from __future__ import annotations

import pytest

from strategy_board.ui_formatters import (
    coerce_number,
    fixed,
    format_currency,
    format_exec_time,
    format_number,
)


@pytest.mark.parametrize(
    "value, expected",
    [
        (None, "$0.00"),
        (0, "$0.00"),
        (-3.5, "-$3.50"),
        (1.25, "$1.25"),
        (1234.567, "$1234.57"),
        (-0.004, "-$0.00"),
        ("2.5", "$2.50"),
        ("n/a", "$0.00"),
        (float("nan"), "$0.00"),
    ],
)
def test_format_currency(value, expected) -> None:
    assert format_currency(value) == expected


@pytest.mark.parametrize(
    "value, expected",
    [
        (None, "0"),
        (0, "0"),
        (100, "100"),
        (1234.5, "1,234.5"),
        (1234567.891, "1,234,567.89"),
        (0.005, "0.01"),
        (-2500.1, "-2,500.1"),
        (-0.001, "0"),
        (498.75, "498.75"),
        ("bad", "0"),
        (True, "0"),
    ],
)
def test_format_number(value, expected) -> None:
    assert format_number(value) == expected


@pytest.mark.parametrize(
    "ms, expected",
    [
        (0, "0s"),
        (None, "0s"),
        ("", "0s"),
        (45000, "45s"),
        (61000, "1m 1s"),
        (500, "1s"),
        (59500, "1m 0s"),
        (3_600_000, "60m 0s"),
    ],
)
def test_format_exec_time(ms, expected) -> None:
    assert format_exec_time(ms) == expected


def test_coerce_number_rejects_bool_and_non_finite() -> None:
    assert coerce_number(True) is None
    assert coerce_number(float("inf")) is None
    assert coerce_number(" 12.5 ") == 12.5
    assert coerce_number([1]) is None


def test_fixed_rounds_half_up() -> None:
    assert fixed(0.125, 2) == "0.13"
    assert fixed(2.45, 1) == "2.5"
    assert fixed(-0.0, 1) == "0.0"


@pytest.mark.parametrize("value", [1e30, "1e30"])
def test_huge_values_format_without_raising(value) -> None:
    assert format_currency(value) == "$1000000000000000000000000000000.00"
    assert format_currency(-float(value)) == "-$1000000000000000000000000000000.00"
    assert format_number(value) == "1,000,000,000,000,000,000,000,000,000,000"
    assert fixed(float(value), 1) == "1000000000000000000000000000000.0"


def test_largest_float_formats() -> None:
    assert format_number(1.7976931348623157e308).startswith("179,769,313,486,231,57")
