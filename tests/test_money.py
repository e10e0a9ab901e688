"""
Unit Tests for money helpers
"""

import pytest
from decimal import Decimal
from settlement.money import coerce_bool, coerce_money, format_brl, round2


class TestRound2:

    @pytest.mark.parametrize("value,expected", [
        ("1.005", "1.01"), ("2.675", "2.68"), ("0.004", "0.00"), ("-1.005", "-1.01"), ("10", "10.00"),
    ])
    def test_half_up(self, value, expected):
        assert round2(Decimal(value)) == Decimal(expected)

    @pytest.mark.parametrize("value", ["0", "1.005", "123.456", "-7.125", "99999.995"])
    def test_idempotent(self, value):
        once = round2(Decimal(value))
        assert round2(once) == once


class TestCoerceMoney:

    @pytest.mark.parametrize("raw,expected", [
        (1500, "1500.00"),
        (100.005, "100.01"),
        ("1234.5", "1234.50"),
        ("1.234,56", "1234.56"),
        ("R$ 2.500,00", "2500.00"),
        ("1234,5", "1234.50"),
        (Decimal("99.999"), "100.00"),
    ])
    def test_parses(self, raw, expected):
        assert coerce_money(raw) == Decimal(expected)

    @pytest.mark.parametrize("raw", [None, "", "abc", "-5", -0.01, float("nan"), "Infinity", True, [1]])
    def test_coerces_to_zero(self, raw):
        assert coerce_money(raw) == Decimal('0')

    @pytest.mark.parametrize("raw", ["1e30", 1e30, "1000000000000000", Decimal("9e25")])
    def test_out_of_range_coerces_to_zero(self, raw):
        assert coerce_money(raw) == Decimal('0')

    def test_largest_accepted_amount(self):
        assert coerce_money("999999999999999.99") == Decimal('999999999999999.99')


class TestCoerceBool:

    @pytest.mark.parametrize("raw,expected", [
        (True, True), (False, False), ("true", True), ("on", True), ("sim", True),
        ("false", False), ("", False), (0, False), (1, True), (None, False),
    ])
    def test_values(self, raw, expected):
        assert coerce_bool(raw) == expected


class TestFormatBrl:

    @pytest.mark.parametrize("value,expected", [
        (Decimal("1234.56"), "R$ 1.234,56"),
        (Decimal("0"), "R$ 0,00"),
        (Decimal("1000000"), "R$ 1.000.000,00"),
        (Decimal("-600"), "-R$ 600,00"),
        (250, "R$ 250,00"),
    ])
    def test_format(self, value, expected):
        assert format_brl(value) == expected
