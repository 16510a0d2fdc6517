"""Tests for ValueFormatter magnitude ladders."""
import pytest

from cronosmcp.toolkits.utils import ValueFormatter


class TestFormatCurrency:

    @pytest.mark.parametrize("value,expected", [
        (1234, "$1.23K"),
        (2.5e12, "$2.50T"),
        (7.891e9, "$7.89B"),
        (1e6, "$1.00M"),
        (999.999, "$1000.00"),
        (1, "$1.00"),
        (0.5, "$0.5000"),
        (0.01, "$0.0100"),
        (0.00000001, "$0.00000001"),
    ])
    def test_ladder(self, value, expected):
        assert ValueFormatter.format_currency(value) == expected

    @pytest.mark.parametrize("value", [0, -5, float("inf"), float("nan"), None, "123", True])
    def test_degenerate_values(self, value):
        assert ValueFormatter.format_currency(value) == "$0.00"


    @pytest.mark.parametrize("value,expected", [
        (1125, "$1.13K"),
        (0.03125, "$0.0313"),
        (2.675, "$2.67"),
    ])
    def test_ties_round_up(self, value, expected):
        # 2.675 is stored just below the tie
        assert ValueFormatter.format_currency(value) == expected


class TestFormatPrice:

    @pytest.mark.parametrize("value,expected", [
        (65000.1, "$65,000.10"),
        (1000, "$1,000.00"),
        (1.5, "$1.5000"),
        (0.0812, "$0.081200"),
        (0.0001, "$0.000100"),
        (0.00000001, "$0.00000001"),
        (0, "$0.00"),
        (-1, "$0.00"),
    ])
    def test_ladder(self, value, expected):
        assert ValueFormatter.format_price(value) == expected

    def test_custom_prefix(self):
        assert ValueFormatter.format_price(2, prefix="") == "2.0000"
        assert ValueFormatter.format_price(0, prefix="") == "0.00"

    def test_grouped_tie_rounds_up(self):
        assert ValueFormatter.format_price(1000.125) == "$1,000.13"


class TestFormatTokenAmount:

    @pytest.mark.parametrize("raw,expected", [
        ("100000000000", "100.00B"),
        (1500, "1.50K"),
        ("5e26", "500.00M"),
        ("2.5", "2.50"),
        ("1125", "1.13K"),
        ("0", "0.00"),
        ("abc", "0.00"),
        (None, "0.00"),
    ])
    def test_amounts(self, raw, expected):
        assert ValueFormatter.format_token_amount(raw) == expected


class TestFormatBalance:

    def test_wei_balance(self):
        assert ValueFormatter.format_balance("1500000000000000000") == "1.5000"

    def test_suffixes(self):
        assert ValueFormatter.format_balance(2_500_000 * 10**18) == "2.50M"
        assert ValueFormatter.format_balance(1234, decimals=0) == "1.23K"
        assert ValueFormatter.format_balance(1125, decimals=0) == "1.13K"

    def test_invalid_balance(self):
        assert ValueFormatter.format_balance("not-a-number") == "0.0000"


class TestFormatPercentage:

    def test_ratio(self):
        assert ValueFormatter.format_percentage("25", "100") == "25.00%"

    def test_zero_denominator(self):
        assert ValueFormatter.format_percentage(5, 0) == "0.00%"
