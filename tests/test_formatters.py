"""Tests for the number formatting presets."""

import pytest

from formatters import CURRENCY, DECIMAL, FORMATTERS, NumberFormatter, get_formatter


class TestCurrency:
    def test_whole_dollars_with_grouping(self):
        assert CURRENCY.format(1000000) == "$1,000,000"

    def test_no_fraction_digits(self):
        assert CURRENCY.format(760505847.4) == "$760,505,847"

    def test_half_rounds_away_from_zero(self):
        assert CURRENCY.format(2.5) == "$3"
        assert CURRENCY.format(-2.5) == "-$3"

    def test_negative_sign_before_symbol(self):
        assert CURRENCY.format(-1234) == "-$1,234"

    def test_numeric_string_input(self):
        assert CURRENCY.format("652177271") == "$652,177,271"

    def test_small_negative_rounds_to_unsigned_zero(self):
        assert CURRENCY.format(-0.4) == "$0"


class TestDecimal:
    def test_grouping_without_symbol(self):
        assert DECIMAL.format(1000000) == "1,000,000"

    def test_rounds_fraction(self):
        assert DECIMAL.format(82.53) == "83"
        assert DECIMAL.format(30.01) == "30"

    def test_callable_alias(self):
        assert DECIMAL(1234) == "1,234"

    def test_fraction_digits_option(self):
        f = NumberFormatter(style="decimal", max_fraction_digits=2)
        assert f.format(1234.5) == "1,234.50"


class TestRegistry:
    def test_presets(self):
        assert get_formatter("currency") is CURRENCY
        assert get_formatter("decimal") is DECIMAL

    def test_unknown_name(self):
        with pytest.raises(KeyError):
            get_formatter("percent")

    def test_read_only(self):
        with pytest.raises(TypeError):
            FORMATTERS["percent"] = DECIMAL


class TestExtremeValues:
    def test_beyond_default_decimal_precision(self):
        assert DECIMAL.format(1e30) == "1,000,000,000,000,000,000,000,000,000,000"
        assert CURRENCY.format(-1e28) == "-$10,000,000,000,000,000,000,000,000,000"

    def test_largest_float(self):
        out = DECIMAL.format(1.7976931348623157e308)
        assert out.startswith("179,769,313,486,231,570")
        assert out.count(",") == 102

    def test_nan_and_infinity(self):
        assert DECIMAL.format(float("nan")) == "NaN"
        assert CURRENCY.format(float("inf")) == "$∞"
        assert DECIMAL.format(float("-inf")) == "-∞"

    def test_scene_with_huge_leaf_value(self, registry):
        from hierarchy import Node
        from scene import build_scene

        tree = Node("r", children=(Node("A", children=(Node("big", "A", 1e30),)),))
        scene = build_scene(tree, registry["movies"], registry, 1200, 720)
        assert "Value: $1,000,000,000,000,000,000,000,000,000,000" in scene.tiles[0].tooltip_html
