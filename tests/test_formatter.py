"""
Tests for number and currency formatting.
"""

from decimal import Decimal

import pytest

from locale_amount import Amount, LocaleAmountFormatter, to_locale_amount
from locale_amount.formatter import (
    group_thousands,
    group_thousandths,
    parse_digits,
    render_fixed,
    render_natural,
)


class TestUsageExamples:
    """The documented usage examples."""

    def test_english_natural(self, formatter):
        assert formatter.format(41131.935, "en") == "41,131.935"

    def test_french_two_digits(self, formatter):
        assert formatter.format(41131.935, "fr", 2) == "41&nbsp;131,94"

    def test_english_euro(self, formatter):
        assert formatter.format(41131.935, "en", "EUR") == "&euro;41,131.94"

    def test_french_yen_extended(self, formatter):
        assert formatter.format(41131.935, "fr", "JPY", True) == "41&nbsp;132&nbsp;&yen;"

    def test_module_level_function(self):
        assert to_locale_amount(41131.935, "en", "EUR") == "&euro;41,131.94"


class TestRounding:
    """Fixed precision rounds half away from zero."""

    @pytest.mark.parametrize("digits, expected", [
        (0, "1,235"),
        (1, "1,234.5"),
        (2, "1,234.50"),
        (3, "1,234.500"),
    ])
    def test_english_digits(self, formatter, digits, expected):
        assert formatter.format(1234.5, "en", digits) == expected

    def test_french_digits(self, formatter):
        assert formatter.format(1234.5, "fr", 0) == "1&nbsp;235"
        assert formatter.format(1234.5, "fr", 2) == "1&nbsp;234,50"

    def test_half_rounds_away_from_zero(self, formatter):
        assert formatter.format(2.5, "en", 0) == "3"
        assert formatter.format(-2.5, "en", 0) == "-3"
        assert formatter.format(0.125, "en", 2) == "0.13"

    def test_digit_string_is_not_a_currency(self, formatter):
        assert formatter.format(1000, "en", "2") == "1,000.00"

    def test_negative_digits_use_natural_form(self, formatter):
        assert formatter.format(1.5, "en", -1) == "1.5"

    def test_digits_above_limit_use_natural_form(self, formatter):
        hundred = formatter.format(1.5, "en", 100)
        assert hundred.startswith("1.500&nbsp;000&nbsp;")
        assert hundred.count("&nbsp;") == 33
        assert formatter.format(1.5, "en", 101) == "1.5"
        assert formatter.format(1, "en", 10**7) == "1"
        assert formatter.format(1234.5, "fr", "10000000") == "1&nbsp;234,5"

    def test_zero_digits_has_no_decimal_separator(self, formatter):
        assert formatter.format(41131.935, "fr", 0) == "41&nbsp;132"


class TestGrouping:
    """Integer and fractional grouping."""

    def test_short_integers_untouched(self, formatter):
        assert formatter.format(999, "en") == "999"
        assert formatter.format(0, "en") == "0"

    def test_integer_grouping(self, formatter):
        assert formatter.format(1000, "en") == "1,000"
        assert formatter.format(1234567, "en") == "1,234,567"
        assert formatter.format(1234567, "fr") == "1&nbsp;234&nbsp;567"

    def test_integral_float_has_no_fraction(self, formatter):
        assert formatter.format(1000.0, "en") == "1,000"

    def test_short_fraction_untouched(self, formatter):
        assert formatter.format(0.12345, "en") == "0.12345"

    def test_long_fraction_grouped_from_left(self, formatter):
        assert formatter.format(0.123456, "en") == "0.123&nbsp;456"
        assert formatter.format(1.1234567, "en") == "1.123&nbsp;456&nbsp;7"
        assert formatter.format(0.123456, "fr") == "0,123&nbsp;456"

    def test_small_values_are_positional(self, formatter):
        assert formatter.format(1e-7, "en") == "0.000&nbsp;000&nbsp;1"

    def test_negative_sign_kept_outside_groups(self, formatter):
        assert formatter.format(-1234.5, "en", 2) == "-1,234.50"
        assert formatter.format(-123.4, "en") == "-123.4"
        assert formatter.format(-123456, "en") == "-123,456"

    def test_negative_zero(self, formatter):
        assert formatter.format(-0.0, "en") == "0"

    def test_decimal_input(self, formatter):
        assert formatter.format(Decimal("1234.5678"), "en") == "1,234.5678"

    def test_non_finite_values(self, formatter):
        assert formatter.format(float("nan"), "en", 2) == "NaN"
        assert formatter.format(float("inf"), "fr", "EUR") == "Infinity"
        assert formatter.format(float("-inf"), "en") == "-Infinity"


class TestCurrency:
    """Currency symbols and precision."""

    def test_compact_and_extended(self, formatter):
        assert formatter.format(1234567.891, "en", "USD") == "$1,234,567.89"
        assert formatter.format(1234567.891, "en", "USD", True) == "US$1,234,567.89"
        assert formatter.format(1234567.891, "fr", "CAD", True) == "1&nbsp;234&nbsp;567,89&nbsp;$CAN"
        assert formatter.format(10, "fr", "EUR") == "10,00&nbsp;&euro;"

    def test_currency_without_symbol(self, formatter):
        assert formatter.format(1000, "en", "CHF") == "1,000.00"

    def test_yen_has_no_fraction(self, formatter):
        assert formatter.format(1234.5, "en", "JPY") == "&yen;1,235"

    def test_unknown_currency_skips_wrapping(self, formatter):
        assert formatter.format(1000, "en", "ZZZ") == "1,000"
        assert formatter.format(41131.935, "en", "ZZZ") == "41,131.935"

    def test_currency_codes_are_case_sensitive(self, formatter):
        assert formatter.format(1000, "en", "eur") == "1,000"


class TestLanguageResolution:
    """Language selection and fallback."""

    def test_unknown_language_falls_back_to_english(self, formatter):
        assert formatter.format(1000, "zz") == "1,000"

    def test_only_first_two_letters_used(self, formatter):
        assert formatter.format(1000, "FR-ca") == "1&nbsp;000"
        assert formatter.format(1000, "EN-US", "GBP") == "&pound;1,000.00"

    def test_no_language_defaults_to_english(self, formatter):
        assert formatter.format(1000) == "1,000"
        assert formatter.format(1000, "") == "1,000"

    def test_ambient_language(self, registry):
        formatter = LocaleAmountFormatter(registry, default_language="fr-FR")
        assert formatter.format(1000) == "1&nbsp;000"
        assert formatter.format(1000, "en") == "1,000"
        assert formatter.format(1000, default_language="en") == "1,000"


class TestHelpers:
    """Low-level helpers."""

    def test_parse_digits(self):
        assert parse_digits(2) == 2
        assert parse_digits("2") == 2
        assert parse_digits(" 3") == 3
        assert parse_digits("2abc") == 2
        assert parse_digits(2.9) == 2
        assert parse_digits("EUR") is None
        assert parse_digits(None) is None
        assert parse_digits(True) is None

    def test_render(self):
        assert render_natural(Decimal("1000.0")) == "1000"
        assert render_natural(Decimal("41131.935")) == "41131.935"
        assert render_fixed(Decimal("41131.935"), 2) == "41131.94"
        assert render_fixed(Decimal("41131.935"), 0) == "41132"

    def test_grouping_helpers(self):
        assert group_thousands("123", ",") == "123"
        assert group_thousands("1234", ",") == "1,234"
        assert group_thousandths("12345", " ") == "12345"
        assert group_thousandths("1234567", " ") == "123 456 7"


class TestAmount:
    """Value wrapper."""

    def test_to_locale_amount(self):
        assert Amount(41131.935).to_locale_amount("fr", "JPY", True) == "41&nbsp;132&nbsp;&yen;"

    def test_str_uses_defaults(self):
        assert str(Amount(1234.5)) == "1,234.5"

    def test_custom_formatter(self, registry):
        amount = Amount(1000, LocaleAmountFormatter(registry, default_language="fr"))
        assert str(amount) == "1&nbsp;000"
