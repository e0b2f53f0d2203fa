import logging
import math
import re
from decimal import ROUND_HALF_UP, Context, Decimal

from .locales import CurrencyRule, LocaleRegistry, LocaleRule, default_registry

logger = logging.getLogger(__name__)

_LEADING_INT = re.compile(r"\s*([+-]?\d+)")

# Fractional parts up to this length are left ungrouped.
FRACTION_GROUPING_THRESHOLD = 5

# Largest fixed precision; larger counts render in natural form.
MAX_FRACTION_DIGITS = 100


# -------------------------------
# Selector parsing
# -------------------------------
def parse_digits(selector) -> int | None:
    """
    Read an explicit fractional digit count from the selector.

    Ints are taken as-is, floats are truncated, strings are read from their
    leading integer ("2", " 3", "2abc"). Anything else returns None and is
    treated as a currency code by the caller.
    """
    if selector is None or isinstance(selector, bool):
        return None
    if isinstance(selector, int):
        return selector
    if isinstance(selector, (float, Decimal)):
        return int(selector) if math.isfinite(selector) else None
    if isinstance(selector, str):
        match = _LEADING_INT.match(selector)
        return int(match.group(1)) if match else None
    return None


def to_decimal(value) -> Decimal:
    if isinstance(value, Decimal):
        return value
    if isinstance(value, bool):
        value = int(value)
    # str() gives the shortest round-trip form, so 41131.935 stays 41131.935
    return Decimal(str(value))


# -------------------------------
# Rendering helpers
# -------------------------------
def render_natural(number: Decimal) -> str:
    """Positional representation with no rounding and no trailing zeros."""
    if number.is_zero():
        return "0"
    text = format(number, "f")
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return text


def render_non_finite(number: Decimal) -> str:
    if number.is_nan():
        return "NaN"
    return "-Infinity" if number < 0 else "Infinity"


def render_fixed(number: Decimal, digits: int) -> str:
    """Exactly `digits` fractional digits, rounding half away from zero."""
    context = Context(prec=max(28, number.adjusted() + digits + 2))
    rounded = number.quantize(Decimal(1).scaleb(-digits), rounding=ROUND_HALF_UP, context=context)
    return format(rounded, "f")


def group_thousands(integer_part: str, sep: str) -> str:
    """Apply thousands grouping to a string of digits."""
    if len(integer_part) <= 3:
        return integer_part

    rev = integer_part[::-1]
    groups = [rev[i:i+3] for i in range(0, len(rev), 3)]
    return sep.join(g[::-1] for g in groups[::-1])


def group_thousandths(fraction_part: str, sep: str) -> str:
    """Group long fractional parts in runs of 3 from the left."""
    if len(fraction_part) <= FRACTION_GROUPING_THRESHOLD:
        return fraction_part
    return sep.join(fraction_part[i:i+3] for i in range(0, len(fraction_part), 3))


def format_plain(number: Decimal, locale_rule: LocaleRule, digits: int | None) -> str:
    """Format a number with locale separators and optional fixed precision."""
    sign = "-" if number < 0 else ""
    abs_val = abs(number)

    if digits is not None and 0 <= digits <= MAX_FRACTION_DIGITS:
        number_str = render_fixed(abs_val, digits)
    else:
        number_str = render_natural(abs_val)

    int_part, _, frac_part = number_str.partition(".")
    result = group_thousands(int_part, locale_rule.thousands_separator)
    if frac_part:
        result += locale_rule.decimal_separator
        result += group_thousandths(frac_part, locale_rule.thousandths_separator)

    return sign + result


def wrap_currency(text: str, currency_rule: CurrencyRule, extended: bool = False) -> str:
    if extended:
        return currency_rule.ext_prefix + text + currency_rule.ext_suffix
    return currency_rule.prefix + text + currency_rule.suffix


# -------------------------------
# Formatter
# -------------------------------
class LocaleAmountFormatter:
    """
    Formats numbers as locale-specific display strings.

    `default_language` stands in for the caller's ambient preferred language
    (a browser's Accept-Language, a user setting...). It is consulted only
    when no language code is passed to `format`.
    """

    def __init__(self, registry: LocaleRegistry | None = None, default_language: str = ""):
        self.registry = registry or default_registry()
        self.default_language = default_language

    def format(self, value, language_code: str | None = None, digits_or_currency=None,
               extended: bool = False, default_language: str | None = None) -> str:
        """
        Format `value` for a language, optionally as a currency amount.

        Examples:
          format(41131.935, "en")              -> "41,131.935"
          format(41131.935, "fr", 2)           -> "41&nbsp;131,94"
          format(41131.935, "en", "EUR")       -> "&euro;41,131.94"
          format(41131.935, "fr", "JPY", True) -> "41&nbsp;132&nbsp;&yen;"
        """
        if default_language is None:
            default_language = self.default_language
        lang, locale_rule = self.registry.resolve(language_code or default_language or "")

        digits = parse_digits(digits_or_currency)
        currency = digits_or_currency if digits is None else None

        currency_rule = None
        if isinstance(currency, str):
            currency_rule = locale_rule.currencies.get(currency)
            if currency_rule is None:
                logger.debug(f"No currency {currency} for locale {lang}, skipping symbol")
            else:
                digits = currency_rule.digits

        number = to_decimal(value)
        if not number.is_finite():
            return render_non_finite(number)

        result = format_plain(number, locale_rule, digits)
        if currency_rule is not None:
            result = wrap_currency(result, currency_rule, extended)
        return result


default_formatter = LocaleAmountFormatter()


def to_locale_amount(value, language_code: str | None = None, digits_or_currency=None,
                     extended: bool = False) -> str:
    """Format with the process-wide formatter and its built-in locales."""
    return default_formatter.format(value, language_code, digits_or_currency, extended)


class Amount:
    """Thin wrapper giving a number a `to_locale_amount` method."""

    def __init__(self, value, formatter: LocaleAmountFormatter | None = None):
        self.value = value
        self.formatter = formatter or default_formatter

    def to_locale_amount(self, language_code: str | None = None, digits_or_currency=None,
                         extended: bool = False) -> str:
        return self.formatter.format(self.value, language_code, digits_or_currency, extended)

    def __str__(self) -> str:
        return self.to_locale_amount()

    def __repr__(self) -> str:
        return f"Amount({self.value!r})"
