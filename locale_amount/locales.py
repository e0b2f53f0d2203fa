import copy
import logging
from dataclasses import dataclass, field

logger = logging.getLogger(__name__)

FALLBACK_LANGUAGE = "en"


class UnknownLocale(ValueError):
    """Raised when a currency is registered under a language that does not exist."""


# -------------------------------
# Rules
# -------------------------------
@dataclass
class CurrencyRule:
    prefix: str = ""
    suffix: str = ""
    ext_prefix: str = ""
    ext_suffix: str = ""
    digits: int = 2

    @classmethod
    def from_dict(cls, data: dict) -> "CurrencyRule":
        """Build a rule from snake_case or camelCase keys."""
        return cls(
            prefix=data.get("prefix", ""),
            suffix=data.get("suffix", ""),
            ext_prefix=data.get("ext_prefix", data.get("extPrefix", "")),
            ext_suffix=data.get("ext_suffix", data.get("extSuffix", "")),
            digits=data.get("digits", 2),
        )

    def to_dict(self) -> dict:
        return {
            "prefix": self.prefix,
            "suffix": self.suffix,
            "ext_prefix": self.ext_prefix,
            "ext_suffix": self.ext_suffix,
            "digits": self.digits,
        }


@dataclass
class LocaleRule:
    thousands_separator: str | None
    decimal_separator: str | None
    thousandths_separator: str | None
    currencies: dict = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: dict) -> "LocaleRule":
        """
        Build a rule from a mapping.

        Accepts either the long keys (``thousands_separator``...) or the short
        ones (``thousands``, ``decimal``, ``thousandths``). Missing keys are
        kept as None so the entry is treated as absent at lookup time.
        """
        currencies = data.get("currencies") or {}
        return cls(
            thousands_separator=data.get("thousands_separator", data.get("thousands")),
            decimal_separator=data.get("decimal_separator", data.get("decimal")),
            thousandths_separator=data.get("thousandths_separator", data.get("thousandths")),
            currencies={
                code: rule if isinstance(rule, CurrencyRule) else CurrencyRule.from_dict(rule)
                for code, rule in currencies.items()
            },
        )

    def is_complete(self) -> bool:
        separators = (
            self.thousands_separator,
            self.decimal_separator,
            self.thousandths_separator,
        )
        return all(sep is not None for sep in separators) and bool(self.currencies)

    def to_dict(self) -> dict:
        return {
            "thousands_separator": self.thousands_separator,
            "decimal_separator": self.decimal_separator,
            "thousandths_separator": self.thousandths_separator,
            "currencies": {code: rule.to_dict() for code, rule in self.currencies.items()},
        }


# -------------------------------
# Seed data
# -------------------------------
# Values are HTML fragments emitted verbatim.
# Adding a new language = add one entry here, or call LocaleRegistry.register().
LOCALE_CONFIG = {
    "en": {
        "thousands": ",",
        "decimal": ".",
        "thousandths": "&nbsp;",
        "currencies": {
            "AUD": {"prefix": "$", "suffix": "", "extPrefix": "A$", "extSuffix": "", "digits": 2},
            "CAD": {"prefix": "$", "suffix": "", "extPrefix": "C$", "extSuffix": "", "digits": 2},
            "CHF": {"prefix": "", "suffix": "", "extPrefix": "", "extSuffix": "", "digits": 2},
            "EUR": {"prefix": "&euro;", "suffix": "", "extPrefix": "&euro;", "extSuffix": "", "digits": 2},
            "GBP": {"prefix": "&pound;", "suffix": "", "extPrefix": "&pound;", "extSuffix": "", "digits": 2},
            "JPY": {"prefix": "&yen;", "suffix": "", "extPrefix": "&yen;", "extSuffix": "", "digits": 0},
            "MXN": {"prefix": "$", "suffix": "", "extPrefix": "Mex$", "extSuffix": "", "digits": 2},
            "NZD": {"prefix": "$", "suffix": "", "extPrefix": "NZ$", "extSuffix": "", "digits": 2},
            "USD": {"prefix": "$", "suffix": "", "extPrefix": "US$", "extSuffix": "", "digits": 2},
        },
    },
    "fr": {
        "thousands": "&nbsp;",
        "decimal": ",",
        "thousandths": "&nbsp;",
        "currencies": {
            "AUD": {"prefix": "", "suffix": "&nbsp;$", "extPrefix": "", "extSuffix": "&nbsp;$A", "digits": 2},
            "CAD": {"prefix": "", "suffix": "&nbsp;$", "extPrefix": "", "extSuffix": "&nbsp;$CAN", "digits": 2},
            "CHF": {"prefix": "", "suffix": "", "extPrefix": "", "extSuffix": "", "digits": 2},
            "EUR": {"prefix": "", "suffix": "&nbsp;&euro;", "extPrefix": "", "extSuffix": "&nbsp;&euro;", "digits": 2},
            "GBP": {"prefix": "", "suffix": "&nbsp;&pound;", "extPrefix": "", "extSuffix": "&nbsp;&pound;", "digits": 2},
            "JPY": {"prefix": "", "suffix": "&nbsp;&yen;", "extPrefix": "", "extSuffix": "&nbsp;&yen;", "digits": 0},
            "MXN": {"prefix": "", "suffix": "&nbsp;$", "extPrefix": "", "extSuffix": "&nbsp;$Mex", "digits": 2},
            "NZD": {"prefix": "", "suffix": "&nbsp;$", "extPrefix": "", "extSuffix": "&nbsp;$NZ", "digits": 2},
            "USD": {"prefix": "", "suffix": "&nbsp;$", "extPrefix": "", "extSuffix": "&nbsp;$US", "digits": 2},
        },
    },
}


# -------------------------------
# Registry
# -------------------------------
class LocaleRegistry:
    """
    Language code -> LocaleRule table.

    Built once at startup and read by formatters. Registration is not
    synchronized: finish it before formatting from several threads.
    """

    def __init__(self, config: dict | None = None):
        self._locales: dict[str, LocaleRule] = {}
        for code, rule in (config or {}).items():
            self.register(code, copy.deepcopy(rule))

    def __contains__(self, code: str) -> bool:
        return self.get(code) is not None

    def register(self, code: str, rule: LocaleRule | dict) -> None:
        """Add or overwrite a language. Malformed entries are stored as-is."""
        if not isinstance(rule, LocaleRule):
            rule = LocaleRule.from_dict(rule)
        code = code.lower()
        self._locales[code] = rule
        logger.info(f"Registered locale {code} with {len(rule.currencies)} currencies")

    def register_currency(self, code: str, currency: str, rule: CurrencyRule | dict) -> None:
        """Add or overwrite a currency under an already registered language."""
        locale_rule = self._locales.get(code.lower())
        if locale_rule is None:
            raise UnknownLocale(f"Unknown locale: {code}")
        if not isinstance(rule, CurrencyRule):
            rule = CurrencyRule.from_dict(rule)
        locale_rule.currencies[currency] = rule
        logger.info(f"Registered currency {currency} for locale {code.lower()}")

    def get(self, code: str) -> LocaleRule | None:
        """Return the rule for an exact code, or None if absent or incomplete."""
        rule = self._locales.get(code)
        if rule is None or not rule.is_complete():
            return None
        return rule

    def resolve(self, code: str | None) -> tuple[str, LocaleRule]:
        """Normalize a language tag to two letters, falling back to English."""
        short = (code or "")[:2].lower()
        rule = self.get(short)
        if rule is None:
            logger.debug(f"No locale for {code!r}, using {FALLBACK_LANGUAGE}")
            fallback = self.get(FALLBACK_LANGUAGE)
            if fallback is None:
                raise UnknownLocale(f"Fallback locale {FALLBACK_LANGUAGE} is not registered or incomplete")
            return FALLBACK_LANGUAGE, fallback
        return short, rule

    def languages(self) -> list[str]:
        return sorted(code for code in self._locales if self.get(code) is not None)


def default_registry() -> LocaleRegistry:
    """Fresh registry seeded with the built-in languages."""
    return LocaleRegistry(LOCALE_CONFIG)
