"""
Locale-aware number and currency formatting with HTML entity output.
"""

from .locales import (
    CurrencyRule,
    LocaleRule,
    LocaleRegistry,
    UnknownLocale,
    LOCALE_CONFIG,
    default_registry,
)
from .formatter import Amount, LocaleAmountFormatter, to_locale_amount

__all__ = [
    'Amount',
    'CurrencyRule',
    'LocaleRule',
    'LocaleRegistry',
    'LocaleAmountFormatter',
    'UnknownLocale',
    'LOCALE_CONFIG',
    'default_registry',
    'to_locale_amount',
]
