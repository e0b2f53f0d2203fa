"""
Pytest configuration and fixtures for locale amount tests.
"""

import pytest

from locale_amount.app import create_app
from locale_amount.formatter import LocaleAmountFormatter
from locale_amount.locales import default_registry


@pytest.fixture
def registry():
    """Fresh registry seeded with the built-in languages."""
    return default_registry()


@pytest.fixture
def formatter(registry):
    """Formatter with no ambient language."""
    return LocaleAmountFormatter(registry)


@pytest.fixture
def app(registry):
    app = create_app(registry, default_language="")
    app.config["TESTING"] = True
    return app


@pytest.fixture
def client(app):
    return app.test_client()
