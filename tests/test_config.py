"""
Tests for settings loaded from the environment.

Settings reads the environment when the module is imported, so each
test reloads gl_posting.config and the fixture reloads it again with
the original environment afterwards.
"""

import importlib

import pytest

from gl_posting import config


@pytest.fixture
def reload_config(monkeypatch):
    def _reload(**env):
        for name, value in env.items():
            monkeypatch.setenv(name, value)
        return importlib.reload(config)

    yield _reload

    monkeypatch.undo()
    importlib.reload(config)


def test_functional_currency_defaults_to_inr(reload_config, monkeypatch):
    monkeypatch.delenv("FUNCTIONAL_CURRENCY", raising=False)
    settings = reload_config().Settings()
    assert settings.FUNCTIONAL_CURRENCY == "INR"


def test_functional_currency_upper_cased(reload_config):
    settings = reload_config(FUNCTIONAL_CURRENCY=" usd ").Settings()
    assert settings.FUNCTIONAL_CURRENCY == "USD"


def test_get_settings_is_cached(reload_config):
    reloaded = reload_config()
    assert reloaded.get_settings() is reloaded.get_settings()
