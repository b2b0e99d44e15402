"""Tests for environment-driven configuration."""

import importlib
import logging

import pytest
from gold_api import config


@pytest.fixture
def reload_config(monkeypatch):
    def _reload(**env):
        for name in ("LOG_LEVEL", "PORT", "MAX_CACHE_SIZE", "CURRENT_PRICE_TTL",
                     "HISTORICAL_DATA_TTL", "DATE_SPECIFIC_TTL", "CACHE_CLEANUP_INTERVAL"):
            monkeypatch.delenv(name, raising=False)
        for name, value in env.items():
            monkeypatch.setenv(name, value)
        return importlib.reload(config)

    yield _reload
    monkeypatch.undo()
    importlib.reload(config)


def test_defaults(reload_config):
    cfg = reload_config()
    assert cfg.CURRENT_PRICE_TTL == 300
    assert cfg.HISTORICAL_DATA_TTL == 1800
    assert cfg.DATE_SPECIFIC_TTL == 86400
    assert cfg.MAX_CACHE_SIZE == 1000
    assert cfg.CACHE_CLEANUP_INTERVAL == 3600


def test_log_level_is_case_insensitive(reload_config):
    cfg = reload_config(LOG_LEVEL="debug")
    assert cfg.LOG_LEVEL == "DEBUG"
    # Must be a level name logging accepts
    assert logging.getLevelName(cfg.LOG_LEVEL) == logging.DEBUG


def test_overrides(reload_config):
    cfg = reload_config(MAX_CACHE_SIZE="5", PORT="8080")
    assert cfg.MAX_CACHE_SIZE == 5
    assert cfg.PORT == 8080
