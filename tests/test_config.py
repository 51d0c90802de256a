from __future__ import annotations

import pytest

import config
from config import DevelopmentConfig, ProductionConfig, get_config


def test_get_config_defaults_to_development(monkeypatch):
    monkeypatch.delenv("APP_ENV", raising=False)
    assert get_config() is DevelopmentConfig


def test_get_config_reads_app_env(monkeypatch):
    monkeypatch.setenv("APP_ENV", "Production")
    assert get_config() is ProductionConfig


def test_get_config_rejects_unknown_env():
    with pytest.raises(KeyError):
        get_config("staging")


def test_provider_alias_is_normalized(monkeypatch):
    monkeypatch.setattr(config.DevelopmentConfig, "FX_RATE_PROVIDER", "Exchange")
    assert get_config("development").FX_RATE_PROVIDER == "exchangerate_api"


def test_unsupported_provider_is_rejected(monkeypatch):
    monkeypatch.setattr(config.DevelopmentConfig, "FX_RATE_PROVIDER", "frankfurter")
    with pytest.raises(ValueError):
        get_config("development")
