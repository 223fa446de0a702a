import json

import pytest

from pos.config import load_env, validate_currency


@pytest.fixture
def clean_env(monkeypatch):
    for key in ("DATABASE_URL", "SECRET_KEY", "LOG_LEVEL", "CURRENCY", "ORDER_STRICT_TRANSITIONS"):
        monkeypatch.delenv(key, raising=False)
    return monkeypatch


def test_defaults(tmp_path, clean_env):
    cfg = load_env(tmp_path / "missing.json")
    assert cfg.database_url == "sqlite:///data/pos.db"
    assert cfg.log_level == "INFO"
    assert cfg.currency == "USD"
    assert cfg.strict_status_transitions is False


def test_settings_file_wins_over_env(tmp_path, clean_env):
    settings = tmp_path / "settings.json"
    settings.write_text(json.dumps({"CURRENCY": "eur", "ORDER_STRICT_TRANSITIONS": True}), encoding="utf-8")
    clean_env.setenv("CURRENCY", "GBP")
    clean_env.setenv("DATABASE_URL", "sqlite:////tmp/other.db")

    cfg = load_env(settings)
    assert cfg.currency == "EUR"
    assert cfg.strict_status_transitions is True
    assert cfg.database_url == "sqlite:////tmp/other.db"


def test_unreadable_settings_file_falls_back_to_env(tmp_path, clean_env):
    settings = tmp_path / "settings.json"
    settings.write_text("{not json", encoding="utf-8")
    clean_env.setenv("ORDER_STRICT_TRANSITIONS", "yes")
    assert load_env(settings).strict_status_transitions is True


def test_invalid_currency():
    with pytest.raises(ValueError):
        validate_currency("EURO")



def test_log_level_is_validated(tmp_path, clean_env):
    clean_env.setenv("LOG_LEVEL", "debug")
    assert load_env(tmp_path / "missing.json").log_level == "DEBUG"

    clean_env.setenv("LOG_LEVEL", "LOUD")
    with pytest.raises(ValueError, match="Invalid log level"):
        load_env(tmp_path / "missing.json")
