import json
import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional


logger = logging.getLogger(__name__)


@dataclass
class AppConfig:
    database_url: str
    secret_key: str
    log_level: str
    currency: str
    strict_status_transitions: bool = False


SETTINGS_FILE = Path(__file__).resolve().parents[1] / "data" / "settings.json"


def validate_currency(value: Optional[str]) -> str:
    v = (value or "USD").strip().upper()
    if len(v) != 3:
        raise ValueError("Invalid currency code: expected ISO4217 length 3")
    return v


LOG_LEVELS = ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG")


def validate_log_level(value: Optional[str]) -> str:
    v = str(value or "INFO").strip().upper()
    if v not in LOG_LEVELS:
        raise ValueError(f"Invalid log level: {value}")
    return v


def parse_bool(value) -> bool:
    if isinstance(value, bool):
        return value
    return str(value or "").strip().lower() in {"1", "true", "yes", "on"}


def _load_settings_file(path: Path = SETTINGS_FILE) -> dict:
    if not path.exists():
        return {}
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, ValueError) as exc:
        logger.warning("ignoring unreadable settings file %s: %s", path, exc)
        return {}
    return data if isinstance(data, dict) else {}


def load_env(settings_path: Path = SETTINGS_FILE) -> AppConfig:
    # data/settings.json wins, environment variables are the fallback
    s = _load_settings_file(settings_path)
    database_url = s.get("DATABASE_URL") or os.getenv("DATABASE_URL", "sqlite:///data/pos.db")
    secret_key = s.get("SECRET_KEY") or os.getenv("SECRET_KEY", "dev_secret")
    log_level = validate_log_level(s.get("LOG_LEVEL") or os.getenv("LOG_LEVEL"))
    currency = validate_currency(s.get("CURRENCY") or os.getenv("CURRENCY"))
    strict = parse_bool(s.get("ORDER_STRICT_TRANSITIONS", os.getenv("ORDER_STRICT_TRANSITIONS")))
    return AppConfig(
        database_url=database_url,
        secret_key=secret_key,
        log_level=log_level,
        currency=currency,
        strict_status_transitions=strict,
    )

