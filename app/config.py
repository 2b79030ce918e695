from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional
import logging
import os

from dotenv import load_dotenv

log = logging.getLogger("sales_tracker.config")

DEFAULT_MONGODB_URI = "mongodb://localhost:27017"


@dataclass(frozen=True)
class Settings:
    mongodb_uri: str = DEFAULT_MONGODB_URI
    database_name: str = "sales_tracker"
    collection_name: str = "sales"
    server_selection_timeout_ms: int = 10_000
    connect_timeout_ms: int = 10_000
    max_pool_size: int = 5
    log_level: str = "INFO"
    log_dir: Optional[Path] = None


def _int_setting(env: Mapping[str, str], name: str, default: int) -> int:
    raw = env.get(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError:
        log.warning("invalid_setting name=%s value=%r using=%s", name, raw, default)
        return default


def load_settings(environ: Optional[Mapping[str, str]] = None) -> Settings:
    if environ is None:
        load_dotenv()
        environ = os.environ

    log_dir = environ.get("LOG_DIR")
    return Settings(
        mongodb_uri=environ.get("MONGODB_URI") or DEFAULT_MONGODB_URI,
        database_name=environ.get("SALES_DB_NAME") or "sales_tracker",
        collection_name=environ.get("SALES_COLLECTION") or "sales",
        server_selection_timeout_ms=_int_setting(environ, "MONGODB_SERVER_SELECTION_TIMEOUT_MS", 10_000),
        connect_timeout_ms=_int_setting(environ, "MONGODB_CONNECT_TIMEOUT_MS", 10_000),
        max_pool_size=_int_setting(environ, "MONGODB_MAX_POOL_SIZE", 5),
        log_level=(environ.get("LOG_LEVEL") or "INFO").upper(),
        log_dir=Path(log_dir) if log_dir else None,
    )


_settings: Optional[Settings] = None


def get_settings() -> Settings:
    global _settings
    if _settings is None:
        _settings = load_settings()
    return _settings


def reset_settings() -> None:
    global _settings
    _settings = None
