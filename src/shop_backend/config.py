# src/shop_backend/config.py

"""Centralized settings loaded from environment variables (+ optional .env).

Design goals:
- One Settings object for the whole app (normal "settings layer").
- No secrets required at import time.
- Bad values never crash startup: they fall back to defaults.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

ENV_PREFIX = "SHOP"

load_dotenv(override=False)


def _k(suffix: str) -> str:
    """Build env var name with the project prefix."""
    return f"{ENV_PREFIX}_{suffix}"


def _env(name: str, default: str = "") -> str:
    v = os.getenv(name)
    return default if v is None else v


def _first_env(*names: str, default: str | None = None) -> str | None:
    for n in names:
        v = os.getenv(n)
        if v is not None and v.strip() != "":
            return v
    return default


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "y", "on"}


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return float(raw)
    except ValueError:
        return default


def _env_path(name: str, default: Path) -> Path:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    return Path(raw).expanduser()


@dataclass(frozen=True, slots=True)
class Settings:
    # ---- App / logging ----
    app_name: str
    log_level: str
    data_dir: Path

    # ---- HTTP ----
    http_enabled: bool
    server_host: str
    server_port: int

    # ---- Background workers ----
    worker_count: int
    shutdown_timeout_seconds: float

    @staticmethod
    def from_env() -> "Settings":
        app_name = _env(_k("APP_NAME"), "shop-backend").strip() or "shop-backend"
        log_level = _env(_k("LOG_LEVEL"), "INFO")
        data_dir = _env_path(_k("DATA_DIR"), Path(".local/shop"))

        http_enabled = _env_bool(_k("HTTP_ENABLED"), True)
        server_host = _env(_k("SERVER_HOST"), "0.0.0.0")

        # Accept the plain SERVER_PORT too (container setups often set only that).
        raw_port = _first_env(_k("SERVER_PORT"), "SERVER_PORT", default="8080") or "8080"
        try:
            server_port = int(raw_port)
        except ValueError:
            server_port = 8080

        worker_count = _env_int(_k("WORKER_COUNT"), 5)
        shutdown_timeout_seconds = max(0.0, _env_float(_k("SHUTDOWN_TIMEOUT"), 10.0))

        return Settings(
            app_name=app_name,
            log_level=log_level,
            data_dir=data_dir,
            http_enabled=http_enabled,
            server_host=server_host,
            server_port=server_port,
            worker_count=worker_count,
            shutdown_timeout_seconds=shutdown_timeout_seconds,
        )


SETTINGS = Settings.from_env()


def get_settings() -> Settings:
    return SETTINGS
