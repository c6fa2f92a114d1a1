"""
app/config.py

Application-level configuration helpers.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache

from db.config import load_env_files

_DEFAULT_UPLOAD_MAX_BYTES = 10 * 1024 * 1024


@lru_cache(maxsize=1)
def _load_env_once() -> None:
    """
    Ensure project `.env` files are loaded once before reading app settings.
    """

    load_env_files()


def _get_bool_env(name: str, default: bool) -> bool:
    """
    Read a boolean from environment variables with safe fallback.
    """

    _load_env_once()
    raw_value = os.getenv(name)
    if raw_value is None:
        return default
    return raw_value.strip().lower() in {"1", "true", "yes", "on"}


def _get_int_env(name: str, default: int) -> int:
    """
    Read an integer from environment variables with safe fallback.
    """

    _load_env_once()
    raw_value = os.getenv(name)
    if raw_value is None:
        return default
    try:
        return int(raw_value)
    except ValueError:
        return default


def _get_str_env(name: str, default: str) -> str:
    _load_env_once()
    value = os.getenv(name)
    if value is None:
        return default
    stripped = value.strip()
    return stripped if stripped else default


@dataclass(frozen=True)
class AppSettings:
    """
    Process-wide settings read at startup.
    """

    log_level: str = "INFO"
    seed_vendor_mappings: bool = False


@dataclass(frozen=True)
class CSVUploadSettings:
    """
    Runtime settings for CSV batch uploads.
    """

    max_upload_bytes: int = _DEFAULT_UPLOAD_MAX_BYTES
    log_row_errors: bool = True


@dataclass(frozen=True)
class DashboardSettings:
    top_vendor_limit: int = 5


@lru_cache(maxsize=1)
def get_app_settings() -> AppSettings:
    """
    Return cached application settings.
    """

    return AppSettings(
        log_level=_get_str_env("LOG_LEVEL", "INFO").upper(),
        seed_vendor_mappings=_get_bool_env("SEED_VENDOR_MAPPINGS", False),
    )


@lru_cache(maxsize=1)
def get_csv_upload_settings() -> CSVUploadSettings:
    """
    Return cached CSV upload settings from environment variables.
    """

    return CSVUploadSettings(
        max_upload_bytes=max(1, _get_int_env("CSV_UPLOAD_MAX_BYTES", _DEFAULT_UPLOAD_MAX_BYTES)),
        log_row_errors=_get_bool_env("CSV_LOG_ROW_ERRORS", True),
    )


@lru_cache(maxsize=1)
def get_dashboard_settings() -> DashboardSettings:
    return DashboardSettings(
        top_vendor_limit=max(1, _get_int_env("DASHBOARD_TOP_VENDOR_LIMIT", 5)),
    )
