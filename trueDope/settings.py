"""Django settings for TrueDope's shot statistics services.

The project hosts validation, orchestration and management commands around the
pure `shotstats` package. It has no database and serves no HTTP traffic.
Every tunable reads an environment variable first and falls back to the
default shown here.
"""

from __future__ import annotations

import os

_TRUTHY = frozenset({"1", "true", "t", "yes", "y", "on"})


def _env_bool(name: str, *, default: bool) -> bool:
    """Read `name` as a flag; any value outside `_TRUTHY` counts as off."""

    value = os.environ.get(name)
    return default if value is None else value.strip().lower() in _TRUTHY


def _env_int(name: str, *, default: int) -> int:
    """Read `name` as an integer.

    Raises:
        ValueError: When the variable is set but is not an integer, so a typo
            fails at startup instead of silently using the default.
    """

    value = os.environ.get(name)
    return default if value is None else int(value.strip())


def _env_csv(name: str, *, default: list[str]) -> list[str]:
    """Read `name` as comma-separated values, dropping blanks."""

    value = os.environ.get(name)
    if value is None:
        return default
    return [item.strip() for item in value.split(",") if item.strip()]


DEBUG = _env_bool("DJANGO_DEBUG", default=True)

SECRET_KEY = os.environ.get("DJANGO_SECRET_KEY", "")
if not SECRET_KEY:
    if not DEBUG:
        raise RuntimeError("Set DJANGO_SECRET_KEY before running with DJANGO_DEBUG off.")
    SECRET_KEY = "truedope-local-development-key"

ALLOWED_HOSTS: list[str] = _env_csv("DJANGO_ALLOWED_HOSTS", default=["localhost", "127.0.0.1"])

INSTALLED_APPS = ["rangelog.apps.RangeLogConfig"]

# Measurements are computed on demand; nothing is persisted here.
DATABASES: dict[str, dict[str, str]] = {}

LANGUAGE_CODE = "en-us"
TIME_ZONE = "UTC"
USE_I18N = False
USE_TZ = True

LOG_LEVEL = os.getenv("DJANGO_LOG_LEVEL", "INFO").strip().upper()

LOGGING = {
    "version": 1,
    "disable_existing_loggers": False,
    "formatters": {
        "verbose": {
            "format": "{asctime} {levelname} {name} {message}",
            "style": "{",
        },
    },
    "handlers": {
        "console": {
            "class": "logging.StreamHandler",
            "formatter": "verbose",
        },
    },
    "root": {
        "handlers": ["console"],
        "level": "WARNING",
    },
    "loggers": {
        "rangelog": {
            "level": LOG_LEVEL,
        },
    },
}

# Shot statistics tuning.
TRUEDOPE_MAX_COMPARED_AMMUNITION = _env_int("TRUEDOPE_MAX_COMPARED_AMMUNITION", default=5)
TRUEDOPE_DOPE_INTERVAL_YARDS = _env_int("TRUEDOPE_DOPE_INTERVAL_YARDS", default=50)
TRUEDOPE_DOPE_MAX_INTERPOLATION_GAP_YARDS = _env_int(
    "TRUEDOPE_DOPE_MAX_INTERPOLATION_GAP_YARDS",
    default=100,
)
