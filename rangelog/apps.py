"""App configuration for the rangelog Django app."""

from __future__ import annotations

from django.apps import AppConfig


class RangeLogConfig(AppConfig):
    """Configuration for the `rangelog` app."""

    name = "rangelog"
    verbose_name = "Range log"
