#!/usr/bin/env python
"""Entry point for TrueDope management commands.

Examples:
    python manage.py group_metrics group.yaml --distance 100
    python manage.py velocity_stats chrono.yaml --unit mps
"""

from __future__ import annotations

import os
import sys


def main(argv: list[str] | None = None) -> None:
    """Dispatch a management command using the TrueDope settings."""

    os.environ.setdefault("DJANGO_SETTINGS_MODULE", "trueDope.settings")
    try:
        from django.core.management import execute_from_command_line
    except ImportError as exc:
        raise ImportError("TrueDope's commands need Django; install the project with `pip install -e .`.") from exc
    execute_from_command_line(argv if argv is not None else sys.argv)


if __name__ == "__main__":
    main()
