"""Shared fixtures and the speed-marker rule for the test suite."""

from __future__ import annotations

from collections.abc import Callable, Sequence
from pathlib import Path

import pytest
import yaml

SPEED_MARKERS = ("unit", "integration")


@pytest.fixture
def write_document(tmp_path: Path) -> Callable[..., Path]:
    """Return a factory that dumps a payload to a YAML file under `tmp_path`."""

    def _write(payload: object, *, name: str = "measurement.yaml") -> Path:
        path = tmp_path / name
        path.write_text(yaml.safe_dump(payload, sort_keys=False), encoding="utf-8")
        return path

    return _write


def pytest_collection_modifyitems(items: Sequence[pytest.Item]) -> None:
    """Fail collection unless each test carries exactly one speed marker.

    `unit` tests exercise `shotstats` alone. `integration` tests go through
    Django: forms, services, settings or management commands.
    """

    offenders = []
    for item in items:
        found = [name for name in SPEED_MARKERS if item.get_closest_marker(name) is not None]
        if len(found) != 1:
            offenders.append(f"  {item.nodeid}: {', '.join(found) or 'no speed marker'}")

    if offenders:
        listing = "\n".join(offenders)
        raise pytest.UsageError(f"Mark each test with exactly one of {SPEED_MARKERS}:\n{listing}")
