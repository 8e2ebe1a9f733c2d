"""Loading measurement documents from disk.

Documents are YAML mappings; JSON files load the same way since JSON is valid
YAML for the shapes used here.
"""

from __future__ import annotations

from pathlib import Path

import yaml


class DocumentError(ValueError):
    """Raised when a measurement document cannot be read or is malformed."""


def load_measurement_document(path: str | Path) -> dict[str, object]:
    """Read a YAML/JSON measurement document.

    Args:
        path: File to read.

    Returns:
        The top-level mapping.

    Raises:
        DocumentError: When the file is unreadable, not valid YAML, or its top
            level is not a mapping.
    """

    source = Path(path)
    try:
        raw = source.read_text(encoding="utf-8")
    except OSError as exc:
        raise DocumentError(f"Could not read {source}: {exc.strerror or exc}.") from exc

    try:
        payload = yaml.safe_load(raw)
    except yaml.YAMLError as exc:
        raise DocumentError(f"{source} is not valid YAML/JSON: {exc}") from exc

    if not isinstance(payload, dict):
        raise DocumentError(f"{source} must contain a mapping at the top level.")
    return payload
