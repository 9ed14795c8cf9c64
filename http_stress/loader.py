"""
Loader for the header and body maps of a run.

Behaviour
~~~~~~~~~
* ``None`` or an empty string → empty map (no extra headers / no body).
* Path to an existing file → the file is parsed as JSON (checked first).
* Otherwise, anything starting with ``{`` is an inline JSON literal, so
  ``--headers '{"X-Test": "1"}'`` works without a temp file.
* The top‑level JSON value must be an object; everything else is a
  :class:`ConfigError`.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, Union


class ConfigError(ValueError):
    """Raised for configuration problems detected before a run starts."""


# Helper functions

def _parse(text: str, origin: str) -> Dict[str, Any]:
    try:
        data = json.loads(text)
    except json.JSONDecodeError as exc:
        raise ConfigError(f"invalid JSON in {origin}: {exc}") from exc
    if not isinstance(data, dict):
        raise ConfigError(
            f"{origin} must contain a JSON object, got {type(data).__name__}"
        )
    return data


def _is_file(path: Path) -> bool:
    # long JSON literals can exceed NAME_MAX
    try:
        return path.is_file()
    except (OSError, ValueError):
        return False


# Public loader

def load_json_map(source: Union[str, Path, None]) -> Dict[str, Any]:
    """Return the JSON object held by *source* (file path or JSON literal)."""
    if source is None:
        return {}
    if isinstance(source, Path):
        path = source
    else:
        text = source.strip()
        if not text:
            return {}
        path = Path(text)
        if not _is_file(path) and text.startswith("{"):
            return _parse(text, "inline JSON")

    if not _is_file(path):
        raise ConfigError(f"file not found: {path}")
    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise ConfigError(f"cannot read {path}: {exc}") from exc
    return _parse(raw, str(path))
