from __future__ import annotations

import os
from pathlib import Path
from typing import Any

import yaml

_LAYOUT_CONFIG_CACHE: dict[str, Any] | None = None
_DEFAULT_LAYOUT_CONFIG_PATH = Path(__file__).resolve().parents[2] / "config" / "layout.yaml"


def _layout_config_path() -> Path:
    override = (os.getenv("LAYOUT_CONFIG_PATH") or "").strip()
    return Path(override) if override else _DEFAULT_LAYOUT_CONFIG_PATH


def get_layout_config() -> dict[str, Any]:
    """Load the role style table from config/layout.yaml and cache it.

    A missing file yields an empty mapping so renderers fall back to their
    built-in defaults; a malformed file is an error.
    """
    global _LAYOUT_CONFIG_CACHE

    if _LAYOUT_CONFIG_CACHE is not None:
        return _LAYOUT_CONFIG_CACHE

    path = _layout_config_path()
    if not path.exists():
        _LAYOUT_CONFIG_CACHE = {}
        return _LAYOUT_CONFIG_CACHE

    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise RuntimeError(f"Failed to read layout config '{path}': {exc}") from exc

    try:
        parsed = yaml.safe_load(raw) or {}
    except yaml.YAMLError as exc:
        raise RuntimeError(f"Invalid YAML in layout config '{path}': {exc}") from exc

    if not isinstance(parsed, dict):
        raise RuntimeError(f"Invalid layout config '{path}': expected a top-level mapping.")

    _LAYOUT_CONFIG_CACHE = parsed
    return _LAYOUT_CONFIG_CACHE


def get_layout_value(path: str, default: Any = None) -> Any:
    """Get nested config value using dot path notation, e.g. 'pdf.roles.name.font_size'."""
    if not path:
        return default

    current: Any = get_layout_config()
    for key in path.split("."):
        if not isinstance(current, dict):
            return default
        if key not in current:
            return default
        current = current[key]
    return current


def reset_layout_config_cache() -> None:
    global _LAYOUT_CONFIG_CACHE
    _LAYOUT_CONFIG_CACHE = None
