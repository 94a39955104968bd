"""Filesystem locations used by the resolver."""

from __future__ import annotations

from pathlib import Path

CACHE_DIR_ENV_VAR = "FIELDS_RESOLVER_CACHE_DIR"

_SETTINGS_DIR_NAME = ".fields-resolver"


def default_fields_cache_dir(home: Path | None = None) -> Path:
    """Return the directory holding cached external schemas."""
    base = home if home is not None else Path.home()
    return base / _SETTINGS_DIR_NAME / "cache" / "fields"
