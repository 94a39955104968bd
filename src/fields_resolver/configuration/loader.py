"""Build manifest loader service."""

from __future__ import annotations

from collections.abc import Mapping
from pathlib import Path
from typing import Any

import yaml

from .build_manifest import BuildManifest, Dependencies, ECSDependency

BUILD_MANIFEST_PATH = Path("_dev") / "build" / "build.yml"


class ConfigurationError(Exception):
    """Raised when the build manifest or a dependency reference is invalid."""


def read_build_manifest(package_root: Path | str) -> BuildManifest | None:
    """Load the package build manifest, or return None when the package has none."""
    path = Path(package_root) / BUILD_MANIFEST_PATH
    if not path.exists():
        return None
    return load_build_manifest(path)


def load_build_manifest(manifest_path: Path | str) -> BuildManifest:
    """Load and validate a build manifest file."""
    path = Path(manifest_path)
    if not path.exists():
        raise ConfigurationError(f"Build manifest not found: {path}")

    text = path.read_text(encoding="utf-8")
    try:
        parsed = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigurationError(f"Failed to parse build manifest {path}: {exc}") from exc

    if parsed is None:
        parsed = {}

    if not isinstance(parsed, Mapping):
        raise ConfigurationError("Build manifest root must be a mapping.")

    dependencies = _parse_dependencies_section(parsed.get("dependencies"))
    return BuildManifest(path=path, dependencies=dependencies)


def _parse_dependencies_section(value: Any) -> Dependencies:
    section = _optional_mapping(value, "dependencies")
    return Dependencies(ecs=_parse_ecs_section(section.get("ecs")))


def _parse_ecs_section(value: Any) -> ECSDependency:
    section = _optional_mapping(value, "dependencies.ecs")
    reference = section.get("reference")
    if reference is None:
        reference = ""
    if not isinstance(reference, str):
        raise ConfigurationError("dependencies.ecs.reference must be a string.")
    return ECSDependency(reference=reference.strip())


def _optional_mapping(value: Any, section_name: str) -> Mapping[str, Any]:
    if value is None:
        return {}
    if not isinstance(value, Mapping):
        raise ConfigurationError(f"Build manifest section '{section_name}' must be a mapping.")
    return value
