"""Configuration domain exports."""

from .build_manifest import BuildManifest, Dependencies, ECSDependency
from .loader import (
    BUILD_MANIFEST_PATH,
    ConfigurationError,
    load_build_manifest,
    read_build_manifest,
)
from .locations import CACHE_DIR_ENV_VAR, default_fields_cache_dir
from .manifest_scaffold_builder import (
    DEFAULT_MANIFEST_FILENAME,
    build_placeholder_build_manifest,
    write_placeholder_build_manifest,
)

__all__ = [
    "BuildManifest",
    "Dependencies",
    "ECSDependency",
    "BUILD_MANIFEST_PATH",
    "ConfigurationError",
    "load_build_manifest",
    "read_build_manifest",
    "CACHE_DIR_ENV_VAR",
    "default_fields_cache_dir",
    "DEFAULT_MANIFEST_FILENAME",
    "build_placeholder_build_manifest",
    "write_placeholder_build_manifest",
]
