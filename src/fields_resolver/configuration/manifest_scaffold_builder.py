"""Build manifest scaffold generation helpers."""

from __future__ import annotations

from pathlib import Path

from .loader import BUILD_MANIFEST_PATH

DEFAULT_MANIFEST_FILENAME = str(BUILD_MANIFEST_PATH)

_MANIFEST_SCAFFOLD_TEMPLATE = """# Build manifest for a package using external field definitions.
# Fields marked with `external: ecs` are resolved against the ECS version below.

dependencies:
  ecs:
    # Git reference of the ECS repository, prefixed with "git@" (tag or branch).
    reference: "git@<REQUIRED>"
"""


def build_placeholder_build_manifest() -> str:
    """Build a build manifest template with placeholders and inline guidance."""
    return _MANIFEST_SCAFFOLD_TEMPLATE


def write_placeholder_build_manifest(output_path: Path | str) -> Path:
    """Write the placeholder build manifest to the requested output path.

    Args:
      output_path: Destination file path for the scaffold.

    Returns:
      The resolved destination path.

    Raises:
      FileExistsError: If the destination file already exists.
      OSError: If writing the scaffold fails.
    """
    destination = Path(output_path)
    if destination.exists():
        raise FileExistsError(f"Build manifest already exists: {destination.resolve()}")
    destination.parent.mkdir(parents=True, exist_ok=True)
    destination.write_text(build_placeholder_build_manifest(), encoding="utf-8")
    return destination.resolve()
