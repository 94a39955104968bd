"""Package fields build use-case service."""

from __future__ import annotations

import logging
from pathlib import Path

from fields_resolver.configuration import ConfigurationError, read_build_manifest
from fields_resolver.dependency_resolution import (
    DependencyManager,
    FieldImportError,
    create_field_dependency_manager,
    inject_fields,
)
from fields_resolver.schema_management import (
    SchemaError,
    SchemaLoader,
    dump_field_nodes,
    load_fields_file,
)

from .build_contracts import BuildOutcome, BuildRequest

_LOGGER = logging.getLogger(__name__)

FIELDS_FILE_PATTERNS = ("fields/*.yml", "data_stream/*/fields/*.yml")


class FieldsBuildError(Exception):
    """Raised when the fields of a package cannot be built."""


def build_package_fields(request: BuildRequest, *, loader: SchemaLoader) -> BuildOutcome:
    """Resolve external fields of every fields file and write the results to the output dir."""
    package_root = Path(request.package_root)
    output_dir = Path(request.output_dir)
    if not package_root.is_dir():
        raise FieldsBuildError(f"Package root not found: {package_root}")

    manager = _create_dependency_manager(package_root, loader)

    written: list[Path] = []
    changed: list[Path] = []
    for fields_path in _find_fields_files(package_root):
        relative_path = fields_path.relative_to(package_root)
        destination = output_dir / relative_path
        file_changed = _build_fields_file(manager, fields_path, destination)
        written.append(destination)
        if file_changed:
            _LOGGER.debug("Resolved external fields in %s", relative_path)
            changed.append(destination)

    return BuildOutcome(
        output_dir=output_dir.resolve(),
        written_files=tuple(written),
        changed_files=tuple(changed),
    )


def _create_dependency_manager(
    package_root: Path, loader: SchemaLoader
) -> DependencyManager | None:
    try:
        manifest = read_build_manifest(package_root)
        if manifest is None:
            return None
        return create_field_dependency_manager(manifest.dependencies, loader)
    except (ConfigurationError, SchemaError) as exc:
        raise FieldsBuildError(f"can't create field dependency manager: {exc}") from exc


def _find_fields_files(package_root: Path) -> list[Path]:
    found: set[Path] = set()
    for pattern in FIELDS_FILE_PATTERNS:
        found.update(path for path in package_root.glob(pattern) if path.is_file())
    return sorted(found)


def _build_fields_file(
    manager: DependencyManager | None, fields_path: Path, destination: Path
) -> bool:
    try:
        fields = load_fields_file(fields_path)
        result = inject_fields(manager, fields)
        destination.parent.mkdir(parents=True, exist_ok=True)
        destination.write_text(dump_field_nodes(result.fields), encoding="utf-8")
    except (ConfigurationError, SchemaError, FieldImportError, OSError) as exc:
        raise FieldsBuildError(f"can't build fields file {fields_path}: {exc}") from exc
    return result.changed
