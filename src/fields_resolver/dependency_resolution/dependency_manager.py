"""Resolution of external field dependencies."""

from __future__ import annotations

import copy
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, replace
from types import MappingProxyType

from fields_resolver.configuration.build_manifest import Dependencies
from fields_resolver.configuration.loader import BUILD_MANIFEST_PATH, ConfigurationError
from fields_resolver.schema_management.schema_index import find_element_definition
from fields_resolver.schema_management.schema_loading import ECS_SCHEMA_NAME, SchemaLoader
from fields_resolver.schema_management.schema_models import FieldDefinition, FieldNode

from .field_merge import merge_imported_field
from .field_pruning import skip_field


class FieldImportError(Exception):
    """Raised when an external field cannot be resolved."""


class SchemaNotRegisteredError(FieldImportError):
    """Raised when a field references a schema the package does not depend on."""


class FieldNotFoundError(FieldImportError):
    """Raised when the referenced schema has no definition for a field path."""


class ExternalFieldsNotAllowedError(ConfigurationError):
    """Raised when external fields are used by a package without a build manifest."""


@dataclass(frozen=True)
class InjectionResult:
    """Merged field tree and whether any external field was resolved."""

    fields: tuple[FieldNode, ...]
    changed: bool


class DependencyManager:
    """Holds the external schemas a package depends on, keyed by schema name."""

    def __init__(self, schema: Mapping[str, Sequence[FieldDefinition]]) -> None:
        self._schema = MappingProxyType(
            {name: tuple(definitions) for name, definitions in schema.items()}
        )

    @property
    def schema(self) -> Mapping[str, tuple[FieldDefinition, ...]]:
        return self._schema

    def import_field(self, schema_name: str, field_path: str) -> FieldDefinition:
        """Resolve a single external field using the available schemas."""
        definitions = self._schema.get(schema_name)
        if definitions is None:
            raise SchemaNotRegisteredError(
                f'schema "{schema_name}" is not defined as package dependency'
            )

        imported = find_element_definition(field_path, definitions)
        if imported is None:
            raise FieldNotFoundError(f"field definition not found in schema (name: {field_path})")
        return imported

    def inject_fields(self, fields: Sequence[FieldNode]) -> InjectionResult:
        return inject_fields(self, fields)


def create_field_dependency_manager(
    dependencies: Dependencies, loader: SchemaLoader
) -> DependencyManager:
    """Load every declared schema and build a dependency manager over them."""
    return DependencyManager(build_fields_schema(dependencies, loader))


def build_fields_schema(
    dependencies: Dependencies, loader: SchemaLoader
) -> dict[str, tuple[FieldDefinition, ...]]:
    schema: dict[str, tuple[FieldDefinition, ...]] = {}
    ecs_schema = loader.load(ECS_SCHEMA_NAME, dependencies.ecs.reference)
    if ecs_schema is not None:
        schema[ECS_SCHEMA_NAME] = ecs_schema
    return schema


def import_field(
    manager: DependencyManager | None, schema_name: str, field_path: str
) -> FieldDefinition:
    """Resolve an external field, failing when the package has no build manifest."""
    if manager is None:
        raise ExternalFieldsNotAllowedError(
            f'importing external field "{field_path}": external fields not allowed because '
            f'dependencies file "{BUILD_MANIFEST_PATH.as_posix()}" is missing'
        )
    return manager.import_field(schema_name, field_path)


def inject_fields(
    manager: DependencyManager | None, fields: Sequence[FieldNode]
) -> InjectionResult:
    """Replace external field references with their imported definitions.

    Any resolution failure aborts the whole call. Group nodes left without
    children are dropped from the result.
    """
    updated, changed = _inject_fields_with_root(manager, "", fields, inherited_external=None)
    return InjectionResult(fields=tuple(updated), changed=changed)


def _inject_fields_with_root(
    manager: DependencyManager | None,
    root: str,
    fields: Sequence[FieldNode],
    *,
    inherited_external: str | None,
) -> tuple[list[FieldNode], bool]:
    updated: list[FieldNode] = []
    changed = False
    for node in fields:
        field_path = build_field_path(root, node.name)

        external = node.external or inherited_external
        if node.external:
            imported: FieldDefinition | None = import_field(manager, node.external, field_path)
        elif inherited_external and manager is not None:
            # Children of an external node resolve against the same schema when
            # it defines them. Other children stay local.
            imported = find_element_definition(
                field_path, manager.schema.get(inherited_external, ())
            )
        else:
            imported = None

        if imported is not None:
            node = merge_imported_field(imported, node)
            changed = True
        if node.fields:
            injected, fields_changed = _inject_fields_with_root(
                manager, field_path, node.fields, inherited_external=external
            )
            if fields_changed:
                changed = True
            node = replace(node, fields=tuple(injected))

        if skip_field(node):
            continue
        updated.append(replace(node, attributes=copy.deepcopy(dict(node.attributes))))
    return updated, changed


def build_field_path(root: str, name: str) -> str:
    return f"{root}.{name}" if root else name
