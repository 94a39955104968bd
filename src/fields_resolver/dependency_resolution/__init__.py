"""Dependency resolution exports."""

from .dependency_manager import (
    DependencyManager,
    ExternalFieldsNotAllowedError,
    FieldImportError,
    FieldNotFoundError,
    InjectionResult,
    SchemaNotRegisteredError,
    build_fields_schema,
    create_field_dependency_manager,
    import_field,
    inject_fields,
)
from .field_merge import merge_imported_field, resolve_field_type, transform_imported_field
from .field_pruning import skip_field

__all__ = [
    "DependencyManager",
    "ExternalFieldsNotAllowedError",
    "FieldImportError",
    "FieldNotFoundError",
    "InjectionResult",
    "SchemaNotRegisteredError",
    "build_fields_schema",
    "create_field_dependency_manager",
    "import_field",
    "inject_fields",
    "merge_imported_field",
    "resolve_field_type",
    "skip_field",
    "transform_imported_field",
]
