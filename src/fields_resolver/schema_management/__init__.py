"""Schema management exports."""

from .field_documents import dump_field_nodes, load_fields_file, parse_field_nodes
from .schema_index import find_element_definition
from .schema_loading import (
    ECS_SCHEMA_FILE,
    ECS_SCHEMA_NAME,
    ECS_SCHEMA_URL,
    CacheIOError,
    FetchError,
    ParseError,
    SchemaError,
    SchemaLoader,
    UnsatisfiedDependencyError,
    as_git_reference,
    parse_fields_schema,
)
from .schema_models import GROUP_TYPE, FieldDefinition, FieldNode, OptionalBool

__all__ = [
    "CacheIOError",
    "ECS_SCHEMA_FILE",
    "ECS_SCHEMA_NAME",
    "ECS_SCHEMA_URL",
    "FetchError",
    "FieldDefinition",
    "FieldNode",
    "GROUP_TYPE",
    "OptionalBool",
    "ParseError",
    "SchemaError",
    "SchemaLoader",
    "UnsatisfiedDependencyError",
    "as_git_reference",
    "dump_field_nodes",
    "find_element_definition",
    "load_fields_file",
    "parse_field_nodes",
    "parse_fields_schema",
]
