"""Merging of imported field definitions with local overrides."""

from __future__ import annotations

from typing import TypeVar

from fields_resolver.schema_management.schema_models import FieldDefinition, FieldNode

KEYWORD_TYPE = "keyword"
CONSTANT_KEYWORD_TYPE = "constant_keyword"

_T = TypeVar("_T")


def transform_imported_field(definition: FieldDefinition) -> FieldNode:
    """Convert an imported definition into a node carrying only its set attributes."""
    return FieldNode(
        name=definition.name,
        type=definition.type,
        # Multi-fields don't have descriptions.
        description=definition.description or None,
        pattern=definition.pattern or None,
        index=definition.index,
        doc_values=definition.doc_values,
        normalize=definition.normalize,
        multi_fields=tuple(transform_imported_field(item) for item in definition.multi_fields),
    )


def merge_imported_field(imported: FieldDefinition, local: FieldNode) -> FieldNode:
    """Overlay a local node on its imported definition and drop the external marker.

    Local attributes win, except for the type (see `resolve_field_type`).
    """
    transformed = transform_imported_field(imported)
    return FieldNode(
        name=local.name,
        type=resolve_field_type(imported.type, local.type),
        external=None,
        description=_prefer(local.description, transformed.description),
        pattern=_prefer(local.pattern, transformed.pattern),
        index=_prefer(local.index, transformed.index),
        doc_values=_prefer(local.doc_values, transformed.doc_values),
        normalize=local.normalize or transformed.normalize,
        multi_fields=local.multi_fields or transformed.multi_fields,
        attributes={**transformed.attributes, **local.attributes},
        fields=local.fields,
    )


def resolve_field_type(imported_type: str, local_type: str | None) -> str:
    """Return the merged type.

    Only keyword may be overridden locally, and only to constant_keyword, so the
    value can be set in the mappings.
    """
    if local_type == CONSTANT_KEYWORD_TYPE and imported_type == KEYWORD_TYPE:
        return local_type
    return imported_type


def _prefer(local: _T | None, imported: _T | None) -> _T | None:
    return local if local is not None else imported
