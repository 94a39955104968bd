"""Elision of empty group nodes from merged field trees."""

from __future__ import annotations

from fields_resolver.schema_management.schema_models import FieldNode


def skip_field(node: FieldNode) -> bool:
    """Return True for group nodes without children, which are left out of built fields."""
    return node.is_group and not node.fields
