"""Dotted-path lookup over external field definitions."""

from __future__ import annotations

from collections.abc import Sequence

from .schema_models import FieldDefinition

_WILDCARD = "*"


def find_element_definition(
    searched_key: str, definitions: Sequence[FieldDefinition]
) -> FieldDefinition | None:
    """Return the definition matching a dotted path, or None when absent.

    Definition names may themselves contain dots, so keys are built by joining
    ancestor names and compared segment by segment. A ``*`` segment in a
    definition name matches any single segment. When several definitions match,
    the first one in document order wins.
    """
    searched = tuple(searched_key.split("."))
    return _find_for_root((), searched, definitions)


def _find_for_root(
    root: tuple[str, ...], searched: tuple[str, ...], definitions: Sequence[FieldDefinition]
) -> FieldDefinition | None:
    for definition in definitions:
        key = root + tuple(definition.name.split("."))
        if len(key) > len(searched) or not _segments_match(key, searched[: len(key)]):
            continue
        if len(key) == len(searched):
            return definition
        for children in (definition.fields, definition.multi_fields):
            found = _find_for_root(key, searched, children)
            if found is not None:
                return found
    return None


def _segments_match(key: tuple[str, ...], searched: tuple[str, ...]) -> bool:
    return all(
        expected == _WILDCARD or expected == actual
        for expected, actual in zip(key, searched, strict=True)
    )
