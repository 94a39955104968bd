"""Reading and writing of a package's local fields files."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from pathlib import Path
from typing import Any

import yaml

from .schema_loading import ParseError
from .schema_models import FieldNode

_KNOWN_KEYS = frozenset(
    {
        "name",
        "type",
        "external",
        "description",
        "pattern",
        "index",
        "doc_values",
        "normalize",
        "multi_fields",
        "fields",
    }
)


def load_fields_file(path: Path | str) -> tuple[FieldNode, ...]:
    """Read one local fields file."""
    fields_path = Path(path)
    try:
        text = fields_path.read_text(encoding="utf-8")
    except UnicodeDecodeError as exc:
        raise ParseError(f"Fields file {fields_path} is not valid UTF-8: {exc}") from exc
    try:
        raw = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ParseError(f"Failed to parse fields file {fields_path}: {exc}") from exc
    return parse_field_nodes(raw)


def parse_field_nodes(raw: Any, *, prefix: str = "") -> tuple[FieldNode, ...]:
    """Convert YAML data into local field nodes."""
    if raw is None:
        return ()
    if not isinstance(raw, list):
        raise ParseError(f"fields under '{prefix or '<root>'}' must be a list.")
    return tuple(_parse_node(item, prefix=prefix) for item in raw)


def dump_field_nodes(nodes: Sequence[FieldNode]) -> str:
    """Render field nodes as a YAML document."""
    return yaml.safe_dump(
        [node.to_mapping() for node in nodes],
        sort_keys=False,
        default_flow_style=False,
        allow_unicode=True,
    )


def _parse_node(item: Any, *, prefix: str) -> FieldNode:
    if not isinstance(item, Mapping):
        raise ParseError(f"field under '{prefix or '<root>'}' must be a mapping.")
    name = item.get("name")
    if not isinstance(name, str) or not name:
        raise ParseError(f"field under '{prefix or '<root>'}' requires a name.")
    path = f"{prefix}.{name}" if prefix else name

    raw_fields = item.get("fields")
    return FieldNode(
        name=name,
        type=_optional_string(item, "type", path),
        external=_optional_string(item, "external", path),
        description=_optional_string(item, "description", path),
        pattern=_optional_string(item, "pattern", path),
        index=_optional_bool(item, "index", path),
        doc_values=_optional_bool(item, "doc_values", path),
        normalize=_string_sequence(item, "normalize", path),
        multi_fields=parse_field_nodes(item.get("multi_fields"), prefix=path),
        attributes={key: value for key, value in item.items() if key not in _KNOWN_KEYS},
        fields=None if raw_fields is None else parse_field_nodes(raw_fields, prefix=path),
    )


def _optional_string(item: Mapping[str, Any], key: str, path: str) -> str | None:
    value = item.get(key)
    if value is None or isinstance(value, str):
        return value
    raise ParseError(f"{path}.{key} must be a string.")


def _optional_bool(item: Mapping[str, Any], key: str, path: str) -> bool | None:
    value = item.get(key)
    if value is None or isinstance(value, bool):
        return value
    raise ParseError(f"{path}.{key} must be a boolean.")


def _string_sequence(item: Mapping[str, Any], key: str, path: str) -> tuple[str, ...]:
    value = item.get(key)
    if value is None:
        return ()
    if not isinstance(value, list) or not all(isinstance(entry, str) for entry in value):
        raise ParseError(f"{path}.{key} must be a list of strings.")
    return tuple(value)
