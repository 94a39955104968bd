"""Local fields document tests."""

from __future__ import annotations

from pathlib import Path

import pytest
import yaml
from fields_resolver.schema_management.field_documents import (
    dump_field_nodes,
    load_fields_file,
    parse_field_nodes,
)
from fields_resolver.schema_management.schema_loading import ParseError
from fields_resolver.schema_management.schema_models import FieldNode


def test_parses_known_and_extra_attributes(tmp_path: Path) -> None:
    fields_path = tmp_path / "fields.yml"
    fields_path.write_text(
        """
- name: source
  type: group
  description: Source fields.
  fields:
    - name: ip
      external: ecs
      ignore_above: 1024
      example: 10.0.0.1
    - name: port
      type: long
      index: false
- name: tags
  type: keyword
  fields: []
""",
        encoding="utf-8",
    )

    nodes = load_fields_file(fields_path)

    source, tags = nodes
    assert source.type == "group"
    assert source.description == "Source fields."
    assert source.fields is not None
    ip, port = source.fields
    assert ip.external == "ecs"
    assert ip.type is None
    assert dict(ip.attributes) == {"ignore_above": 1024, "example": "10.0.0.1"}
    assert port.index is False
    assert port.doc_values is None
    assert tags.fields == ()


def test_absent_fields_key_is_distinct_from_empty_fields() -> None:
    absent, empty = parse_field_nodes(
        [{"name": "a", "type": "group"}, {"name": "b", "type": "group", "fields": []}]
    )

    assert absent.fields is None
    assert empty.fields == ()


def test_dump_omits_absent_attributes_and_keeps_order() -> None:
    nodes = (
        FieldNode(
            name="event",
            type="group",
            fields=(
                FieldNode(name="outcome", type="keyword", index=False, attributes={"example": "x"}),
            ),
        ),
    )

    rendered = yaml.safe_load(dump_field_nodes(nodes))

    assert rendered == [
        {
            "name": "event",
            "type": "group",
            "fields": [{"name": "outcome", "type": "keyword", "index": False, "example": "x"}],
        }
    ]


def test_parse_rejects_non_list_documents() -> None:
    with pytest.raises(ParseError, match="must be a list"):
        parse_field_nodes({"name": "event"})


def test_parse_rejects_nodes_without_name() -> None:
    with pytest.raises(ParseError, match="event' requires a name"):
        parse_field_nodes([{"name": "event", "fields": [{"type": "keyword"}]}])


def test_invalid_yaml_is_parse_error(tmp_path: Path) -> None:
    fields_path = tmp_path / "broken.yml"
    fields_path.write_text("- name: [unclosed\n", encoding="utf-8")

    with pytest.raises(ParseError, match="Failed to parse fields file"):
        load_fields_file(fields_path)


def test_non_utf8_fields_file_is_parse_error(tmp_path: Path) -> None:
    fields_path = tmp_path / "latin1.yml"
    fields_path.write_bytes(b"- name: caf\xe9\n  type: keyword\n")

    with pytest.raises(ParseError, match="is not valid UTF-8") as excinfo:
        load_fields_file(fields_path)
    assert str(fields_path) in str(excinfo.value)
