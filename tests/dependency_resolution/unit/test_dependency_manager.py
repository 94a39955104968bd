"""Dependency manager tests."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

import pytest
from fields_resolver.configuration.build_manifest import Dependencies, ECSDependency
from fields_resolver.configuration.loader import ConfigurationError
from fields_resolver.dependency_resolution.dependency_manager import (
    DependencyManager,
    ExternalFieldsNotAllowedError,
    FieldNotFoundError,
    SchemaNotRegisteredError,
    create_field_dependency_manager,
    import_field,
    inject_fields,
)
from fields_resolver.schema_management.schema_loading import SchemaLoader
from fields_resolver.schema_management.schema_models import FieldDefinition, FieldNode

OUTCOME = FieldDefinition(name="outcome", type="keyword")
ECS_SCHEMA = (
    FieldDefinition(name="event", type="group", fields=(OUTCOME,)),
    FieldDefinition(name="message", type="match_only_text"),
)


@dataclass
class _FakeResponse:
    status_code: int
    content: bytes = b""


@dataclass
class _RecordingHTTPGet:
    content: bytes
    urls: list[str] = field(default_factory=list)

    def __call__(self, url: str) -> _FakeResponse:
        self.urls.append(url)
        return _FakeResponse(200, self.content)


def _manager() -> DependencyManager:
    return DependencyManager({"ecs": ECS_SCHEMA})


def test_import_field_returns_matching_definition() -> None:
    assert _manager().import_field("ecs", "event.outcome") is OUTCOME


def test_import_field_fails_for_unknown_path() -> None:
    with pytest.raises(FieldNotFoundError, match=r"not found in schema \(name: event.missing\)"):
        _manager().import_field("ecs", "event.missing")


def test_import_field_fails_for_unregistered_schema() -> None:
    with pytest.raises(SchemaNotRegisteredError, match='schema "otel" is not defined'):
        _manager().import_field("otel", "event.outcome")


def test_import_field_without_manager_is_not_allowed() -> None:
    with pytest.raises(ExternalFieldsNotAllowedError) as excinfo:
        import_field(None, "ecs", "event.outcome")

    assert isinstance(excinfo.value, ConfigurationError)
    assert str(excinfo.value) == (
        'importing external field "event.outcome": external fields not allowed because '
        'dependencies file "_dev/build/build.yml" is missing'
    )


def test_schema_mapping_is_read_only() -> None:
    manager = _manager()

    with pytest.raises(TypeError):
        manager.schema["other"] = ()  # type: ignore[index]


def test_create_manager_loads_declared_ecs_schema(tmp_path: Path) -> None:
    http_get = _RecordingHTTPGet(b"- name: message\n  type: match_only_text\n")
    loader = SchemaLoader(tmp_path, http_get=http_get)

    manager = create_field_dependency_manager(
        Dependencies(ecs=ECSDependency(reference="git@v8.0.0")), loader
    )

    assert list(manager.schema) == ["ecs"]
    assert manager.import_field("ecs", "message").type == "match_only_text"
    assert len(http_get.urls) == 1
    assert "/v8.0.0/" in http_get.urls[0]


def test_create_manager_without_reference_registers_no_schema(tmp_path: Path) -> None:
    http_get = _RecordingHTTPGet(b"")
    loader = SchemaLoader(tmp_path, http_get=http_get)

    manager = create_field_dependency_manager(Dependencies(), loader)

    assert dict(manager.schema) == {}
    assert http_get.urls == []
    with pytest.raises(SchemaNotRegisteredError):
        manager.import_field("ecs", "message")


def test_inject_replaces_external_field_and_reports_change() -> None:
    result = _manager().inject_fields(
        (
            FieldNode(
                name="event",
                type="group",
                fields=(FieldNode(name="outcome", external="ecs"),),
            ),
        )
    )

    assert result.changed is True
    assert [node.to_mapping() for node in result.fields] == [
        {"name": "event", "type": "group", "fields": [{"name": "outcome", "type": "keyword"}]}
    ]


def test_inject_without_external_fields_is_unchanged() -> None:
    fields = (
        FieldNode(name="custom", type="group", fields=(FieldNode(name="id", type="keyword"),)),
        FieldNode(name="flag", type="boolean"),
    )

    result = _manager().inject_fields(fields)

    assert result.changed is False
    assert result.fields == fields


def test_inject_without_manager_passes_through_local_fields() -> None:
    fields = (FieldNode(name="flag", type="boolean"),)

    result = inject_fields(None, fields)

    assert result.fields == fields
    assert result.changed is False


def test_inject_without_manager_fails_on_external_field() -> None:
    with pytest.raises(ExternalFieldsNotAllowedError, match='"event.outcome"'):
        inject_fields(
            None,
            (
                FieldNode(
                    name="event", type="group", fields=(FieldNode(name="outcome", external="ecs"),)
                ),
            ),
        )


def test_inject_aborts_on_first_resolution_failure() -> None:
    with pytest.raises(FieldNotFoundError, match="event.unknown"):
        _manager().inject_fields(
            (
                FieldNode(name="message", external="ecs"),
                FieldNode(
                    name="event", type="group", fields=(FieldNode(name="unknown", external="ecs"),)
                ),
            )
        )


def test_inject_drops_groups_left_empty_and_keeps_order() -> None:
    result = _manager().inject_fields(
        (
            FieldNode(name="first", type="keyword"),
            FieldNode(name="empty", type="group", fields=()),
            FieldNode(name="message", external="ecs"),
            FieldNode(name="nested", type="group", fields=(FieldNode(name="gone", type="group"),)),
            FieldNode(name="last", type="long"),
        )
    )

    assert [node.name for node in result.fields] == ["first", "message", "last"]


def test_inherited_lookup_miss_keeps_local_child() -> None:
    custom_code = FieldNode(name="custom_code", type="keyword", attributes={"example": "E42"})

    result = _manager().inject_fields(
        (FieldNode(name="event", external="ecs", fields=(FieldNode(name="outcome"), custom_code)),)
    )

    (event,) = result.fields
    assert event.type == "group"
    assert event.external is None
    assert event.fields == (FieldNode(name="outcome", type="keyword"), custom_code)


def test_output_nodes_do_not_share_input_attributes() -> None:
    tags: list[str] = ["a"]
    local = FieldNode(name="flag", type="boolean", attributes={"example": tags})
    external = FieldNode(name="message", external="ecs", attributes={"ignore_above": 1024})

    result = _manager().inject_fields((local, external))

    flag, message = result.fields
    assert flag.attributes == {"example": ["a"]}
    assert flag.attributes is not local.attributes
    assert message.attributes is not external.attributes
    tags.append("b")
    assert flag.attributes == {"example": ["a"]}
