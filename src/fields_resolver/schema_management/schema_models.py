"""Schema management entities."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

# Absent (None) is distinct from an explicit false.
OptionalBool = bool | None

GROUP_TYPE = "group"


@dataclass(frozen=True)
class FieldDefinition:  # pylint: disable=too-many-instance-attributes
    """Field definition loaded from an external schema document."""

    name: str
    type: str = ""
    description: str = ""
    pattern: str = ""
    index: OptionalBool = None
    doc_values: OptionalBool = None
    normalize: tuple[str, ...] = ()
    multi_fields: tuple[FieldDefinition, ...] = ()
    fields: tuple[FieldDefinition, ...] = ()


@dataclass(frozen=True)
class FieldNode:  # pylint: disable=too-many-instance-attributes
    """One node of a package's local field tree.

    Known attributes are typed; every other key of the source mapping is kept
    verbatim in ``attributes``. ``fields`` is ``None`` when the key is absent
    and an empty tuple when it is present but holds no children.
    """

    name: str
    type: str | None = None
    external: str | None = None
    description: str | None = None
    pattern: str | None = None
    index: OptionalBool = None
    doc_values: OptionalBool = None
    normalize: tuple[str, ...] = ()
    multi_fields: tuple[FieldNode, ...] = ()
    attributes: Mapping[str, Any] = field(default_factory=dict)
    fields: tuple[FieldNode, ...] | None = None

    @property
    def is_group(self) -> bool:
        return self.type == GROUP_TYPE

    def to_mapping(self) -> dict[str, Any]:
        """Render the node as a plain mapping, omitting absent attributes."""
        rendered: dict[str, Any] = {"name": self.name}
        if self.type is not None:
            rendered["type"] = self.type
        if self.external is not None:
            rendered["external"] = self.external
        if self.description is not None:
            rendered["description"] = self.description
        if self.pattern is not None:
            rendered["pattern"] = self.pattern
        if self.index is not None:
            rendered["index"] = self.index
        if self.doc_values is not None:
            rendered["doc_values"] = self.doc_values
        if self.normalize:
            rendered["normalize"] = list(self.normalize)
        if self.multi_fields:
            rendered["multi_fields"] = [item.to_mapping() for item in self.multi_fields]
        for key, value in self.attributes.items():
            rendered[key] = value
        if self.fields is not None:
            rendered["fields"] = [item.to_mapping() for item in self.fields]
        return rendered
