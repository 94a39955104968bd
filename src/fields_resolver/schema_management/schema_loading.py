"""External schema loading service with an on-disk cache."""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping
from pathlib import Path
from typing import Any, Protocol

import requests
import yaml

from fields_resolver.configuration.loader import ConfigurationError

from .schema_models import FieldDefinition

_LOGGER = logging.getLogger(__name__)

ECS_SCHEMA_NAME = "ecs"
GIT_REFERENCE_PREFIX = "git@"

ECS_SCHEMA_FILE = "ecs_nested.yml"
ECS_SCHEMA_URL = (
    "https://raw.githubusercontent.com/elastic/ecs/{reference}/generated/ecs/{filename}"
)

_HTTP_OK = 200
_HTTP_NOT_FOUND = 404


class SchemaError(Exception):
    """Raised when an external schema cannot be loaded."""


class UnsatisfiedDependencyError(SchemaError):
    """Raised when the referenced schema version does not exist upstream."""


class FetchError(SchemaError):
    """Raised when downloading the schema fails."""


class CacheIOError(SchemaError):
    """Raised when the schema cache cannot be read or written."""


class ParseError(SchemaError):
    """Raised when a fields document cannot be parsed into definitions."""


class HTTPResponse(Protocol):
    """Subset of the response API used by the loader."""

    status_code: int
    content: bytes


HTTPGet = Callable[[str], HTTPResponse]


def as_git_reference(reference: str) -> str:
    """Strip the Git prefix from a build manifest reference."""
    if not reference.startswith(GIT_REFERENCE_PREFIX):
        raise ConfigurationError(
            f'invalid Git reference "{reference}" ("{GIT_REFERENCE_PREFIX}" prefix expected)'
        )
    return reference[len(GIT_REFERENCE_PREFIX) :]


class SchemaLoader:
    """Resolve schema references to field definitions, caching downloads on disk.

    The cache is not guarded against concurrent writers: two processes missing
    the same entry both download it and the last write wins. A reader racing a
    writer may observe a partially written file.
    """

    def __init__(
        self,
        cache_root: Path | str,
        *,
        http_get: HTTPGet | None = None,
        schema_url: str = ECS_SCHEMA_URL,
        schema_file: str = ECS_SCHEMA_FILE,
    ) -> None:
        self._cache_root = Path(cache_root)
        self._http_get: HTTPGet = http_get or requests.get
        self._schema_url = schema_url
        self._schema_file = schema_file

    def cached_schema_path(self, schema_name: str, git_reference: str) -> Path:
        return self._cache_root / schema_name / git_reference / self._schema_file

    def load(self, schema_name: str, reference: str) -> tuple[FieldDefinition, ...] | None:
        """Return the definitions of one schema, or None when no reference is declared."""
        if not reference:
            _LOGGER.debug("%s dependency isn't defined", schema_name.upper())
            return None

        content = self.read_schema_file(schema_name, reference)
        try:
            return parse_fields_schema(content)
        except ParseError as exc:
            cached_schema_path = self.cached_schema_path(schema_name, as_git_reference(reference))
            raise ParseError(
                f"can't parse {schema_name.upper()} schema "
                f"(reference: {reference}, path: {cached_schema_path}): {exc}"
            ) from exc

    def read_schema_file(self, schema_name: str, reference: str) -> bytes:
        """Return raw schema content from the cache, downloading it on a miss."""
        git_reference = as_git_reference(reference)
        cached_schema_path = self.cached_schema_path(schema_name, git_reference)
        try:
            return cached_schema_path.read_bytes()
        except FileNotFoundError:
            pass
        except OSError as exc:
            raise CacheIOError(f"can't read cached schema (path: {cached_schema_path})") from exc

        _LOGGER.debug("Pulling %s dependency using reference: %s", schema_name, reference)
        content = self._download(schema_name, git_reference)
        self._write_cache(cached_schema_path, content)
        return content

    def _download(self, schema_name: str, git_reference: str) -> bytes:
        url = self._schema_url.format(reference=git_reference, filename=self._schema_file)
        _LOGGER.debug("Schema URL: %s", url)
        try:
            response = self._http_get(url)
        except requests.RequestException as exc:
            raise FetchError(f"can't download the online schema (URL: {url})") from exc

        if response.status_code == _HTTP_NOT_FOUND:
            raise UnsatisfiedDependencyError(
                f"unsatisfied {schema_name.upper()} dependency, reference defined in build "
                f"manifest doesn't exist (HTTP StatusNotFound, URL: {url})"
            )
        if response.status_code != _HTTP_OK:
            raise FetchError(f"unexpected HTTP status code: {response.status_code} (URL: {url})")

        content = response.content
        _LOGGER.debug("Downloaded %d bytes", len(content))
        return content

    def _write_cache(self, cached_schema_path: Path, content: bytes) -> None:
        cached_schema_dir = cached_schema_path.parent
        try:
            cached_schema_dir.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise CacheIOError(
                f"can't create cache directories for schema (path: {cached_schema_dir})"
            ) from exc

        _LOGGER.debug("Cache downloaded schema: %s", cached_schema_path)
        try:
            cached_schema_path.write_bytes(content)
        except OSError as exc:
            raise CacheIOError(f"can't write cached schema (path: {cached_schema_path})") from exc


def parse_fields_schema(content: bytes | str) -> tuple[FieldDefinition, ...]:
    """Parse a schema document into field definitions.

    Three document shapes are accepted:

    * a list of records with ``name`` keys, children under ``fields``;
    * a flat mapping keyed by full dotted field name (``ecs_flat.yml``);
    * a nested mapping of fieldsets whose ``fields`` mapping is keyed by full
      dotted name (``ecs_nested.yml``). Keys are made relative to the enclosing
      fieldset, and fieldsets flagged ``root: true`` contribute their fields at
      the top level.
    """
    try:
        raw = yaml.safe_load(content)
    except yaml.YAMLError as exc:
        raise ParseError(f"unmarshalling field body failed: {exc}") from exc
    return _parse_definitions(raw, prefix="")


def _parse_definitions(raw: Any, *, prefix: str) -> tuple[FieldDefinition, ...]:
    if raw is None:
        return ()
    if isinstance(raw, Mapping):
        definitions: list[FieldDefinition] = []
        for key, record in raw.items():
            if isinstance(record, Mapping) and record.get("root") is True:
                definitions.extend(_parse_definitions(record.get("fields"), prefix=prefix))
                continue
            name = _relative_name(str(key), prefix)
            definitions.append(_parse_definition(record, prefix=prefix, name=name))
        return tuple(definitions)
    if isinstance(raw, list):
        return tuple(_parse_definition(record, prefix=prefix) for record in raw)
    raise ParseError(f"fields under '{prefix or '<root>'}' must be a list or a mapping.")


def _parse_definition(record: Any, *, prefix: str, name: str | None = None) -> FieldDefinition:
    if not isinstance(record, Mapping):
        raise ParseError(f"field definition under '{prefix or '<root>'}' must be a mapping.")
    if name is None:
        name = record.get("name")
    if not isinstance(name, str) or not name:
        raise ParseError(f"field definition under '{prefix or '<root>'}' requires a name.")
    path = f"{prefix}.{name}" if prefix else name

    return FieldDefinition(
        name=name,
        type=_text(record, "type", path),
        description=_text(record, "description", path),
        pattern=_text(record, "pattern", path),
        index=_optional_bool(record, "index", path),
        doc_values=_optional_bool(record, "doc_values", path),
        normalize=_string_sequence(record, "normalize", path),
        multi_fields=_parse_definitions(record.get("multi_fields"), prefix=path),
        fields=_parse_definitions(record.get("fields"), prefix=path),
    )


def _relative_name(key: str, prefix: str) -> str:
    if prefix and key.startswith(f"{prefix}."):
        return key[len(prefix) + 1 :]
    return key


def _text(record: Mapping[str, Any], key: str, path: str) -> str:
    value = record.get(key)
    if value is None:
        return ""
    if not isinstance(value, str):
        raise ParseError(f"{path}.{key} must be a string.")
    return value


def _optional_bool(record: Mapping[str, Any], key: str, path: str) -> bool | None:
    value = record.get(key)
    if value is None or isinstance(value, bool):
        return value
    raise ParseError(f"{path}.{key} must be a boolean.")


def _string_sequence(record: Mapping[str, Any], key: str, path: str) -> tuple[str, ...]:
    value = record.get(key)
    if value is None:
        return ()
    if not isinstance(value, list) or not all(isinstance(item, str) for item in value):
        raise ParseError(f"{path}.{key} must be a list of strings.")
    return tuple(value)
