"""Build manifest scaffold builder tests."""

from __future__ import annotations

from pathlib import Path

import pytest
import yaml
from fields_resolver.configuration.manifest_scaffold_builder import (
    build_placeholder_build_manifest,
    write_placeholder_build_manifest,
)


def test_build_placeholder_build_manifest_declares_ecs_dependency() -> None:
    scaffold = build_placeholder_build_manifest()

    parsed = yaml.safe_load(scaffold)
    assert parsed["dependencies"]["ecs"]["reference"].startswith("git@")
    assert "<REQUIRED>" in scaffold


def test_write_placeholder_build_manifest_creates_parent_dirs(tmp_path: Path) -> None:
    output_path = tmp_path / "_dev" / "build" / "build.yml"

    written_path = write_placeholder_build_manifest(output_path)

    assert written_path == output_path.resolve()
    assert "dependencies:" in output_path.read_text(encoding="utf-8")


def test_write_placeholder_build_manifest_fails_when_file_exists(tmp_path: Path) -> None:
    output_path = tmp_path / "build.yml"
    output_path.write_text("existing", encoding="utf-8")

    with pytest.raises(FileExistsError):
        write_placeholder_build_manifest(output_path)
