"""Package fields build entities."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True)
class BuildRequest:
    """Input contract for building the fields of one package."""

    package_root: str
    output_dir: str


@dataclass(frozen=True)
class BuildOutcome:
    """Output contract for one completed build."""

    output_dir: Path
    written_files: tuple[Path, ...]
    changed_files: tuple[Path, ...]
