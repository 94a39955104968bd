"""Build manifest entities."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path


@dataclass(frozen=True)
class ECSDependency:
    """Declared dependency on the ECS field schema."""

    reference: str = ""


@dataclass(frozen=True)
class Dependencies:
    """External schema dependencies declared by a package."""

    ecs: ECSDependency = field(default_factory=ECSDependency)


@dataclass(frozen=True)
class BuildManifest:
    """Parsed `_dev/build/build.yml` of a package."""

    path: Path
    dependencies: Dependencies
