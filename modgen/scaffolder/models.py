"""Result records shared by the cloner, the artifact generators and the report."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from pathlib import Path


class ArtifactKind(str, Enum):
    """What a ``GeneratedArtifact`` represents on disk."""

    DIRECTORY = "directory"
    FILE = "file"
    MIGRATION = "migration"
    SEED = "seed"
    FIXTURE = "fixture"


@dataclass
class GeneratedArtifact:
    """One output path produced (or found already present) during a run.

    ``content`` is empty for directories and for artifacts that already
    existed, since nothing was written for them.
    """

    target_path: Path
    kind: ArtifactKind = ArtifactKind.FILE
    already_existed: bool = False
    content: str = ""

    @property
    def created(self) -> bool:
        return not self.already_existed
