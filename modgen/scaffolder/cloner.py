"""Recursive, idempotent duplication of a template directory tree.

Every directory segment and file name containing the template token is
renamed, every text file is passed through the content rewriter, and any
target file that already exists is left untouched so that manual edits made
after a previous run survive a re-run.
"""

from __future__ import annotations

from pathlib import Path

from ..errors import SourceMissingError
from ..naming import ModuleNameSet
from ..utils import ensure_dir, write_file
from .models import ArtifactKind, GeneratedArtifact
from .rewriter import rewrite, rewrite_name


class TreeCloner:
    """Clones one template directory into one target directory."""

    def __init__(self, template: ModuleNameSet) -> None:
        self.template = template

    def clone(
        self,
        source_dir: str | Path,
        target_dir: str | Path,
        names: ModuleNameSet,
    ) -> list[GeneratedArtifact]:
        """Copy *source_dir* into *target_dir*, rewriting names along the way.

        Args:
            source_dir: Template directory (e.g. ``src/Domain/Example``).
            target_dir: Concrete destination (e.g. ``src/Domain/Order``).
            names: Name forms of the module being generated.

        Returns:
            Artifacts for every directory created and every file visited, in
            depth-first order.

        Raises:
            SourceMissingError: If *source_dir* is not a directory.
        """
        source = Path(source_dir)
        if not source.is_dir():
            raise SourceMissingError(source)

        artifacts: list[GeneratedArtifact] = []
        self._clone_dir(source, Path(target_dir), names, artifacts)
        return artifacts

    def _clone_dir(
        self,
        source: Path,
        target: Path,
        names: ModuleNameSet,
        artifacts: list[GeneratedArtifact],
    ) -> None:
        if ensure_dir(target):
            artifacts.append(GeneratedArtifact(target_path=target, kind=ArtifactKind.DIRECTORY))

        entries = sorted(source.iterdir(), key=lambda p: p.name)
        files = [p for p in entries if p.is_file()]
        subdirs = [p for p in entries if p.is_dir()]

        for file_path in files:
            out = target / rewrite_name(file_path.name, names, self.template)
            artifacts.append(self._clone_file(file_path, out, names))

        for subdir in subdirs:
            out_dir = target / rewrite_name(subdir.name, names, self.template)
            self._clone_dir(subdir, out_dir, names, artifacts)

    def _clone_file(self, source: Path, target: Path, names: ModuleNameSet) -> GeneratedArtifact:
        if target.exists():
            return GeneratedArtifact(target_path=target, already_existed=True)

        raw = source.read_bytes()
        try:
            text = raw.decode("utf-8")
        except UnicodeDecodeError:
            # Binary asset: copied verbatim.
            write_file(target, raw)
            return GeneratedArtifact(target_path=target)

        content = rewrite(text, names, self.template)
        write_file(target, content)
        return GeneratedArtifact(target_path=target, content=content)
