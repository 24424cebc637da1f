"""Main module-generation orchestrator.

Takes a ``GeneratorConfig`` and a module name and generates a complete
feature module inside the target project: the four layer directories cloned
from the template module, a timestamped migration, a seeder class, a seed
fixture, and the wiring in the shared repository, permission and route files.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path

from ..config import GeneratorConfig
from ..errors import SourceMissingError
from ..naming import ModuleNameSet, derive
from ..patcher import PatchOutcome, PatchResult, apply_patch
from ..patches import build_patches
from ..templates import FragmentRenderer
from ..utils import display_path, print_status
from .cloner import TreeCloner
from .fixture_gen import FixtureGenerator
from .migration_gen import MigrationGenerator
from .models import ArtifactKind, GeneratedArtifact
from .seed_gen import SeedGenerator


# ---------------------------------------------------------------------------
# Report
# ---------------------------------------------------------------------------


@dataclass
class GenerationReport:
    """Everything a run created, skipped, patched or could not find."""

    names: ModuleNameSet
    artifacts: list[GeneratedArtifact] = field(default_factory=list)
    patches: list[PatchResult] = field(default_factory=list)
    missing_sources: list[Path] = field(default_factory=list)

    @property
    def directories_created(self) -> list[GeneratedArtifact]:
        return [a for a in self.artifacts if a.kind is ArtifactKind.DIRECTORY]

    @property
    def files_created(self) -> list[GeneratedArtifact]:
        return [
            a for a in self.artifacts
            if a.kind is not ArtifactKind.DIRECTORY and not a.already_existed
        ]

    @property
    def files_skipped(self) -> list[GeneratedArtifact]:
        return [a for a in self.artifacts if a.already_existed]

    def patches_with(self, outcome: PatchOutcome) -> list[PatchResult]:
        return [p for p in self.patches if p.outcome is outcome]

    @property
    def patches_failed(self) -> list[PatchResult]:
        return [p for p in self.patches if p.failed]

    def summary(self) -> dict[str, str]:
        """Aggregate counts, in display order."""
        return {
            "Module": self.names.pascal,
            "Table": self.names.table_name,
            "Directories created": str(len(self.directories_created)),
            "Files created": str(len(self.files_created)),
            "Files skipped (already exist)": str(len(self.files_skipped)),
            "Missing template sources": str(len(self.missing_sources)),
            "Config patches applied": str(len(self.patches_with(PatchOutcome.APPLIED))),
            "Config patches skipped": str(len(self.patches_with(PatchOutcome.ALREADY_PRESENT))),
            "Config patches failed": str(len(self.patches_failed)),
        }


# ---------------------------------------------------------------------------
# Main generator
# ---------------------------------------------------------------------------


class ModuleGenerator:
    """Module scaffolding orchestrator.

    Given a ``GeneratorConfig``, generates for one module name:
    - the API, application, domain and persistence layer directories
    - a ``M<timestamp>Create<Module>Table`` migration
    - a ``Seed<Module>Data`` seeder and its ``<module>.yaml`` fixture
    - repository, permission and route wiring in the shared config files

    Every step is idempotent: existing files and already-wired config files
    are reported and left alone.
    """

    def __init__(self, config: GeneratorConfig, *, verbose: bool = True) -> None:
        self.config = config
        self.verbose = verbose
        self.template = config.template
        self.renderer = FragmentRenderer()
        self.cloner = TreeCloner(self.template)
        self.migration_gen = MigrationGenerator(config, self.template)
        self.seed_gen = SeedGenerator(config, self.template)
        self.fixture_gen = FixtureGenerator(config, self.template)

    # -- Public API --------------------------------------------------------

    def generate(
        self, module: str, table: str | None = None, now: datetime | None = None
    ) -> GenerationReport:
        """Generate the module and return what happened.

        Args:
            module: Module name as typed by the operator.
            table: Optional storage table name override.
            now: Timestamp for the migration; defaults to the current time.

        Raises:
            InvalidInputError: If *module* is empty or malformed.
            UnrecoverableIOError: If the target project cannot be written.
        """
        names = derive(module, table)
        report = GenerationReport(names=names)

        # 1. Clone each layer directory
        self._clone_layers(names, report)

        # 2. Migration, seeder and fixture
        self._run_artifact("migration", lambda: self.migration_gen.generate(names, now), report)
        self._run_artifact("seeder", lambda: self.seed_gen.generate(names), report)
        self._run_artifact("fixture", lambda: self.fixture_gen.generate(names), report)

        # 3. Shared config wiring
        self._patch_config(names, report)

        return report

    # -- Steps -------------------------------------------------------------

    def _clone_layers(self, names: ModuleNameSet, report: GenerationReport) -> None:
        for layer in self.config.layers:
            source = self.config.layer_source_path(layer)
            target = self.config.layer_target_path(layer, names.pascal)
            try:
                artifacts = self.cloner.clone(source, target, names)
            except SourceMissingError as exc:
                report.missing_sources.append(exc.path)
                self._emit("missing", f"template directory {self._rel(exc.path)}")
                continue
            for artifact in artifacts:
                report.artifacts.append(artifact)
                self._emit_artifact(artifact)

    def _run_artifact(
        self,
        label: str,
        produce: Callable[[], GeneratedArtifact],
        report: GenerationReport,
    ) -> None:
        try:
            artifact = produce()
        except SourceMissingError as exc:
            report.missing_sources.append(exc.path)
            self._emit("missing", f"{label} template {self._rel(exc.path)}")
            return
        report.artifacts.append(artifact)
        self._emit_artifact(artifact)

    def _patch_config(self, names: ModuleNameSet, report: GenerationReport) -> None:
        for patch in build_patches(self.config, names, self.template, self.renderer):
            result = apply_patch(patch)
            report.patches.append(result)
            target = self._rel(result.target_file)
            if result.outcome is PatchOutcome.APPLIED:
                self._emit("applied", f"{patch.description} -> {target}")
            elif result.outcome is PatchOutcome.ALREADY_PRESENT:
                self._emit("present", f"{patch.description} already in {target}")
            else:
                self._emit("failed", f"{patch.description} {target}: {result.detail}")

    # -- Output ------------------------------------------------------------

    def _rel(self, path: Path) -> str:
        return display_path(path, self.config.project_root)

    def _emit(self, status: str, message: str) -> None:
        if self.verbose:
            print_status(status, message)

    def _emit_artifact(self, artifact: GeneratedArtifact) -> None:
        path = self._rel(artifact.target_path)
        if artifact.kind is ArtifactKind.DIRECTORY:
            self._emit("created", f"{path}/")
        elif artifact.already_existed:
            self._emit("skipped", f"{path} (already exists)")
        else:
            self._emit("created", path)
