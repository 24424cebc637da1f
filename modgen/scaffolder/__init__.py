"""Module scaffolder -- clones the template module and generates its artifacts.

Quick usage::

    from modgen.scaffolder import ModuleGenerator
    from modgen.config import GeneratorConfig

    report = ModuleGenerator(GeneratorConfig(project_root=root)).generate("Order")
"""

from modgen.scaffolder.cloner import TreeCloner
from modgen.scaffolder.fixture_gen import FixtureGenerator
from modgen.scaffolder.generator import GenerationReport, ModuleGenerator
from modgen.scaffolder.migration_gen import MigrationGenerator
from modgen.scaffolder.models import ArtifactKind, GeneratedArtifact
from modgen.scaffolder.seed_gen import SeedGenerator

__all__ = [
    "ArtifactKind",
    "FixtureGenerator",
    "GeneratedArtifact",
    "GenerationReport",
    "MigrationGenerator",
    "ModuleGenerator",
    "SeedGenerator",
    "TreeCloner",
]
