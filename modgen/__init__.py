"""modgen -- module scaffolding generator for CRUD API projects.

Clones the project's template module into a new module, generates its
migration, seeder and fixture, and wires it into the shared repository,
permission and route configuration files.

Quick usage::

    from modgen import GeneratorConfig, ModuleGenerator

    config = GeneratorConfig(project_root=Path("./my-api"))
    report = ModuleGenerator(config).generate("Order")
"""

from modgen.config import GeneratorConfig
from modgen.naming import ModuleNameSet, derive
from modgen.scaffolder.generator import GenerationReport, ModuleGenerator

__all__ = [
    "GenerationReport",
    "GeneratorConfig",
    "ModuleGenerator",
    "ModuleNameSet",
    "derive",
]
