"""Module generator configuration.

Centralised, typed configuration for a generation run.  All settings use
Pydantic v2 models so they can be validated at construction time and
serialised to/from JSON or environment variables without boiler-plate.
Paths are stored relative to ``project_root`` and resolved through the
read-only properties below.  Template-side paths may contain ``{template}``
and ``{template_lower}``, which follow ``template_name``.
"""

from __future__ import annotations

import os
from pathlib import Path

from pydantic import BaseModel, Field, field_validator

from .errors import InvalidInputError
from .naming import ModuleNameSet, derive

MODULE_PLACEHOLDER = "{module}"
TEMPLATE_PLACEHOLDER = "{template}"
TEMPLATE_LOWER_PLACEHOLDER = "{template_lower}"


class LayerMapping(BaseModel):
    """One template directory and the directory pattern it is cloned into.

    ``target`` must contain the ``{module}`` placeholder, which is replaced by
    the module's PascalCase name.
    """

    source: str
    target: str

    @field_validator("target")
    @classmethod
    def _target_has_placeholder(cls, value: str) -> str:
        if MODULE_PLACEHOLDER not in value:
            raise ValueError(f"target '{value}' must contain {MODULE_PLACEHOLDER}")
        return value

    def target_for(self, pascal: str) -> str:
        """Return the concrete target directory for a module."""
        return self.target.replace(MODULE_PLACEHOLDER, pascal)


def _default_layers() -> list[LayerMapping]:
    return [
        LayerMapping(source="src/Api/V1/{template}", target="src/Api/V1/{module}"),
        LayerMapping(source="src/Application/{template}", target="src/Application/{module}"),
        LayerMapping(source="src/Domain/{template}", target="src/Domain/{module}"),
        LayerMapping(
            source="src/Infrastructure/Persistence/{template}",
            target="src/Infrastructure/Persistence/{module}",
        ),
    ]


class ArtifactPaths(BaseModel):
    """Single-file templates and the directories their output lands in."""

    migration_template: str = Field(default="src/Migration/M20240101000000Create{template}.php")
    migration_dir: str = Field(default="src/Migration")
    seed_template: str = Field(default="src/Seeder/Seed{template}Data.php")
    seed_dir: str = Field(default="src/Seeder")
    fixture_template: str = Field(default="src/Seeder/Fixtures/{template_lower}.yaml")
    fixture_dir: str = Field(default="src/Seeder/Fixtures")


class SharedConfigPaths(BaseModel):
    """Hand-maintained configuration files that receive module wiring."""

    repository: str = Field(default="config/common/repository.php")
    access: str = Field(default="config/common/access.php")
    routes: str = Field(default="config/common/routes.php")


class GeneratorConfig(BaseModel):
    """Global configuration for one generator run.

    Instances are typically created once by the CLI entry point and then
    passed to ``ModuleGenerator``.
    """

    project_root: Path = Field(default=Path("."))
    template_name: str = Field(default="Example", min_length=1)
    layers: list[LayerMapping] = Field(default_factory=_default_layers)
    artifacts: ArtifactPaths = Field(default_factory=ArtifactPaths)
    shared: SharedConfigPaths = Field(default_factory=SharedConfigPaths)

    @field_validator("template_name")
    @classmethod
    def _template_name_is_identifier(cls, value: str) -> str:
        try:
            derive(value)
        except InvalidInputError as exc:
            raise ValueError(str(exc)) from exc
        return value

    @property
    def template(self) -> ModuleNameSet:
        """Name forms of the template module."""
        return derive(self.template_name)

    def expand(self, path: str) -> str:
        """Fill the ``{template}`` / ``{template_lower}`` placeholders of *path*."""
        template = self.template
        return path.replace(TEMPLATE_PLACEHOLDER, template.pascal).replace(
            TEMPLATE_LOWER_PLACEHOLDER, template.lower
        )

    # ------------------------------------------------------------------
    # Derived paths (read-only properties)
    # ------------------------------------------------------------------

    def layer_source_path(self, layer: LayerMapping) -> Path:
        return self.project_root / self.expand(layer.source)

    def layer_target_path(self, layer: LayerMapping, pascal: str) -> Path:
        return self.project_root / layer.target_for(pascal)

    @property
    def migration_template_path(self) -> Path:
        return self.project_root / self.expand(self.artifacts.migration_template)

    @property
    def migration_dir_path(self) -> Path:
        return self.project_root / self.artifacts.migration_dir

    @property
    def seed_template_path(self) -> Path:
        return self.project_root / self.expand(self.artifacts.seed_template)

    @property
    def seed_dir_path(self) -> Path:
        return self.project_root / self.artifacts.seed_dir

    @property
    def fixture_template_path(self) -> Path:
        return self.project_root / self.expand(self.artifacts.fixture_template)

    @property
    def fixture_dir_path(self) -> Path:
        return self.project_root / self.artifacts.fixture_dir

    def shared_path(self, key: str) -> Path:
        """Absolute path of a shared config file (``repository``, ``access``, ``routes``)."""
        return self.project_root / getattr(self.shared, key)

    # ------------------------------------------------------------------
    # Serialisation helpers
    # ------------------------------------------------------------------

    def save(self, path: Path) -> Path:
        """Persist the configuration to a JSON file.

        Returns:
            The path where the file was written.
        """
        target = Path(path)
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(self.model_dump_json(indent=2), encoding="utf-8")
        return target

    @classmethod
    def load(cls, path: Path) -> "GeneratorConfig":
        """Load a previously-saved configuration from JSON."""
        raw = Path(path).read_text(encoding="utf-8")
        return cls.model_validate_json(raw)

    @classmethod
    def from_env(cls) -> "GeneratorConfig":
        """Build a ``GeneratorConfig`` from environment variables.

        Recognised variables (all optional):
            MODGEN_PROJECT_ROOT, MODGEN_TEMPLATE_NAME.
        """
        return cls(
            project_root=Path(os.environ.get("MODGEN_PROJECT_ROOT", ".")),
            template_name=os.environ.get("MODGEN_TEMPLATE_NAME", "Example"),
        )
