"""Seed fixture (Alice YAML) generation."""

from __future__ import annotations

from ..config import GeneratorConfig
from ..errors import SourceMissingError
from ..naming import ModuleNameSet, display_name
from ..utils import read_file, write_file
from .models import ArtifactKind, GeneratedArtifact
from .rewriter import rewrite

# Display phrases in the template, ``{name}`` being the module's display name.
FIXTURE_PHRASES: tuple[str, ...] = (
    "{name} Item",
    "{name} Record",
    "Sample {name}",
)

# Built-in Faker formatter used instead of the template's custom provider.
GENERIC_RANDOM_PLACEHOLDER = "<company()>"


def custom_random_placeholder(names: ModuleNameSet) -> str:
    """Placeholder served by a module-specific Faker provider (``<exampleRandom()>``)."""
    return f"<{names.lower}Random()>"


class FixtureGenerator:
    """Generates ``<module>.yaml`` next to the template fixture."""

    def __init__(self, config: GeneratorConfig, template: ModuleNameSet) -> None:
        self.config = config
        self.template = template

    def generate(self, names: ModuleNameSet) -> GeneratedArtifact:
        """Write the fixture file unless it already exists.

        Raises:
            SourceMissingError: If the fixture template file is missing.
        """
        target = self.config.fixture_dir_path / f"{names.lower}.yaml"
        if target.exists():
            return GeneratedArtifact(target_path=target, kind=ArtifactKind.FIXTURE, already_existed=True)

        template_path = self.config.fixture_template_path
        if not template_path.is_file():
            raise SourceMissingError(template_path)

        content = self.render(read_file(template_path), names)
        write_file(target, content)
        return GeneratedArtifact(target_path=target, kind=ArtifactKind.FIXTURE, content=content)

    def render(self, source: str, names: ModuleNameSet) -> str:
        template_display = display_name(self.template)
        module_display = display_name(names)
        content = source
        for phrase in FIXTURE_PHRASES:
            content = content.replace(
                phrase.format(name=template_display), phrase.format(name=module_display)
            )
        # Module-specific Faker providers are not generated.
        content = content.replace(custom_random_placeholder(self.template), GENERIC_RANDOM_PLACEHOLDER)
        return rewrite(content, names, self.template)
