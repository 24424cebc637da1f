"""Timestamped migration generation.

The migration runner keys on the class name, so the generated class name and
file name must embed the same ``YYYYMMDDHHMMSS`` timestamp:
``M20261017142501CreateOrderTable`` in ``M20261017142501CreateOrderTable.php``.
"""

from __future__ import annotations

import re
from datetime import datetime
from pathlib import Path

from ..config import GeneratorConfig
from ..errors import SourceMissingError
from ..naming import ModuleNameSet
from ..utils import read_file, write_file
from .models import ArtifactKind, GeneratedArtifact
from .rewriter import rewrite

TIMESTAMP_FORMAT = "%Y%m%d%H%M%S"

_TABLE_CONSTANT_RE = re.compile(r"(\bconst\s+TABLE_NAME\s*=\s*)(['\"])[^'\"]*\2")


def migration_class_name(names: ModuleNameSet, now: datetime) -> str:
    """Return ``M<timestamp>Create<Pascal>Table``."""
    return f"M{now.strftime(TIMESTAMP_FORMAT)}Create{names.pascal}Table"


class MigrationGenerator:
    """Generates the ``CREATE TABLE`` migration for a new module."""

    def __init__(self, config: GeneratorConfig, template: ModuleNameSet) -> None:
        self.config = config
        self.template = template

    def find_existing(self, names: ModuleNameSet) -> Path | None:
        """Return a migration already creating this module's table, if any."""
        directory = self.config.migration_dir_path
        if not directory.is_dir():
            return None
        pattern = re.compile(rf"^M\d{{14}}Create{re.escape(names.pascal)}(?:Table)?\.php$")
        for candidate in sorted(directory.iterdir()):
            if candidate.is_file() and pattern.match(candidate.name):
                return candidate
        return None

    def generate(self, names: ModuleNameSet, now: datetime | None = None) -> GeneratedArtifact:
        """Write a new migration unless one already exists for *names*.

        Args:
            names: Name forms of the module being generated.
            now: Generation time; defaults to the current local time.

        Raises:
            SourceMissingError: If the migration template file is missing.
        """
        existing = self.find_existing(names)
        if existing is not None:
            return GeneratedArtifact(
                target_path=existing, kind=ArtifactKind.MIGRATION, already_existed=True
            )

        template_path = self.config.migration_template_path
        if not template_path.is_file():
            raise SourceMissingError(template_path)

        class_name = migration_class_name(names, now or datetime.now())
        content = self.render(read_file(template_path), names, class_name)

        target = self.config.migration_dir_path / f"{class_name}.php"
        write_file(target, content)
        return GeneratedArtifact(target_path=target, kind=ArtifactKind.MIGRATION, content=content)

    def render(self, source: str, names: ModuleNameSet, class_name: str) -> str:
        """Apply the class rename, name substitution and table constant, in that order."""
        class_re = re.compile(
            rf"\bM\d{{14}}Create{re.escape(self.template.pascal)}(?:Table)?(?![A-Za-z0-9_])"
        )
        content = class_re.sub(class_name, source)
        content = rewrite(content, names, self.template)
        return _TABLE_CONSTANT_RE.sub(
            lambda m: f"{m.group(1)}{m.group(2)}{names.table_name}{m.group(2)}",
            content,
        )
