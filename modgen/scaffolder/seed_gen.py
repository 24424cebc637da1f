"""Seeder class generation.

The template seeder still carries a few methods whose logic now lives in the
shared ``AbstractSeederData`` base class.  After name substitution those
overrides are deleted from the generated class and the fixture constants are
pointed at the new module.
"""

from __future__ import annotations

import re
from collections.abc import Callable
from pathlib import Path

from ..config import GeneratorConfig
from ..errors import SourceMissingError
from ..naming import ModuleNameSet
from ..utils import read_file, write_file
from .models import ArtifactKind, GeneratedArtifact
from .rewriter import rewrite

# Overrides inherited from AbstractSeederData.
SEED_REDUNDANT_METHODS: tuple[str, ...] = (
    "getTableName",
    "getEntityClass",
    "isValidEntity",
)

# Class constants rewritten after substitution: (constant, value builder).
SEED_CONSTANTS: tuple[tuple[str, Callable[[ModuleNameSet], str]], ...] = (
    ("YAML_FILE", lambda n: f"'{n.lower}.yaml'"),
    ("TABLE_NAME", lambda n: f"'{n.table_name}'"),
    ("ENTITY_CLASS", lambda n: f"{n.pascal}::class"),
)

_MODIFIERS = r"(?:(?:public|protected|private|static|final|abstract)\s+)*"


def seed_class_name(names: ModuleNameSet) -> str:
    return f"Seed{names.pascal}Data"


def _camel(pascal: str) -> str:
    return pascal[:1].lower() + pascal[1:]


class SeedGenerator:
    """Generates the ``Seed<Module>Data`` seeder class."""

    def __init__(self, config: GeneratorConfig, template: ModuleNameSet) -> None:
        self.config = config
        self.template = template

    def find_existing(self, names: ModuleNameSet) -> Path | None:
        """Return a seeder already present for *names* (timestamped or not)."""
        directory = self.config.seed_dir_path
        if not directory.is_dir():
            return None
        pattern = re.compile(rf"^(?:M\d{{14}})?{seed_class_name(names)}\.php$")
        for candidate in sorted(directory.iterdir()):
            if candidate.is_file() and pattern.match(candidate.name):
                return candidate
        return None

    def generate(self, names: ModuleNameSet) -> GeneratedArtifact:
        """Write the seeder class unless one already exists.

        Raises:
            SourceMissingError: If the seeder template file is missing.
        """
        existing = self.find_existing(names)
        if existing is not None:
            return GeneratedArtifact(target_path=existing, kind=ArtifactKind.SEED, already_existed=True)

        template_path = self.config.seed_template_path
        if not template_path.is_file():
            raise SourceMissingError(template_path)

        content = self.render(read_file(template_path), names)
        target = self.config.seed_dir_path / f"{seed_class_name(names)}.php"
        write_file(target, content)
        return GeneratedArtifact(target_path=target, kind=ArtifactKind.SEED, content=content)

    def render(self, source: str, names: ModuleNameSet) -> str:
        t = self.template
        content = re.sub(
            rf"\bSeed{re.escape(t.pascal)}Data\b", seed_class_name(names), source
        )
        content = re.sub(
            rf"\b{re.escape(t.pascal)}RepositoryInterface\b",
            f"{names.pascal}RepositoryInterface",
            content,
        )
        content = re.sub(
            rf"(?<=[$>]){re.escape(_camel(t.pascal))}Repository\b",
            f"{_camel(names.pascal)}Repository",
            content,
        )
        content = rewrite(content, names, t)

        for method in SEED_REDUNDANT_METHODS:
            content = remove_method(content, method)

        for constant, build in SEED_CONSTANTS:
            content = re.sub(
                rf"(\bconst\s+{constant}\s*=\s*)[^;]+;",
                lambda m, value=build(names): f"{m.group(1)}{value};",
                content,
            )
        return content


# ---------------------------------------------------------------------------
# Method removal
# ---------------------------------------------------------------------------


def remove_method(source: str, name: str) -> str:
    """Delete the method *name* (with its doc comment) from PHP *source*.

    The span runs from the declaration line (or the ``/** ... */`` block right
    above it) to the matching closing brace.  Returns *source* unchanged if
    the method is not declared or its body is unbalanced.
    """
    decl = re.search(
        rf"^[ \t]*{_MODIFIERS}function\s+{re.escape(name)}\s*\(", source, re.MULTILINE
    )
    if decl is None:
        return source

    start = _doc_comment_start(source, decl.start())
    end = _body_end(source, decl.end())
    if end is None:
        return source

    # Swallow the rest of the closing line.
    newline = source.find("\n", end)
    if newline != -1 and not source[end:newline].strip():
        end = newline + 1

    head, tail = source[:start], source[end:]
    if head.endswith("\n\n"):
        if tail.startswith("\n"):
            tail = tail[1:]
        elif tail.lstrip(" \t").startswith("}"):
            head = head[:-1]
    return head + tail


def _doc_comment_start(source: str, decl_start: int) -> int:
    before = source[:decl_start]
    stripped = before.rstrip()
    if not stripped.endswith("*/"):
        return decl_start
    open_at = stripped.rfind("/**")
    if open_at == -1 or stripped.find("*/", open_at) != len(stripped) - 2:
        return decl_start
    return before.rfind("\n", 0, open_at) + 1


def _body_end(source: str, pos: int) -> int | None:
    """Return the index just past the brace closing the body opened after *pos*."""
    depth = 0
    i = pos
    length = len(source)
    while i < length:
        char = source[i]
        if char in "'\"":
            i = _skip_string(source, i)
            continue
        if source.startswith("//", i) or char == "#":
            newline = source.find("\n", i)
            i = length if newline == -1 else newline
            continue
        if source.startswith("/*", i):
            close = source.find("*/", i + 2)
            i = length if close == -1 else close + 2
            continue
        if char == ";" and depth == 0:
            # Abstract or interface declaration: no body.
            return i + 1
        if char == "{":
            depth += 1
        elif char == "}":
            depth -= 1
            if depth == 0:
                return i + 1
            if depth < 0:
                return None
        i += 1
    return None


def _skip_string(source: str, start: int) -> int:
    quote = source[start]
    i = start + 1
    while i < len(source):
        if source[i] == "\\":
            i += 2
            continue
        if source[i] == quote:
            return i + 1
        i += 1
    return len(source)
