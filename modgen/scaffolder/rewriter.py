"""Placeholder substitution for template file contents and paths.

Pure functions: no I/O.  The template module's name forms (``Example``,
``example``, ``EXAMPLE``) are replaced by the new module's forms in a single
scan, so replacement text is never rewritten again.
"""

from __future__ import annotations

import re
from pathlib import Path, PurePath

from ..naming import ModuleNameSet


def rewrite(text: str, names: ModuleNameSet, template: ModuleNameSet) -> str:
    """Return *text* with every template name form replaced by the module's.

    When the module's table name differs from its lowercase form, quoted
    table-name literals (``'example'``) and quoted identifiers prefixed with
    the table name (``'example_id_seq'``) become ``names.table_name`` instead,
    so code identifiers and storage names can diverge.
    """
    tokens: dict[str, str] = {}
    for old, new in (
        (template.pascal, names.pascal),
        (template.lower, names.lower),
        (template.upper, names.upper),
    ):
        tokens.setdefault(old, new)

    alternatives = [re.escape(token) for token in tokens]
    table_pass = names.table_name != names.lower
    if table_pass:
        lower = re.escape(template.lower)
        alternatives[:0] = [
            rf"(?P<literal>['\"]){lower}(?P=literal)",
            rf"(?P<prefix>['\"]){lower}_",
        ]
    pattern = re.compile("|".join(alternatives))

    def _replace(match: re.Match[str]) -> str:
        if table_pass:
            if match.group("literal"):
                quote = match.group("literal")
                return f"{quote}{names.table_name}{quote}"
            if match.group("prefix"):
                return f"{match.group('prefix')}{names.table_name}_"
        return tokens[match.group(0)]

    return pattern.sub(_replace, text)


def rewrite_name(name: str, names: ModuleNameSet, template: ModuleNameSet) -> str:
    """Rename a single file or directory name containing the template token."""
    if template.pascal in name:
        return name.replace(template.pascal, names.pascal)
    return name


def rewrite_path(
    relative_path: str | PurePath, names: ModuleNameSet, template: ModuleNameSet
) -> Path:
    """Rename the base name of *relative_path*; parent segments are left as-is.

    Directory segments are renamed one level at a time by the tree cloner.
    """
    path = Path(relative_path)
    return path.with_name(rewrite_name(path.name, names, template))
