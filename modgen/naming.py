"""Derivation of every name form used during generation.

A single operator-supplied module name (``Order``, ``productOrder``) is turned
into a ``ModuleNameSet`` once per run and passed explicitly to every other
component.  The same function also describes the template module itself
(``Example`` by default), so substitution tokens are never hard-coded.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

from .errors import InvalidInputError

_IDENTIFIER_RE = re.compile(r"^[A-Za-z][A-Za-z0-9_]*$")


@dataclass(frozen=True)
class ModuleNameSet:
    """All case/format variants of one module name."""

    raw: str
    pascal: str
    lower: str
    upper: str
    kebab: str
    table_name: str


def derive(raw: str, table: str | None = None) -> ModuleNameSet:
    """Build the ``ModuleNameSet`` for *raw*.

    Args:
        raw: Module name as typed by the operator.  Only its first character
            is uppercased for the ``pascal`` form; the rest is kept verbatim.
        table: Optional storage table name.  Defaults to the lowercase form.

    Raises:
        InvalidInputError: If *raw* is empty or not a valid identifier.
    """
    name = (raw or "").strip()
    if not name:
        raise InvalidInputError("Module name must not be empty.")
    if not _IDENTIFIER_RE.match(name):
        raise InvalidInputError(
            f"Module name '{name}' must start with a letter and contain only "
            "letters, digits and underscores."
        )

    pascal = name[0].upper() + name[1:]
    lower = pascal.lower()
    table_name = (table or "").strip() or lower

    return ModuleNameSet(
        raw=raw,
        pascal=pascal,
        lower=lower,
        upper=pascal.upper(),
        kebab=to_kebab(pascal),
        table_name=table_name,
    )


def to_kebab(pascal: str) -> str:
    """Insert a hyphen before every uppercase letter but the first, then lowercase.

    ``ProductOrder`` -> ``product-order``.
    """
    chars: list[str] = []
    for index, char in enumerate(pascal):
        if index > 0 and char.isupper():
            chars.append("-")
        chars.append(char)
    return "".join(chars).lower()


def display_name(names: ModuleNameSet) -> str:
    """Human-readable title used in generated fixtures (``Product Order``)."""
    return " ".join(part.capitalize() for part in names.kebab.split("-") if part)
