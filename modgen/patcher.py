"""Anchor-based, idempotent editing of shared configuration files.

A patch is skipped when any of its markers is already in the file.
Otherwise each insertion looks for the first anchor that matches and splices
its fragment in at that point.  If any insertion cannot find an anchor the
file is left exactly as it was.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum
from pathlib import Path

from .utils import read_file, write_file


# ---------------------------------------------------------------------------
# Anchors
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class LiteralAnchor:
    """Insert immediately after the first occurrence of ``text``."""

    text: str

    def locate(self, content: str) -> int | None:
        index = content.find(self.text)
        if index == -1:
            return None
        return index + len(self.text)


@dataclass(frozen=True)
class PatternAnchor:
    """Insert immediately before the last match of ``pattern`` (multiline).

    Used for the file's trailing closing construct, e.g. ``^\\];``.
    """

    pattern: str

    def locate(self, content: str) -> int | None:
        last = None
        for match in re.finditer(self.pattern, content, re.MULTILINE):
            last = match
        return None if last is None else last.start()


Anchor = LiteralAnchor | PatternAnchor


@dataclass(frozen=True)
class Insertion:
    """A fragment and the ordered anchors that may place it."""

    fragment: str
    anchors: tuple[Anchor, ...]


@dataclass(frozen=True)
class ConfigPatch:
    """One edit to a shared file, keyed by uniqueness markers.

    Markers reuse the anchor types: a marker that can be located proves the
    edit was already made.
    """

    target_file: Path
    markers: tuple[Anchor, ...]
    insertions: tuple[Insertion, ...]
    description: str = ""


# ---------------------------------------------------------------------------
# Results
# ---------------------------------------------------------------------------


class PatchOutcome(str, Enum):
    """Result of applying a ``ConfigPatch``."""

    APPLIED = "applied"
    ALREADY_PRESENT = "already-present"
    ANCHOR_NOT_FOUND = "anchor-not-found"
    FILE_MISSING = "file-missing"


@dataclass
class PatchResult:
    target_file: Path
    outcome: PatchOutcome
    detail: str = ""

    @property
    def failed(self) -> bool:
        return self.outcome in (PatchOutcome.ANCHOR_NOT_FOUND, PatchOutcome.FILE_MISSING)


# ---------------------------------------------------------------------------
# Patching
# ---------------------------------------------------------------------------


def insert_at_anchor(content: str, insertion: Insertion) -> str | None:
    """Return *content* with the fragment spliced in, or ``None`` if no anchor matches."""
    for anchor in insertion.anchors:
        position = anchor.locate(content)
        if position is not None:
            return content[:position] + insertion.fragment + content[position:]
    return None


def find_marker(content: str, patch: ConfigPatch) -> Anchor | None:
    """Return the first of *patch*'s markers present in *content*, if any."""
    for marker in patch.markers:
        if marker.locate(content) is not None:
            return marker
    return None


def plan_patch(content: str, patch: ConfigPatch) -> tuple[PatchOutcome, str]:
    """Compute the patched text without touching the file system.

    Returns:
        ``(outcome, text)``; *text* is the original content unless the
        outcome is ``APPLIED``.
    """
    if find_marker(content, patch) is not None:
        return PatchOutcome.ALREADY_PRESENT, content

    patched = content
    for insertion in patch.insertions:
        result = insert_at_anchor(patched, insertion)
        if result is None:
            return PatchOutcome.ANCHOR_NOT_FOUND, content
        patched = result
    return PatchOutcome.APPLIED, patched


def apply_patch(patch: ConfigPatch) -> PatchResult:
    """Apply *patch* to its target file.

    Raises:
        UnrecoverableIOError: If the patched file cannot be written.
    """
    target = patch.target_file
    if not target.is_file():
        return PatchResult(target, PatchOutcome.FILE_MISSING, "target file does not exist")

    content = read_file(target)
    outcome, patched = plan_patch(content, patch)

    if outcome is PatchOutcome.APPLIED:
        write_file(target, patched)
        return PatchResult(target, outcome)
    if outcome is PatchOutcome.ALREADY_PRESENT:
        marker = find_marker(content, patch)
        label = marker.text if isinstance(marker, LiteralAnchor) else marker.pattern
        return PatchResult(target, outcome, f"marker {label!r} already present")
    return PatchResult(target, outcome, "no insertion anchor found; file left unchanged")
