"""Shared utility functions for the module generator.

Provides the shared Rich console, coloured status lines, the summary table,
and small file-system helpers used by every generator component.
"""

from __future__ import annotations

from pathlib import Path

from rich.console import Console
from rich.table import Table
from rich.text import Text

from .errors import UnrecoverableIOError

console = Console()

# ---------------------------------------------------------------------------
# File-system helpers
# ---------------------------------------------------------------------------


def ensure_dir(path: str | Path) -> bool:
    """Create a directory (and parents) if it does not exist.

    Returns:
        ``True`` if the directory was created by this call.

    Raises:
        UnrecoverableIOError: If the directory cannot be created.
    """
    dir_path = Path(path)
    if dir_path.is_dir():
        return False
    try:
        dir_path.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        raise UnrecoverableIOError(dir_path, exc) from exc
    return True


def read_file(path: str | Path) -> str:
    """Read a UTF-8 text file, keeping its line endings untouched."""
    return Path(path).read_bytes().decode("utf-8")


def write_file(path: str | Path, content: str | bytes) -> None:
    """Create parent dirs and write *content* (text as UTF-8, bytes verbatim).

    Line endings are written exactly as given.

    Raises:
        UnrecoverableIOError: If the file cannot be written.
    """
    file_path = Path(path)
    ensure_dir(file_path.parent)
    data = content if isinstance(content, bytes) else content.encode("utf-8")
    try:
        file_path.write_bytes(data)
    except OSError as exc:
        raise UnrecoverableIOError(file_path, exc) from exc


def display_path(path: str | Path, root: str | Path) -> str:
    """Return *path* relative to *root* when possible, for operator output."""
    try:
        return str(Path(path).relative_to(root))
    except ValueError:
        return str(path)


# ---------------------------------------------------------------------------
# Rich output helpers
# ---------------------------------------------------------------------------

STATUS_STYLES: dict[str, str] = {
    "created": "green",
    "skipped": "yellow",
    "applied": "green",
    "present": "cyan",
    "failed": "red",
    "missing": "red",
}


def print_status(status: str, message: str) -> None:
    """Print one outcome line with a coloured, fixed-width status tag."""
    style = STATUS_STYLES.get(status, "white")
    console.print(Text.assemble("  ", (f"{status:<8}", style), " ", message), highlight=False)


MESSAGE_STYLES: dict[str, str] = {
    "success": "bold green",
    "warning": "bold yellow",
    "error": "bold red",
}


def _result_cell(label: str, value: str) -> Text:
    # Zero counts fade out; a non-zero failure count stands out.
    if value == "0":
        return Text(value, style="dim")
    if "failed" in label.lower() and value.isdigit():
        return Text(value, style="bold red")
    return Text(value)


def print_summary_table(data: dict[str, str], title: str = "Summary") -> None:
    """Print a generation report as a label/result table, counts right-aligned."""
    table = Table(title=title, title_justify="left", header_style="bold cyan")
    table.add_column("Field", style="dim", no_wrap=True)
    table.add_column("Result", justify="right")
    for label, value in data.items():
        table.add_row(label, _result_cell(label, str(value)))
    console.print(table)
    console.print()


def _print_message(kind: str, message: str) -> None:
    # Text, not markup: PHP paths and array snippets may contain brackets.
    console.print(Text(message, style=MESSAGE_STYLES[kind]))


def print_success(message: str) -> None:
    _print_message("success", message)


def print_error(message: str) -> None:
    _print_message("error", message)


def print_warning(message: str) -> None:
    _print_message("warning", message)
