"""Command-line entry point for the module generator.

Usage::

    modgen --module=Order
    modgen --module Product --table inventory_items
    python -m modgen --module=Order --root ./my-api
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import NoReturn

from pydantic import ValidationError
from rich.panel import Panel

from .config import GeneratorConfig
from .errors import InvalidInputError, UnrecoverableIOError
from .scaffolder.generator import ModuleGenerator
from .utils import console, print_error, print_success, print_summary_table, print_warning


class _ArgumentParser(argparse.ArgumentParser):
    """``ArgumentParser`` that reports usage errors on stdout with status 1."""

    def error(self, message: str) -> NoReturn:
        self.print_usage(sys.stdout)
        console.print(f"[bold red]Error:[/bold red] {message}")
        sys.exit(1)


def build_parser() -> argparse.ArgumentParser:
    parser = _ArgumentParser(
        prog="modgen",
        description="Generate a CRUD module from the project's template module",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "Examples:\n"
            "  modgen --module=Order\n"
            "  modgen --module=Product --table=inventory_items\n"
            "  modgen --module ProductOrder --root ./my-api\n"
        ),
    )
    parser.add_argument(
        "--module",
        default=None,
        help="Module name, e.g. Order or ProductOrder (required)",
    )
    parser.add_argument(
        "--table",
        default=None,
        help="Database table name (default: lowercase module name)",
    )
    parser.add_argument(
        "--root",
        default=None,
        help="Project root containing the template module (default: MODGEN_PROJECT_ROOT or .)",
    )
    parser.add_argument(
        "--config",
        default=None,
        help="JSON file with a saved generator configuration",
    )
    return parser


def _usage_exit(parser: argparse.ArgumentParser, message: str) -> NoReturn:
    parser.print_usage(sys.stdout)
    console.print(f"[bold red]Error:[/bold red] {message}")
    sys.exit(1)


def _load_config(args: argparse.Namespace) -> GeneratorConfig:
    config = GeneratorConfig.load(Path(args.config)) if args.config else GeneratorConfig.from_env()
    if args.root:
        config.project_root = Path(args.root)
    return config


def main(argv: list[str] | None = None) -> None:
    """CLI entry point for ``modgen`` and ``python -m modgen``."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.module or not args.module.strip():
        _usage_exit(parser, "--module is required")

    try:
        config = _load_config(args)
    except (OSError, ValidationError):
        print_error(f"Cannot load configuration from {args.config or 'environment'}:")
        console.print_exception()
        sys.exit(1)

    if not config.project_root.is_dir():
        print_error(f"Project root not found: {config.project_root}")
        sys.exit(1)

    console.print(
        Panel(
            f"[bold]Generating module[/bold] {args.module.strip()}"
            + (f" (table: {args.table})" if args.table else ""),
            style="cyan",
        )
    )

    try:
        generator = ModuleGenerator(config)
        report = generator.generate(args.module.strip(), args.table)
    except InvalidInputError as exc:
        _usage_exit(parser, str(exc))
    except UnrecoverableIOError as exc:
        print_error(f"Generation aborted: {exc}")
        sys.exit(1)
    except Exception:
        print_error("Unexpected error while generating module:")
        console.print_exception()
        sys.exit(1)

    console.print()
    print_summary_table(report.summary(), title="Generation Summary")

    if report.patches_failed or report.missing_sources:
        print_warning(
            f"Module '{report.names.pascal}' generated with warnings; "
            "re-run after fixing the items above."
        )
    else:
        print_success(f"Module '{report.names.pascal}' generated successfully!")


if __name__ == "__main__":
    main()
