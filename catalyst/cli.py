"""Catalyst command line entry point.

Usage::

    catalyst                                   # interactive
    catalyst --list
    catalyst --name my_app --modules oban,credo --database postgres
    catalyst --project-path ./my_app --modules docker,alpine
"""

from __future__ import annotations

import argparse
import asyncio
import sys
from pathlib import Path

from rich.markup import escape

from catalyst.config import Config, Database
from catalyst.errors import CatalystError, GenerationError, UnknownModuleError
from catalyst.generator import generate_project
from catalyst.modules import MODULES, ProjectContext, select_modules
from catalyst.orchestrator import Orchestrator, RunReport
from catalyst.prompts import Prompter
from catalyst.utils import (
    console,
    print_banner,
    print_error,
    print_success,
    print_summary_table,
)

EXIT_OK = 0
EXIT_FATAL = 1


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="catalyst",
        description="Catalyst -- modular Phoenix project setup",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "Examples:\n"
            "  catalyst\n"
            "  catalyst --name shop --database mysql --modules oban,swoosh\n"
            "  catalyst --project-path ./shop --modules docker\n"
        ),
    )
    parser.add_argument(
        "--name",
        default=None,
        help="Project name (asked interactively if omitted)",
    )
    parser.add_argument(
        "--output-dir", "-o",
        default=None,
        help="Directory the project is generated in (default: current directory)",
    )
    parser.add_argument(
        "--database",
        choices=[db.value for db in Database],
        default=None,
        help="Database adapter (asked interactively if omitted)",
    )
    parser.add_argument(
        "--modules",
        default=None,
        help="Comma-separated module keys; skips the module questions",
    )
    parser.add_argument(
        "--project-path",
        default=None,
        help="Run modules against an existing project instead of generating one",
    )
    parser.add_argument(
        "--skip-deps",
        action="store_true",
        help="Do not run `mix deps.get` after adding dependencies",
    )
    parser.add_argument(
        "--skip-migrations",
        action="store_true",
        help="Do not run generators or `mix ecto.migrate`",
    )
    parser.add_argument(
        "--traceback",
        action="store_true",
        help="Print the traceback when a module fails unexpectedly",
    )
    parser.add_argument(
        "--list",
        action="store_true",
        help="List the available modules and exit",
    )
    return parser


def build_config(args: argparse.Namespace) -> Config:
    """Start from ``CATALYST_*`` environment settings and apply CLI overrides."""
    config = Config.from_env()
    updates: dict = {}
    if args.output_dir:
        updates["output_dir"] = Path(args.output_dir)
    if args.database:
        updates["database"] = Database(args.database)
    if args.skip_deps:
        updates["fetch_dependencies"] = False
    if args.skip_migrations:
        updates["run_migrations"] = False
    return config.model_copy(update=updates)


def print_module_list() -> None:
    print_summary_table(
        {descriptor.key: descriptor.prompt for descriptor in MODULES},
        title="Catalyst modules",
    )


async def run(args: argparse.Namespace, prompter: Prompter | None = None) -> int:
    """Execute one Catalyst session and return the process exit code."""
    prompter = prompter or Prompter(console)
    config = build_config(args)

    # Unknown keys must fail before anything is generated.
    try:
        preselected = select_modules(args.modules.split(",")) if args.modules is not None else None
    except UnknownModuleError as exc:
        print_error(f"❌ {escape(str(exc))}")
        return EXIT_FATAL

    if args.project_path:
        root = Path(args.project_path).expanduser().resolve()
        if not (root / "mix.exs").is_file():
            print_error(f"❌ {escape(str(root))} is not a Mix project (no mix.exs)")
            return EXIT_FATAL
        context = ProjectContext.from_path(root, config)
        selection = preselected if preselected is not None else prompter.ask_modules(MODULES)
    else:
        name = args.name or prompter.ask_project_name(Path(config.output_dir))
        if args.database is None:
            config = config.model_copy(update={"database": prompter.ask_database()})
        selection = preselected if preselected is not None else prompter.ask_modules(MODULES)
        try:
            context = await generate_project(name, config)
        except GenerationError as exc:
            print_error(f"❌ {escape(str(exc))}")
            return EXIT_FATAL
        print_success("✅ Phoenix project created successfully!")

    orchestrator = Orchestrator(console, show_tracebacks=args.traceback)
    report = await orchestrator.run(context, selection)
    if report.outcomes:
        orchestrator.print_summary(report)
    _print_closing(context, report, generated=not args.project_path)
    return report.exit_code


def _print_closing(context: ProjectContext, report: RunReport, generated: bool) -> None:
    lines = [f"  cd {escape(str(context.root))}", "  mix setup"]
    if any(outcome.ok for _, outcome in report.outcomes):
        lines.append(f"  Module notes: {escape(context.config.docs_dir)}/")
    title = "🎉 Catalyst setup is complete!" if generated else "🎉 Catalyst modules applied!"
    style = "bright_green" if report.exit_code == EXIT_OK else "yellow"
    print_banner(title, lines, style=style)


def main(argv: list[str] | None = None) -> None:
    """CLI entry point for ``catalyst`` and ``python -m catalyst``."""
    args = build_parser().parse_args(argv)

    if args.list:
        print_module_list()
        sys.exit(EXIT_OK)

    console.print("🚀 Welcome to Catalyst - Modular Phoenix Setup!")
    try:
        code = asyncio.run(run(args))
    except CatalystError as exc:
        print_error(f"❌ {escape(str(exc))}")
        code = EXIT_FATAL
    except KeyboardInterrupt:
        print_error("Aborted.")
        code = EXIT_FATAL
    sys.exit(code)


if __name__ == "__main__":
    main()
