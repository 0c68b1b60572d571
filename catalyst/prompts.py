"""Interactive questions asked before generation.

All input goes through a Rich ``Console`` so tests can substitute one whose
``input`` returns scripted answers.
"""

from __future__ import annotations

from pathlib import Path
from typing import Sequence

from rich.console import Console
from rich.markup import escape

from catalyst.config import Database
from catalyst.modules import ModuleDescriptor
from catalyst.utils import console as default_console
from catalyst.utils import is_valid_project_name

DATABASE_QUESTION = "Database [1] Postgres (default), [2] MySQL, [3] SQLite: "


class Prompter:
    """Asks the project name, database and module questions in order."""

    def __init__(self, console: Console | None = None) -> None:
        self.console = console or default_console

    def _error(self, message: str) -> None:
        self.console.print(f"[bold red]{escape(message)}[/bold red]")

    def ask_project_name(self, output_dir: Path) -> str:
        """Ask until the answer is a valid, unused project name."""
        while True:
            name = self.console.input("Project name? ").strip()
            if not name:
                self._error("Project name cannot be empty")
            elif not is_valid_project_name(name):
                self._error(
                    "Invalid project name. Use only lowercase letters, numbers, and underscores"
                )
            elif (output_dir / name).exists():
                self._error(f"Directory '{name}' already exists")
            else:
                return name

    def ask_database(self) -> Database:
        return Database.from_choice(self.console.input(DATABASE_QUESTION))

    def confirm(self, question: str) -> bool:
        """Yes/no question defaulting to yes. Only an answer starting with ``n`` declines."""
        answer = self.console.input(f"{escape(question)} [Yn] ").strip().lower()
        return not answer.startswith("n")

    def ask_modules(self, registry: Sequence[ModuleDescriptor]) -> list[ModuleDescriptor]:
        """Ask each module's question in registry order; return the accepted ones."""
        return [descriptor for descriptor in registry if self.confirm(descriptor.prompt)]
