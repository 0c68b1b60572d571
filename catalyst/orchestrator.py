"""Catalyst module orchestrator.

Runs an ordered selection of feature modules against one generated project,
strictly one after another, and collects exactly one outcome per module.
A failing module never stops the run: its outcome is recorded and the next
module starts.
"""

from __future__ import annotations

import time
import traceback
from dataclasses import dataclass, field
from enum import Enum
from typing import Sequence

from rich.console import Console
from rich.markup import escape

from catalyst.modules import Failure, ModuleDescriptor, ProjectContext, SetupOutcome, Success
from catalyst.utils import console as default_console
from catalyst.utils import format_duration


class RunStatus(str, Enum):
    COMPLETED = "completed"
    COMPLETED_WITH_WARNINGS = "completed_with_warnings"


@dataclass
class RunReport:
    """Ordered ``(key, outcome)`` pairs for one orchestrator run."""

    outcomes: list[tuple[str, SetupOutcome]] = field(default_factory=list)
    duration: float = 0.0

    @property
    def failures(self) -> list[tuple[str, Failure]]:
        return [(key, outcome) for key, outcome in self.outcomes if not outcome.ok]

    @property
    def status(self) -> RunStatus:
        if self.failures:
            return RunStatus.COMPLETED_WITH_WARNINGS
        return RunStatus.COMPLETED

    @property
    def exit_code(self) -> int:
        """``0`` when every module succeeded, ``2`` otherwise."""
        return 0 if self.status is RunStatus.COMPLETED else 2

    def outcome_for(self, key: str) -> SetupOutcome | None:
        for outcome_key, outcome in self.outcomes:
            if outcome_key == key:
                return outcome
        return None


class Orchestrator:
    """Drives module setup in selection order.

    Attributes:
        console: Rich console that receives one status line per module.
        show_tracebacks: Print the traceback of unexpected exceptions
            (anything a module's own ``setup`` did not convert).
    """

    def __init__(self, console: Console | None = None, show_tracebacks: bool = False) -> None:
        self.console = console or default_console
        self.show_tracebacks = show_tracebacks

    async def run(
        self, context: ProjectContext, selection: Sequence[ModuleDescriptor]
    ) -> RunReport:
        """Set up every module in *selection* against *context*.

        Each module is awaited to completion before the next one starts.
        The orchestrator itself touches no files.
        """
        report = RunReport()
        started = time.monotonic()

        for descriptor in selection:
            outcome = await self._run_one(context, descriptor)
            report.outcomes.append((descriptor.key, outcome))
            self._report(descriptor, outcome)

        report.duration = time.monotonic() - started
        return report

    async def _run_one(self, context: ProjectContext, descriptor: ModuleDescriptor) -> SetupOutcome:
        try:
            result = await descriptor.module.setup(context)
        except Exception as exc:
            if self.show_tracebacks:
                self.console.print(f"[dim]{escape(traceback.format_exc())}[/dim]")
            return Failure(str(exc) or type(exc).__name__)
        if not isinstance(result, (Success, Failure)):
            return Failure(f"{descriptor.key} returned {result!r}")
        return result

    def _report(self, descriptor: ModuleDescriptor, outcome: SetupOutcome) -> None:
        title = escape(descriptor.title)
        if outcome.ok:
            self.console.print(f"[green]✅ {title} setup completed![/green]")
        else:
            self.console.print(
                f"[red]❌ {title} setup failed: {escape(outcome.reason)}[/red]"
            )

    def print_summary(self, report: RunReport) -> None:
        """Print the closing line with counts and duration."""
        succeeded = len(report.outcomes) - len(report.failures)
        line = (
            f"{succeeded}/{len(report.outcomes)} modules set up "
            f"in {format_duration(report.duration)}"
        )
        if report.failures:
            failed = ", ".join(escape(key) for key, _ in report.failures)
            self.console.print(f"[bold yellow]{line}; failed: {failed}[/bold yellow]")
        else:
            self.console.print(f"[bold green]{line}[/bold green]")
