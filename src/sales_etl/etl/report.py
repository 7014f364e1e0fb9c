"""
Run report: the structured outcome of one extraction run.

Tracks every step (one per source, one per dimension loader) with its status,
timing and row count, plus an overall run status.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

from rich.console import Group
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table
from rich.text import Text


class StepStatus(Enum):
    """Status of a run step."""

    PENDING = "pending"
    RUNNING = "running"
    DONE = "done"
    FAILED = "failed"
    SKIPPED = "skipped"


class RunStatus(Enum):
    """Overall outcome of a run."""

    SUCCESS = "success"
    PARTIAL = "partial"  # a plain source failed and was recovered
    FATAL = "fatal"  # no sources, or the run boundary caught a failure


@dataclass
class StepResult:
    """A single run step (extract from a source, or load a dimension)."""

    name: str
    phase: str  # extract, load
    status: StepStatus = StepStatus.PENDING
    error: str | None = None
    duration: float | None = None
    row_count: int | None = None


@dataclass
class RunReport:
    """Outcome of one `execute_extraction()` call."""

    status: RunStatus = RunStatus.SUCCESS
    steps: list[StepResult] = field(default_factory=list)
    fact_count: int = 0
    facts_loaded: bool = False
    bundle_captured: bool = False
    error: str | None = None
    duration: float | None = None

    @property
    def succeeded(self) -> bool:
        return self.status is not RunStatus.FATAL

    def add_step(self, name: str, phase: str) -> StepResult:
        step = StepResult(name=name, phase=phase)
        self.steps.append(step)
        return step

    def step(self, name: str, phase: str) -> StepResult:
        for s in self.steps:
            if s.name == name and s.phase == phase:
                return s
        raise KeyError(f"No {phase} step named {name!r}")

    def phase_steps(self, phase: str) -> list[StepResult]:
        return [s for s in self.steps if s.phase == phase]

    def skip_pending(self) -> None:
        """Mark every step the run never reached as skipped."""
        for s in self.steps:
            if s.status in (StepStatus.PENDING, StepStatus.RUNNING):
                s.status = StepStatus.SKIPPED

    def finalize(self, fatal_error: str | None = None) -> None:
        """Settle the run status once no more steps will execute."""
        self.skip_pending()
        if fatal_error is not None:
            self.status = RunStatus.FATAL
            self.error = fatal_error
        elif any(s.status is StepStatus.FAILED for s in self.steps):
            self.status = RunStatus.PARTIAL
        else:
            self.status = RunStatus.SUCCESS


_STATUS_ICONS = {
    StepStatus.PENDING: "[dim][ ][/]",
    StepStatus.RUNNING: "[yellow][>][/]",
    StepStatus.DONE: "[green]\\[ok][/]",
    StepStatus.FAILED: "[red][!][/]",
    StepStatus.SKIPPED: "[dim][-][/]",
}

_RUN_STYLES = {
    RunStatus.SUCCESS: "green",
    RunStatus.PARTIAL: "yellow",
    RunStatus.FATAL: "red",
}


def render_report(report: RunReport) -> Panel:
    """Build a rich panel summarizing a run."""
    table = Table(show_header=True, header_style="bold cyan", expand=True)
    table.add_column("Phase", style="dim", width=8)
    table.add_column("Step", width=24)
    table.add_column("Status", width=10, justify="center")
    table.add_column("Rows", width=10, justify="right")
    table.add_column("Time", width=8, justify="right")
    table.add_column("Error", style="red")

    for s in report.steps:
        table.add_row(
            s.phase,
            escape(s.name),
            _STATUS_ICONS[s.status],
            f"{s.row_count:,}" if s.row_count is not None else "-",
            f"{s.duration:.1f}s" if s.duration is not None else "-",
            escape(s.error or ""),
        )

    style = _RUN_STYLES[report.status]
    summary = Text()
    summary.append("Run: ", style="bold")
    summary.append(report.status.value, style=f"bold {style}")
    summary.append(f"   facts aggregated: {report.fact_count:,}")
    summary.append("   facts loaded: no", style="dim")
    if report.error:
        summary.append(f"\nError: {report.error}", style="red")

    return Panel(Group(table, Text(""), summary), title="[bold blue]Sales Extraction Run[/]", border_style=style)
