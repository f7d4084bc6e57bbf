"""Human-readable console output using rich."""

from typing import Optional

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from isotest.core.results import RunSummary, TestResult, TestStatus
from isotest.reporting.base import Reporter

STATUS_STYLES = {
    TestStatus.PASSED: "green",
    TestStatus.FAILED: "red",
    TestStatus.CRASHED: "bold red",
    TestStatus.TIMED_OUT: "yellow",
    TestStatus.NOT_FOUND: "magenta",
}


def format_duration(ms: int) -> str:
    """Format duration in milliseconds to human-readable string."""
    if ms < 1000:
        return f"{ms}ms"
    elif ms < 60000:
        return f"{ms / 1000:.2f}s"
    else:
        minutes = ms // 60000
        seconds = (ms % 60000) / 1000
        return f"{minutes}m {seconds:.1f}s"


class ConsoleReporter(Reporter):
    """Prints suites, test outcomes and the final summary."""

    def __init__(self, console: Optional[Console] = None, errors_only: bool = False):
        """Initialize the console reporter.

        Args:
            console: Console to print to (default: a new stdout console)
            errors_only: Only print non-passing tests and the summary
        """
        super().__init__()
        self.console = console or Console()
        self.errors_only = errors_only

    def suite_started(self, path: str) -> None:
        if not self.errors_only:
            self.console.print(f"[bold]Suite[/bold] {escape(path)}")

    def suite_finished(self, path: str) -> None:
        if not self.errors_only:
            self.console.print(f"[dim]Finished {escape(path)}[/dim]")

    def test_started(self, path: str) -> None:
        if not self.errors_only:
            self.console.print(f"  [dim]▶ {escape(path)}[/dim]")

    def test_finished(self, result: TestResult) -> None:
        if result.passed:
            if not self.errors_only:
                self.console.print(
                    f"  [green]✓[/green] {escape(result.qualified_path)} "
                    f"[dim]({format_duration(result.duration_ms)})[/dim]"
                )
            return

        style = STATUS_STYLES[result.status]
        self.console.print(
            f"  [{style}]✗ {result.status.label}[/{style}] {escape(result.qualified_path)} "
            f"[dim]({format_duration(result.duration_ms)})[/dim]"
        )
        if result.description:
            for line in result.description.splitlines():
                self.console.print(f"      {line}", markup=False, highlight=False, soft_wrap=True)

    def summary(self, summary: RunSummary) -> None:
        self.console.print("\n" + "=" * 50)
        self.console.print("[bold]Test Results Summary[/bold]")
        self.console.print("=" * 50)

        table = Table(show_header=False, box=None)
        table.add_column("Metric", style="bold")
        table.add_column("Value", justify="right")

        table.add_row("Total Tests", str(summary.total))
        table.add_row("Passed", f"[green]{summary.passed}[/green]")
        table.add_row("Failed", f"[red]{summary.failed}[/red]")

        if summary.total > 0:
            pass_rate = (summary.passed / summary.total) * 100
            table.add_row("Pass Rate", f"{pass_rate:.1f}%")

        self.console.print(table)

        if summary.successful:
            self.console.print("\n[green]All tests passed![/green]")
            return

        self.console.print("\n[red]Some tests failed![/red]")
        self.console.print("\nFailed tests:")
        for status, path in summary.failures:
            style = STATUS_STYLES[status]
            self.console.print(f"  [{style}]✗[/{style}] {escape(path)} [dim]({status.label})[/dim]")
