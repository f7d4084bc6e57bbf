"""Command-line interface of isotest test programs.

A test program builds its suite tree and hands it to :func:`main`::

    from isotest import Suite, Testcase, main

    main([Suite("math", tests=[Testcase("add", test_add)])])
"""

import json
import logging
import sys
from typing import Optional, Sequence

import click
from pydantic import ValidationError
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel

from isotest import __version__
from isotest.config import RunConfig
from isotest.core import protocol
from isotest.core.filter import NameFilter
from isotest.core.results import TestStatus
from isotest.core.runner import Runner
from isotest.core.suite import Suite
from isotest.diagnostics import configure_logging
from isotest.exceptions import InvalidFilterFormat
from isotest.reporting import REPORTERS, create_reporter

console = Console()


@click.command(context_settings={"help_option_names": ["-h", "--help"]})
@click.version_option(
    __version__,
    "-v",
    "--version",
    prog_name="isotest",
    message="%(prog)s %(version)s - isolated test execution engine",
)
@click.option("--tasks", "-j", type=click.IntRange(min=1), help="Number of worker threads")
@click.option("--test", "-t", "test_filter", help="Test (suite/testcase) or suite path to run")
@click.option(
    "--reporter",
    "-r",
    "reporters",
    multiple=True,
    type=click.Choice(sorted(REPORTERS)),
    help="Reporter to use (repeatable)",
)
@click.option("--quiet", "-q", is_flag=True, help="Disable reporters")
@click.option(
    "--timeout", "-l", type=click.FloatRange(min=0), help="Timeout for each test in seconds"
)
@click.option("--error", "-e", "errors_only", is_flag=True, help="Only show errors and summary")
@click.option(
    "--config",
    "-c",
    "config_path",
    type=click.Path(exists=True, dir_okay=False),
    help="Path to a JSON configuration file",
)
@click.pass_context
def cli(
    ctx: click.Context,
    tasks: Optional[int],
    test_filter: Optional[str],
    reporters: tuple[str, ...],
    quiet: bool,
    timeout: Optional[float],
    errors_only: bool,
    config_path: Optional[str],
) -> None:
    """Run the test program's suites, each test in its own process."""
    suites: Sequence[Suite] = ctx.obj["suites"]

    try:
        config = RunConfig.from_file(config_path) if config_path else RunConfig()
    except (ValidationError, json.JSONDecodeError) as e:
        console.print(f"[red]Invalid configuration:[/red] {escape(str(e))}")
        ctx.exit(1)

    overrides = {
        "worker_count": tasks,
        "timeout_seconds": timeout,
        "test_filter": test_filter,
        "reporters": list(reporters) or None,
    }
    data = config.model_dump()
    data.update({key: value for key, value in overrides.items() if value is not None})
    data["quiet"] = quiet or config.quiet
    data["errors_only"] = errors_only or config.errors_only
    config = RunConfig.model_validate(data)

    configure_logging(logging.ERROR if config.errors_only else logging.WARNING)

    try:
        NameFilter.parse(config.test_filter)
    except InvalidFilterFormat as e:
        if config.quiet:
            click.echo(protocol.encode(TestStatus.NOT_FOUND, str(e)), nl=False)
            ctx.exit(1)
        console.print(f"[red]Error:[/red] {escape(str(e))}")
        ctx.exit(1)

    if "console" in config.selected_reporters and not config.errors_only:
        console.print(Panel.fit("[bold blue]isotest[/bold blue]", subtitle=f"v{__version__}"))

    reporter = create_reporter(config, console)
    runner = Runner(config, reporter)
    summary = runner.run(suites)

    ctx.exit(0 if summary.successful else 1)


def run(suites: Sequence[Suite], argv: Optional[Sequence[str]] = None) -> int:
    """Run a test program's suites with command-line arguments and return the exit code."""
    try:
        result = cli.main(
            args=list(argv) if argv is not None else None,
            prog_name="isotest",
            obj={"suites": suites},
            standalone_mode=False,
        )
    except click.ClickException as e:
        e.show()
        return e.exit_code
    except click.Abort:
        console.print("[yellow]Aborted[/yellow]")
        return 1

    return result if isinstance(result, int) else 0


def main(suites: Sequence[Suite], argv: Optional[Sequence[str]] = None) -> None:
    """Entry point of a test program: run its suites and exit with the result."""
    sys.exit(run(suites, argv))
