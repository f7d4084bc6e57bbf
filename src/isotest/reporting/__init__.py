"""Reporters receiving run progress and results."""

from typing import Callable, Optional

from rich.console import Console

from isotest.config import RunConfig
from isotest.reporting.base import CombinedReporter, Reporter
from isotest.reporting.child import ProtocolReporter
from isotest.reporting.console import ConsoleReporter
from isotest.reporting.html_report import HtmlReporter

REPORTERS: dict[str, Callable[[RunConfig, Optional[Console]], Reporter]] = {
    "console": lambda config, console: ConsoleReporter(console, errors_only=config.errors_only),
    "subprocess": lambda config, console: ProtocolReporter.attach_to_stdout(),
    "html": lambda config, console: HtmlReporter(config.report),
}


def create_reporter(config: RunConfig, console: Optional[Console] = None) -> CombinedReporter:
    """Build the combined reporter for the reporters a configuration selects.

    Raises:
        KeyError: If a selected reporter name is not registered
    """
    reporters = []
    for name in config.selected_reporters:
        if name not in REPORTERS:
            raise KeyError(f"Unknown reporter: {name}")
        reporters.append(REPORTERS[name](config, console))
    return CombinedReporter(reporters)


__all__ = [
    "REPORTERS",
    "CombinedReporter",
    "ConsoleReporter",
    "HtmlReporter",
    "ProtocolReporter",
    "Reporter",
    "create_reporter",
]
