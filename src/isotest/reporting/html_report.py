"""Static HTML report rendered with Jinja2 once a run finishes."""

import json
import logging
from datetime import datetime
from pathlib import Path
from typing import Any, Optional

from jinja2 import Environment, FileSystemLoader, select_autoescape

from isotest.config import ReportConfig
from isotest.core.results import RunSummary, TestResult
from isotest.reporting.base import Reporter
from isotest.reporting.console import format_duration

log = logging.getLogger(__name__)


class HtmlReporter(Reporter):
    """Collects finished tests and writes an HTML report with the summary."""

    def __init__(self, config: ReportConfig, base_dir: Optional[Path] = None):
        """Initialize the HTML reporter.

        Args:
            config: Report location and title
            base_dir: Directory the output directory is relative to (default: cwd)
        """
        super().__init__()
        self.config = config
        self.base_dir = base_dir or Path.cwd()
        self.results: list[TestResult] = []
        self.report_path: Optional[Path] = None
        self.data_path: Optional[Path] = None

        template_dir = Path(__file__).parent / "templates"
        self.env = Environment(
            loader=FileSystemLoader(template_dir),
            autoescape=select_autoescape(["html", "xml"]),
        )
        self.env.filters["duration_format"] = format_duration
        self.env.filters["percentage"] = lambda value: f"{value:.1f}%"

    def suite_started(self, path: str) -> None:
        pass

    def suite_finished(self, path: str) -> None:
        pass

    def test_started(self, path: str) -> None:
        pass

    def test_finished(self, result: TestResult) -> None:
        with self._lock:
            self.results.append(result)

    def summary(self, summary: RunSummary) -> None:
        template = self.env.get_template("report.html")
        html_content = template.render(**self._prepare_context(summary))

        output_dir = self.base_dir / self.config.output_dir
        output_dir.mkdir(parents=True, exist_ok=True)

        self.report_path = output_dir / self.config.filename
        self.report_path.write_text(html_content, encoding="utf-8")
        log.info("Report written to %s", self.report_path)

        self.data_path = self.report_path.with_suffix(".json")
        with open(self.data_path, "w", encoding="utf-8") as f:
            json.dump(self._prepare_data(summary), f, indent=2)

    def _prepare_data(self, summary: RunSummary) -> dict[str, Any]:
        """Machine-readable copy of the report."""
        with self._lock:
            results = sorted(self.results, key=lambda r: r.qualified_path)

        data = summary.to_dict()
        data["title"] = self.config.title
        data["results"] = [r.to_dict() for r in results]
        return data

    def _prepare_context(self, summary: RunSummary) -> dict[str, Any]:
        with self._lock:
            results = sorted(self.results, key=lambda r: r.qualified_path)

        failed_tests = [r for r in results if not r.passed]
        passed_tests = [r for r in results if r.passed]

        return {
            "title": self.config.title,
            "generated_at": datetime.now().strftime("%Y-%m-%d %H:%M:%S"),
            "total": summary.total,
            "passed": summary.passed,
            "failed": summary.failed,
            "pass_rate": (summary.passed / summary.total * 100) if summary.total else 0,
            "duration_ms": sum(r.duration_ms for r in results),
            "failed_tests": failed_tests,
            "passed_tests": passed_tests,
        }
