"""Configuration management for isotest runs."""

import json
import os
import sys
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, field_validator


def default_executable() -> list[str]:
    """Command that re-invokes the running test program."""
    return [sys.executable, os.path.abspath(sys.argv[0])]


class ReportConfig(BaseModel):
    """HTML report configuration."""

    model_config = ConfigDict(frozen=True)

    output_dir: str = Field(default="./reports", description="Directory for report output")
    filename: str = Field(default="isotest_report.html", description="Report filename")
    title: str = Field(default="Test Results", description="Report title")


class RunConfig(BaseModel):
    """Settings for one run, fixed for its whole duration."""

    model_config = ConfigDict(frozen=True)

    worker_count: int = Field(default=1, description="Concurrent test cases per suite")
    timeout_seconds: float = Field(
        default=60, description="Timeout for each isolated test, 0 disables it"
    )
    test_filter: str = Field(
        default="", description="Exact test path or suite path prefix, empty runs everything"
    )
    executable: list[str] = Field(
        default_factory=default_executable,
        description="Command that re-invokes the test program for isolation",
    )
    environment: dict[str, str] = Field(
        default_factory=dict, description="Additional environment variables for isolated tests"
    )
    reporters: list[str] = Field(default_factory=list, description="Reporter names to use")
    quiet: bool = Field(default=False, description="Disable the default console reporter")
    errors_only: bool = Field(default=False, description="Only show errors and the summary")
    report: ReportConfig = Field(default_factory=ReportConfig)

    @field_validator("worker_count")
    @classmethod
    def validate_worker_count(cls, v: int) -> int:
        if v < 1:
            raise ValueError("Worker count must be at least 1")
        return v

    @field_validator("timeout_seconds")
    @classmethod
    def validate_timeout(cls, v: float) -> float:
        if v < 0:
            raise ValueError("Timeout cannot be negative")
        return v

    @field_validator("executable")
    @classmethod
    def validate_executable(cls, v: list[str]) -> list[str]:
        if not v or not v[0].strip():
            raise ValueError("Executable command cannot be empty")
        return v

    @property
    def selected_reporters(self) -> list[str]:
        """Reporters to use: explicit ones, else the console unless quiet."""
        if self.reporters:
            return list(self.reporters)
        if self.quiet:
            return []
        return ["console"]

    @classmethod
    def from_file(cls, path: Path | str) -> "RunConfig":
        """Load configuration from a JSON file."""
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Configuration file not found: {path}")

        with open(path, "r") as f:
            data = json.load(f)

        return cls.model_validate(data)
