from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

from .request import Request
from .validated_line import ValidatedLine

"""Result models for the order intake pipeline.

IntakeResult is the payload of one upload run (request + validated lines +
global observations). FileStat and BatchResult aggregate metrics when the CLI
processes several uploads in one go and feed the SUMMARY line.
"""


@dataclass(frozen=True)
class IntakeResult:
    """Outcome of running the rules over one upload.

    `request` is None when no line survived filtering and validation; the
    reason is then in `observations`.
    """
    validated_lines: list[ValidatedLine] = field(default_factory=list)
    observations: list[str] = field(default_factory=list)  # Global observations
    request: Request | None = None

    @property
    def valid_count(self) -> int:
        return sum(1 for line in self.validated_lines if line.is_valid)

    @property
    def invalid_count(self) -> int:
        return len(self.validated_lines) - self.valid_count

    def to_dict(self) -> dict[str, Any]:
        return {
            "request": self.request.to_dict() if self.request is not None else None,
            "validated_lines": [line.to_dict() for line in self.validated_lines],
            "observations": list(self.observations),
        }


@dataclass(frozen=True)
class FileStat:
    """Per-upload statistics (internal helper for BatchResult)."""
    file_name: str
    total_lines: int  # Lines that passed the intake filter
    valid_lines: int
    invalid_lines: int
    request_id: str | None  # None when no request was produced
    elapsed_seconds: float


@dataclass(frozen=True)
class BatchResult:
    """Aggregated results over every upload processed in one CLI run."""
    success_files: int  # Uploads that produced a request
    failed_files: int  # Uploads that produced no request
    total_lines: int
    valid_lines: int
    invalid_lines: int
    start_time: datetime
    end_time: datetime
    elapsed_seconds: float
    file_stats: list[FileStat] | None = None

    @property
    def total_files(self) -> int:
        return self.success_files + self.failed_files
