from __future__ import annotations

from datetime import UTC, datetime
from pathlib import Path

from ..models.intake_result import IntakeResult
from ..models.observation_record import ObservationRecord
from ..services.validator import RULE_CODES

"""Observation log generation & buffering.

- JSON Lines with a fixed schema (no extra keys)
- One `logs/observations-YYYYMMDD-HHMMSS.log` (UTC) per run, created lazily
- Records are buffered and appended on flush(); serial use only
"""

__all__ = [
    "ObservationRecord",
    "ObservationLogBuffer",
    "records_for_result",
]

LOGS_DIR = Path("./logs")
TIMESTAMP_FMT = "%Y%m%d-%H%M%S"


def records_for_result(file_name: str, result: IntakeResult) -> list[ObservationRecord]:
    """One record per observation of every invalid line, plus upload-level
    records when no request was produced."""
    records: list[ObservationRecord] = []
    for line in result.validated_lines:
        if line.is_valid:
            continue
        for message in line.observations:
            records.append(
                ObservationRecord.create(
                    file=file_name,
                    order_number=line.order_number,
                    line_item=line.line_item,
                    rule=RULE_CODES.get(message, "LINE_VALIDATION"),
                    message=message,
                )
            )
    if result.request is None and result.observations:
        rule = "NO_VALID_LINES" if result.validated_lines else "NO_ELIGIBLE_ROWS"
        records.append(
            ObservationRecord.create(
                file=file_name, order_number="", line_item="", rule=rule, message=result.observations[-1]
            )
        )
    return records


class ObservationLogBuffer:
    """In-memory buffer of observation records; flush() appends JSON Lines."""

    def __init__(self, logs_dir: Path | None = None) -> None:
        self._records: list[ObservationRecord] = []
        self._logs_dir = logs_dir or LOGS_DIR
        self._file_path: Path | None = None

    @property
    def file_path(self) -> Path:
        if self._file_path is None:
            self._logs_dir.mkdir(parents=True, exist_ok=True)
            stamp = datetime.now(UTC).strftime(TIMESTAMP_FMT)
            self._file_path = self._logs_dir / f"observations-{stamp}.log"
        return self._file_path

    def append(self, record: ObservationRecord) -> None:
        self._records.append(record)

    def extend(self, records: list[ObservationRecord]) -> None:
        self._records.extend(records)

    def __len__(self) -> int:  # pragma: no cover (trivial)
        return len(self._records)

    def flush(self) -> Path | None:
        """Append buffered records to the log file.

        Returns the log path, or None when nothing was ever buffered (no file
        is created for clean runs).
        """
        if not self._records:
            return self._file_path
        fp = self.file_path
        with fp.open("a", encoding="utf-8") as f:
            for r in self._records:
                f.write(r.to_json_line() + "\n")
        self._records.clear()
        return fp
