from __future__ import annotations

from ..models.intake_result import BatchResult

"""SUMMARY line rendering for a CLI run.

Format:
SUMMARY files={files} requests={requests} lines={lines} valid={valid}
invalid={invalid} elapsed_sec={elapsed}
"""


def _format_seconds(seconds: float) -> str:
    if seconds == 0:
        return "0"
    if seconds == int(seconds):
        return str(int(seconds))
    if seconds < 0.01:
        # Avoid scientific notation for very small values
        return f"{seconds:.6f}".rstrip("0").rstrip(".")
    return f"{seconds:.3f}".rstrip("0").rstrip(".")


def render_summary_line(result: BatchResult) -> str:
    """Render the SUMMARY line from a BatchResult.

    Examples:
        >>> from datetime import datetime, timezone
        >>> start = datetime(2024, 1, 1, 10, 0, 0, tzinfo=timezone.utc)
        >>> end = datetime(2024, 1, 1, 10, 0, 2, tzinfo=timezone.utc)
        >>> result = BatchResult(
        ...     success_files=1, failed_files=0, total_lines=3, valid_lines=2,
        ...     invalid_lines=1, start_time=start, end_time=end, elapsed_seconds=2.0,
        ... )
        >>> render_summary_line(result)
        'SUMMARY files=1 requests=1 lines=3 valid=2 invalid=1 elapsed_sec=2'
    """
    return (
        f"SUMMARY files={result.total_files} "
        f"requests={result.success_files} "
        f"lines={result.total_lines} "
        f"valid={result.valid_lines} "
        f"invalid={result.invalid_lines} "
        f"elapsed_sec={_format_seconds(result.elapsed_seconds)}"
    )
