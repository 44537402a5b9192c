from __future__ import annotations

import logging
import time
from collections.abc import Sequence
from datetime import UTC, datetime
from pathlib import Path

from ..config.loader import IntakeConfig
from ..excel.reader import UploadedFile, parse_order_file
from ..logging.observation_log import ObservationLogBuffer, records_for_result
from ..models.intake_result import BatchResult, FileStat, IntakeResult
from ..models.order_line import OrderLine
from .intake_filter import filter_intake_lines, no_match_observation
from .progress import ProgressTracker
from .request_builder import build_request
from .validator import validate_lines

"""Pipeline orchestration.

simulate_rules() runs the whole chain for one upload:
extractor -> intake filter -> validator -> request builder.
process_files() runs it over several files for the CLI, aggregating metrics
for the SUMMARY line and buffering observations to the observation log.
"""

logger = logging.getLogger(__name__)


class ProcessingError(Exception):
    """Fatal problem with the CLI inputs (not with the business data)."""
    pass


def parse_upload(upload: UploadedFile, config: IntakeConfig | None = None) -> list[OrderLine]:
    """Extract order lines and keep only those eligible for the workflow."""
    config = config or IntakeConfig()
    lines = parse_order_file(upload)
    eligible = filter_intake_lines(lines, config)
    logger.debug(f"{upload.name}: extracted={len(lines)} eligible={len(eligible)}")
    return eligible


def simulate_rules(
    upload: UploadedFile,
    customer: str,
    requester: str,
    local_time: str,
    config: IntakeConfig | None = None,
) -> IntakeResult:
    """Run the business rules over one upload.

    Returns:
        IntakeResult; when no line passes the intake filter it carries a
        single global observation, no lines and no request.
    """
    config = config or IntakeConfig()
    lines = parse_upload(upload, config)
    if not lines:
        logger.info(f"{upload.name}: no rows matched the upload filter")
        return IntakeResult(validated_lines=[], observations=[no_match_observation(config)], request=None)

    validated = validate_lines(lines, config)
    return build_request(validated, local_time, customer, requester, config)


def check_input_files(paths: Sequence[Path]) -> list[Path]:
    """Validate CLI input paths.

    Raises:
        ProcessingError: If no path is given or a path is not an existing file
    """
    if not paths:
        raise ProcessingError("no input files given")
    for path in paths:
        if not path.exists():
            raise ProcessingError(f"File not found: {path}")
        if not path.is_file():
            raise ProcessingError(f"Path is not a file: {path}")
    return list(paths)


def process_files(
    paths: Sequence[Path],
    customer: str,
    requester: str,
    local_time: str,
    config: IntakeConfig | None = None,
    observation_log: ObservationLogBuffer | None = None,
) -> tuple[BatchResult, list[tuple[Path, IntakeResult]]]:
    """Run simulate_rules() over every file.

    Each file is independent: one producing no request does not stop the
    others. Observations of every file are buffered to `observation_log` and
    flushed once at the end.

    Raises:
        ProcessingError: For missing / invalid input paths
    """
    config = config or IntakeConfig()
    file_paths = check_input_files(paths)
    start_time = datetime.now(UTC)
    log_buffer = observation_log or ObservationLogBuffer()

    results: list[tuple[Path, IntakeResult]] = []
    file_stats: list[FileStat] = []
    with ProgressTracker(len(file_paths)) as progress:
        for path in file_paths:
            progress.start_file(path)
            started = time.perf_counter()
            try:
                upload = UploadedFile.from_path(path)
            except OSError as e:
                raise ProcessingError(f"Error reading {path}: {e}") from e

            result = simulate_rules(upload, customer, requester, local_time, config)
            elapsed = time.perf_counter() - started
            log_buffer.extend(records_for_result(path.name, result))

            request_id = result.request.id if result.request is not None else None
            for observation in result.observations:
                logger.warning(f"{path.name}: {observation}")
            logger.info(
                f"{path.name}: lines={len(result.validated_lines)} valid={result.valid_count} "
                f"invalid={result.invalid_count} request={request_id or '-'}"
            )
            file_stats.append(
                FileStat(
                    file_name=path.name,
                    total_lines=len(result.validated_lines),
                    valid_lines=result.valid_count,
                    invalid_lines=result.invalid_count,
                    request_id=request_id,
                    elapsed_seconds=elapsed,
                )
            )
            results.append((path, result))
            progress.finish_file(lines=len(result.validated_lines), request_id=request_id)

    log_path = log_buffer.flush()
    if log_path is not None:
        logger.info(f"observations written to {log_path}")

    end_time = datetime.now(UTC)
    success = sum(1 for s in file_stats if s.request_id is not None)
    batch = BatchResult(
        success_files=success,
        failed_files=len(file_stats) - success,
        total_lines=sum(s.total_lines for s in file_stats),
        valid_lines=sum(s.valid_lines for s in file_stats),
        invalid_lines=sum(s.invalid_lines for s in file_stats),
        start_time=start_time,
        end_time=end_time,
        elapsed_seconds=(end_time - start_time).total_seconds(),
        file_stats=file_stats,
    )
    return batch, results
