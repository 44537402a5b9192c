from __future__ import annotations

import argparse
import json
import os
import sys
from pathlib import Path

from dotenv import load_dotenv

from ..config.loader import ConfigError, IntakeConfig, load_config
from ..excel.reader import UploadedFile, extract_raw_lines, parse_order_file, preview_rows
from ..logging.init import log_summary, set_debug, setup_logging
from ..models.intake_result import IntakeResult
from ..services.intake_filter import filter_intake_lines
from ..services.orchestrator import ProcessingError, process_files
from ..services.summary import render_summary_line
from ..services.time_window import local_time_of_day

"""CLI entrypoint.

Flow:
- Load .env, then the YAML config (--config, ORDER_INTAKE_CONFIG or
  config/intake.yml; built-in defaults when none exists)
- Run the intake rules over every given file
- Log per-file results and a SUMMARY line; optionally write a JSON document
"""

EXIT_SUCCESS_ALL = 0
EXIT_PARTIAL_FAILURE = 2
EXIT_FATAL = 1

CONFIG_ENV_VAR = "ORDER_INTAKE_CONFIG"


def _load_env_file(path: Path, override: bool = False) -> None:
    """Load .env using python-dotenv; existing variables win unless override."""
    if path.exists():
        load_dotenv(dotenv_path=path, override=override)


def _parse_args(argv: list[str]) -> argparse.Namespace:
    p = argparse.ArgumentParser(description="Warehouse change / allocation order intake")
    p.add_argument("files", nargs="+", type=Path, help="Uploaded order files (xlsx, json, csv)")
    p.add_argument("--customer", required=True, help="Customer name for the request")
    p.add_argument("--requester", required=True, help="Person sending the request")
    p.add_argument("--time", dest="local_time", help="Local time of day HH:MM (default: now in config timezone)")
    p.add_argument("--config", type=Path, help="YAML config file")
    p.add_argument("--output", type=Path, help="Write results as JSON to this path")
    p.add_argument("--debug", action="store_true", help="Enable debug logging")
    p.add_argument("--inspect-data", action="store_true", help="Print resolved rows and lines then exit")
    return p.parse_args(argv)


def _resolve_config_path(args: argparse.Namespace) -> Path | None:
    if args.config is not None:
        return args.config
    env_path = os.getenv(CONFIG_ENV_VAR)
    return Path(env_path) if env_path else None


def _inspect_data(files: list[Path], cfg: IntakeConfig) -> int:
    for f in files:
        print(f"FILE: {f.name}")
        if not f.is_file():
            print("  read_error: not a file")
            continue
        upload = UploadedFile.from_path(f)
        raw = extract_raw_lines(upload)
        print(f"  raw_rows={len(raw)} cols={list(raw[0].keys()) if raw else []}")
        print("    sample_rows=", preview_rows(raw))
        lines = parse_order_file(upload)
        eligible = filter_intake_lines(lines, cfg)
        print(f"  lines={len(lines)} eligible={len(eligible)}")
        for line in eligible[:3]:
            print(f"    {line.label} sku={line.sku} qty={line.quantity} {line.origin_location}->{line.destination_location or '-'}")
    return EXIT_SUCCESS_ALL


def _write_output(path: Path, results: list[tuple[Path, IntakeResult]]) -> None:
    document = {"files": [{"file": p.name, **result.to_dict()} for p, result in results]}
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(document, ensure_ascii=False, indent=2), encoding="utf-8")


def main(argv: list[str] | None = None) -> int:
    logger = setup_logging()

    # None only: an explicit [] must not pick up pytest's own argv
    if argv is None:
        argv = sys.argv[1:]
    args = _parse_args(argv)
    _load_env_file(Path(".env"))

    try:
        cfg = load_config(_resolve_config_path(args))
    except ConfigError as e:
        logger.error(f"config: {e}")
        return EXIT_FATAL

    if args.debug:
        set_debug(logger)
        logger.debug("debug mode enabled")

    if args.inspect_data:
        return _inspect_data(args.files, cfg)

    local_time = args.local_time or local_time_of_day(cfg.timezone)
    logger.info(f"customer={args.customer} requester={args.requester} local_time={local_time}")

    try:
        batch, results = process_files(args.files, args.customer, args.requester, local_time, cfg)
    except ProcessingError as e:
        logger.error(f"processing: {e}")
        return EXIT_FATAL

    for path, result in results:
        if result.request is not None:
            request = result.request
            logger.info(
                f"{path.name}: request {request.id} action={request.suggested_action.value} "
                f"priority={request.priority.value} emergency={request.is_daily_emergency}"
            )

    if args.output is not None:
        _write_output(args.output, results)
        logger.info(f"results written to {args.output}")

    summary_line = render_summary_line(batch)
    # log_summary adds the "SUMMARY " label itself
    log_summary(summary_line[len("SUMMARY "):])

    if batch.failed_files > 0:
        return EXIT_PARTIAL_FAILURE
    return EXIT_SUCCESS_ALL
