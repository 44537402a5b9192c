from __future__ import annotations

from pathlib import Path

import pytest

from conftest import business_row

from order_intake.excel.reader import UploadedFile
from order_intake.logging.observation_log import ObservationLogBuffer
from order_intake.services.orchestrator import ProcessingError, check_input_files, parse_upload, process_files


def test_check_input_files_requires_paths():
    with pytest.raises(ProcessingError):
        check_input_files([])


def test_check_input_files_rejects_missing_and_directories(tmp_path: Path):
    with pytest.raises(ProcessingError) as e:
        check_input_files([tmp_path / "missing.xlsx"])
    assert "File not found" in str(e.value)
    with pytest.raises(ProcessingError) as e:
        check_input_files([tmp_path])
    assert "not a file" in str(e.value)


def test_parse_upload_applies_filter(make_workbook):
    path = make_workbook([business_row(), business_row(item="20", **{"Shipping Block": "Z1"})])
    lines = parse_upload(UploadedFile.from_path(path))
    assert [line.line_item for line in lines] == ["10"]


def test_process_files_aggregates_batch(tmp_path: Path, make_workbook):
    first = make_workbook([business_row(), business_row(item="20", sku="")], name="a.xlsx")
    second = make_workbook([business_row(category="ZTAB")], name="b.xlsx")
    log = ObservationLogBuffer(logs_dir=tmp_path / "logs")

    batch, results = process_files([first, second], "ACME", "jdoe", "10:00", observation_log=log)

    assert (batch.success_files, batch.failed_files, batch.total_files) == (1, 1, 2)
    assert (batch.total_lines, batch.valid_lines, batch.invalid_lines) == (2, 1, 1)
    assert [s.file_name for s in batch.file_stats] == ["a.xlsx", "b.xlsx"]
    assert batch.file_stats[0].request_id == results[0][1].request.id
    assert batch.file_stats[1].request_id is None
    assert batch.elapsed_seconds >= 0
    assert len(list((tmp_path / "logs").glob("observations-*.log"))) == 1


def test_process_files_missing_input_raises(tmp_path: Path):
    with pytest.raises(ProcessingError):
        process_files([tmp_path / "nope.xlsx"], "ACME", "jdoe", "10:00")
