from __future__ import annotations
import json
from pathlib import Path

from conftest import make_line

from order_intake.logging.observation_log import ObservationLogBuffer, records_for_result
from order_intake.models.intake_result import IntakeResult
from order_intake.models.observation_record import ObservationRecord
from order_intake.services.request_builder import build_request
from order_intake.services.validator import validate_lines

RECORD_KEYS = {"timestamp", "file", "order_number", "line_item", "rule", "message"}


def test_observation_record_creation_and_json_line():
    rec = ObservationRecord.create(
        file="orders.xlsx", order_number="4500", line_item="10", rule="MISSING_SKU", message="Missing SKU"
    )
    data = json.loads(rec.to_json_line())
    assert data["file"] == "orders.xlsx"
    assert data["rule"] == "MISSING_SKU"
    assert data["timestamp"].endswith("Z")
    assert set(data.keys()) == RECORD_KEYS


def test_records_for_invalid_lines():
    lines = validate_lines([make_line(), make_line(line_item="20", sku="", quantity=0.0)])
    result = build_request(lines, "10:00", "ACME", "jdoe")
    records = records_for_result("orders.xlsx", result)
    assert [(r.line_item, r.rule) for r in records] == [("20", "MISSING_SKU"), ("20", "INVALID_QUANTITY")]


def test_records_when_no_valid_line():
    lines = validate_lines([make_line(quantity=0.0)])
    result = build_request(lines, "10:00", "ACME", "jdoe")
    records = records_for_result("orders.xlsx", result)
    assert [r.rule for r in records] == ["INVALID_QUANTITY", "NO_VALID_LINES"]
    assert records[-1].order_number == ""


def test_records_when_nothing_eligible():
    result = IntakeResult(validated_lines=[], observations=["No rows matched"], request=None)
    records = records_for_result("orders.xlsx", result)
    assert len(records) == 1
    assert records[0].rule == "NO_ELIGIBLE_ROWS"
    assert records[0].message == "No rows matched"


def test_observation_log_buffer_flush(temp_workdir: Path):
    buf = ObservationLogBuffer()
    buf.append(ObservationRecord.create("f1.xlsx", "1", "10", "MISSING_SKU", "Missing SKU"))
    buf.extend([ObservationRecord.create("f1.xlsx", "1", "20", "INVALID_QUANTITY", "Quantity must be a number > 0")])
    path = buf.flush()
    assert path.exists()
    assert path.parent == Path("logs")
    assert path.name.startswith("observations-")
    lines = path.read_text(encoding="utf-8").strip().splitlines()
    assert len(lines) == 2
    for raw in lines:
        assert set(json.loads(raw).keys()) == RECORD_KEYS
    assert len(buf) == 0


def test_observation_log_buffer_multiple_flushes(tmp_path: Path):
    buf = ObservationLogBuffer(logs_dir=tmp_path / "logs")
    buf.append(ObservationRecord.create("f.xlsx", "1", "10", "MISSING_SKU", "Missing SKU"))
    path = buf.flush()
    size1 = path.stat().st_size
    buf.append(ObservationRecord.create("f.xlsx", "1", "20", "MISSING_SKU", "Missing SKU"))
    path2 = buf.flush()
    assert path == path2
    assert path2.stat().st_size > size1


def test_clean_run_creates_no_file(tmp_path: Path):
    logs = tmp_path / "logs"
    buf = ObservationLogBuffer(logs_dir=logs)
    assert buf.flush() is None
    assert not logs.exists()
