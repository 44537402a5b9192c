from __future__ import annotations

import re
from pathlib import Path

from conftest import business_row

from order_intake.cli import main as cli_main

"""SUMMARY line format contract: the last line of every CLI run."""

SUMMARY_PATTERN = re.compile(
    r"^SUMMARY\s+files=([0-9]+)\s+requests=([0-9]+)\s+lines=([0-9]+)\s+"
    r"valid=([0-9]+)\s+invalid=([0-9]+)\s+elapsed_sec=([0-9]+\.?[0-9]*)$"
)


def test_summary_pattern_example_line():
    line = "SUMMARY files=2 requests=1 lines=40 valid=37 invalid=3 elapsed_sec=0.84"
    m = SUMMARY_PATTERN.match(line)
    assert m, "SUMMARY line should match contract regex"
    assert int(m.group(4)) + int(m.group(5)) == int(m.group(3))


def test_cli_summary_is_last_line_and_matches(temp_workdir: Path, make_workbook, capsys):
    path = make_workbook([business_row(), business_row(item="20", qty=0)])
    code = cli_main([str(path), "--customer", "ACME", "--requester", "jdoe", "--time", "09:00"])
    lines = capsys.readouterr().out.strip().splitlines()
    assert code == 0
    m = SUMMARY_PATTERN.match(lines[-1])
    assert m, lines[-1]
    assert m.groups()[:5] == ("1", "1", "2", "1", "1")
