# Shared pytest fixtures
from __future__ import annotations
import tempfile
from collections.abc import Callable
from pathlib import Path
from typing import Any

import pandas as pd
import pytest

from order_intake.logging.init import reset_logging
from order_intake.models.order_line import OrderLine

BUSINESS_HEADERS = [
    "Sales Order Number",
    "Line Item",
    "Material UCC14",
    "Order Quantity",
    "Storage Location",
    "New storage Location",
    "Item Category",
    "Order Item block",
    "Reason for Rejection",
    "Delivery Note",
    "Shipping Block",
    "Shipment Number",
]


@pytest.fixture(autouse=True)
def _fresh_logging():
    # Handlers bind sys.stdout at setup time; capsys swaps it per test
    reset_logging()
    yield
    reset_logging()


@pytest.fixture()
def temp_workdir(monkeypatch) -> Path:
    with tempfile.TemporaryDirectory() as d:
        p = Path(d)
        (p / "config").mkdir()
        (p / "data").mkdir()
        monkeypatch.chdir(p)
        monkeypatch.delenv("ORDER_INTAKE_CONFIG", raising=False)
        yield p


@pytest.fixture()
def sample_config_yaml() -> str:
    return """required_item_category: ZTAN
allowed_storage_locations: [PT11, PT15, "1000"]
allocation_only_location: PT11
approval_required_location: PT15
country: Chile
sla_hours: 2
emergency_cutoff: "11:00"
timezone: America/Santiago
"""


@pytest.fixture()
def write_config(temp_workdir: Path, sample_config_yaml: str) -> Path:
    cfg = temp_workdir / "config" / "intake.yml"
    cfg.write_text(sample_config_yaml, encoding="utf-8")
    return cfg


def business_row(
    order: str = "45000001",
    item: str = "10",
    sku: str = "27501056344096",
    qty: Any = 2,
    origin: str = "1000",
    dest: str = "PT15",
    category: str = "ZTAN",
    **blocks: str,
) -> dict[str, Any]:
    """One row keyed by the SAP business headers."""
    row: dict[str, Any] = {
        "Sales Order Number": order,
        "Line Item": item,
        "Material UCC14": sku,
        "Order Quantity": qty,
        "Storage Location": origin,
        "New storage Location": dest,
        "Item Category": category,
        "Order Item block": "",
        "Reason for Rejection": "",
        "Delivery Note": "",
        "Shipping Block": "",
        "Shipment Number": "",
    }
    row.update(blocks)
    return row


@pytest.fixture()
def make_workbook(tmp_path: Path) -> Callable[..., Path]:
    def _make(rows: list[dict[str, Any]], name: str = "orders.xlsx", directory: Path | None = None) -> Path:
        p = (directory or tmp_path) / name
        df = pd.DataFrame(rows)
        with pd.ExcelWriter(p, engine="openpyxl") as writer:
            df.to_excel(writer, sheet_name="Sheet1", index=False)
        return p
    return _make


def make_line(**overrides: Any) -> OrderLine:
    values: dict[str, Any] = dict(
        order_number="4500",
        line_item="10",
        sku="SKU1",
        quantity=10.0,
        origin_location="1000",
        destination_location="PT15",
        item_category="ZTAN",
    )
    values.update(overrides)
    return OrderLine(**values)
