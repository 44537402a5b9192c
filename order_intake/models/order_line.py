from __future__ import annotations

from dataclasses import dataclass
from typing import Any

"""OrderLine model for the order intake pipeline.

RawLine is the untyped mapping produced straight from an uploaded sheet row.
OrderLine is the canonical line built from it by the extractor after header
alias resolution and numeric/code normalization.
"""

__all__ = [
    "RawLine",
    "OrderLine",
    "BLOCK_FLAG_FIELDS",
]

RawLine = dict[str, Any]

# Fields that must all be blank for a line to enter the workflow
BLOCK_FLAG_FIELDS = (
    "order_item_block",
    "reason_for_rejection",
    "delivery_note",
    "shipping_block",
    "shipment_number",
)


@dataclass(frozen=True)
class OrderLine:
    """Canonical SAP order line (one per uploaded row)."""
    order_number: str  # Sales order (VBELN)
    line_item: str  # Order item (POSNR)
    sku: str  # Material code, exact digits
    quantity: float
    origin_location: str  # Current storage location
    destination_location: str  # Requested storage location, may be blank
    item_category: str = ""
    order_item_block: str = ""
    reason_for_rejection: str = ""
    delivery_note: str = ""
    shipping_block: str = ""
    shipment_number: str = ""
    source_row: int | None = None  # 1-based data row in the upload

    @property
    def label(self) -> str:
        """Human readable `order / line` identifier used in observations."""
        return f"{self.order_number or 'NO_ORDER'} / {self.line_item or 'NO_LINE'}"

    def block_flags(self) -> tuple[str, ...]:
        return tuple(getattr(self, name) for name in BLOCK_FLAG_FIELDS)
