from __future__ import annotations

import re
from collections.abc import Mapping
from typing import Any

from .normalizer import cell_to_text

"""Header alias table and resolution.

Uploads come from several SAP report layouts, localized templates and ad hoc
exports, so each canonical OrderLine field accepts an ordered list of header
aliases: the canonical name, the business name shown in SAP GUI exports, a
snake_case form and the SAP technical field name where one exists.

Headers are compared in normalized form (see normalize_header); the first
alias present in a row wins.
"""

__all__ = [
    "FIELD_ALIASES",
    "normalize_header",
    "normalize_keys",
    "resolve_field",
]

FIELD_ALIASES: dict[str, tuple[str, ...]] = {
    "order_number": ("pedidoSAP", "Sales Order Number", "sales_order", "SalesOrderNumber", "Sales Order", "VBELN"),
    "line_item": ("posicion", "Line Item", "line_item", "Order Item", "OrderItem", "POSNR"),
    "sku": ("sku", "Material UCC14", "material", "Material", "SKU", "MATNR"),
    "quantity": ("cantidad", "qty", "Quantity", "Order Quantity", "order_qty", "KWMENG"),
    "origin_location": ("almacenOrigen", "Storage Location", "storage_location", "StorageLocation", "LGORT"),
    "destination_location": (
        "almacenDestinoDeseado",
        "New storage Location",
        "new_storage_location",
        "New Storage Location",
    ),
    "item_category": ("itemCategory", "Item Category", "item_category", "PSTYV"),
    "order_item_block": ("orderItemBlock", "Order Item block", "Order Item Block", "order_item_block"),
    "reason_for_rejection": ("reasonForRejection", "Reason for Rejection", "reason_for_rejection", "ABGRU"),
    "delivery_note": ("deliveryNote", "Delivery Note", "delivery_note"),
    "shipping_block": ("shippingBlock", "Shipping Block", "shipping_block", "LIFSK"),
    "shipment_number": ("shipmentNumber", "Shipment Number", "shipment_number"),
}

_SEPARATORS = re.compile(r"[\s\-/]+")
_DISALLOWED = re.compile(r"[^a-z0-9_]")


def normalize_header(header: Any) -> str:
    """Normalize a header for alias comparison.

    Lower-cased and trimmed; runs of whitespace, '-' and '/' collapse to '_';
    any other character outside [a-z0-9_] is dropped.

    >>> normalize_header(" Order Item-block ")
    'order_item_block'
    """
    text = str(header).lower().strip()
    text = _SEPARATORS.sub("_", text)
    return _DISALLOWED.sub("", text)


def normalize_keys(row: Mapping[str, Any]) -> dict[str, Any]:
    """Re-key a raw row by normalized header (later duplicates win)."""
    return {normalize_header(k): v for k, v in row.items()}


def _is_missing(value: Any) -> bool:
    return value is None or (isinstance(value, float) and value != value)


def resolve_field(row: Mapping[str, Any], field: str) -> str:
    """Return the text value of a canonical field from a raw row.

    Aliases are tried in FIELD_ALIASES order; None / NaN cells count as absent
    and the next alias is tried. Returns "" when no alias is present.

    `row` may already be normalized (see normalize_keys); normalizing twice is
    harmless.
    """
    normalized = normalize_keys(row)
    for alias in FIELD_ALIASES[field]:
        value = normalized.get(normalize_header(alias))
        if _is_missing(value):
            continue
        return cell_to_text(value)
    return ""
