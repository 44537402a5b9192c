from __future__ import annotations

import math
from collections.abc import Iterable

from ..config.loader import IntakeConfig
from ..models.order_line import OrderLine
from ..models.validated_line import ValidatedLine

"""Line validator and recommendation classifier.

Validation failures are accumulated as observation strings on the line
instead of raised; a line is valid iff it has no observation.
"""

__all__ = [
    "MISSING_ORDER_OR_LINE",
    "MISSING_SKU",
    "INVALID_QUANTITY",
    "RULE_CODES",
    "line_observations",
    "recommend",
    "validate_line",
    "validate_lines",
]

MISSING_ORDER_OR_LINE = "Missing order or line item"
MISSING_SKU = "Missing SKU"
INVALID_QUANTITY = "Quantity must be a number > 0"

# Observation text -> rule code used in the observation log
RULE_CODES = {
    MISSING_ORDER_OR_LINE: "MISSING_ORDER_OR_LINE",
    MISSING_SKU: "MISSING_SKU",
    INVALID_QUANTITY: "INVALID_QUANTITY",
}

ALLOCATION_ONLY = "Allocation only: do not create approval ticket"
APPROVAL_REQUIRED = "Approval required: create approval ticket + allocation ticket"
NO_WAREHOUSE_CHANGE = "Allocation only: no warehouse change requested"
ALLOWED = "Allowed: warehouse change / allocation, open ticket with Stock Management"


def line_observations(line: OrderLine) -> list[str]:
    observations: list[str] = []
    if not line.order_number or not line.line_item:
        observations.append(MISSING_ORDER_OR_LINE)
    if not line.sku:
        observations.append(MISSING_SKU)
    if not math.isfinite(line.quantity) or line.quantity <= 0:
        observations.append(INVALID_QUANTITY)
    return observations


def recommend(line: OrderLine, observations: list[str], config: IntakeConfig) -> str:
    """Classify a line into its operational recommendation.

    Storage codes are compared trimmed and case-insensitively. Order matters:
    the allocation-only location wins over the approval-required one.
    """
    if observations:
        return f"Flagged: {'; '.join(observations)}"

    origin = line.origin_location.strip().upper()
    dest = line.destination_location.strip().upper()
    allocation_only = config.allocation_only_location.upper()
    approval_required = config.approval_required_location.upper()

    if allocation_only in (origin, dest):
        return ALLOCATION_ONLY
    if approval_required in (origin, dest):
        return APPROVAL_REQUIRED
    if not dest or dest == origin:
        return NO_WAREHOUSE_CHANGE
    return ALLOWED


def validate_line(line: OrderLine, config: IntakeConfig | None = None) -> ValidatedLine:
    config = config or IntakeConfig()
    observations = line_observations(line)
    return ValidatedLine.from_line(line, observations, recommend(line, observations, config))


def validate_lines(lines: Iterable[OrderLine], config: IntakeConfig | None = None) -> list[ValidatedLine]:
    config = config or IntakeConfig()
    return [validate_line(line, config) for line in lines]
