from __future__ import annotations

from collections.abc import Iterable

from ..config.loader import IntakeConfig
from ..models.order_line import OrderLine

"""Intake filter: keep only lines eligible for the allocation workflow.

Runs before validation so that rows outside the workflow (other item
categories, other storage locations, blocked lines) never show up as errors.
"""

__all__ = [
    "filter_intake_lines",
    "is_eligible",
    "no_match_observation",
]


def _is_blank(value: str | None) -> bool:
    return not value or value.strip() == ""


def is_eligible(line: OrderLine, config: IntakeConfig) -> bool:
    """True when the line has the required item category, an allowed origin
    storage location and every block flag blank."""
    category_ok = line.item_category.strip() == config.required_item_category
    storage_ok = line.origin_location.strip() in config.allowed_storage_locations
    blocks_ok = all(_is_blank(flag) for flag in line.block_flags())
    return category_ok and storage_ok and blocks_ok


def filter_intake_lines(lines: Iterable[OrderLine], config: IntakeConfig | None = None) -> list[OrderLine]:
    config = config or IntakeConfig()
    return [line for line in lines if is_eligible(line, config)]


def no_match_observation(config: IntakeConfig) -> str:
    """Global observation reported when the filter leaves nothing."""
    return (
        f"No rows matched the upload filter "
        f"({config.required_item_category} + allowed storage + blank blocks)."
    )
