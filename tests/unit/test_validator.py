from __future__ import annotations

import math

import pytest

from conftest import make_line

from order_intake.config.loader import IntakeConfig
from order_intake.services.validator import (
    ALLOCATION_ONLY,
    ALLOWED,
    APPROVAL_REQUIRED,
    INVALID_QUANTITY,
    MISSING_ORDER_OR_LINE,
    MISSING_SKU,
    NO_WAREHOUSE_CHANGE,
    line_observations,
    recommend,
    validate_line,
    validate_lines,
)


def test_complete_line_is_valid():
    line = validate_line(make_line())
    assert line.is_valid
    assert line.observations == ()
    assert line.order_number == "4500"


@pytest.mark.parametrize("qty", [0.0, -1.0, math.nan, math.inf])
def test_quantity_must_be_positive_and_finite(qty: float):
    line = validate_line(make_line(quantity=qty))
    assert not line.is_valid
    assert line.observations == (INVALID_QUANTITY,)


def test_observations_are_accumulated_in_order():
    line = validate_line(make_line(order_number="", sku="", quantity=0.0))
    assert line.observations == (MISSING_ORDER_OR_LINE, MISSING_SKU, INVALID_QUANTITY)
    assert line.recommendation == f"Flagged: {MISSING_ORDER_OR_LINE}; {MISSING_SKU}; {INVALID_QUANTITY}"


def test_missing_line_item_alone_is_flagged():
    assert line_observations(make_line(line_item="")) == [MISSING_ORDER_OR_LINE]


@pytest.mark.parametrize(
    "origin, dest, expected",
    [
        ("1000", "PT11", ALLOCATION_ONLY),
        ("PT11", "PT15", ALLOCATION_ONLY),  # allocation-only location wins
        ("1000", "PT15", APPROVAL_REQUIRED),
        ("PT15", "1000", APPROVAL_REQUIRED),
        ("1000", "", NO_WAREHOUSE_CHANGE),
        ("1000", "1000", NO_WAREHOUSE_CHANGE),
        ("1000", "2000", ALLOWED),
        ("1000", " pt15 ", APPROVAL_REQUIRED),
    ],
)
def test_recommendation(origin: str, dest: str, expected: str):
    line = make_line(origin_location=origin, destination_location=dest)
    assert recommend(line, [], IntakeConfig()) == expected


def test_recommendation_follows_config():
    cfg = IntakeConfig(allocation_only_location="X1", approval_required_location="X2")
    assert recommend(make_line(destination_location="PT11"), [], cfg) == ALLOWED
    assert recommend(make_line(destination_location="X2"), [], cfg) == APPROVAL_REQUIRED


def test_validate_lines_keeps_source_fields():
    lines = [make_line(order_number="1", source_row=4), make_line(order_number="2", quantity=-2.0)]
    validated = validate_lines(lines)
    assert [v.order_number for v in validated] == ["1", "2"]
    assert validated[0].source_row == 4
    assert [v.is_valid for v in validated] == [True, False]
