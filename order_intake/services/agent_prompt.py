from __future__ import annotations

import json
import logging
from collections.abc import Sequence
from dataclasses import dataclass, field

from ..models.validated_line import ValidatedLine

"""Recommendation request composer.

Builds the prompt sent to the recommendation agent for a set of validated
lines and parses its JSON answer. Sending the prompt is the caller's job.
"""

__all__ = [
    "BUSINESS_RULES",
    "AgentLineRecommendation",
    "AgentResponse",
    "build_agent_payload",
    "build_agent_prompt",
    "parse_agent_response",
]

logger = logging.getLogger(__name__)

BUSINESS_RULES = """Business rules (concise, mandatory):
1) Single allocation ticket; assign to Stock Management.
2) Warehouse change: classify as Order validation; after execution, verify warehouse updated + stock available.
3) SLA target: 2h for Stock Management; mention window and monitoring.
4) Attach line file only if high volume.
5) Daily emergency: if CL time <= 11:00 mark "Daily emergency"; else justify and notify planning.
6) Ticket fields: Customer, SAP order(s), Comments ("Allocate and Plan" or "Allocate"), Date, Time, Expected owner "Stock Management Basket", publish ticket # to "REUNIÓN OPERATIVA 2024".
7) After allocation confirmation: validate deliveries and record delivery numbers.
8) Destination rules:
  - If new_storage_location == "PT11": DO NOT create an approval ticket. Only the single allocation ticket applies.
  - If new_storage_location == "PT15": An approval ticket IS REQUIRED (in addition to the allocation ticket).

Allocation-only rule:
  - If new_storage_location is blank OR equals storage_location: treat as allocation-only (do not reject the line).

Per-line validations: must have order, line_item, sku, qty>0; if inconsistent, exclude the line and return observations."""

RESPONSE_SHAPE = '{"summary":"...","lines":[{"sales_order":"...","line_item":"...","recommendation":"...","insights":"..."}]}'


@dataclass(frozen=True)
class AgentLineRecommendation:
    sales_order: str
    line_item: str
    recommendation: str
    insights: str


@dataclass(frozen=True)
class AgentResponse:
    summary: str
    lines: list[AgentLineRecommendation] = field(default_factory=list)


def build_agent_payload(lines: Sequence[ValidatedLine], customer: str, local_time: str) -> dict:
    return {
        "customer": customer,
        "hora_local_chile": local_time,
        "lines": [
            {
                "sales_order": line.order_number,
                "line_item": line.line_item,
                "material": line.sku,
                "storage_location": line.origin_location,
                "new_storage_location": line.destination_location,
                "qty": line.quantity,
            }
            for line in lines
        ],
    }


def build_agent_prompt(lines: Sequence[ValidatedLine], customer: str, local_time: str) -> str:
    payload = build_agent_payload(lines, customer, local_time)
    return "\n\n".join(
        [
            "You are validating warehouse change/allocation lines. "
            "Apply the business rules and produce recommendations/insights.",
            BUSINESS_RULES,
            "Input payload (json):",
            json.dumps(payload, ensure_ascii=False),
            "Return a single json object with exactly this shape:",
            RESPONSE_SHAPE,
            "Rules: include every input line exactly once; keep values short; no markdown; no surrounding text.",
        ]
    )


def parse_agent_response(text: str) -> AgentResponse | None:
    """Parse the agent answer, salvaging the outermost {...} block.

    Returns None when no JSON object with a string `summary` and a list
    `lines` can be found. Line entries without sales order or line item are
    dropped.
    """
    trimmed = (text or "").strip()
    start = trimmed.find("{")
    end = trimmed.rfind("}")
    if start == -1 or end <= start:
        return None

    try:
        obj = json.loads(trimmed[start : end + 1])
    except ValueError as e:
        logger.debug(f"agent response is not valid json: {e}")
        return None
    if not isinstance(obj, dict):
        return None
    summary = obj.get("summary")
    raw_lines = obj.get("lines")
    if not isinstance(summary, str) or not isinstance(raw_lines, list):
        return None

    recommendations: list[AgentLineRecommendation] = []
    for item in raw_lines:
        if not isinstance(item, dict):
            continue
        rec = AgentLineRecommendation(
            sales_order=str(item.get("sales_order") or ""),
            line_item=str(item.get("line_item") or ""),
            recommendation=str(item.get("recommendation") or ""),
            insights=str(item.get("insights") or ""),
        )
        if rec.sales_order and rec.line_item:
            recommendations.append(rec)
    return AgentResponse(summary=summary, lines=recommendations)
