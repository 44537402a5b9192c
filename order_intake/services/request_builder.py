from __future__ import annotations

import logging
import uuid
from collections.abc import Sequence
from datetime import UTC, datetime

from ..config.loader import IntakeConfig
from ..models.intake_result import IntakeResult
from ..models.request import (
    HistoryEntry,
    LineSummary,
    Priority,
    Request,
    RequestStatus,
    SuggestedAction,
)
from ..models.validated_line import ValidatedLine
from .time_window import is_daily_emergency

"""Request builder: validated lines -> single approval request.

Invalid lines are excluded from the request and reported as global
observations (a header plus a few examples). When nothing valid remains no
Request is built at all.
"""

__all__ = [
    "NO_VALID_LINES",
    "build_request",
    "exclusion_observations",
    "generate_request_id",
    "infer_suggested_action",
]

logger = logging.getLogger(__name__)

NO_VALID_LINES = "No valid lines remain after filtering and validation."
SYSTEM_ACTOR = "System"


def _utc_now_iso() -> str:
    return datetime.now(UTC).isoformat().replace("+00:00", "Z")


def generate_request_id() -> str:
    return f"SOL-{uuid.uuid4().hex[:8].upper()}"


def exclusion_observations(invalid: Sequence[ValidatedLine], max_examples: int = 3) -> list[str]:
    """Header line, up to `max_examples` `order / line: reasons` entries and a
    `+N more` suffix when truncated. Empty when nothing was excluded."""
    if not invalid:
        return []
    observations = [f"Excluded {len(invalid)} line(s) due to validation errors:"]
    preview = invalid[:max_examples]
    for line in preview:
        reason = "; ".join(line.observations) if line.observations else "Unknown validation error"
        observations.append(f"- {line.label}: {reason}")
    if len(invalid) > len(preview):
        observations.append(f"+{len(invalid) - len(preview)} more")
    return observations


def _changes_warehouse(line: ValidatedLine) -> bool:
    # Case-insensitive, same as the recommendation's "destination equals origin" rule
    dest = line.destination_location.strip().upper()
    return bool(dest) and dest != line.origin_location.strip().upper()


def infer_suggested_action(lines: Sequence[ValidatedLine]) -> SuggestedAction:
    """Both / WarehouseChange / Allocation for a set of valid lines.

    Valid lines always have quantity > 0, so `needs_allocation` is true for
    any non-empty input and WAREHOUSE_CHANGE is never returned in practice.
    The branch stays because consumers of the request accept all three values.
    """
    needs_warehouse_change = any(_changes_warehouse(line) for line in lines)
    needs_allocation = any(line.quantity > 0 for line in lines)
    if needs_warehouse_change and needs_allocation:
        return SuggestedAction.BOTH
    if needs_warehouse_change:
        return SuggestedAction.WAREHOUSE_CHANGE
    return SuggestedAction.ALLOCATION


def _summarize(line: ValidatedLine) -> LineSummary:
    return LineSummary(
        order_number=line.order_number,
        line_item=line.line_item,
        sku=line.sku,
        quantity=line.quantity,
        origin_location=line.origin_location,
        destination_location=line.destination_location,
    )


def build_request(
    lines: Sequence[ValidatedLine],
    local_time: str,
    customer: str,
    requester: str,
    config: IntakeConfig | None = None,
) -> IntakeResult:
    """Aggregate validated lines into one Request.

    Args:
        lines: Every validated line of the upload (valid and invalid)
        local_time: Local time of day at the customer site, HH:mm
        customer: Customer name
        requester: Person sending the request
        config: Business configuration (defaults when None)

    Returns:
        IntakeResult with all lines, the global observations and the Request,
        or request=None when no valid line remains.
    """
    config = config or IntakeConfig()
    valid = [line for line in lines if line.is_valid]
    invalid = [line for line in lines if not line.is_valid]

    observations = exclusion_observations(invalid, config.max_observation_examples)
    if not valid:
        observations.append(NO_VALID_LINES)
        logger.info(f"no request built: {len(invalid)} invalid line(s), 0 valid")
        return IntakeResult(validated_lines=list(lines), observations=observations, request=None)

    emergency = is_daily_emergency(local_time, config.cutoff)
    created_at = _utc_now_iso()
    request = Request(
        id=generate_request_id(),
        customer=customer,
        country=config.country,
        local_time=local_time,
        is_daily_emergency=emergency,
        lines=tuple(_summarize(line) for line in valid),
        suggested_action=infer_suggested_action(valid),
        status=RequestStatus.PENDING,
        priority=Priority.HIGH if emergency else Priority.MEDIUM,
        requester=requester,
        sent_at=created_at,
        sla_hours=config.sla_hours,
        requester_comments="Daily emergency" if emergency else "Standard allocation",
        history=(
            HistoryEntry(
                timestamp=created_at,
                actor=SYSTEM_ACTOR,
                event="Request created",
                note="Marked emergency due to time window" if emergency else None,
            ),
        ),
    )
    logger.info(
        f"request {request.id} built: lines={len(valid)} excluded={len(invalid)} "
        f"action={request.suggested_action.value} priority={request.priority.value}"
    )
    return IntakeResult(validated_lines=list(lines), observations=observations, request=request)
