from __future__ import annotations

import json
from dataclasses import asdict, dataclass
from enum import Enum
from typing import Any

"""Request domain model and its enums.

A Request aggregates the valid lines of one upload into a single record that
goes through the approval workflow. It is created once by the request builder
and afterwards only changed through the workflow transitions in
order_intake.services.workflow (which return new instances).

Serialization uses snake_case keys and enum values as plain strings; the
payload shape is pinned by order_intake/contracts/request_schema.json.
"""

__all__ = [
    "RequestStatus",
    "Priority",
    "SuggestedAction",
    "LineSummary",
    "HistoryEntry",
    "Request",
]


class RequestStatus(Enum):
    """Approval workflow status.

    Pending → UnderReview → (ChangesRequested | Approved | Rejected)
    """
    PENDING = "Pending"
    UNDER_REVIEW = "UnderReview"
    CHANGES_REQUESTED = "ChangesRequested"
    APPROVED = "Approved"
    REJECTED = "Rejected"


class Priority(Enum):
    HIGH = "High"
    MEDIUM = "Medium"
    LOW = "Low"


class SuggestedAction(Enum):
    WAREHOUSE_CHANGE = "WarehouseChange"
    ALLOCATION = "Allocation"
    BOTH = "Both"


@dataclass(frozen=True)
class LineSummary:
    """Line as carried inside a Request (no filter or validation fields)."""
    order_number: str
    line_item: str
    sku: str
    quantity: float
    origin_location: str
    destination_location: str


@dataclass(frozen=True)
class HistoryEntry:
    timestamp: str  # ISO8601 UTC
    actor: str
    event: str
    note: str | None = None


@dataclass(frozen=True)
class Request:
    """Approval-worthy request built from the valid lines of one upload."""
    id: str  # SOL-XXXXXXXX
    customer: str
    local_time: str  # HH:mm at the customer site
    is_daily_emergency: bool
    lines: tuple[LineSummary, ...]  # never empty
    suggested_action: SuggestedAction
    status: RequestStatus
    priority: Priority
    requester: str
    sent_at: str  # ISO8601 UTC
    sla_hours: int
    history: tuple[HistoryEntry, ...]
    country: str = "Chile"
    requester_comments: str | None = None
    requested_changes: str | None = None  # Set by the approver on status change

    def __post_init__(self) -> None:
        if not self.lines:
            raise ValueError(f"request {self.id} must carry at least one line")

    def to_dict(self) -> dict[str, Any]:
        data = asdict(self)
        data["lines"] = [asdict(line) for line in self.lines]
        data["history"] = [asdict(entry) for entry in self.history]
        data["suggested_action"] = self.suggested_action.value
        data["status"] = self.status.value
        data["priority"] = self.priority.value
        return data

    def to_json(self, indent: int | None = None) -> str:
        return json.dumps(self.to_dict(), ensure_ascii=False, indent=indent)
