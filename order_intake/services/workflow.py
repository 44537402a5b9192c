from __future__ import annotations

from dataclasses import replace
from datetime import UTC, datetime

from ..models.request import HistoryEntry, Priority, Request, RequestStatus

"""Approval workflow transitions on a Request.

Requests are immutable; each transition returns a new Request with the
change applied and, where relevant, a history entry appended. Persisting or
notifying about the result is up to the caller.
"""

__all__ = [
    "append_history",
    "update_priority",
    "update_status",
]


def _utc_now_iso() -> str:
    return datetime.now(UTC).isoformat().replace("+00:00", "Z")


def append_history(request: Request, event: str, actor: str, note: str | None = None) -> Request:
    entry = HistoryEntry(timestamp=_utc_now_iso(), actor=actor, event=event, note=note)
    return replace(request, history=request.history + (entry,))


def update_status(
    request: Request, status: RequestStatus, actor: str, comment: str | None = None
) -> Request:
    """Move the request to `status`, recording who did it.

    A comment is kept as the history note and, for the requester's benefit, as
    `requested_changes` (the approver's latest remarks).
    """
    updated = replace(
        request,
        status=status,
        requested_changes=comment if comment is not None else request.requested_changes,
    )
    return append_history(updated, f"Status: {status.value}", actor, comment)


def update_priority(request: Request, priority: Priority) -> Request:
    return replace(request, priority=priority)
