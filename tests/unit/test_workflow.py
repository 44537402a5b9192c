from __future__ import annotations

from conftest import make_line

from order_intake.models.request import Priority, RequestStatus
from order_intake.services.request_builder import build_request
from order_intake.services.validator import validate_lines
from order_intake.services.workflow import append_history, update_priority, update_status


def _request():
    return build_request(validate_lines([make_line()]), "12:00", "ACME", "jdoe").request


def test_update_status_appends_history_and_keeps_original():
    request = _request()
    reviewed = update_status(request, RequestStatus.UNDER_REVIEW, "approver")
    assert reviewed.status is RequestStatus.UNDER_REVIEW
    assert request.status is RequestStatus.PENDING
    assert len(reviewed.history) == 2
    assert reviewed.history[-1].actor == "approver"
    assert reviewed.history[-1].event == "Status: UnderReview"
    assert reviewed.history[-1].note is None
    assert reviewed.requested_changes is None


def test_update_status_with_comment_sets_requested_changes():
    request = update_status(_request(), RequestStatus.CHANGES_REQUESTED, "approver", "Split line 10")
    assert request.requested_changes == "Split line 10"
    assert request.history[-1].note == "Split line 10"

    approved = update_status(request, RequestStatus.APPROVED, "approver")
    assert approved.requested_changes == "Split line 10"
    assert [h.event for h in approved.history] == [
        "Request created",
        "Status: ChangesRequested",
        "Status: Approved",
    ]


def test_update_priority_does_not_touch_history():
    request = _request()
    raised = update_priority(request, Priority.HIGH)
    assert raised.priority is Priority.HIGH
    assert raised.history == request.history


def test_append_history():
    request = append_history(_request(), "Ticket published", "jdoe", "INC-1")
    assert request.history[-1].event == "Ticket published"
    assert request.history[-1].timestamp.endswith("Z")
