# workforce_api/services/leave_workflow.py
"""
Two-stage leave approval.

    pending (hr_approved unset)
      ├─ HR approves  → hr_approved=True, status pending
      │     └─ admin decides → status approved | rejected   (terminal)
      └─ HR rejects   → hr_approved=False, status rejected  (terminal)

Each transition is a one-way write and appends a LeaveApprovalAction row.
"""
from __future__ import annotations

import logging

from workforce_api.extensions import db
from workforce_api.common.errors import Conflict, NotFound, ValidationError
from workforce_api.common.parsing import as_str, parse_date, utcnow
from workforce_api.models.leave import LeaveRequest, LeaveApprovalAction

log = logging.getLogger(__name__)

FINAL_STATUSES = ("approved", "rejected")


def _log_action(lr: LeaveRequest, action: str, actor_id: int, comment: str | None = None):
    lr.actions.append(LeaveApprovalAction(
        action=action,
        comment=comment,
        acted_by_user_id=actor_id,
        acted_at=utcnow(),
    ))


def get_or_404(leave_id: int) -> LeaveRequest:
    lr = db.session.get(LeaveRequest, leave_id)
    if not lr:
        raise NotFound("Leave not found", code="leave.not_found")
    return lr


def submit(user_id: int, reason: str, start_date, end_date) -> LeaveRequest:
    reason = as_str(reason, "reason", required=True)
    sd = parse_date(start_date)
    ed = parse_date(end_date)
    if not (sd and ed):
        raise ValidationError("Invalid dates", code="validation.dates")
    if sd > ed:
        raise ValidationError("Start date cannot be after end date", code="validation.dates")

    lr = LeaveRequest(
        user_id=user_id,
        reason=reason,
        start_date=sd,
        end_date=ed,
        status="pending",
        hr_approved=None,
    )
    _log_action(lr, "submitted", user_id)
    db.session.add(lr)
    db.session.commit()
    log.info("leave %s submitted by user=%s (%s..%s)", lr.id, user_id, sd, ed)
    return lr


def hr_decide(lr: LeaveRequest, approved, actor_id: int, comment: str | None = None) -> LeaveRequest:
    if not isinstance(approved, bool):
        raise ValidationError("approved must be true or false", code="validation.approved")
    comment = as_str(comment, "comment")
    if lr.hr_approved is not None:
        raise Conflict("Leave has already been reviewed by HR", code="leave.already_reviewed")

    now = utcnow()
    lr.hr_approved = approved
    lr.hr_comment = comment
    lr.hr_reviewed_by = actor_id
    lr.hr_updated_at = now
    lr.updated_at = now
    if not approved:
        lr.status = "rejected"

    _log_action(lr, "hr_approved" if approved else "hr_rejected", actor_id, comment)
    db.session.commit()
    log.info("leave %s hr decision approved=%s by user=%s", lr.id, approved, actor_id)
    return lr


def admin_decide(lr: LeaveRequest, status, actor_id: int, comment: str | None = None) -> LeaveRequest:
    if status not in FINAL_STATUSES:
        raise ValidationError("status must be 'approved' or 'rejected'", code="validation.status")
    comment = as_str(comment, "comment")
    if lr.hr_approved is not True:
        raise Conflict("Leave must be approved by HR first", code="leave.hr_review_pending")
    if lr.status != "pending":
        raise Conflict(f"Leave is already {lr.status}", code="leave.already_decided")

    lr.status = status
    lr.admin_comment = comment
    lr.admin_reviewed_by = actor_id
    lr.updated_at = utcnow()

    _log_action(lr, status, actor_id, comment)
    db.session.commit()
    log.info("leave %s final decision %s by user=%s", lr.id, status, actor_id)
    return lr


def visible_to(user, awaiting_hr: bool = False):
    """Query of leave requests the caller may list; `awaiting_hr` narrows to the HR queue."""
    q = LeaveRequest.query
    if awaiting_hr:
        q = q.filter(LeaveRequest.hr_approved.is_(None), LeaveRequest.status == "pending")
    if user.role == "admin":
        return q.filter(LeaveRequest.hr_approved.is_(True))
    if user.role == "hr":
        return q
    return q.filter(LeaveRequest.user_id == user.id)


def can_view(user, lr: LeaveRequest) -> bool:
    if user.role == "hr" or lr.user_id == user.id:
        return True
    return user.role == "admin" and lr.hr_approved is True
