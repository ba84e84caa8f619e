from flask import Blueprint, request
from flask_jwt_extended import current_user

from workforce_api.common.auth import requires_perms
from workforce_api.common.errors import NotFound
from workforce_api.common.http import ok, json_body
from workforce_api.common.parsing import pick
from workforce_api.models.leave import LeaveRequest
from workforce_api.services import leave_workflow

bp = Blueprint("leaves", __name__, url_prefix="/api/leaves")

def _visible_or_404(leave_id):
    lr = leave_workflow.get_or_404(leave_id)
    if not leave_workflow.can_view(current_user, lr):
        raise NotFound("Leave not found", code="leave.not_found")
    return lr

@bp.get("")
@requires_perms("leave.request.read")
def list_leaves():
    awaiting_hr = (request.args.get("awaitingHr") or "").strip().lower() in ("1", "true", "yes")
    q = leave_workflow.visible_to(current_user, awaiting_hr=awaiting_hr)
    status = request.args.get("status")
    if status:
        q = q.filter(LeaveRequest.status == status)
    items = q.order_by(LeaveRequest.created_at.desc(), LeaveRequest.id.desc()).all()
    return ok([lr.to_dict() for lr in items])

@bp.post("")
@requires_perms("leave.request.create")
def submit_leave():
    d = json_body()
    lr = leave_workflow.submit(
        current_user.id,
        d.get("reason"),
        pick(d, "startDate", "start_date"),
        pick(d, "endDate", "end_date"),
    )
    return ok(lr.to_dict(), 201)

@bp.get("/<int:leave_id>")
@requires_perms("leave.request.read")
def get_leave(leave_id):
    return ok(_visible_or_404(leave_id).to_dict())

@bp.get("/<int:leave_id>/history")
@requires_perms("leave.request.read")
def leave_history(leave_id):
    lr = _visible_or_404(leave_id)
    return ok([a.to_dict() for a in lr.actions])

@bp.put("/<int:leave_id>/hr")
@requires_perms("leave.hr_review")
def hr_review(leave_id):
    d = json_body()
    lr = leave_workflow.get_or_404(leave_id)
    lr = leave_workflow.hr_decide(lr, d.get("approved"), current_user.id, d.get("comment"))
    return ok(lr.to_dict())

@bp.put("/<int:leave_id>/admin")
@requires_perms("leave.final_decide")
def admin_decision(leave_id):
    d = json_body()
    lr = leave_workflow.get_or_404(leave_id)
    lr = leave_workflow.admin_decide(lr, d.get("status"), current_user.id, d.get("comment"))
    return ok(lr.to_dict())
