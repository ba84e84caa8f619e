from flask import Blueprint
from sqlalchemy import func

from workforce_api.extensions import db
from workforce_api.common.auth import requires_perms
from workforce_api.common.http import ok
from workforce_api.common.parsing import utcnow
from workforce_api.models.user import User
from workforce_api.models.attendance import AttendanceRecord
from workforce_api.models.leave import LeaveRequest, LEAVE_STATUSES
from workforce_api.models.task import Task, TASK_STATUSES
from workforce_api.services.attendance_service import minutes_worked

bp = Blueprint("dashboard", __name__, url_prefix="/api/dashboard")

def _counts(col, keys):
    rows = db.session.query(col, func.count()).group_by(col).all()
    out = {k: 0 for k in keys}
    out.update({k: n for k, n in rows})
    return out

@bp.get("/summary")
@requires_perms("dashboard.view")
def summary():
    """
    Headcount, today's attendance and leave / task pipelines.
    """
    now = utcnow()
    day = now.date()

    todays = AttendanceRecord.query.filter_by(work_date=day).all()
    checked_in_users = {r.user_id for r in todays}

    return ok({
        "date": day.isoformat(),
        "employees": User.query.filter_by(role="employee").count(),
        "users": User.query.count(),
        "attendance": {
            "checkedInToday": len(checked_in_users),
            "openSessions": sum(1 for r in todays if r.is_open),
            "minutesWorkedToday": minutes_worked(todays, now=now),
        },
        "leaves": {
            **_counts(LeaveRequest.status, LEAVE_STATUSES),
            "awaitingHr": LeaveRequest.query.filter(LeaveRequest.hr_approved.is_(None)).count(),
            "awaitingAdmin": LeaveRequest.query.filter(
                LeaveRequest.hr_approved.is_(True), LeaveRequest.status == "pending"
            ).count(),
        },
        "tasks": _counts(Task.status, TASK_STATUSES),
    })
