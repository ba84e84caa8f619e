from flask import Blueprint, request
from flask_jwt_extended import current_user

from workforce_api.common.auth import requires_perms
from workforce_api.common.errors import ValidationError
from workforce_api.common.http import ok, json_body
from workforce_api.common.parsing import parse_date, as_int
from workforce_api.permissions import has_perm
from workforce_api.models.attendance import AttendanceRecord
from workforce_api.services import attendance_service

bp = Blueprint("attendance", __name__, url_prefix="/api/attendance")

@bp.get("")
@requires_perms("attendance.self")
def list_attendance():
    q = AttendanceRecord.query
    if has_perm(current_user.role, "attendance.read_all"):
        uid = as_int(request.args.get("userId"))
        if uid is not None:
            q = q.filter(AttendanceRecord.user_id == uid)
    else:
        q = q.filter(AttendanceRecord.user_id == current_user.id)

    day_raw = request.args.get("date")
    if day_raw:
        day = parse_date(day_raw)
        if day is None:
            raise ValidationError("Invalid date format YYYY-MM-DD", code="validation.date")
        q = q.filter(AttendanceRecord.work_date == day)

    rows = q.order_by(AttendanceRecord.check_in.desc(), AttendanceRecord.id.desc()).all()
    return ok([r.to_dict() for r in rows])

@bp.post("/check-in")
@requires_perms("attendance.self")
def check_in():
    rec = attendance_service.check_in(current_user.id, json_body().get("location"))
    return ok(rec.to_dict(), 201)

@bp.post("/check-out")
@requires_perms("attendance.self")
def check_out():
    rec = attendance_service.check_out(current_user.id, json_body().get("location"))
    return ok(rec.to_dict())
