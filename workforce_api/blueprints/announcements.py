from flask import Blueprint
from flask_jwt_extended import current_user

from workforce_api.extensions import db
from workforce_api.common.auth import requires_perms
from workforce_api.common.errors import ValidationError
from workforce_api.common.http import ok, json_body
from workforce_api.common.parsing import as_str, parse_date, pick, today
from workforce_api.models.announcement import Announcement

bp = Blueprint("announcements", __name__, url_prefix="/api/announcements")

@bp.get("")
@requires_perms("announcements.read")
def list_active():
    d = today()
    rows = (Announcement.query
            .filter(Announcement.start_date <= d, Announcement.end_date >= d)
            .order_by(Announcement.start_date.desc(), Announcement.id.desc())
            .all())
    return ok([a.to_dict() for a in rows])

@bp.get("/all")
@requires_perms("announcements.manage")
def list_all():
    rows = Announcement.query.order_by(Announcement.created_at.desc(), Announcement.id.desc()).all()
    return ok([a.to_dict() for a in rows])

@bp.post("")
@requires_perms("announcements.manage")
def create_announcement():
    d = json_body()
    title = as_str(d.get("title"), "title", required=True)
    sd = parse_date(pick(d, "startDate", "start_date"))
    ed = parse_date(pick(d, "endDate", "end_date"))
    if not (sd and ed):
        raise ValidationError("Invalid dates", code="validation.dates")
    if sd > ed:
        raise ValidationError("Start date cannot be after end date", code="validation.dates")

    a = Announcement(
        title=title,
        description=as_str(d.get("description"), "description"),
        start_date=sd,
        end_date=ed,
        created_by=current_user.id,
    )
    db.session.add(a)
    db.session.commit()
    return ok(a.to_dict(), 201)
