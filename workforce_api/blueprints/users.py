from flask import Blueprint, request, current_app
from flask_jwt_extended import current_user
from sqlalchemy import or_
from sqlalchemy.exc import IntegrityError

from workforce_api.extensions import db
from workforce_api.common.auth import requires_perms
from workforce_api.common.errors import Conflict, ValidationError
from workforce_api.common.http import ok, json_body
from workforce_api.common.parsing import as_str, parse_date, pick, today, utcnow
from workforce_api.models.user import User
from workforce_api.permissions import ROLES

bp = Blueprint("users", __name__, url_prefix="/api/users")

# fields a user may change on their own profile
PROFILE_FIELDS = ("name", "phone", "address", "bio", "avatar")

def _skills(v):
    if v is None:
        return []
    if isinstance(v, str):
        return [s.strip() for s in v.split(",") if s.strip()]
    if isinstance(v, (list, tuple)):
        return [str(s).strip() for s in v if str(s).strip()]
    raise ValidationError("skills must be a list or comma separated string", code="validation.skills")

@bp.get("")
@requires_perms("users.read")
def list_users():
    q = User.query
    role = (request.args.get("role") or "").strip().lower()
    if role:
        q = q.filter(User.role == role)
    dept = (request.args.get("department") or "").strip()
    if dept:
        q = q.filter(User.department == dept)
    text = (request.args.get("q") or "").strip().lower()
    if text:
        like = f"%{text}%"
        q = q.filter(or_(User.name.ilike(like), User.email.ilike(like)))
    rows = q.order_by(User.id.asc()).all()
    return ok([u.public_dict() for u in rows])

@bp.post("")
@requires_perms("users.create")
def create_user():
    """
    JSON: {name, email, password, role?, department?, position?, joinDate?, avatar?}
    """
    d = json_body()
    name = as_str(d.get("name"), "name")
    email = (as_str(d.get("email"), "email") or "").lower()
    password = d.get("password") or ""
    if not isinstance(password, str):
        raise ValidationError("password must be a string", code="validation.password")
    role = (as_str(d.get("role"), "role") or "employee").lower()

    if not name or not email or not password:
        raise ValidationError("name, email and password required", code="validation.required")
    if "@" not in email:
        raise ValidationError("invalid email", code="validation.email")
    if len(password) < 6:
        raise ValidationError("password too short (min 6)", code="validation.password")
    if role not in ROLES:
        raise ValidationError(f"role must be one of {', '.join(ROLES)}", code="validation.role")

    join_raw = pick(d, "joinDate", "join_date")
    join_date = parse_date(join_raw) if join_raw else today()
    if join_date is None:
        raise ValidationError("Invalid joinDate", code="validation.join_date")

    if User.query.filter_by(email=email).first():
        raise Conflict("User already exists", code="user.email_taken")

    u = User(
        name=name,
        email=email,
        role=role,
        department=as_str(d.get("department"), "department"),
        position=as_str(d.get("position"), "position"),
        join_date=join_date,
        avatar=as_str(d.get("avatar"), "avatar"),
        skills=[],
    )
    u.set_password(password)
    db.session.add(u)
    try:
        db.session.commit()
    except IntegrityError:
        db.session.rollback()
        raise Conflict("User already exists", code="user.email_taken")

    current_app.logger.info("user %s created by admin=%s role=%s", u.id, current_user.id, role)
    return ok(u.public_dict(), 201)

@bp.get("/profile")
@requires_perms("profile.read")
def get_profile():
    return ok(current_user.profile_dict())

@bp.put("/profile")
@requires_perms("profile.update")
def update_profile():
    d = json_body()
    u = current_user
    for f in PROFILE_FIELDS:
        if f in d:
            setattr(u, f, as_str(d[f], f, required=(f == "name")))
    if "skills" in d:
        u.skills = _skills(d["skills"])
    u.updated_at = utcnow()
    db.session.commit()
    return ok(u.profile_dict())
