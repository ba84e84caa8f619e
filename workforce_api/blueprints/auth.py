from flask import Blueprint
from flask_jwt_extended import current_user

from workforce_api.common.auth import authenticate, start_session, end_session, login_required
from workforce_api.common.http import ok, json_body

bp = Blueprint("auth", __name__, url_prefix="/api/auth")

@bp.post("/login")
def login():
    data = json_body()
    u = authenticate(data.get("email"), data.get("password"))
    resp, status = ok({"user": u.public_dict()})
    start_session(resp, u)
    return resp, status

@bp.post("/logout")
def logout():
    # cookie only; the token itself stays valid until it expires
    resp, status = ok({"message": "Logged out successfully"})
    end_session(resp)
    return resp, status

@bp.get("/user")
@login_required
def me():
    return ok(current_user.public_dict())
