from flask import Blueprint
from workforce_api.common.http import ok

bp = Blueprint("health", __name__, url_prefix="/api")

@bp.get("/health")
def health():
    return ok({"status": "ok"})
