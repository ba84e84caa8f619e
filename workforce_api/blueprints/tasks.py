from flask import Blueprint, request
from flask_jwt_extended import current_user

from workforce_api.common.auth import requires_perms
from workforce_api.common.errors import NotFound
from workforce_api.common.http import ok, json_body
from workforce_api.services import task_rules

bp = Blueprint("tasks", __name__, url_prefix="/api/tasks")

@bp.get("")
@requires_perms("tasks.read")
def list_tasks():
    q = task_rules.visible_to(
        current_user,
        assigned_to=request.args.get("assignedTo"),
        status=request.args.get("status"),
    )
    return ok([t.to_dict() for t in q.all()])

@bp.post("")
@requires_perms("tasks.create")
def create_task():
    t = task_rules.create_task(json_body(), current_user)
    return ok(t.to_dict(), 201)

@bp.get("/<int:task_id>")
@requires_perms("tasks.read")
def get_task(task_id):
    t = task_rules.visible_to(current_user).filter_by(id=task_id).first()
    if not t:
        raise NotFound("Task not found", code="task.not_found")
    return ok(t.to_dict())

@bp.put("/<int:task_id>")
@requires_perms("tasks.update")
def update_task(task_id):
    t = task_rules.get_or_404(task_id)
    t = task_rules.apply_update(t, json_body(), current_user)
    return ok(t.to_dict())
