# workforce_api/services/task_rules.py
from __future__ import annotations

import logging

from workforce_api.extensions import db
from workforce_api.common.errors import Forbidden, NotFound, ValidationError
from workforce_api.common.parsing import parse_ts, pick, as_int, as_str, utcnow
from workforce_api.models.task import Task, TASK_STATUSES, TASK_PRIORITIES
from workforce_api.models.user import User
from workforce_api.permissions import has_perm

log = logging.getLogger(__name__)


def _status(v) -> str:
    if v not in TASK_STATUSES:
        raise ValidationError(f"status must be one of {', '.join(TASK_STATUSES)}", code="validation.status")
    return v


def _priority(v) -> str:
    if v not in TASK_PRIORITIES:
        raise ValidationError(f"priority must be one of {', '.join(TASK_PRIORITIES)}", code="validation.priority")
    return v


def _assignee(v) -> int:
    uid = as_int(v)
    if uid is None:
        raise ValidationError("assignedTo is required", code="validation.assigned_to")
    if not db.session.get(User, uid):
        raise NotFound("Assignee not found", code="user.not_found")
    return uid


def _due(v):
    if v in (None, ""):
        return None
    ts = parse_ts(v)
    if ts is None:
        raise ValidationError("Invalid dueDate", code="validation.due_date")
    return ts


def get_or_404(task_id: int) -> Task:
    t = db.session.get(Task, task_id)
    if not t:
        raise NotFound("Task not found", code="task.not_found")
    return t


def create_task(data: dict, creator: User) -> Task:
    title = as_str(pick(data, "title"), "title", required=True)

    t = Task(
        title=title,
        description=as_str(pick(data, "description"), "description"),
        status="pending",
        priority=_priority(pick(data, "priority", default="medium")),
        assigned_to=_assignee(pick(data, "assignedTo", "assigned_to")),
        due_date=_due(pick(data, "dueDate", "due_date")),
        created_by=creator.id,
    )
    db.session.add(t)
    db.session.commit()
    log.info("task %s created by user=%s for user=%s", t.id, creator.id, t.assigned_to)
    return t


def apply_update(t: Task, data: dict, actor: User) -> Task:
    """
    Assignee or admin only. Without `tasks.assign` only `status` is applied;
    every other key in the payload, `assignedTo` included, is ignored.
    """
    can_assign = has_perm(actor.role, "tasks.assign")
    if t.assigned_to != actor.id and not can_assign:
        raise Forbidden("Not authorized to update this task")

    if "status" in data:
        t.status = _status(data["status"])

    if can_assign:
        if "title" in data:
            t.title = as_str(data["title"], "title", required=True)
        if "description" in data:
            t.description = as_str(data["description"], "description")
        if "priority" in data:
            t.priority = _priority(data["priority"])
        due_key = next((k for k in ("dueDate", "due_date") if k in data), None)
        if due_key:
            t.due_date = _due(data[due_key])
        assignee_key = next((k for k in ("assignedTo", "assigned_to") if k in data), None)
        if assignee_key:
            t.assigned_to = _assignee(data[assignee_key])

    t.updated_at = utcnow()
    db.session.commit()
    log.info("task %s updated by user=%s status=%s", t.id, actor.id, t.status)
    return t


def visible_to(user: User, assigned_to=None, status=None):
    q = Task.query
    if has_perm(user.role, "tasks.read_all"):
        uid = as_int(assigned_to)
        if uid is not None:
            q = q.filter(Task.assigned_to == uid)
    else:
        q = q.filter(Task.assigned_to == user.id)
    if status:
        q = q.filter(Task.status == status)
    return q.order_by(Task.due_date.is_(None), Task.due_date.asc(), Task.id.asc())
