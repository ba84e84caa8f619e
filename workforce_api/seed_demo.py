# workforce_api/seed_demo.py
# Demo data for a fresh database; idempotent by email / title.

from datetime import timedelta

from workforce_api.extensions import db
from workforce_api.common.parsing import parse_date, parse_ts, today
from workforce_api.models.user import User
from workforce_api.models.task import Task
from workforce_api.models.leave import LeaveRequest, LeaveApprovalAction
from workforce_api.models.announcement import Announcement

DEMO_USERS = [
    # (name, email, password, role, department, position, join_date)
    ("Admin User", "admin@company.com", "admin123", "admin", "Management", "IT Director", "2020-01-15"),
    ("John Doe", "john@company.com", "john123", "employee", "Development", "Senior Developer", "2021-03-10"),
    ("Sarah Wilson", "sarah@company.com", "sarah123", "hr", "Human Resources", "HR Manager", "2021-02-15"),
    ("Michael Brown", "michael@company.com", "michael123", "employee", "QA", "Test Engineer", "2022-01-05"),
    ("Emily Johnson", "emily@company.com", "emily123", "employee", "Support", "Technical Support", "2022-04-18"),
]

DEMO_TASKS = [
    # (title, description, status, priority, assignee email, due)
    ("Implement user authentication", "Create login and registration functionality with JWT",
     "completed", "high", "john@company.com", "2023-10-05T17:00:00Z"),
    ("Design dashboard UI", "Create wireframes and mockups for the admin and employee dashboards",
     "in-progress", "medium", "sarah@company.com", "2023-10-08T17:00:00Z"),
    ("Implement unit tests for API", "Write comprehensive tests for all API endpoints",
     "pending", "medium", "michael@company.com", "2023-10-10T17:00:00Z"),
    ("Setup CI/CD pipeline", "Configure automated testing and deployment",
     "in-progress", "high", "john@company.com", "2023-10-15T17:00:00Z"),
    ("Resolve customer reported bugs", "Fix issues reported by users in the support ticket system",
     "in-progress", "high", "emily@company.com", "2023-10-09T17:00:00Z"),
]

DEMO_LEAVES = [
    # (employee email, reason, start, end)
    ("michael@company.com", "Family vacation", "2023-10-20", "2023-10-25"),
    ("emily@company.com", "Taking certification exam", "2023-10-18", "2023-10-18"),
    ("john@company.com", "Conference attendance", "2023-11-05", "2023-11-07"),
]


def run():
    counts = {"users": 0, "tasks": 0, "leaves": 0, "announcements": 0}

    by_email = {}
    for name, email, pw, role, dept, pos, joined in DEMO_USERS:
        u = User.query.filter_by(email=email).first()
        if not u:
            u = User(name=name, email=email, role=role, department=dept, position=pos,
                     join_date=parse_date(joined), skills=[])
            u.set_password(pw)
            db.session.add(u)
            counts["users"] += 1
        by_email[email] = u
    db.session.flush()

    admin = by_email["admin@company.com"]
    for title, desc, status, prio, who, due in DEMO_TASKS:
        if Task.query.filter_by(title=title).first():
            continue
        db.session.add(Task(title=title, description=desc, status=status, priority=prio,
                            assigned_to=by_email[who].id, due_date=parse_ts(due), created_by=admin.id))
        counts["tasks"] += 1

    for who, reason, sd, ed in DEMO_LEAVES:
        uid = by_email[who].id
        if LeaveRequest.query.filter_by(user_id=uid, reason=reason).first():
            continue
        lr = LeaveRequest(user_id=uid, reason=reason, start_date=parse_date(sd),
                          end_date=parse_date(ed), status="pending")
        lr.actions.append(LeaveApprovalAction(action="submitted", acted_by_user_id=uid))
        db.session.add(lr)
        counts["leaves"] += 1

    title = "Welcome to the workforce portal"
    if not Announcement.query.filter_by(title=title).first():
        d = today()
        db.session.add(Announcement(title=title, description="Check in daily and keep your tasks up to date.",
                                    start_date=d, end_date=d + timedelta(days=30), created_by=admin.id))
        counts["announcements"] += 1

    db.session.commit()
    return counts
