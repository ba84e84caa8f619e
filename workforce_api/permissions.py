# workforce_api/permissions.py
# Declarative role -> permission table consulted by common.auth.requires_perms.

ADMIN = "admin"
HR = "hr"
EMPLOYEE = "employee"
ROLES = (ADMIN, HR, EMPLOYEE)

SELF_SERVICE_PERMS = [
    "profile.read", "profile.update",
    "users.read",
    "attendance.self",
    "tasks.read", "tasks.update",
    "leave.request.create", "leave.request.read",
    "announcements.read",
]

ROLE_PERMISSIONS = {
    ADMIN: set(SELF_SERVICE_PERMS) | {
        "users.create",
        "attendance.read_all",
        "tasks.create", "tasks.assign", "tasks.read_all",
        "leave.final_decide",
        "announcements.manage",
        "dashboard.view",
    },
    HR: set(SELF_SERVICE_PERMS) | {
        "leave.hr_review",
        "dashboard.view",
    },
    EMPLOYEE: set(SELF_SERVICE_PERMS),
}


def permissions_for(role: str | None) -> set[str]:
    return ROLE_PERMISSIONS.get((role or "").lower(), set())


def has_perm(role: str | None, code: str) -> bool:
    return code in permissions_for(role)


def has_any_perm(role: str | None, codes) -> bool:
    if not codes:
        return True
    perms = permissions_for(role)
    return any(c in perms for c in codes)
