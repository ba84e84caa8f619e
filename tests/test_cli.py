from workforce_api.models.user import User
from workforce_api.models.task import Task
from workforce_api.models.leave import LeaveRequest
from workforce_api.seed_demo import run, DEMO_USERS


def test_seed_demo_is_idempotent(app):
    first = run()
    assert first["users"] == len(DEMO_USERS)
    assert first["tasks"] > 0 and first["leaves"] > 0
    second = run()
    assert second == {"users": 0, "tasks": 0, "leaves": 0, "announcements": 0}
    assert User.query.count() == len(DEMO_USERS)
    assert LeaveRequest.query.filter(LeaveRequest.hr_approved.isnot(None)).count() == 0


def test_seeded_users_can_log_in(app):
    runner = app.test_cli_runner()
    result = runner.invoke(args=["seed-demo"])
    assert result.exit_code == 0, result.output
    assert Task.query.count() > 0
    resp = app.test_client().post("/api/auth/login", json={"email": "sarah@company.com", "password": "sarah123"})
    assert resp.get_json()["data"]["user"]["role"] == "hr"


def test_create_user_command(app):
    runner = app.test_cli_runner()
    result = runner.invoke(args=["create-user", "--email", "Ops@Company.com", "--password", "secret1",
                                 "--name", "Ops", "--role", "hr"])
    assert result.exit_code == 0, result.output
    u = User.query.filter_by(email="ops@company.com").first()
    assert u is not None and u.role == "hr"

    dup = runner.invoke(args=["create-user", "--email", "ops@company.com", "--password", "x",
                              "--name", "Ops"])
    assert dup.exit_code != 0
