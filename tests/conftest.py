import pytest

from workforce_api import create_app
from workforce_api.config import TestingConfig
from workforce_api.extensions import db
from workforce_api.models.user import User

PASSWORDS = {
    "admin": "admin123",
    "hr": "sarah123",
    "employee": "john123",
    "employee2": "michael123",
}

EMAILS = {
    "admin": "admin@company.com",
    "hr": "sarah@company.com",
    "employee": "john@company.com",
    "employee2": "michael@company.com",
}


@pytest.fixture(scope="function")
def app():
    app = create_app(TestingConfig)
    with app.app_context():
        db.create_all()
        yield app
        db.session.remove()
        db.drop_all()


@pytest.fixture(scope="function")
def users(app):
    rows = {}
    for key, (name, role, dept) in {
        "admin": ("Admin User", "admin", "Management"),
        "hr": ("Sarah Wilson", "hr", "Human Resources"),
        "employee": ("John Doe", "employee", "Development"),
        "employee2": ("Michael Brown", "employee", "QA"),
    }.items():
        u = User(name=name, email=EMAILS[key], role=role, department=dept, skills=[])
        u.set_password(PASSWORDS[key])
        db.session.add(u)
        rows[key] = u
    db.session.commit()
    return rows


def _login(client, key):
    resp = client.post("/api/auth/login", json={"email": EMAILS[key], "password": PASSWORDS[key]})
    assert resp.status_code == 200, resp.get_json()
    return client


@pytest.fixture
def client_for(app, users):
    """client_for("hr") -> test client holding that user's session cookie."""
    def make(key):
        return _login(app.test_client(), key)
    return make


@pytest.fixture
def admin(client_for):
    return client_for("admin")


@pytest.fixture
def hr(client_for):
    return client_for("hr")


@pytest.fixture
def employee(client_for):
    return client_for("employee")


@pytest.fixture
def employee2(client_for):
    return client_for("employee2")
