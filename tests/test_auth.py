from datetime import timedelta

from flask_jwt_extended import create_access_token

from workforce_api.extensions import db
from workforce_api.models.user import User


def test_login_sets_httponly_cookie_and_returns_user(app, users):
    c = app.test_client()
    resp = c.post("/api/auth/login", json={"email": "John@Company.com", "password": "john123"})
    assert resp.status_code == 200
    body = resp.get_json()
    assert body["success"] is True
    assert body["data"]["user"]["email"] == "john@company.com"
    assert body["data"]["user"]["role"] == "employee"
    assert "passwordHash" not in body["data"]["user"]

    cookies = resp.headers.getlist("Set-Cookie")
    token_cookie = next(h for h in cookies if h.startswith("token="))
    assert "HttpOnly" in token_cookie
    assert "Max-Age=86400" in token_cookie
    assert "Secure" not in token_cookie


def test_wrong_password_is_401_without_cookie(app, users):
    c = app.test_client()
    resp = c.post("/api/auth/login", json={"email": "john@company.com", "password": "nope"})
    assert resp.status_code == 401
    assert resp.get_json()["error"]["code"] == "auth.invalid_credentials"
    assert resp.headers.getlist("Set-Cookie") == []


def test_unknown_email_is_401(app, users):
    resp = app.test_client().post("/api/auth/login", json={"email": "ghost@company.com", "password": "x"})
    assert resp.status_code == 401


def test_current_user_roundtrip_and_logout(employee):
    resp = employee.get("/api/auth/user")
    assert resp.status_code == 200
    assert resp.get_json()["data"]["name"] == "John Doe"

    out = employee.post("/api/auth/logout")
    assert out.status_code == 200

    resp = employee.get("/api/auth/user")
    assert resp.status_code == 401
    assert resp.get_json()["error"]["code"] == "auth.no_token"


def test_no_token_rejected_before_any_store_access(app, users):
    c = app.test_client()
    for method, url in [
        ("get", "/api/tasks"), ("post", "/api/tasks"), ("get", "/api/leaves"),
        ("post", "/api/attendance/check-in"), ("get", "/api/users/profile"),
        ("post", "/api/announcements"),
    ]:
        resp = getattr(c, method)(url, json={})
        assert resp.status_code == 401, url


def test_garbage_token_is_invalid(app, users):
    c = app.test_client()
    c.set_cookie("token", "not-a-jwt")
    resp = c.get("/api/auth/user")
    assert resp.status_code == 401
    assert resp.get_json()["error"]["code"] == "auth.invalid_token"


def test_expired_token(app, users):
    token = create_access_token(identity=users["employee"], expires_delta=timedelta(hours=-1))
    c = app.test_client()
    c.set_cookie("token", token)
    resp = c.get("/api/tasks")
    assert resp.status_code == 401
    assert resp.get_json()["error"]["code"] == "auth.token_expired"


def test_token_for_unknown_user(app, users):
    token = create_access_token(identity="9999")
    c = app.test_client()
    c.set_cookie("token", token)
    resp = c.get("/api/auth/user")
    assert resp.status_code == 401
    assert resp.get_json()["error"]["code"] == "auth.user_not_found"


def test_token_signed_with_other_secret_is_invalid(app, users):
    token = create_access_token(identity=users["admin"])
    app.config["JWT_SECRET_KEY"] = "rotated-secret"
    c = app.test_client()
    c.set_cookie("token", token)
    assert c.get("/api/auth/user").status_code == 401


def test_logout_does_not_revoke_token(app, users):
    # cookie is cleared client side; a copied token still verifies until expiry
    token = create_access_token(identity=users["hr"])
    c = app.test_client()
    c.set_cookie("token", token)
    c.post("/api/auth/logout")
    other = app.test_client()
    other.set_cookie("token", token)
    assert other.get("/api/auth/user").status_code == 200


def test_password_is_stored_hashed(app, users):
    u = db.session.get(User, users["admin"].id)
    assert u.password_hash != "admin123"
    assert u.check_password("admin123")


def test_production_requires_real_secret(monkeypatch):
    import pytest
    from workforce_api import create_app
    from workforce_api.config import ProductionConfig

    monkeypatch.delenv("JWT_SECRET_KEY", raising=False)

    class Prod(ProductionConfig):
        SQLALCHEMY_DATABASE_URI = "sqlite:///:memory:"
        JWT_SECRET_KEY = "dev-jwt-secret"

    with pytest.raises(RuntimeError):
        create_app(Prod)


def test_production_cookie_is_secure(monkeypatch):
    from workforce_api import create_app
    from workforce_api.config import ProductionConfig
    from workforce_api.extensions import db as _db

    class Prod(ProductionConfig):
        SQLALCHEMY_DATABASE_URI = "sqlite:///:memory:"
        JWT_SECRET_KEY = "prod-secret-for-tests"

    app = create_app(Prod)
    with app.app_context():
        _db.create_all()
        u = User(name="P", email="p@company.com", role="employee", skills=[])
        u.set_password("secret1")
        _db.session.add(u)
        _db.session.commit()
        resp = app.test_client().post("/api/auth/login", json={"email": "p@company.com", "password": "secret1"})
        cookie = next(h for h in resp.headers.getlist("Set-Cookie") if h.startswith("token="))
        assert "Secure" in cookie
        _db.session.remove()


def test_non_string_credentials_are_invalid(app, users):
    c = app.test_client()
    for body in ({"email": 123, "password": "john123"},
                 {"email": "john@company.com", "password": 123456},
                 {"email": ["john@company.com"], "password": {"x": 1}}):
        resp = c.post("/api/auth/login", json=body)
        assert resp.status_code == 401
        assert resp.get_json()["error"]["code"] == "auth.invalid_credentials"
        assert resp.headers.getlist("Set-Cookie") == []
