def test_list_users_public_fields(employee, users):
    rows = employee.get("/api/users").get_json()["data"]
    assert len(rows) == 4
    assert all("passwordHash" not in r and "password_hash" not in r for r in rows)
    assert {r["role"] for r in rows} == {"admin", "hr", "employee"}


def test_list_users_filters(admin):
    emps = admin.get("/api/users?role=employee").get_json()["data"]
    assert {r["email"] for r in emps} == {"john@company.com", "michael@company.com"}
    found = admin.get("/api/users?q=sarah").get_json()["data"]
    assert [r["role"] for r in found] == ["hr"]
    qa = admin.get("/api/users?department=QA").get_json()["data"]
    assert [r["name"] for r in qa] == ["Michael Brown"]


def test_admin_creates_user_who_can_login(admin, app):
    resp = admin.post("/api/users", json={
        "name": "Emily Johnson", "email": "Emily@Company.com", "password": "emily123",
        "department": "Support", "position": "Technical Support",
    })
    assert resp.status_code == 201
    body = resp.get_json()["data"]
    assert body["email"] == "emily@company.com"
    assert body["role"] == "employee"
    assert body["joinDate"] is not None

    c = app.test_client()
    assert c.post("/api/auth/login", json={"email": "emily@company.com", "password": "emily123"}).status_code == 200


def test_duplicate_email_is_conflict(admin):
    resp = admin.post("/api/users", json={"name": "Dup", "email": "JOHN@company.com", "password": "secret1"})
    assert resp.status_code == 400
    assert resp.get_json()["error"]["code"] == "user.email_taken"


def test_create_user_validation(admin):
    assert admin.post("/api/users", json={"name": "x", "email": "x@c.com"}).status_code == 422
    assert admin.post("/api/users", json={"name": "x", "email": "x@c.com", "password": "123"}).status_code == 422
    assert admin.post("/api/users", json={"name": "x", "email": "x@c.com", "password": "secret1",
                                          "role": "owner"}).status_code == 422


def test_only_admin_creates_users(hr, employee):
    payload = {"name": "x", "email": "x@c.com", "password": "secret1"}
    assert hr.post("/api/users", json=payload).status_code == 403
    assert employee.post("/api/users", json=payload).status_code == 403


def test_profile_update_is_self_service_only(employee, users):
    resp = employee.put("/api/users/profile", json={
        "name": "Johnny Doe",
        "phone": "555-0100",
        "bio": "Backend",
        "skills": "python, flask ,  ",
        "role": "admin",
        "email": "hijack@company.com",
        "department": "Management",
        "password": "owned",
    })
    assert resp.status_code == 200
    p = resp.get_json()["data"]
    assert p["name"] == "Johnny Doe"
    assert p["phone"] == "555-0100"
    assert p["skills"] == ["python", "flask"]
    assert p["role"] == "employee"
    assert p["email"] == "john@company.com"
    assert p["department"] == "Development"

    again = employee.get("/api/users/profile").get_json()["data"]
    assert again["bio"] == "Backend"
    # admin-only routes still closed after the attempted role change
    assert employee.post("/api/tasks", json={"title": "x", "assignedTo": users["employee"].id}).status_code == 403


def test_profile_skills_list_and_blank_name(employee):
    resp = employee.put("/api/users/profile", json={"skills": ["SQL", " Docker "]})
    assert resp.get_json()["data"]["skills"] == ["SQL", "Docker"]
    assert employee.put("/api/users/profile", json={"name": " "}).status_code == 422


def test_profile_rejects_non_string_fields(employee):
    resp = employee.put("/api/users/profile", json={"phone": {"a": 1}})
    assert resp.status_code == 422
    assert resp.get_json()["error"]["code"] == "validation.phone"
    assert employee.put("/api/users/profile", json={"name": 12}).status_code == 422
    assert employee.get("/api/users/profile").get_json()["data"]["name"] == "John Doe"


def test_create_user_rejects_non_string_fields(admin):
    base = {"name": "Ops", "email": "ops@company.com", "password": "secret1"}
    for over in ({"email": 123}, {"name": ["Ops"]}, {"password": 1234567}, {"department": {"d": 1}}):
        assert admin.post("/api/users", json={**base, **over}).status_code == 422
    assert admin.post("/api/users", json=base).status_code == 201
