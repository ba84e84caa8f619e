from workforce_api.models.leave import LeaveRequest


def test_summary_counts(admin, hr, employee, employee2, users):
    employee.post("/api/attendance/check-in")
    employee2.post("/api/attendance/check-in")
    employee2.post("/api/attendance/check-out")

    lid = employee.post("/api/leaves", json={"reason": "Personal", "startDate": "2023-10-15",
                                             "endDate": "2023-10-15"}).get_json()["data"]["id"]
    employee2.post("/api/leaves", json={"reason": "Medical", "startDate": "2023-10-16", "endDate": "2023-10-16"})
    hr.put(f"/api/leaves/{lid}/hr", json={"approved": True})

    admin.post("/api/tasks", json={"title": "t1", "assignedTo": users["employee"].id})

    resp = hr.get("/api/dashboard/summary")
    assert resp.status_code == 200
    s = resp.get_json()["data"]
    assert s["employees"] == 2
    assert s["users"] == 4
    assert s["attendance"]["checkedInToday"] == 2
    assert s["attendance"]["openSessions"] == 1
    assert s["attendance"]["minutesWorkedToday"] >= 0
    assert s["leaves"]["pending"] == 2
    assert s["leaves"]["approved"] == 0
    assert s["leaves"]["awaitingHr"] == 1
    assert s["leaves"]["awaitingAdmin"] == 1
    assert s["tasks"] == {"pending": 1, "in-progress": 0, "completed": 0}


def test_summary_not_for_employees(employee):
    assert employee.get("/api/dashboard/summary").status_code == 403


def test_health_is_public(app):
    resp = app.test_client().get("/api/health")
    assert resp.status_code == 200
    assert resp.get_json()["data"]["status"] == "ok"
