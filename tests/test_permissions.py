from workforce_api.permissions import ROLE_PERMISSIONS, ROLES, has_perm, has_any_perm, permissions_for


def test_every_role_has_an_entry():
    assert set(ROLE_PERMISSIONS) == set(ROLES)


def test_stage_permissions_are_exclusive():
    assert has_perm("hr", "leave.hr_review")
    assert not has_perm("admin", "leave.hr_review")
    assert has_perm("admin", "leave.final_decide")
    assert not has_perm("hr", "leave.final_decide")


def test_admin_only_permissions():
    for code in ("users.create", "tasks.create", "tasks.assign", "announcements.manage"):
        assert has_perm("admin", code)
        assert not has_perm("hr", code)
        assert not has_perm("employee", code)


def test_unknown_role_gets_nothing():
    assert permissions_for("contractor") == set()
    assert permissions_for(None) == set()
    assert not has_any_perm("contractor", ["tasks.read"])


def test_empty_requirement_allows():
    assert has_any_perm("employee", [])


def test_role_lookup_is_case_insensitive():
    assert has_perm("ADMIN", "users.create")
