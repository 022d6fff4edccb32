from __future__ import annotations

from dayflow.database.bootstrap import DEMO_USERS, ensure_demo_users, list_tables


def test_schema_and_demo_users_are_idempotent(container, db):
    assert list_tables(db) == ["accounts", "attendance", "leaves", "profiles", "users"]

    ensure_demo_users(db)
    ensure_demo_users(db)

    assert container.users_repo.count() == len(DEMO_USERS)
    for _, email, password, role, employee_id in DEMO_USERS:
        signed_in = container.auth_provider.sign_in_email(email, password)
        assert signed_in.ok
        assert signed_in.user.role == role
        assert container.profiles_repo.get_by_user_id(signed_in.user.id).employee_id == employee_id
