from __future__ import annotations

from dayflow.profiles.actions import PROFILE_VIEW


def test_owner_updates_name_phone_and_address(container, make_employee):
    employee = make_employee(name="Jane Doe")

    result = container.profile_actions.update_user_profile(
        employee.user.id,
        {"name": "Jane Smith", "phone": "+1 555 010 9999", "address": "1 Main St"},
    )

    assert result.success, result.message
    assert result.data.user.name == "Jane Smith"
    assert result.data.profile.name == "Jane Smith"
    assert result.data.profile.phone == "+1 555 010 9999"
    assert result.data.profile.employee_id == employee.profile.employee_id
    assert container.revalidator.drain() == [PROFILE_VIEW]


def test_salary_is_ignored_unless_allowed(container, make_employee):
    employee = make_employee()

    container.profile_actions.update_user_profile(employee.user.id, {"name": "Jane Doe", "salary": 9000})
    assert container.profiles_repo.get_by_user_id(employee.user.id).salary is None

    container.profile_actions.update_user_profile(
        employee.user.id, {"name": "Jane Doe", "salary": 9000}, allow_salary=True
    )
    assert container.profiles_repo.get_by_user_id(employee.user.id).salary == 9000


def test_profile_is_created_with_placeholder_employee_id(container):
    user = container.users_repo.create(name="No Profile", email="np@dayflow.io")

    result = container.profile_actions.update_user_profile(user.id, {"name": "Has Profile"})

    assert result.success, result.message
    assert result.data.profile.employee_id.startswith("AUTO-")
    assert len(result.data.profile.employee_id) == len("AUTO-") + 10


def test_invalid_profile_input(container, make_employee):
    employee = make_employee()

    result = container.profile_actions.update_user_profile(employee.user.id, {"name": "J"})

    assert result.success is False
    assert result.field_errors == {"name": ["Name must be at least 2 characters"]}


def test_fetch_unknown_user(container):
    result = container.profile_actions.fetch_user_profile("missing")
    assert result.success is False
    assert result.message == "User not found"


def test_update_password_checks_current_password(container, make_employee):
    employee = make_employee(email="jane@dayflow.io")

    wrong = container.profile_actions.update_password(
        employee.user.id,
        {"currentPassword": "Wrong@123", "newPassword": "NewPass123", "confirmPassword": "NewPass123"},
    )
    assert wrong.success is False
    assert wrong.field_errors == {"currentPassword": ["Current password is incorrect"]}

    done = container.profile_actions.update_password(
        employee.user.id,
        {"currentPassword": "Secret@123", "newPassword": "NewPass123", "confirmPassword": "NewPass123"},
    )
    assert done.success, done.message
    assert container.auth_provider.sign_in_email("jane@dayflow.io", "NewPass123").ok
    assert not container.auth_provider.sign_in_email("jane@dayflow.io", "Secret@123").ok
