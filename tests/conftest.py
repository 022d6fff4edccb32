from __future__ import annotations

import os

os.environ["APP_ENV"] = "testing"

import pytest
from werkzeug.security import generate_password_hash

from dayflow.container import build_container
from dayflow.core.enums import Role
from dayflow.database.bootstrap import apply_schema
from dayflow.database.connection import DatabaseConnection
from dayflow.main import create_app, create_token_app

PASSWORD = "Secret@123"


@pytest.fixture
def db():
    db = DatabaseConnection.from_url("sqlite://")
    apply_schema(db)
    yield db
    db.dispose()


@pytest.fixture
def container(db):
    return build_container(db=db)


@pytest.fixture
def make_employee(container):
    """Factory for a user with credentials and a profile; returns the ``Employee``."""

    created = []

    def _make(name="Jane Doe", email=None, *, role=Role.EMPLOYEE, employee_id=None, password=PASSWORD, verified=True):
        n = len(created) + 1
        user = container.accounts_repo.create_user_with_account(
            name=name,
            email=email or f"user{n}@dayflow.io",
            password_hash=generate_password_hash(password),
        )
        employee = container.employees_repo.update(
            user.id,
            {"role": role, "email_verified": verified},
            {"employee_id": employee_id or str(1000 + n), "name": name},
        )
        created.append(employee)
        return employee

    return _make


@pytest.fixture
def app(container):
    return create_app(container)


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def token_client(container):
    return create_token_app(container).test_client()


@pytest.fixture
def login(client):
    def _login(email, password=PASSWORD):
        resp = client.post("/api/auth/sign-in", json={"email": email, "password": password})
        assert resp.status_code == 200, resp.get_json()
        return resp

    return _login
