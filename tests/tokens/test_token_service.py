from __future__ import annotations

from datetime import datetime, timedelta, timezone

import pytest

from dayflow.core.enums import Role
from dayflow.core.exceptions import AuthenticationError
from dayflow.tokens.jwt_tokens import TokenIssuer
from dayflow.tokens.service import password_feedback

SECRET = "unit-test-secret-of-a-reasonable-length"
SIGNUP = {"employeeId": "4000001", "email": "tok@dayflow.io", "password": "Str0ng!Pass", "role": "employee"}


def test_password_feedback_lists_unmet_rules():
    assert password_feedback("Str0ng!Pass") == []
    assert password_feedback("abc") == [
        "At least 8 characters",
        "At least one uppercase letter",
        "At least one number",
        "At least one special character",
    ]


def test_issuer_round_trip_and_expiry():
    now = datetime.now(timezone.utc)
    issuer = TokenIssuer(SECRET, clock=lambda: now)
    claims = issuer.decode(issuer.session_token("u1", Role.ADMIN))
    assert (claims["userId"], claims["role"]) == ("u1", "ADMIN")

    stale = TokenIssuer(SECRET, clock=lambda: now - timedelta(days=8))
    with pytest.raises(AuthenticationError, match="Token has expired"):
        issuer.decode(stale.session_token("u1", Role.ADMIN))
    with pytest.raises(AuthenticationError, match="Invalid token"):
        TokenIssuer("another-secret-of-a-reasonable-length!").decode(issuer.session_token("u1", Role.ADMIN))


def test_health(token_client):
    body = token_client.get("/api/health").get_json()
    assert body["status"] == "Server is running"


def test_signup_verify_signin_me(token_client):
    signup = token_client.post("/api/auth/signup", json=SIGNUP)
    assert signup.status_code == 201
    data = signup.get_json()["data"]
    assert data["role"] == "EMPLOYEE"
    assert data["emailVerified"] is False

    unverified = token_client.post("/api/auth/signin", json={"email": SIGNUP["email"], "password": SIGNUP["password"]})
    assert unverified.status_code == 403

    verify = token_client.post("/api/auth/verify-email", json={"token": data["verificationToken"]})
    assert verify.status_code == 200
    assert verify.get_json()["data"]["emailVerified"] is True

    wrong = token_client.post("/api/auth/signin", json={"email": SIGNUP["email"], "password": "Wrong!Pass1"})
    assert wrong.status_code == 401
    assert wrong.get_json()["message"] == "Incorrect credentials"

    signin = token_client.post("/api/auth/signin", json={"email": SIGNUP["email"], "password": SIGNUP["password"]})
    assert signin.status_code == 200
    session = signin.get_json()["data"]
    assert session["redirectUrl"] == "/dashboard/employee"
    assert session["employeeId"] == "4000001"

    headers = {"Authorization": f"Bearer {session['token']}"}
    me = token_client.get("/api/auth/me", headers=headers).get_json()["data"]
    assert me["email"] == SIGNUP["email"]
    assert me["profile"]["employeeId"] == "4000001"

    assert token_client.post("/api/auth/verify-token", headers=headers).status_code == 200
    assert token_client.post("/api/auth/verify-token").status_code == 401
    assert token_client.post("/api/auth/logout").status_code == 200


def test_signup_validation_and_conflicts(token_client):
    missing = token_client.post("/api/auth/signup", json={"email": "a@dayflow.io"})
    assert missing.status_code == 400
    assert missing.get_json()["message"] == "Please provide employeeId, email, password, and role"

    weak = token_client.post("/api/auth/signup", json={**SIGNUP, "password": "weak"})
    assert weak.status_code == 400
    assert "password" in weak.get_json()["fieldErrors"]

    bad_role = token_client.post("/api/auth/signup", json={**SIGNUP, "role": "manager"})
    assert bad_role.get_json()["message"] == "Role must be EMPLOYEE or ADMIN"

    assert token_client.post("/api/auth/signup", json=SIGNUP).status_code == 201
    again = token_client.post("/api/auth/signup", json={**SIGNUP, "employeeId": "4000002"})
    assert again.status_code == 409
    assert again.get_json()["message"] == "Email already registered"
    taken_id = token_client.post("/api/auth/signup", json={**SIGNUP, "email": "new@dayflow.io"})
    assert taken_id.status_code == 409
    assert taken_id.get_json()["message"] == "Employee ID already registered"


def test_verify_email_rejects_garbage(token_client):
    resp = token_client.post("/api/auth/verify-email", json={"token": "not-a-jwt"})
    assert resp.status_code == 401
    assert resp.get_json()["message"] == "Invalid or expired verification token"
