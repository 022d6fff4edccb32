from __future__ import annotations

import re
from typing import Optional

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator
from pydantic_core import PydanticCustomError

from ..core.constants import EMPLOYEE_ID_MAX_LENGTH


def _require(v: str, message: str) -> str:
    if not v:
        raise PydanticCustomError("required", message)
    return v


class LoginSchema(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    email: EmailStr
    password: str
    code: Optional[str] = None

    @field_validator("email", mode="before")
    @classmethod
    def _email_present(cls, v):
        if v is None or v == "":
            raise PydanticCustomError("required", "Email is required")
        if not isinstance(v, str):
            raise PydanticCustomError("email_type", "Email must be a string")
        return v

    @field_validator("password")
    @classmethod
    def _password_present(cls, v: str) -> str:
        return _require(v, "Password is required")


class RegisterSchema(BaseModel):
    model_config = ConfigDict(populate_by_name=True, str_strip_whitespace=True)

    name: str
    email: EmailStr
    employee_id: str = Field(alias="employeeId")
    password: str
    confirm_password: str = Field(alias="confirmPassword")
    is_admin: bool = Field(default=False, alias="isAdmin")

    @field_validator("name")
    @classmethod
    def _name_present(cls, v: str) -> str:
        return _require(v, "Name is required")

    @field_validator("email", mode="before")
    @classmethod
    def _email_present(cls, v):
        if v is None or v == "":
            raise PydanticCustomError("required", "Email is required")
        if not isinstance(v, str):
            raise PydanticCustomError("email_type", "Email must be a string")
        return v

    @field_validator("employee_id")
    @classmethod
    def _employee_id_digits(cls, v: str) -> str:
        _require(v, "Employee ID is required")
        if not re.fullmatch(r"[0-9]+", v):
            raise PydanticCustomError("employee_id_digits", "Employee ID must be digits only")
        if len(v) > EMPLOYEE_ID_MAX_LENGTH:
            raise PydanticCustomError("employee_id_length", "Employee ID must be 7 digits")
        return v

    @field_validator("password")
    @classmethod
    def _password_strength(cls, v: str) -> str:
        if len(v) < 6:
            raise PydanticCustomError("password_length", "Minimum 6 characters required")
        checks = (r"[A-Z]", r"[a-z]", r"[0-9]", r"[^A-Za-z0-9]")
        if not all(re.search(p, v) for p in checks):
            raise PydanticCustomError(
                "password_strength",
                "Password must include uppercase, lowercase, number and special character",
            )
        return v

    @field_validator("confirm_password")
    @classmethod
    def _confirm_matches(cls, v: str, info) -> str:
        _require(v, "Confirm password is required")
        if info.data.get("password") is not None and v != info.data["password"]:
            raise PydanticCustomError("password_mismatch", "Passwords do not match")
        return v
