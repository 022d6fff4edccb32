from __future__ import annotations

import re
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic_core import PydanticCustomError

_PHONE_RE = re.compile(r"^\+?[\d\s\-()]+$")
_PASSWORD_MIX_RE = re.compile(r"^(?=.*[a-z])(?=.*[A-Z])(?=.*\d)")


class UpdateProfileSchema(BaseModel):
    model_config = ConfigDict(populate_by_name=True, str_strip_whitespace=True)

    name: str
    phone: Optional[str] = None
    address: Optional[str] = None
    salary: Optional[int] = None

    @field_validator("name")
    @classmethod
    def _name_length(cls, v: str) -> str:
        if len(v) < 2:
            raise PydanticCustomError("name_length", "Name must be at least 2 characters")
        return v

    @field_validator("phone")
    @classmethod
    def _phone_format(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            return v
        if len(v) < 10:
            raise PydanticCustomError("phone_length", "Phone must be at least 10 digits")
        if not _PHONE_RE.match(v):
            raise PydanticCustomError("phone_format", "Invalid phone format")
        return v

    @field_validator("salary", mode="before")
    @classmethod
    def _salary_integer(cls, v):
        if v is None:
            return v
        if isinstance(v, bool) or not isinstance(v, int):
            if isinstance(v, float) and v.is_integer():
                v = int(v)
            else:
                raise PydanticCustomError("salary_int", "Salary must be an integer")
        if v < 0:
            raise PydanticCustomError("salary_negative", "Salary must be positive")
        return v


class UpdatePasswordSchema(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    current_password: str = Field(alias="currentPassword")
    new_password: str = Field(alias="newPassword")
    confirm_password: str = Field(alias="confirmPassword")

    @field_validator("current_password")
    @classmethod
    def _current_present(cls, v: str) -> str:
        if not v:
            raise PydanticCustomError("required", "Current password is required")
        return v

    @field_validator("new_password")
    @classmethod
    def _new_strength(cls, v: str) -> str:
        if len(v) < 8:
            raise PydanticCustomError("password_length", "Password must be at least 8 characters")
        if not _PASSWORD_MIX_RE.match(v):
            raise PydanticCustomError("password_mix", "Password must contain uppercase, lowercase, and number")
        return v

    @field_validator("confirm_password")
    @classmethod
    def _confirm_matches(cls, v: str, info) -> str:
        if not v:
            raise PydanticCustomError("required", "Please confirm your password")
        if info.data.get("new_password") is not None and v != info.data["new_password"]:
            raise PydanticCustomError("password_mismatch", "Passwords do not match")
        return v
