from __future__ import annotations

from datetime import date

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic_core import PydanticCustomError

from ..core.enums import LeaveType


class ApplyLeaveSchema(BaseModel):
    """Leave application form. Any ``status`` sent along is ignored."""

    model_config = ConfigDict(populate_by_name=True, str_strip_whitespace=True)

    leave_type: LeaveType = Field(alias="leaveType")
    start_date: date = Field(alias="startDate")
    end_date: date = Field(alias="endDate")
    reason: str

    @field_validator("end_date")
    @classmethod
    def _end_after_start(cls, v: date, info) -> date:
        start = info.data.get("start_date")
        if start is not None and v < start:
            raise PydanticCustomError("date_order", "End date must be on or after start date")
        return v

    @field_validator("reason")
    @classmethod
    def _reason_length(cls, v: str) -> str:
        if len(v) < 10:
            raise PydanticCustomError("reason_length", "Reason must be at least 10 characters")
        if len(v) > 500:
            raise PydanticCustomError("reason_length", "Reason must be at most 500 characters")
        return v
