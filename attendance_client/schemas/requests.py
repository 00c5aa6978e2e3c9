import datetime as dt
from datetime import date, datetime
from enum import Enum
from typing import Optional

from pydantic import AliasChoices, Field, field_validator

from .base import CamelModel, upper_enum_value


class RequestStatus(str, Enum):
    PENDING = "PENDING"
    APPROVED = "APPROVED"
    REJECTED = "REJECTED"

    @property
    def is_terminal(self) -> bool:
        return self is not RequestStatus.PENDING


class LeaveType(str, Enum):
    ANNUAL = "ANNUAL"
    SICK = "SICK"
    PERSONAL = "PERSONAL"
    SPECIAL = "SPECIAL"
    MATERNITY = "MATERNITY"
    PATERNITY = "PATERNITY"
    PAID = "PAID"


class _RequestBase(CamelModel):
    id: str
    user_id: str
    user_name: Optional[str] = None
    reason: str
    status: RequestStatus = RequestStatus.PENDING
    approved_by: Optional[str] = None
    approved_at: Optional[datetime] = None
    rejection_reason: Optional[str] = None
    created_at: Optional[datetime] = None

    @field_validator("status", mode="before")
    @classmethod
    def _normalise_status(cls, value):
        return upper_enum_value(value)


class LeaveRequest(_RequestBase):
    type: LeaveType
    start_date: date
    end_date: date

    @field_validator("type", mode="before")
    @classmethod
    def _normalise_type(cls, value):
        return upper_enum_value(value)

    @property
    def duration_days(self) -> int:
        return (self.end_date - self.start_date).days + 1


class TimeModificationRequest(_RequestBase):
    date: dt.date = Field(validation_alias=AliasChoices("date", "requestDate"))
    original_clock_in: Optional[datetime] = None
    original_clock_out: Optional[datetime] = None
    requested_clock_in: Optional[datetime] = None
    requested_clock_out: Optional[datetime] = None


class LeaveRequestCreate(CamelModel):
    type: LeaveType
    start_date: date
    end_date: date
    reason: str


class TimeModificationRequestCreate(CamelModel):
    date: dt.date
    requested_clock_in: Optional[datetime] = None
    requested_clock_out: Optional[datetime] = None
    reason: str


class RequestDecision(CamelModel):
    status: RequestStatus
    comment: Optional[str] = None
