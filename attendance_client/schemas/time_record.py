import datetime as dt
from datetime import date, datetime
from enum import Enum
from typing import Optional

from pydantic import AliasChoices, BaseModel, Field, field_validator

from .base import CamelModel, upper_enum_value


class AttendanceStatus(str, Enum):
    PRESENT = "PRESENT"
    LATE = "LATE"
    ABSENT = "ABSENT"
    EARLY_LEAVE = "EARLY_LEAVE"


class ClockActionType(str, Enum):
    CLOCK_IN = "clock_in"
    CLOCK_OUT = "clock_out"
    BREAK_START = "break_start"
    BREAK_END = "break_end"

    @property
    def path(self) -> str:
        return "/time/" + self.value.replace("_", "-")


class DailyAttendanceRecord(CamelModel):
    id: Optional[str] = None
    user_id: Optional[str] = None
    date: dt.date = Field(validation_alias=AliasChoices("date", "recordDate"))
    clock_in: Optional[datetime] = None
    clock_out: Optional[datetime] = None
    break_start: Optional[datetime] = None
    break_end: Optional[datetime] = None
    total_hours: Optional[float] = None
    status: AttendanceStatus = AttendanceStatus.PRESENT
    notes: Optional[str] = None

    @field_validator("status", mode="before")
    @classmethod
    def _normalise_status(cls, value):
        return upper_enum_value(value)


class Location(BaseModel):
    lat: float
    lng: float


class ClockAction(CamelModel):
    type: ClockActionType
    timestamp: datetime
    location: Optional[Location] = None
    notes: Optional[str] = None

    def to_payload(self) -> dict:
        # the action type travels in the URL, not the body
        return self.model_dump(
            by_alias=True, exclude_none=True, exclude={"type"}, mode="json"
        )


class AttendanceStats(CamelModel):
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    total_hours: float = 0.0
    average_hours: float = 0.0
    working_days: int = 0
