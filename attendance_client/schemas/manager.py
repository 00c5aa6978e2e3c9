import datetime as dt
from datetime import datetime
from enum import Enum
from typing import List, Optional

from pydantic import field_validator

from .base import CamelModel
from .time_record import AttendanceStats, DailyAttendanceRecord
from .user import User


class AlertType(str, Enum):
    LATE = "late"
    ABSENT = "absent"
    MISSING_CLOCK_OUT = "missing_clock_out"


class Alert(CamelModel):
    id: str
    type: AlertType
    user_id: str
    user_name: str
    date: dt.date
    message: str
    is_read: bool = False
    created_at: Optional[datetime] = None

    @field_validator("type", mode="before")
    @classmethod
    def _normalise_type(cls, value):
        if isinstance(value, str):
            return value.lower()
        return value


class MonthlyReport(CamelModel):
    user_id: str
    month: str
    year: int
    records: List[DailyAttendanceRecord] = []
    stats: AttendanceStats = AttendanceStats()


class DashboardOverview(CamelModel):
    team_size: int = 0
    today_present: int = 0
    today_late: int = 0
    today_absent: int = 0
    unread_alerts: int = 0
    pending_approvals: int = 0
    team_members: List[User] = []


class ExportFormat(str, Enum):
    CSV = "csv"
    EXCEL = "excel"


class ExportResult(CamelModel):
    download_url: str
