from .envelope import ApiResponse
from .manager import (
    Alert,
    AlertType,
    DashboardOverview,
    ExportFormat,
    ExportResult,
    MonthlyReport,
)
from .requests import (
    LeaveRequest,
    LeaveRequestCreate,
    LeaveType,
    RequestDecision,
    RequestStatus,
    TimeModificationRequest,
    TimeModificationRequestCreate,
)
from .time_record import (
    AttendanceStats,
    AttendanceStatus,
    ClockAction,
    ClockActionType,
    DailyAttendanceRecord,
    Location,
)
from .user import LoginRequest, LoginResult, User, UserRole

__all__ = [
    "Alert",
    "AlertType",
    "ApiResponse",
    "AttendanceStats",
    "AttendanceStatus",
    "ClockAction",
    "ClockActionType",
    "DailyAttendanceRecord",
    "DashboardOverview",
    "ExportFormat",
    "ExportResult",
    "LeaveRequest",
    "LeaveRequestCreate",
    "LeaveType",
    "Location",
    "LoginRequest",
    "LoginResult",
    "MonthlyReport",
    "RequestDecision",
    "RequestStatus",
    "TimeModificationRequest",
    "TimeModificationRequestCreate",
    "User",
    "UserRole",
]
