from .auth_service import AuthService
from .clock_actions import ClockActions
from .manager_service import ManagerService
from .request_service import RequestService
from .time_service import TimeService

__all__ = [
    "AuthService",
    "ClockActions",
    "ManagerService",
    "RequestService",
    "TimeService",
]
