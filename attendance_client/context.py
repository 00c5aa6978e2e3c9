from dataclasses import dataclass
from typing import Optional

from .api import ApiClient
from .attendance_state import DailyAttendanceState
from .core.config import Settings, get_settings
from .services.auth_service import AuthService
from .services.clock_actions import ClockActions
from .services.manager_service import ManagerService
from .services.request_service import RequestService
from .services.time_service import TimeService
from .session import FileSessionStore, MemorySessionStore, SessionState, SessionStore


@dataclass(frozen=True)
class AppContext:
    settings: Settings
    session: SessionState
    attendance: DailyAttendanceState
    api: ApiClient

    auth_service: AuthService
    time_service: TimeService
    request_service: RequestService
    manager_service: ManagerService
    clock_actions: ClockActions

    def start(self) -> bool:
        """Restore the persisted session and confirm it with the server. True if still logged in."""
        if not self.session.restore():
            return False
        return self.session.revalidate(self.auth_service)


def build_context(
    settings: Optional[Settings] = None,
    store: Optional[SessionStore] = None,
    http=None,
) -> AppContext:
    settings = settings or get_settings()
    if store is None:
        store = (
            FileSessionStore(settings.session_store_path)
            if settings.session_store_path
            else MemorySessionStore()
        )
    session = SessionState(store)
    attendance = DailyAttendanceState()
    session.add_logout_listener(attendance.clear)

    api = ApiClient(
        token_provider=lambda: session.token,
        on_unauthorized=session.logout,
        settings=settings,
        http=http,
    )

    time_service = TimeService(api)

    return AppContext(
        settings=settings,
        session=session,
        attendance=attendance,
        api=api,
        auth_service=AuthService(api),
        time_service=time_service,
        request_service=RequestService(api),
        manager_service=ManagerService(api),
        clock_actions=ClockActions(attendance, time_service),
    )
