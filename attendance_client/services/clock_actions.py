from datetime import datetime, timezone
from typing import Callable, Optional

from ..attendance_state import DailyAttendanceState
from ..schemas.time_record import (
    ClockAction,
    ClockActionType,
    DailyAttendanceRecord,
    Location,
)
from .time_service import TimeService


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class ClockActions:
    """Issues clock actions for the current user and keeps DailyAttendanceState in step."""

    def __init__(
        self,
        state: DailyAttendanceState,
        time_service: TimeService,
        clock: Callable[[], datetime] = utc_now,
    ):
        self.state = state
        self._time = time_service
        self._clock = clock

    def _perform(
        self,
        action_type: ClockActionType,
        location: Optional[Location] = None,
        notes: Optional[str] = None,
    ) -> DailyAttendanceRecord:
        action = ClockAction(
            type=action_type,
            timestamp=self._clock(),
            location=location,
            notes=notes,
        )
        return self.state.perform(action, self._time.clock_action)

    def clock_in(self, location: Optional[Location] = None, notes: Optional[str] = None):
        return self._perform(ClockActionType.CLOCK_IN, location, notes)

    def clock_out(self, location: Optional[Location] = None, notes: Optional[str] = None):
        return self._perform(ClockActionType.CLOCK_OUT, location, notes)

    def start_break(self):
        return self._perform(ClockActionType.BREAK_START)

    def end_break(self):
        return self._perform(ClockActionType.BREAK_END)

    def refresh_today(self) -> Optional[DailyAttendanceRecord]:
        ticket = self.state.next_ticket()
        record = self._time.get_today()
        self.state.apply(ticket, record)
        return self.state.today_record
