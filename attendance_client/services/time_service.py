from datetime import date
from typing import List, Optional

from ..schemas.time_record import (
    AttendanceStats,
    ClockAction,
    DailyAttendanceRecord,
)
from .base import BaseService


class TimeService(BaseService):
    def clock_action(self, action: ClockAction) -> DailyAttendanceRecord:
        data = self._api.post(action.type.path, json=action.to_payload())
        return self._parse(DailyAttendanceRecord, data)

    def get_today(self) -> Optional[DailyAttendanceRecord]:
        data = self._api.get("/time/today")
        if not data:
            return None
        return self._parse(DailyAttendanceRecord, data)

    def get_history(self, year: int, month: int) -> List[DailyAttendanceRecord]:
        data = self._api.get("/time/history", params={"year": year, "month": month})
        return self._parse_list(DailyAttendanceRecord, data)

    def get_statistics(self, start_date: date, end_date: date) -> AttendanceStats:
        data = self._api.get(
            "/time/statistics",
            params={"startDate": start_date.isoformat(), "endDate": end_date.isoformat()},
        )
        return self._parse(AttendanceStats, data or {})
