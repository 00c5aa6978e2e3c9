from datetime import date
from typing import List, Optional, Union

from ..core.exceptions import ValidationError
from ..schemas.manager import (
    Alert,
    DashboardOverview,
    ExportFormat,
    ExportResult,
    MonthlyReport,
)
from ..schemas.time_record import DailyAttendanceRecord
from ..schemas.user import User
from .base import BaseService


class ManagerService(BaseService):
    """Manager-only endpoints. The server enforces the role; callers check is_manager() first."""

    def get_dashboard(self) -> DashboardOverview:
        return self._parse(DashboardOverview, self._api.get("/manager/dashboard") or {})

    def get_team_members(self) -> List[User]:
        return self._parse_list(User, self._api.get("/manager/team"))

    def get_team_attendance(self, day: date) -> List[DailyAttendanceRecord]:
        data = self._api.get("/manager/team/attendance", params={"date": day.isoformat()})
        return self._parse_list(DailyAttendanceRecord, data)

    def get_alerts(self, limit: Optional[int] = None, unread_only: bool = False) -> List[Alert]:
        endpoint = "/manager/alerts/unread" if unread_only else "/manager/alerts"
        params = {"limit": limit} if limit else None
        return self._parse_list(Alert, self._api.get(endpoint, params=params))

    def mark_alert_as_read(self, alert_id: str) -> Optional[Alert]:
        data = self._api.patch(f"/manager/alerts/{alert_id}/read")
        return self._parse(Alert, data) if data else None

    def mark_all_alerts_as_read(self) -> None:
        self._api.post("/manager/alerts/mark-all-read")

    def get_monthly_report(self, year: int, month: int, user_id: Optional[str] = None) -> List[MonthlyReport]:
        if not 1 <= month <= 12:
            raise ValidationError("Invalid month", errors={"month": "must be between 1 and 12"})
        params = {"userId": user_id} if user_id else None
        data = self._api.get(f"/manager/reports/monthly/{year}/{month}", params=params)
        return self._parse_list(MonthlyReport, data)

    def export_team_report(
        self,
        start_date: date,
        end_date: date,
        format: Union[ExportFormat, str] = ExportFormat.CSV,
    ) -> ExportResult:
        if start_date > end_date:
            raise ValidationError(
                "Invalid export range", errors={"endDate": "End date must be on or after the start date"}
            )
        payload = {
            "startDate": start_date.isoformat(),
            "endDate": end_date.isoformat(),
            "format": ExportFormat(format).value,
        }
        return self._parse(ExportResult, self._api.post("/manager/export", json=payload))
