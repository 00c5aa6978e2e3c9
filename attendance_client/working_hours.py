import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Iterable, Optional

from .schemas.time_record import DailyAttendanceRecord

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class WorkingHours:
    minutes: int
    clamped: bool = False

    @property
    def display(self) -> str:
        hours, mins = divmod(self.minutes, 60)
        return f"{hours}:{mins:02d}"

    @property
    def decimal_hours(self) -> float:
        return self.minutes / 60


def _whole_minutes(start: datetime, end: datetime) -> int:
    # floor, also for negative spans
    return int((end - start).total_seconds() // 60)


def _now_for(reference: datetime) -> datetime:
    if reference.tzinfo is not None:
        return datetime.now(reference.tzinfo)
    return datetime.now()


def compute_working_hours(
    record: Optional[DailyAttendanceRecord], now: Optional[datetime] = None
) -> WorkingHours:
    """
    Time worked on one day.

    An open shift counts up to `now`. A break is only subtracted once it
    has both a start and an end. Negative results (clock-out before
    clock-in, or a break longer than the shift) are clamped to zero and
    flagged.
    """
    if record is None or record.clock_in is None:
        return WorkingHours(0)

    end = record.clock_out or now or _now_for(record.clock_in)
    minutes = _whole_minutes(record.clock_in, end)

    if record.break_start and record.break_end:
        minutes -= _whole_minutes(record.break_start, record.break_end)

    if minutes < 0:
        logger.warning(
            "Negative working time (%d min) for record %s on %s, clamping to zero",
            minutes,
            record.id,
            record.date,
        )
        return WorkingHours(0, clamped=True)

    return WorkingHours(minutes)


def format_working_hours(
    record: Optional[DailyAttendanceRecord], now: Optional[datetime] = None
) -> str:
    return compute_working_hours(record, now).display


def total_hours(records: Iterable[DailyAttendanceRecord], now: Optional[datetime] = None) -> float:
    """Decimal hours over a set of records, e.g. a month of history."""
    return sum(compute_working_hours(r, now).minutes for r in records) / 60
