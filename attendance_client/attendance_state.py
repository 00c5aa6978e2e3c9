import itertools
import logging
from enum import Enum
from typing import Callable, Optional

from .core.exceptions import ClockActionInProgress
from .schemas.time_record import ClockAction, DailyAttendanceRecord

logger = logging.getLogger(__name__)


class AttendancePhase(str, Enum):
    CLOCKED_OUT = "clocked_out"
    CLOCKED_IN = "clocked_in"
    ON_BREAK = "on_break"


class DailyAttendanceState:
    """
    Today's attendance record as last reported by the server.

    Phase and the four action predicates are derived from the record on
    every call, nothing is cached. Responses carry a ticket from
    next_ticket(); one older than the last applied response is dropped so
    a slow reply can never overwrite a newer record.
    """

    def __init__(self):
        self.today_record: Optional[DailyAttendanceRecord] = None
        self.in_flight = False
        self.last_action: Optional[ClockAction] = None
        self._tickets = itertools.count(1)
        self._applied_ticket = 0

    # ---------------------------------------------------------
    # DERIVED STATE
    # ---------------------------------------------------------
    def get_current_status(self) -> AttendancePhase:
        record = self.today_record
        if record is None or record.clock_in is None:
            return AttendancePhase.CLOCKED_OUT
        if record.clock_out is not None:
            return AttendancePhase.CLOCKED_OUT
        if self._break_open(record):
            return AttendancePhase.ON_BREAK
        return AttendancePhase.CLOCKED_IN

    def can_clock_in(self) -> bool:
        record = self.today_record
        return not self.in_flight and (record is None or record.clock_in is None)

    def can_clock_out(self) -> bool:
        record = self.today_record
        return (
            not self.in_flight
            and record is not None
            and record.clock_in is not None
            and record.clock_out is None
            and not self._break_open(record)
        )

    def can_start_break(self) -> bool:
        record = self.today_record
        return (
            not self.in_flight
            and record is not None
            and record.clock_in is not None
            and record.clock_out is None
            and record.break_start is None
        )

    def can_end_break(self) -> bool:
        record = self.today_record
        return not self.in_flight and record is not None and self._break_open(record)

    @staticmethod
    def _break_open(record: DailyAttendanceRecord) -> bool:
        return (
            record.clock_out is None
            and record.break_start is not None
            and record.break_end is None
        )

    # ---------------------------------------------------------
    # UPDATES
    # ---------------------------------------------------------
    def next_ticket(self) -> int:
        return next(self._tickets)

    def apply(self, ticket: int, record: Optional[DailyAttendanceRecord]) -> bool:
        if ticket <= self._applied_ticket:
            logger.info(
                "Discarding stale attendance response (ticket %d, already applied %d)",
                ticket,
                self._applied_ticket,
            )
            return False
        self._applied_ticket = ticket
        self.today_record = record
        return True

    def perform(
        self,
        action: ClockAction,
        send: Callable[[ClockAction], DailyAttendanceRecord],
    ) -> DailyAttendanceRecord:
        """
        Run one clock action through `send`.

        The record is only replaced by the server's answer; on failure it is
        left as it was and the error propagates to the caller.
        """
        if self.in_flight:
            raise ClockActionInProgress(action.type.value)

        ticket = self.next_ticket()
        self.in_flight = True
        try:
            record = send(action)
        finally:
            self.in_flight = False

        self.last_action = action
        self.apply(ticket, record)
        return record

    def clear(self) -> None:
        self.today_record = None
        self.in_flight = False
        self.last_action = None
