import logging
from datetime import date, datetime
from enum import Enum
from typing import Dict, Iterable, List, Optional, Union

from ..core.exceptions import ApiError, BusinessRuleError, ValidationError
from ..schemas.requests import (
    LeaveRequest,
    LeaveRequestCreate,
    LeaveType,
    RequestDecision,
    RequestStatus,
    TimeModificationRequest,
    TimeModificationRequestCreate,
)
from ..schemas.user import User, UserRole
from .base import BaseService

logger = logging.getLogger(__name__)

AnyRequest = Union[LeaveRequest, TimeModificationRequest]


class RequestKind(str, Enum):
    LEAVE = "leave"
    TIME_MODIFICATION = "time-modification"

    @property
    def path(self) -> str:
        return f"/requests/{self.value}"

    @property
    def model(self):
        return LeaveRequest if self is RequestKind.LEAVE else TimeModificationRequest

    @classmethod
    def of(cls, request: AnyRequest) -> "RequestKind":
        return cls.LEAVE if isinstance(request, LeaveRequest) else cls.TIME_MODIFICATION


# ---------------------------------------------------------
# CONTROL PREDICATES (what the UI may offer)
# ---------------------------------------------------------
def can_withdraw(request: AnyRequest, user: Optional[User]) -> bool:
    return (
        user is not None
        and request.user_id == user.id
        and request.status == RequestStatus.PENDING
    )


def can_decide(request: AnyRequest, user: Optional[User]) -> bool:
    return (
        user is not None
        and user.role == UserRole.MANAGER
        and request.status == RequestStatus.PENDING
    )


def _coerce_status(status: Union[RequestStatus, str]) -> RequestStatus:
    return RequestStatus(str(getattr(status, "value", status)).upper())


def _status_param(status: Optional[Union[RequestStatus, str]]) -> Optional[dict]:
    if status is None:
        return None
    return {"status": _coerce_status(status).value}


class RequestService(BaseService):
    # ---------------------------------------------------------
    # LEAVE
    # ---------------------------------------------------------
    def create_leave_request(
        self,
        type: Union[LeaveType, str],
        start_date: date,
        end_date: date,
        reason: str,
    ) -> LeaveRequest:
        errors = {}
        if not reason or not reason.strip():
            errors["reason"] = "Reason is required"
        if start_date is None:
            errors["startDate"] = "Start date is required"
        if end_date is None:
            errors["endDate"] = "End date is required"
        if start_date and end_date and start_date > end_date:
            errors["endDate"] = "End date must be on or after the start date"
        try:
            leave_type = LeaveType(str(getattr(type, "value", type)).upper())
        except ValueError:
            errors["type"] = f"Unknown leave type: {type}"
        if errors:
            raise ValidationError("Leave request is invalid", errors=errors)

        payload = LeaveRequestCreate(
            type=leave_type, start_date=start_date, end_date=end_date, reason=reason.strip()
        )
        data = self._api.post(RequestKind.LEAVE.path, json=payload.to_payload())
        return self._parse(LeaveRequest, data)

    def get_leave_requests(self, status=None) -> List[LeaveRequest]:
        return self._list(RequestKind.LEAVE, status)

    def update_leave_request_status(self, request_id: str, status, comment: Optional[str] = None) -> LeaveRequest:
        return self._update_status(RequestKind.LEAVE, request_id, status, comment)

    def delete_leave_request(self, request_id: str) -> None:
        self._api.delete(f"{RequestKind.LEAVE.path}/{request_id}")

    # ---------------------------------------------------------
    # TIME MODIFICATION
    # ---------------------------------------------------------
    def create_time_modification(
        self,
        date: date,
        reason: str,
        requested_clock_in: Optional[datetime] = None,
        requested_clock_out: Optional[datetime] = None,
    ) -> TimeModificationRequest:
        errors = {}
        if date is None:
            errors["date"] = "Date is required"
        if not reason or not reason.strip():
            errors["reason"] = "Reason is required"
        if requested_clock_in is None and requested_clock_out is None:
            errors["requestedClockIn"] = "Enter a corrected clock-in or clock-out time"
        if requested_clock_in and requested_clock_out and requested_clock_out <= requested_clock_in:
            errors["requestedClockOut"] = "Clock-out must be after clock-in"
        if errors:
            raise ValidationError("Time correction request is invalid", errors=errors)

        payload = TimeModificationRequestCreate(
            date=date,
            requested_clock_in=requested_clock_in,
            requested_clock_out=requested_clock_out,
            reason=reason.strip(),
        )
        data = self._api.post(RequestKind.TIME_MODIFICATION.path, json=payload.to_payload())
        return self._parse(TimeModificationRequest, data)

    def get_time_modification_requests(self, status=None) -> List[TimeModificationRequest]:
        return self._list(RequestKind.TIME_MODIFICATION, status)

    def update_time_modification_status(
        self, request_id: str, status, comment: Optional[str] = None
    ) -> TimeModificationRequest:
        return self._update_status(RequestKind.TIME_MODIFICATION, request_id, status, comment)

    def delete_time_modification_request(self, request_id: str) -> None:
        self._api.delete(f"{RequestKind.TIME_MODIFICATION.path}/{request_id}")

    # ---------------------------------------------------------
    # LIFECYCLE (guards shared by both kinds)
    # ---------------------------------------------------------
    def decide(
        self,
        request: AnyRequest,
        status: RequestStatus,
        user: Optional[User],
        comment: Optional[str] = None,
    ) -> AnyRequest:
        """Approve or reject a PENDING request as a manager."""
        status = _coerce_status(status)
        if status is RequestStatus.PENDING:
            raise ValidationError("A decision must be APPROVED or REJECTED", errors={"status": "invalid"})
        if user is None or user.role != UserRole.MANAGER:
            raise BusinessRuleError("Only managers can approve or reject requests", status_code=403)
        if request.status.is_terminal:
            raise BusinessRuleError(f"Request is already {request.status.value}")
        if status is RequestStatus.REJECTED and not (comment and comment.strip()):
            raise ValidationError("A reason is required to reject a request", errors={"comment": "required"})

        return self._update_status(RequestKind.of(request), request.id, status, comment)

    def approve(self, request: AnyRequest, user: Optional[User], comment: Optional[str] = None):
        return self.decide(request, RequestStatus.APPROVED, user, comment)

    def reject(self, request: AnyRequest, user: Optional[User], comment: str):
        return self.decide(request, RequestStatus.REJECTED, user, comment)

    def withdraw(self, request: AnyRequest, user: Optional[User]) -> bool:
        """Delete one of the user's own requests while it is still PENDING."""
        if not can_withdraw(request, user):
            raise BusinessRuleError("Only your own pending requests can be withdrawn")
        self._api.delete(f"{RequestKind.of(request).path}/{request.id}")
        return True

    def bulk_decide(
        self,
        requests: Iterable[AnyRequest],
        status: RequestStatus,
        user: Optional[User],
        comment: Optional[str] = None,
    ) -> Dict[str, str]:
        """Decide several requests. Returns {request_id: error message} for the ones that failed."""
        status = _coerce_status(status)
        failures = {}
        for request in requests:
            try:
                self.decide(request, status, user, comment)
            except ApiError as e:
                logger.warning("Could not %s request %s: %s", status.value.lower(), request.id, e.message)
                failures[request.id] = e.message
        return failures

    def pending_queue(self) -> Dict[str, List[AnyRequest]]:
        """Manager approval queue, both kinds, PENDING only."""
        return {
            RequestKind.LEAVE.value: self.get_leave_requests(RequestStatus.PENDING),
            RequestKind.TIME_MODIFICATION.value: self.get_time_modification_requests(RequestStatus.PENDING),
        }

    def _list(self, kind: RequestKind, status) -> list:
        data = self._api.get(kind.path, params=_status_param(status))
        return self._parse_list(kind.model, data)

    def _update_status(self, kind: RequestKind, request_id: str, status, comment: Optional[str]):
        decision = RequestDecision(status=_coerce_status(status), comment=comment or None)
        data = self._api.patch(f"{kind.path}/{request_id}", json=decision.to_payload())
        return self._parse(kind.model, data)
