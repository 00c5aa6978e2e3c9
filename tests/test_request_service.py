from datetime import date, datetime

import pytest

from attendance_client.core.exceptions import BusinessRuleError, ValidationError
from attendance_client.schemas.requests import LeaveRequest, RequestStatus, TimeModificationRequest
from attendance_client.services.request_service import RequestKind, can_decide, can_withdraw


class RequestBackend:
    """Minimal in-memory /requests/* server wired into FakeHttp."""

    def __init__(self, http, kind="leave"):
        self.items = {}
        self.path = f"/requests/{kind}"
        self._http = http
        http.add("GET", self.path, self.list)
        http.add("POST", self.path, self.create)

    def seed(self, **fields):
        item = {
            "id": fields.pop("id"),
            "userId": "u1",
            "type": "ANNUAL",
            "startDate": "2026-10-20",
            "endDate": "2026-10-21",
            "reason": "Family trip",
            "status": "PENDING",
        }
        item.update(fields)
        self.items[item["id"]] = item
        self._route(item["id"])
        return item

    def _route(self, request_id):
        self._http.add("PATCH", f"{self.path}/{request_id}", lambda **kw: self.patch(request_id, **kw))
        self._http.add("DELETE", f"{self.path}/{request_id}", lambda **kw: self.delete(request_id))

    def list(self, json, params, headers):
        items = list(self.items.values())
        if params and "status" in params:
            items = [i for i in items if i["status"] == params["status"]]
        return 200, {"success": True, "data": items}

    def create(self, json, params, headers):
        item = dict(json, id=f"lr{len(self.items) + 1}", userId="u1", status="PENDING")
        self.items[item["id"]] = item
        self._route(item["id"])
        return 201, {"success": True, "data": item}

    def patch(self, request_id, json, params, headers):
        item = self.items[request_id]
        if item["status"] != "PENDING":
            return 409, {"success": False, "error": "Request already processed"}
        item["status"] = json["status"]
        if json["status"] == "REJECTED":
            item["rejectionReason"] = json.get("comment")
        return 200, {"success": True, "data": item}

    def delete(self, request_id):
        self.items.pop(request_id)
        return 200, {"success": True, "data": None}


@pytest.fixture
def backend(http):
    return RequestBackend(http)


@pytest.fixture
def service(ctx):
    return ctx.request_service


def test_approve_removes_from_pending_list(service, backend, manager):
    backend.seed(id="lr1")
    backend.seed(id="lr2")
    lr1 = next(r for r in service.get_leave_requests("PENDING") if r.id == "lr1")

    service.approve(lr1, manager)

    pending = service.get_leave_requests(RequestStatus.PENDING)
    assert [r.id for r in pending] == ["lr2"]
    everything = {r.id: r.status for r in service.get_leave_requests()}
    assert everything["lr1"] == RequestStatus.APPROVED


def test_status_filter_is_sent_upper_case(service, backend, http):
    service.get_leave_requests("pending")

    assert http.last()["params"] == {"status": "PENDING"}


def test_withdraw_pending_request(service, backend, employee):
    backend.seed(id="lr1")
    request = service.get_leave_requests()[0]

    assert service.withdraw(request, employee) is True
    assert service.get_leave_requests() == []


def test_withdraw_refused_for_decided_request(service, backend, employee, http):
    backend.seed(id="lr1", status="APPROVED")
    request = service.get_leave_requests()[0]
    calls_before = len(http.calls)

    with pytest.raises(BusinessRuleError):
        service.withdraw(request, employee)

    assert len(http.calls) == calls_before
    assert "lr1" in backend.items


def test_withdraw_refused_for_someone_elses_request(service, backend, manager):
    backend.seed(id="lr1")
    request = service.get_leave_requests()[0]

    assert not can_withdraw(request, manager)
    with pytest.raises(BusinessRuleError):
        service.withdraw(request, manager)


def test_control_predicates(employee, manager):
    pending = LeaveRequest(
        id="lr1", user_id="u1", type="annual", start_date=date(2026, 10, 20),
        end_date=date(2026, 10, 20), reason="x",
    )
    approved = pending.model_copy(update={"status": RequestStatus.APPROVED})

    assert can_withdraw(pending, employee)
    assert not can_withdraw(approved, employee)
    assert can_decide(pending, manager)
    assert not can_decide(pending, employee)
    assert not can_decide(approved, manager)
    assert not can_withdraw(pending, None)


def test_employee_cannot_decide(service, backend, employee, http):
    backend.seed(id="lr1")
    request = service.get_leave_requests()[0]

    with pytest.raises(BusinessRuleError) as exc:
        service.approve(request, employee)

    assert exc.value.status_code == 403
    assert http.last()["method"] == "GET"


def test_decided_request_cannot_be_decided_again(service, backend, manager):
    backend.seed(id="lr1", status="REJECTED")
    request = service.get_leave_requests()[0]

    with pytest.raises(BusinessRuleError, match="already REJECTED"):
        service.approve(request, manager)


def test_reject_requires_comment(service, backend, manager):
    backend.seed(id="lr1")
    request = service.get_leave_requests()[0]

    with pytest.raises(ValidationError) as exc:
        service.reject(request, manager, "  ")

    assert "comment" in exc.value.errors
    assert backend.items["lr1"]["status"] == "PENDING"


def test_reject_with_comment(service, backend, manager, http):
    backend.seed(id="lr1")
    request = service.get_leave_requests()[0]

    result = service.reject(request, manager, "Busy week")

    assert http.last()["json"] == {"status": "REJECTED", "comment": "Busy week"}
    assert result.status == RequestStatus.REJECTED
    assert result.rejection_reason == "Busy week"


def test_pending_is_not_a_decision(service, backend, manager):
    backend.seed(id="lr1")
    request = service.get_leave_requests()[0]

    with pytest.raises(ValidationError):
        service.decide(request, RequestStatus.PENDING, manager)


def test_server_conflict_surfaces_as_business_error(service, backend, manager):
    backend.seed(id="lr1")
    stale = service.get_leave_requests()[0]
    backend.items["lr1"]["status"] = "APPROVED"

    with pytest.raises(BusinessRuleError, match="already processed"):
        service.approve(stale, manager)


def test_bulk_decide_reports_failures(service, backend, manager):
    backend.seed(id="lr1")
    backend.seed(id="lr2")
    requests = service.get_leave_requests()
    backend.items["lr2"]["status"] = "APPROVED"

    failures = service.bulk_decide(requests, "approved", manager)

    assert list(failures) == ["lr2"]
    assert backend.items["lr1"]["status"] == "APPROVED"


def test_create_leave_request(service, backend, http):
    created = service.create_leave_request("sick", date(2026, 10, 22), date(2026, 10, 23), " Flu ")

    assert http.last()["json"] == {
        "type": "SICK",
        "startDate": "2026-10-22",
        "endDate": "2026-10-23",
        "reason": "Flu",
    }
    assert created.status == RequestStatus.PENDING
    assert created.duration_days == 2


def test_create_leave_request_validation(service, backend, http):
    with pytest.raises(ValidationError) as exc:
        service.create_leave_request("holiday", date(2026, 10, 23), date(2026, 10, 22), "")

    assert set(exc.value.errors) == {"reason", "endDate", "type"}
    assert http.calls == []


def test_time_modification_round_trip(ctx, http, employee):
    backend = RequestBackend(http, kind="time-modification")
    service = ctx.request_service

    def create(json, params, headers):
        item = dict(json, id="tm1", userId="u1", status="PENDING")
        backend.items["tm1"] = item
        backend._route("tm1")
        return 201, {"success": True, "data": item}

    http.add("POST", "/requests/time-modification", create)

    request = service.create_time_modification(
        date(2026, 10, 1), "Forgot to clock in", requested_clock_in=datetime(2026, 10, 1, 9, 0)
    )

    assert isinstance(request, TimeModificationRequest)
    assert http.last()["json"] == {
        "date": "2026-10-01",
        "requestedClockIn": "2026-10-01T09:00:00",
        "reason": "Forgot to clock in",
    }
    assert RequestKind.of(request) is RequestKind.TIME_MODIFICATION

    service.withdraw(request, employee)
    assert service.get_time_modification_requests() == []


def test_time_modification_validation(service, http):
    with pytest.raises(ValidationError) as exc:
        service.create_time_modification(
            date(2026, 10, 1),
            "Fix",
            requested_clock_in=datetime(2026, 10, 1, 18, 0),
            requested_clock_out=datetime(2026, 10, 1, 9, 0),
        )

    assert "requestedClockOut" in exc.value.errors
    assert http.calls == []


def test_time_modification_requires_a_time(service, http):
    with pytest.raises(ValidationError) as exc:
        service.create_time_modification(date(2026, 10, 1), "Fix")

    assert "requestedClockIn" in exc.value.errors


def test_request_date_alias_accepted():
    request = TimeModificationRequest.model_validate({
        "id": "tm1",
        "userId": "u1",
        "requestDate": "2026-10-01",
        "reason": "x",
        "status": "approved",
    })

    assert request.date == date(2026, 10, 1)
    assert request.status == RequestStatus.APPROVED


def test_pending_queue_covers_both_kinds(service, backend, http):
    backend.seed(id="lr1")
    backend.seed(id="lr2", status="APPROVED")
    http.ok("GET", "/requests/time-modification", [])

    queue = service.pending_queue()

    assert [r.id for r in queue["leave"]] == ["lr1"]
    assert queue["time-modification"] == []
