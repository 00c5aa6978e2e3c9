from datetime import date, datetime

import pytest

from attendance_client.context import build_context
from attendance_client.core.config import Settings
from attendance_client.schemas.time_record import DailyAttendanceRecord
from attendance_client.schemas.user import User
from attendance_client.session import MemorySessionStore

BASE_URL = "http://api.test"


class FakeResponse:
    def __init__(self, status_code, body=None, text=None):
        self.status_code = status_code
        self._body = body
        self.text = text if text is not None else ("" if body is None else str(body))

    def json(self):
        if self._body is None:
            raise ValueError("No JSON body")
        return self._body


class FakeHttp:
    """
    Stands in for requests.Session. Routes are keyed by (METHOD, path);
    a route is a (status, body) tuple, a callable returning one, or an
    exception instance to raise.
    """

    def __init__(self):
        self.routes = {}
        self.calls = []

    def add(self, method, path, route):
        self.routes[(method.upper(), path)] = route

    def ok(self, method, path, data=None, status=200):
        self.add(method, path, (status, {"success": True, "data": data}))

    def request(self, method, url, headers=None, json=None, params=None, timeout=None):
        path = url[len(BASE_URL):]
        self.calls.append({
            "method": method,
            "path": path,
            "headers": headers or {},
            "json": json,
            "params": params,
            "timeout": timeout,
        })
        route = self.routes.get((method.upper(), path))
        if route is None:
            return FakeResponse(404, {"success": False, "error": f"No route {method} {path}"})
        if isinstance(route, Exception):
            raise route
        if callable(route):
            route = route(json=json, params=params, headers=headers or {})
        status, body = route
        return FakeResponse(status, body)

    def last(self):
        return self.calls[-1]


def envelope(data=None):
    return {"success": True, "data": data}


def user_json(**overrides):
    data = {
        "id": "u1",
        "employeeId": "E001",
        "name": "Hanako Sato",
        "department": "Sales",
        "role": "EMPLOYEE",
        "isActive": True,
    }
    data.update(overrides)
    return data


@pytest.fixture
def settings():
    return Settings(
        api_base_url=BASE_URL,
        timeout_seconds=5,
    )


@pytest.fixture
def http():
    return FakeHttp()


@pytest.fixture
def store():
    return MemorySessionStore()


@pytest.fixture
def ctx(settings, store, http):
    return build_context(settings=settings, store=store, http=http)


@pytest.fixture
def employee():
    return User.model_validate(user_json())


@pytest.fixture
def manager():
    return User.model_validate(user_json(id="m1", employeeId="M001", name="Taro Yamada", role="MANAGER"))


def make_record(**times):
    """Record for 2026-10-01; times given as 'HH:MM' strings."""
    day = date(2026, 10, 1)
    fields = {}
    for key, value in times.items():
        if value is None:
            continue
        if key in ("clock_in", "clock_out", "break_start", "break_end"):
            hh, mm = value.split(":")
            fields[key] = datetime(day.year, day.month, day.day, int(hh), int(mm))
        else:
            fields[key] = value
    return DailyAttendanceRecord(date=day, **fields)
