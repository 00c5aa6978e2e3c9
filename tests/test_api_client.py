import pytest
import requests

from attendance_client.api import ApiClient, parse_field_errors
from attendance_client.core.exceptions import (
    ApiError,
    AuthenticationError,
    BusinessRuleError,
    NetworkError,
    ValidationError,
)
from tests.conftest import BASE_URL, FakeResponse


@pytest.fixture
def client(settings, http):
    calls = []
    api = ApiClient(
        token_provider=lambda: "tok-1",
        on_unauthorized=lambda: calls.append("unauthorized"),
        settings=settings,
        http=http,
    )
    api.unauthorized_calls = calls
    return api


def test_attaches_bearer_token_and_timeout(client, http):
    http.ok("GET", "/time/today", {"date": "2026-10-01"})

    client.get("/time/today")

    call = http.last()
    assert call["headers"]["Authorization"] == "Bearer tok-1"
    assert call["timeout"] == 5


def test_no_token_no_header(settings, http):
    http.ok("GET", "/auth/profile", {})
    api = ApiClient(token_provider=lambda: None, settings=settings, http=http)

    api.get("/auth/profile")

    assert "Authorization" not in http.last()["headers"]


def test_returns_envelope_data(client, http):
    http.ok("GET", "/manager/team", [{"id": "u1"}])
    assert client.get("/manager/team") == [{"id": "u1"}]


def test_success_false_raises_even_on_200(client, http):
    http.add("POST", "/time/clock-in", (200, {"success": False, "error": "Already clocked in"}))

    with pytest.raises(BusinessRuleError, match="Already clocked in"):
        client.post("/time/clock-in", json={})


def test_401_triggers_unauthorized_hook(client, http):
    http.add("GET", "/time/today", (401, {"success": False, "error": "Token expired"}))

    with pytest.raises(AuthenticationError) as exc:
        client.get("/time/today")

    assert exc.value.status_code == 401
    assert client.unauthorized_calls == ["unauthorized"]


def test_400_becomes_validation_error_with_fields(client, http):
    http.add(
        "POST",
        "/requests/leave",
        (400, {"success": False, "error": "Invalid input: startDate=must not be null, reason=must not be blank"}),
    )

    with pytest.raises(ValidationError) as exc:
        client.post("/requests/leave", json={})

    assert exc.value.errors == {"startDate": "must not be null", "reason": "must not be blank"}


@pytest.mark.parametrize("status", [403, 404, 409])
def test_rule_violations(client, http, status):
    http.add("PATCH", "/requests/leave/lr1", (status, {"success": False, "error": "nope"}))

    with pytest.raises(BusinessRuleError) as exc:
        client.patch("/requests/leave/lr1", json={"status": "APPROVED"})

    assert exc.value.status_code == status


def test_server_error_without_envelope(client, http):
    http.add("GET", "/manager/alerts", lambda **kw: (500, None))

    with pytest.raises(ApiError) as exc:
        client.get("/manager/alerts")

    assert exc.value.status_code == 500
    assert not isinstance(exc.value, (BusinessRuleError, ValidationError))


def test_malformed_success_body(client, http):
    http.add("GET", "/time/today", (200, ["not", "an", "envelope"]))

    with pytest.raises(ApiError, match="Malformed"):
        client.get("/time/today")



def test_envelope_with_invalid_fields_stays_an_api_error(client, http):
    http.add("GET", "/time/today", (200, {"success": None, "data": {}}))

    with pytest.raises(ApiError, match="Malformed") as exc:
        client.get("/time/today")

    assert exc.value.status_code == 200


@pytest.mark.parametrize(
    "error", [requests.Timeout("slow"), requests.ConnectionError("refused")]
)
def test_transport_failures_become_network_error(client, http, error):
    http.add("GET", "/time/today", error)

    with pytest.raises(NetworkError):
        client.get("/time/today")

    assert len(http.calls) == 1


def test_query_params_are_passed(client, http):
    http.ok("GET", "/time/history", [])

    client.get("/time/history", params={"year": 2026, "month": 10})

    assert http.last()["params"] == {"year": 2026, "month": 10}
    assert BASE_URL == client.base_url


def test_parse_field_errors_without_details():
    assert parse_field_errors("Request is already APPROVED") == {}


def test_fake_response_without_body_raises_value_error():
    with pytest.raises(ValueError):
        FakeResponse(204).json()
