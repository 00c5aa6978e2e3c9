import logging
import re
from typing import Any, Callable, Dict, Optional

import requests
from pydantic import ValidationError as SchemaError

from .core.config import Settings, get_settings
from .core.exceptions import (
    ApiError,
    AuthenticationError,
    BusinessRuleError,
    NetworkError,
    ValidationError,
)
from .schemas.envelope import ApiResponse

logger = logging.getLogger(__name__)

TokenProvider = Callable[[], Optional[str]]

# "Invalid input: startDate=must not be null, reason=must not be blank"
_FIELD_ERROR = re.compile(r"(\w+)=([^,]+)")


def api_request(
    method,
    endpoint,
    token=None,
    json=None,
    params=None,
    *,
    base_url: str,
    timeout: float,
    http=requests,
):
    """Send one HTTP request. Transport failures become NetworkError; status codes are left to the caller."""
    headers = {"Content-Type": "application/json"}

    if token:
        headers["Authorization"] = f"Bearer {token}"

    try:
        return http.request(
            method=method,
            url=f"{base_url}{endpoint}",
            headers=headers,
            json=json,
            params=params,
            timeout=timeout,
        )
    except requests.Timeout as e:
        logger.warning("%s %s timed out after %ss", method, endpoint, timeout)
        raise NetworkError("Request timed out") from e
    except requests.RequestException as e:
        logger.warning("%s %s failed: %s", method, endpoint, e)
        raise NetworkError(f"Connection error: {e}") from e


def parse_field_errors(message: str) -> Dict[str, str]:
    if ":" not in message:
        return {}
    _, _, details = message.partition(":")
    return {field: text.strip() for field, text in _FIELD_ERROR.findall(details)}


class ApiClient:
    """
    Wraps every call to the attendance API.

    Attaches the bearer token from the session, unwraps the
    {success, data, error, message} envelope and turns failures into
    ApiError subclasses. A 401 from any endpoint calls on_unauthorized
    before AuthenticationError is raised, so the session is cleared no
    matter which screen issued the call.
    """

    def __init__(
        self,
        token_provider: TokenProvider,
        on_unauthorized: Optional[Callable[[], None]] = None,
        settings: Optional[Settings] = None,
        http=None,
    ):
        settings = settings or get_settings()
        self.base_url = settings.api_base_url
        self.timeout = settings.timeout_seconds
        self._token_provider = token_provider
        self._on_unauthorized = on_unauthorized
        self._http = http or requests.Session()

    def request(self, method: str, endpoint: str, json=None, params=None) -> Any:
        response = api_request(
            method,
            endpoint,
            token=self._token_provider(),
            json=json,
            params=params,
            base_url=self.base_url,
            timeout=self.timeout,
            http=self._http,
        )
        envelope = self._parse_envelope(response)

        if response.status_code == 401:
            logger.info("%s %s returned 401, clearing session", method, endpoint)
            if self._on_unauthorized:
                self._on_unauthorized()
            raise AuthenticationError(
                self._error_text(envelope, "Authentication failed"), status_code=401
            )

        if response.status_code >= 400:
            raise self._error_for_status(response.status_code, envelope, response.text)

        if envelope is None:
            raise ApiError("Malformed response from server", status_code=response.status_code)

        if not envelope.success:
            raise BusinessRuleError(
                self._error_text(envelope, "Request was rejected"),
                status_code=response.status_code,
            )

        return envelope.data

    def get(self, endpoint: str, params=None) -> Any:
        return self.request("GET", endpoint, params=params)

    def post(self, endpoint: str, json=None, params=None) -> Any:
        return self.request("POST", endpoint, json=json, params=params)

    def put(self, endpoint: str, json=None) -> Any:
        return self.request("PUT", endpoint, json=json)

    def patch(self, endpoint: str, json=None) -> Any:
        return self.request("PATCH", endpoint, json=json)

    def delete(self, endpoint: str) -> Any:
        return self.request("DELETE", endpoint)

    @staticmethod
    def _parse_envelope(response) -> Optional[ApiResponse]:
        try:
            body = response.json()
        except ValueError:
            return None
        if not isinstance(body, dict) or "success" not in body:
            return None
        try:
            return ApiResponse.model_validate(body)
        except SchemaError as e:
            logger.warning("Unexpected response envelope: %s", e)
            return None

    @staticmethod
    def _error_text(envelope: Optional[ApiResponse], default: str) -> str:
        if envelope is None:
            return default
        return envelope.error or envelope.message or default

    def _error_for_status(self, status_code: int, envelope, raw_text: str) -> ApiError:
        message = self._error_text(envelope, raw_text or f"HTTP {status_code}")

        if status_code in (400, 422):
            return ValidationError(message, errors=parse_field_errors(message), status_code=status_code)
        if status_code in (403, 404, 409):
            return BusinessRuleError(message, status_code=status_code)
        return ApiError(message, status_code=status_code)
