import logging
from typing import Optional

from ..core.exceptions import ApiError, ValidationError
from ..schemas.user import LoginRequest, LoginResult, User
from ..session import SessionState
from .base import BaseService

logger = logging.getLogger(__name__)


class AuthService(BaseService):
    def login(self, employee_id: str, password: str) -> LoginResult:
        errors = {}
        if not employee_id or not employee_id.strip():
            errors["employeeId"] = "Employee ID is required"
        if not password:
            errors["password"] = "Password is required"
        if errors:
            raise ValidationError("Please enter both employee ID and password", errors=errors)

        payload = LoginRequest(employee_id=employee_id.strip(), password=password)
        data = self._api.post("/auth/login", json=payload.to_payload())
        return self._parse(LoginResult, data)

    def logout(self) -> None:
        self._api.post("/auth/logout")

    def refresh_token(self, refresh_token: str) -> LoginResult:
        data = self._api.post("/auth/refresh", json={"refreshToken": refresh_token})
        return self._parse(LoginResult, data)

    def get_profile(self) -> User:
        data = self._api.get("/auth/profile")
        if not data:
            raise ApiError("Profile response was empty")
        return self._parse(User, data)

    def update_profile(self, **fields) -> User:
        data = self._api.put("/users/profile", json=fields)
        return self._parse(User, data)


def sign_in(session: SessionState, auth: AuthService, employee_id: str, password: str) -> User:
    """Log in against the server and store the result in the session."""
    result = auth.login(employee_id, password)
    session.login(result.user, result.token, result.refresh_token)
    return result.user


def sign_out(session: SessionState, auth: Optional[AuthService] = None) -> None:
    """
    Clear the local session. The server is told about it when possible,
    but a failure there never keeps the user logged in.
    """
    if auth is not None and session.authenticated:
        try:
            auth.logout()
        except ApiError as e:
            logger.info("Server-side logout failed, clearing local session anyway: %s", e.message)
    session.logout()
