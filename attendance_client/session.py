import json
import logging
from pathlib import Path
from typing import Callable, List, MutableMapping, Optional, Protocol

from pydantic import ValidationError as SchemaError

from .core.exceptions import ApiError
from .schemas.user import User, UserRole

logger = logging.getLogger(__name__)


class SessionStore(Protocol):
    def load(self) -> Optional[dict]: ...

    def save(self, data: dict) -> None: ...

    def clear(self) -> None: ...


class MemorySessionStore:
    def __init__(self, data: Optional[dict] = None):
        self.data = data

    def load(self) -> Optional[dict]:
        return self.data

    def save(self, data: dict) -> None:
        self.data = data

    def clear(self) -> None:
        self.data = None


class MappingSessionStore:
    """Stores the session under one key of a mutable mapping such as st.session_state."""

    def __init__(self, mapping: MutableMapping, key: str = "auth_session"):
        self._mapping = mapping
        self._key = key

    def load(self) -> Optional[dict]:
        return self._mapping.get(self._key)

    def save(self, data: dict) -> None:
        self._mapping[self._key] = data

    def clear(self) -> None:
        self._mapping.pop(self._key, None)


class FileSessionStore:
    """
    Keeps the session as a JSON file so a restart does not require a new login.
    The file is shared by everything running as the same OS user, so this
    is for single-user local runs only.
    """

    def __init__(self, path: Path):
        self.path = Path(path)

    def load(self) -> Optional[dict]:
        if not self.path.exists():
            return None
        try:
            return json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as e:
            logger.warning("Ignoring unreadable session file %s: %s", self.path, e)
            return None

    def save(self, data: dict) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(json.dumps(data), encoding="utf-8")

    def clear(self) -> None:
        self.path.unlink(missing_ok=True)


class SessionState:
    """
    Who is logged in.

    authenticated is derived from user and token, so the two can never
    disagree. Every change is written through to the store; logout also
    notifies listeners (the UI uses one to send the user back to login).
    """

    def __init__(self, store: Optional[SessionStore] = None):
        self._store = store or MemorySessionStore()
        self.user: Optional[User] = None
        self.token: Optional[str] = None
        self.refresh_token: Optional[str] = None
        self._logout_listeners: List[Callable[[], None]] = []

    @property
    def authenticated(self) -> bool:
        return self.user is not None and self.token is not None

    def login(self, user: User, token: str, refresh_token: Optional[str] = None) -> None:
        self.user = user
        self.token = token
        self.refresh_token = refresh_token
        self._persist()
        logger.info("Logged in as %s (%s)", user.employee_id, user.role.value)

    def logout(self) -> None:
        was_authenticated = self.authenticated
        self.user = None
        self.token = None
        self.refresh_token = None
        self._store.clear()
        if was_authenticated:
            logger.info("Session cleared")
        for listener in list(self._logout_listeners):
            listener()

    def is_manager(self) -> bool:
        return self.user is not None and self.user.role == UserRole.MANAGER

    def update_user(self, **fields) -> None:
        if self.user is None:
            return
        self.user = self.user.model_copy(update=fields)
        self._persist()

    def update_tokens(self, token: str, refresh_token: Optional[str] = None) -> None:
        self.token = token
        if refresh_token:
            self.refresh_token = refresh_token
        self._persist()

    def add_logout_listener(self, listener: Callable[[], None]) -> None:
        self._logout_listeners.append(listener)

    def snapshot(self) -> dict:
        return {
            "user": self.user,
            "token": self.token,
            "authenticated": self.authenticated,
        }

    def restore(self) -> bool:
        """Load the persisted session. The result must still be revalidated before use."""
        data = self._store.load()
        if not data or not data.get("token") or not data.get("user"):
            return False
        try:
            self.user = User.model_validate(data["user"])
        except SchemaError as e:
            logger.warning("Discarding persisted session with invalid user: %s", e)
            self._store.clear()
            return False
        self.token = data["token"]
        self.refresh_token = data.get("refreshToken")
        return True

    def revalidate(self, auth_service) -> bool:
        """
        Confirm the restored token against the profile endpoint.
        Any failure clears the session exactly like logout().
        """
        if not self.authenticated:
            return False
        try:
            profile = auth_service.get_profile()
        except ApiError as e:
            logger.info("Persisted session rejected: %s", e.message)
            self.logout()
            return False
        self.login(profile, self.token, self.refresh_token)
        return True

    def _persist(self) -> None:
        if not self.authenticated:
            return
        data = {
            "user": self.user.model_dump(by_alias=True, mode="json"),
            "token": self.token,
            "authenticated": True,
        }
        if self.refresh_token:
            data["refreshToken"] = self.refresh_token
        self._store.save(data)
