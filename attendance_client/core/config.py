import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

# Try to load .env from streamlit_app directory first, then fallback to project root
project_root = Path(__file__).resolve().parent.parent.parent
streamlit_app_env = project_root / "streamlit_app" / ".env"
project_root_env = project_root / ".env"

if streamlit_app_env.exists():
    load_dotenv(dotenv_path=streamlit_app_env)
elif project_root_env.exists():
    load_dotenv(dotenv_path=project_root_env)
else:
    load_dotenv()

DEFAULT_API_BASE_URL = "http://localhost:3001/api"
DEFAULT_TIMEOUT_SECONDS = 10.0
DEFAULT_TIMEZONE = "Asia/Tokyo"

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


@dataclass(frozen=True)
class Settings:
    api_base_url: str = DEFAULT_API_BASE_URL
    timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS
    # only for single-user local runs; unset keeps each session in memory
    session_store_path: Optional[Path] = None
    timezone: str = DEFAULT_TIMEZONE
    log_level: str = "INFO"


def get_settings() -> Settings:
    """
    Build settings from the environment.
    Read on every call so tests can monkeypatch os.environ.
    """
    store_path = os.getenv("SESSION_STORE_PATH")
    return Settings(
        api_base_url=os.getenv("API_BASE_URL", DEFAULT_API_BASE_URL).rstrip("/"),
        timeout_seconds=float(os.getenv("API_TIMEOUT_SECONDS", DEFAULT_TIMEOUT_SECONDS)),
        session_store_path=Path(store_path).expanduser() if store_path else None,
        timezone=os.getenv("APP_TIMEZONE", DEFAULT_TIMEZONE),
        log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
    )


def configure_logging(settings: Optional[Settings] = None) -> None:
    settings = settings or get_settings()
    logging.basicConfig(level=settings.log_level, format=LOG_FORMAT)
