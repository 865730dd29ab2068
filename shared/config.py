import logging
import os
import pathlib
from dataclasses import dataclass

from dotenv import load_dotenv

# Force-load the .env from repo root
ENV_PATH = pathlib.Path(__file__).resolve().parents[1] / ".env"

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"

logger = logging.getLogger(__name__)

_logging_configured = False


@dataclass(frozen=True)
class Settings:
    supabase_url: str
    supabase_anon_key: str
    log_level: str = "INFO"
    page_title: str = "Student Roster"


def _require(name: str) -> str:
    value = (os.getenv(name) or "").strip()
    if not value:
        raise RuntimeError(f"{name} environment variable not set.")
    return value


def load_settings(env_path=ENV_PATH) -> Settings:
    """
    Read backend connection details from the environment.

    The URL and anon key are public client identifiers, not credentials;
    row-level security on the backend decides what a session may touch.
    """
    load_dotenv(env_path)

    return Settings(
        supabase_url=_require("SUPABASE_URL"),
        supabase_anon_key=_require("SUPABASE_ANON_KEY"),
        log_level=(os.getenv("ROSTER_LOG_LEVEL") or "INFO").strip().upper(),
        page_title=(os.getenv("ROSTER_PAGE_TITLE") or "Student Roster").strip(),
    )


def configure_logging(level: str = "INFO") -> None:
    """Configure the root logger once; Streamlit reruns call this every time."""
    global _logging_configured
    if _logging_configured:
        return

    logging.basicConfig(level=level, format=LOG_FORMAT)
    # httpx logs every request at INFO
    logging.getLogger("httpx").setLevel(logging.WARNING)
    _logging_configured = True
    logger.debug("Logging configured at %s", level)
