import logging

from supabase import Client, create_client

from shared.config import Settings

logger = logging.getLogger(__name__)


class BackendError(Exception):
    """A hosted backend call failed; `message` is the backend's own text."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


##################################################################
# CLIENT CONSTRUCTION — one client per browser session, never global
##################################################################

def create_backend_client(settings: Settings) -> Client:
    """Build the Supabase client the entry point injects everywhere else."""
    logger.info("Creating backend client for %s", settings.supabase_url)
    return create_client(settings.supabase_url, settings.supabase_anon_key)


##################################################################
# SAFE ROW NORMALIZATION LAYER
##################################################################

def safe_row(row):
    """
    Normalize a row handed back by the client library:
    - dict → dict (copied)
    - pydantic model → model_dump()
    - anything else → {}
    """
    if isinstance(row, dict):
        return dict(row)

    if hasattr(row, "model_dump"):
        return row.model_dump()

    return {}


def safe_rows(rows):
    """Convert a response payload to a list of dict rows safely."""
    if not rows:
        return []
    if isinstance(rows, dict):
        return [dict(rows)]
    return [safe_row(r) for r in rows]


# --------------------------------------------------------------------
# call_backend() — single choke point for every network round trip
# --------------------------------------------------------------------
def error_message(exc: Exception) -> str:
    message = getattr(exc, "message", None)
    if message:
        return str(message)
    return str(exc) or exc.__class__.__name__


def call_backend(description: str, request):
    """
    Run one backend request and return its result.

    Whatever the client library raises (auth errors, PostgREST errors,
    transport errors) comes back out as BackendError carrying the
    library's message, and is mirrored to the log.
    """
    try:
        return request()
    except BackendError:
        raise
    except Exception as exc:
        message = error_message(exc)
        logger.error("%s failed: %s", description, message)
        raise BackendError(message) from exc
