import logging
from typing import Optional

from shared.backend import BackendError
from roster.models import AuthSession, StatusMessage
from roster.services.auth_service import AuthGateway

logger = logging.getLogger(__name__)

# --- Form states ---
IDLE = "idle"
SUBMITTING = "submitting"
SUCCESS = "success"
ERROR = "error"

EVENT_MESSAGES = {
    "SIGNED_IN": StatusMessage("Successfully signed in!", "success"),
    "SIGNED_OUT": StatusMessage("Successfully signed out!", "success"),
}


class CredentialForm:
    """
    Email/password login and logout.

    A successful sign-in does not switch views here; the SessionGate's
    subscription receives the new session and the app re-renders.
    """

    def __init__(self, auth: AuthGateway):
        self.auth = auth
        self.loading = False
        self.state = IDLE
        self.session: Optional[AuthSession] = None
        self.message: Optional[StatusMessage] = StatusMessage("Please log in.")

    def on_auth_event(self, event: str, session: Optional[AuthSession]) -> None:
        self.session = session
        if event in EVENT_MESSAGES:
            self.message = EVENT_MESSAGES[event]

    def submit_login(self, email: str, password: str) -> bool:
        email = (email or "").strip()
        if not email or not password:
            self.message = StatusMessage("Please enter your email and password.", "warning")
            return False

        self.loading = True
        self.state = SUBMITTING
        self.message = None
        try:
            self.auth.sign_in(email, password)
        except BackendError as exc:
            self.state = ERROR
            self.message = StatusMessage(f"Error logging in: {exc.message}", "error")
            return False
        finally:
            self.loading = False

        self.state = SUCCESS
        return True

    def submit_logout(self) -> bool:
        self.loading = True
        self.state = SUBMITTING
        self.message = None
        try:
            self.auth.sign_out()
        except BackendError as exc:
            self.state = ERROR
            self.message = StatusMessage(f"Error logging out: {exc.message}", "error")
            return False
        finally:
            self.loading = False

        self.state = SUCCESS
        self.session = None
        self.message = StatusMessage("Successfully logged out.", "success")
        return True

    def reset(self) -> None:
        """Back to idle once the outcome has been shown."""
        self.state = IDLE
