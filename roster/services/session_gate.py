import logging
from contextlib import contextmanager
from typing import Optional

from shared.backend import BackendError
from roster.models import AuthSession
from roster.services.auth_service import AuthGateway

logger = logging.getLogger(__name__)

CREDENTIAL_VIEW = "credentials"
ROSTER_VIEW = "roster"


def select_view(session: Optional[AuthSession]) -> str:
    return ROSTER_VIEW if session is not None else CREDENTIAL_VIEW


class SessionGate:
    """Holds the current session and decides which view is shown."""

    def __init__(self, auth: AuthGateway):
        self.auth = auth
        self.session: Optional[AuthSession] = None
        self.last_event: Optional[str] = None
        self.mounted = False
        self._listeners = []
        self._unsubscribe = None

    def mount(self) -> Optional[AuthSession]:
        """Resolve the current session; a failure means 'signed out'."""
        try:
            self.session = self.auth.get_session()
        except BackendError as exc:
            logger.warning("Could not restore session: %s", exc.message)
            self.session = None
        self.mounted = True
        return self.session

    def add_listener(self, listener) -> None:
        """Extra callbacks run after the gate itself has updated."""
        self._listeners.append(listener)

    def handle_event(self, event: str, session: Optional[AuthSession]) -> None:
        logger.info("Auth event %s (session %s)", event, "present" if session else "absent")
        self.session = session
        self.last_event = event
        for listener in self._listeners:
            listener(event, session)

    def open(self) -> None:
        """
        Subscribe for the lifetime of the owning service bundle, so events
        fired between reruns (background refresh, expiry) still land here.
        """
        if self._unsubscribe is None:
            self._unsubscribe = self.auth.subscribe(self.handle_event)

    def close(self) -> None:
        if self._unsubscribe is not None:
            unsubscribe, self._unsubscribe = self._unsubscribe, None
            unsubscribe()

    @property
    def is_open(self) -> bool:
        return self._unsubscribe is not None

    @contextmanager
    def listening(self):
        """
        Guarantee a live subscription for the duration of the block.

        With a lifetime subscription (see open) this adds nothing. Otherwise
        the session is resolved again, since events between blocks were not
        observed, and the block-scoped subscription is always deregistered
        on the way out.
        """
        if self.is_open:
            if not self.mounted:
                self.mount()
            yield self
            return

        self.mount()
        unsubscribe = self.auth.subscribe(self.handle_event)
        try:
            yield self
        finally:
            unsubscribe()

    @property
    def view(self) -> str:
        return select_view(self.session)

    @property
    def user_id(self) -> Optional[str]:
        return self.session.user.id if self.session else None
