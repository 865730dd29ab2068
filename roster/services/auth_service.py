import logging
from typing import Callable, Optional

from shared.backend import call_backend
from roster.models import AuthSession

logger = logging.getLogger(__name__)

SessionListener = Callable[[str, Optional[AuthSession]], None]


class AuthGateway:
    """
    Everything this app asks of the hosted auth provider.

    Password checks, token refresh and session issuance all happen on the
    provider's side; this class only forwards calls and converts the
    client library's session objects into AuthSession.
    """

    def __init__(self, client):
        self.client = client

    def get_session(self) -> Optional[AuthSession]:
        session = call_backend("Getting session", self.client.auth.get_session)
        return AuthSession.from_client(session)

    def subscribe(self, listener: SessionListener) -> Callable[[], None]:
        """
        Register `listener(event, session)` for sign-in, sign-out and token
        refresh events. Returns the function that deregisters it.
        """

        def _forward(event, session):
            listener(str(event), AuthSession.from_client(session))

        subscription = self.client.auth.on_auth_state_change(_forward)
        return subscription.unsubscribe

    def sign_in(self, email: str, password: str) -> Optional[AuthSession]:
        response = call_backend(
            "Signing in",
            lambda: self.client.auth.sign_in_with_password(
                {"email": email, "password": password}
            ),
        )
        session = AuthSession.from_client(getattr(response, "session", None))
        logger.info("Signed in user %s", session.user.id if session else "?")
        return session

    def sign_out(self) -> None:
        call_backend("Signing out", self.client.auth.sign_out)
        logger.info("Signed out")

    def get_current_user_id(self) -> Optional[str]:
        response = call_backend("Getting current user", self.client.auth.get_user)
        user = getattr(response, "user", None)
        return str(user.id) if user is not None else None
