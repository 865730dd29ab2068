from dataclasses import dataclass

from roster.repository.class_repo import ClassRepository
from roster.repository.student_repo import StudentRepository
from roster.services.auth_service import AuthGateway
from roster.services.credential_service import CredentialForm
from roster.services.roster_service import RosterView
from roster.services.session_gate import SessionGate


@dataclass
class RosterServices:
    gate: SessionGate
    credentials: CredentialForm
    roster: RosterView

    def close(self) -> None:
        """Deregister the lifetime auth subscription."""
        self.gate.close()


def build_services(client) -> RosterServices:
    """
    Wire every component to the one backend client the entry point owns.
    """
    auth = AuthGateway(client)

    gate = SessionGate(auth)
    credentials = CredentialForm(auth)
    gate.add_listener(credentials.on_auth_event)
    gate.mount()
    gate.open()
    credentials.session = gate.session

    roster = RosterView(auth, ClassRepository(client), StudentRepository(client))
    return RosterServices(gate=gate, credentials=credentials, roster=roster)
