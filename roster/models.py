from dataclasses import dataclass, field
from typing import Any, Dict, Optional


@dataclass(frozen=True)
class UserIdentity:
    id: str
    email: Optional[str] = None


@dataclass(frozen=True)
class AuthSession:
    """Read-only view of the session the auth provider issued."""

    access_token: str
    user: UserIdentity

    @classmethod
    def from_client(cls, session) -> Optional["AuthSession"]:
        if session is None or getattr(session, "user", None) is None:
            return None
        return cls(
            access_token=session.access_token,
            user=UserIdentity(id=str(session.user.id), email=session.user.email),
        )


@dataclass(frozen=True)
class ClassRecord:
    id: Any
    name: str
    teacher_id: Optional[str] = None

    @classmethod
    def from_row(cls, row: Dict[str, Any]) -> "ClassRecord":
        teacher_id = row.get("teacher_id")
        return cls(
            id=row.get("id"),
            name=row.get("name") or "",
            teacher_id=str(teacher_id) if teacher_id is not None else None,
        )


@dataclass(frozen=True)
class StudentRecord:
    id: Any
    name: str
    email: str
    class_id: Any
    created_by: Optional[str] = None
    # server-generated columns (created_at, ...) kept as returned
    extra: Dict[str, Any] = field(default_factory=dict, compare=False)

    @classmethod
    def from_row(cls, row: Dict[str, Any]) -> "StudentRecord":
        known = {"id", "name", "email", "class_id", "created_by"}
        return cls(
            id=row.get("id"),
            name=row.get("name") or "",
            email=row.get("email") or "",
            class_id=row.get("class_id"),
            created_by=row.get("created_by"),
            extra={k: v for k, v in row.items() if k not in known},
        )


@dataclass
class StudentDraft:
    """Uncommitted form values for a new or edited student."""

    name: str = ""
    email: str = ""
    class_id: Any = None

    def cleaned(self) -> "StudentDraft":
        return StudentDraft(
            name=(self.name or "").strip(),
            email=(self.email or "").strip(),
            class_id=self.class_id,
        )

    def is_complete(self) -> bool:
        return bool(self.name) and bool(self.email) and self.class_id not in (None, "")

    def to_row(self) -> Dict[str, Any]:
        return {"name": self.name, "email": self.email, "class_id": self.class_id}

    @classmethod
    def from_student(cls, student: StudentRecord) -> "StudentDraft":
        return cls(name=student.name, email=student.email, class_id=student.class_id)


@dataclass(frozen=True)
class StatusMessage:
    text: str
    level: str = "info"  # info | success | warning | error

    @property
    def is_error(self) -> bool:
        return self.level == "error"
