import itertools

import pytest

from shared.backend import BackendError
from roster.models import AuthSession, ClassRecord, StudentRecord, UserIdentity
from roster.services.roster_service import RosterView

TEACHER_ID = "teacher-1"
OTHER_TEACHER_ID = "teacher-2"


def make_session(user_id=TEACHER_ID, token="token-1", email="teacher@school.test"):
    return AuthSession(access_token=token, user=UserIdentity(id=user_id, email=email))


class FakeAuth:
    """In-memory stand-in for AuthGateway that records every call."""

    def __init__(self, session=None, user_id=TEACHER_ID):
        self.session = session
        self.user_id = user_id
        self.calls = []
        self.listeners = []
        self.fail_with = {}

    def _maybe_fail(self, name):
        self.calls.append(name)
        if name in self.fail_with:
            raise BackendError(self.fail_with[name])

    def get_session(self):
        self._maybe_fail("get_session")
        return self.session

    def subscribe(self, listener):
        self.listeners.append(listener)
        return lambda: self.listeners.remove(listener)

    def emit(self, event, session):
        self.session = session
        for listener in list(self.listeners):
            listener(event, session)

    def sign_in(self, email, password):
        self._maybe_fail("sign_in")
        session = make_session(email=email)
        self.emit("SIGNED_IN", session)
        return session

    def sign_out(self):
        self._maybe_fail("sign_out")
        self.emit("SIGNED_OUT", None)

    def get_current_user_id(self):
        self._maybe_fail("get_current_user_id")
        return self.user_id


class FakeClassRepo:
    def __init__(self, classes=None):
        self.classes = list(classes or [])
        self.calls = 0
        self.error = None

    def list_classes(self):
        self.calls += 1
        if self.error:
            raise BackendError(self.error)
        return list(self.classes)


class FakeStudentRepo:
    """Behaves like the students table: assigns ids, returns stored rows."""

    def __init__(self, students=None):
        self.rows = {s.id: s for s in (students or [])}
        self.calls = []
        self.fail_with = {}
        self._ids = itertools.count(1000)

    def _maybe_fail(self, name):
        if name in self.fail_with:
            raise BackendError(self.fail_with[name])

    def list_students(self):
        self.calls.append(("list",))
        self._maybe_fail("list")
        return list(self.rows.values())

    def insert_student(self, row):
        self.calls.append(("insert", dict(row)))
        self._maybe_fail("insert")
        student = StudentRecord.from_row(
            {**row, "id": next(self._ids), "created_at": "2026-10-19T09:00:00+00:00"}
        )
        self.rows[student.id] = student
        return student

    def update_student(self, student_id, row):
        self.calls.append(("update", student_id, dict(row)))
        self._maybe_fail("update")
        current = self.rows[student_id]
        student = StudentRecord.from_row(
            {"id": student_id, "created_by": current.created_by, **row}
        )
        self.rows[student_id] = student
        return student

    def delete_student(self, student_id):
        self.calls.append(("delete", student_id))
        self._maybe_fail("delete")
        self.rows.pop(student_id, None)

    def mutation_calls(self):
        return [c for c in self.calls if c[0] != "list"]


@pytest.fixture
def classes():
    return [
        ClassRecord(id=1, name="Year 7 Science", teacher_id=TEACHER_ID),
        ClassRecord(id=2, name="Year 8 History", teacher_id=OTHER_TEACHER_ID),
    ]


@pytest.fixture
def students():
    return [
        StudentRecord(id=11, name="Ada", email="ada@school.test", class_id=1, created_by=TEACHER_ID),
        StudentRecord(id=12, name="Ben", email="ben@school.test", class_id=2, created_by=OTHER_TEACHER_ID),
        StudentRecord(id=13, name="Cleo", email="cleo@school.test", class_id=1, created_by=TEACHER_ID),
    ]


@pytest.fixture
def auth():
    return FakeAuth(session=make_session())


@pytest.fixture
def class_repo(classes):
    return FakeClassRepo(classes)


@pytest.fixture
def student_repo(students):
    return FakeStudentRepo(students)


@pytest.fixture
def roster(auth, class_repo, student_repo):
    """A roster view that has already synced with a signed-in session."""
    view = RosterView(auth, class_repo, student_repo)
    view.sync_session(make_session())
    return view
