import logging
from typing import Any, Dict, List, Optional

from shared.backend import BackendError
from roster.models import (
    AuthSession,
    ClassRecord,
    StatusMessage,
    StudentDraft,
    StudentRecord,
)
from roster.repository.class_repo import ClassRepository
from roster.repository.student_repo import StudentRepository
from roster.services.auth_service import AuthGateway
from roster.services.grouping import find_class, group_by_class

logger = logging.getLogger(__name__)


class RosterView:
    """
    State and actions behind the roster page.

    Every list change is applied only after the backend acknowledged it,
    so the roster never shows a row the backend has not stored. Backend
    failures end up in `message`; nothing here raises them further.
    """

    def __init__(self, auth: AuthGateway, classes: ClassRepository, students: StudentRepository):
        self.auth = auth
        self.class_repo = classes
        self.student_repo = students
        self._reset()

    def _reset(self) -> None:
        self.session: Optional[AuthSession] = None
        self.classes: List[ClassRecord] = []
        self.students: List[StudentRecord] = []
        self.loading = False
        self.message: Optional[StatusMessage] = None

        self.classes_loaded = False
        self.students_loaded = False
        self._loaded_token: Optional[str] = None

        self.new_draft = StudentDraft()
        # bumped whenever the new-student inputs should show fresh values
        self.draft_revision = 0

        self.editing_id: Any = None
        self.edit_draft: Optional[StudentDraft] = None

        self.delete_target: Optional[StudentRecord] = None

    # ---------------------------------------
    # Session wiring
    # ---------------------------------------

    def sync_session(self, session: Optional[AuthSession]) -> None:
        """
        Called on every render with the gate's session. Loads classes once
        per mount and re-fetches students whenever the session changes.
        """
        if session is None:
            if self.session is not None:
                self.teardown()
            return

        self.session = session

        if not self.classes_loaded:
            self.load_classes()

        if session.access_token != self._loaded_token:
            self._loaded_token = session.access_token
            self.load_students()

    def teardown(self) -> None:
        """Drop everything tied to the previous session (drafts included)."""
        self._reset()

    @property
    def current_user_id(self) -> Optional[str]:
        return self.session.user.id if self.session else None

    # ---------------------------------------
    # Loading
    # ---------------------------------------

    def load_classes(self) -> None:
        self.classes_loaded = True
        try:
            classes = self.class_repo.list_classes()
        except BackendError as exc:
            logger.error("Error fetching classes: %s", exc.message)
            return

        self.classes = classes
        if self.classes and self.new_draft.class_id in (None, ""):
            self.new_draft.class_id = self.classes[0].id

    def load_students(self) -> None:
        self.loading = True
        self.message = None
        try:
            students = self.student_repo.list_students()
        except BackendError as exc:
            self.message = StatusMessage(f"Error fetching students: {exc.message}", "error")
            return
        finally:
            self.loading = False

        self.students = students
        self.students_loaded = True
        self.message = StatusMessage(f"Loaded {len(students)} students.", "info")

    # ---------------------------------------
    # Add
    # ---------------------------------------

    def add_student(self, name: str, email: str, class_id) -> bool:
        self.new_draft = StudentDraft(name=name, email=email, class_id=class_id)
        draft = self.new_draft.cleaned()
        if not draft.is_complete():
            self.message = StatusMessage("Please fill in all fields for the new student.", "warning")
            return False

        self.loading = True
        self.message = None
        try:
            created_by = self.auth.get_current_user_id()
            if not created_by:
                logger.error("No signed-in user to stamp created_by")
                raise BackendError("Not signed in.")
            row = draft.to_row()
            row["created_by"] = created_by
            student = self.student_repo.insert_student(row)
        except BackendError as exc:
            self.message = StatusMessage(f"Error adding student: {exc.message}", "error")
            return False
        finally:
            self.loading = False

        self.students = self.students + [student]
        # class selector is kept for rapid consecutive entry
        self.new_draft = StudentDraft(class_id=draft.class_id)
        self.draft_revision += 1
        self.message = StatusMessage(f"Student '{student.name}' added successfully!", "success")
        return True

    # ---------------------------------------
    # Edit
    # ---------------------------------------

    def begin_edit(self, student: StudentRecord) -> None:
        self.editing_id = student.id
        self.edit_draft = StudentDraft.from_student(student)
        self.message = None

    def is_editing(self, student: StudentRecord) -> bool:
        return self.editing_id is not None and self.editing_id == student.id

    def save_edit(self, name: str, email: str, class_id) -> bool:
        if self.editing_id is None:
            return False

        self.edit_draft = StudentDraft(name=name, email=email, class_id=class_id)
        draft = self.edit_draft.cleaned()
        if not draft.is_complete():
            self.message = StatusMessage("Please fill in all fields for the edited student.", "warning")
            return False

        self.loading = True
        self.message = None
        try:
            updated = self.student_repo.update_student(self.editing_id, draft.to_row())
        except BackendError as exc:
            self.message = StatusMessage(f"Error updating student: {exc.message}", "error")
            return False
        finally:
            self.loading = False

        edited_id = self.editing_id
        self.students = [updated if s.id == edited_id else s for s in self.students]
        self.cancel_edit()
        self.message = StatusMessage(f"Student '{updated.name}' updated successfully!", "success")
        return True

    def cancel_edit(self) -> None:
        self.editing_id = None
        self.edit_draft = None

    # ---------------------------------------
    # Delete (two step)
    # ---------------------------------------

    def confirm_delete(self, student: StudentRecord) -> None:
        self.delete_target = student

    def cancel_delete(self) -> None:
        self.delete_target = None

    def delete_confirmed(self) -> bool:
        target = self.delete_target
        if target is None:
            return False
        self.delete_target = None

        self.loading = True
        self.message = None
        try:
            self.student_repo.delete_student(target.id)
        except BackendError as exc:
            self.message = StatusMessage(f"Error deleting student: {exc.message}", "error")
            return False
        finally:
            self.loading = False

        self.students = [s for s in self.students if s.id != target.id]
        if self.editing_id == target.id:
            self.cancel_edit()
        self.message = StatusMessage(f"Student '{target.name}' deleted successfully!", "success")
        return True

    # ---------------------------------------
    # Ownership (advisory, RLS is the real check)
    # ---------------------------------------

    def is_teacher_of_class(self, class_id) -> bool:
        user_id = self.current_user_id
        if not user_id:
            return False
        cls = find_class(self.classes, class_id)
        return cls is not None and cls.teacher_id == user_id

    def grouped_students(self) -> Dict[Any, List[StudentRecord]]:
        return group_by_class(self.students)
