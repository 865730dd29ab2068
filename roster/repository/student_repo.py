import logging
from typing import Any, Dict, List

from shared.backend import BackendError, call_backend, safe_rows
from roster.models import StudentRecord

logger = logging.getLogger(__name__)

STUDENTS_TABLE = "students"


def _first_row(response, description: str) -> StudentRecord:
    rows = safe_rows(response.data)
    if not rows:
        # RLS can filter the returned representation away without raising
        logger.error("%s returned no row", description)
        raise BackendError(f"{description} returned no row.")
    return StudentRecord.from_row(rows[0])


class StudentRepository:
    def __init__(self, client):
        self.client = client

    def _table(self):
        return self.client.table(STUDENTS_TABLE)

    def list_students(self) -> List[StudentRecord]:
        response = call_backend(
            "Fetching students",
            lambda: self._table().select("*").execute(),
        )
        return [StudentRecord.from_row(r) for r in safe_rows(response.data)]

    def insert_student(self, row: Dict[str, Any]) -> StudentRecord:
        """
        Insert one student and return the row as the backend stored it,
        so generated columns (id, created_at) are authoritative.
        """
        response = call_backend(
            "Adding student",
            lambda: self._table().insert(row).execute(),
        )
        student = _first_row(response, "Adding student")
        logger.info("Inserted student id=%s", student.id)
        return student

    def update_student(self, student_id, row: Dict[str, Any]) -> StudentRecord:
        response = call_backend(
            "Updating student",
            lambda: self._table().update(row).eq("id", student_id).execute(),
        )
        student = _first_row(response, "Updating student")
        logger.info("Updated student id=%s", student_id)
        return student

    def delete_student(self, student_id) -> None:
        call_backend(
            "Deleting student",
            lambda: self._table().delete().eq("id", student_id).execute(),
        )
        logger.info("Deleted student id=%s", student_id)
