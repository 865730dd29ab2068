from typing import List

from shared.backend import call_backend, safe_rows
from roster.models import ClassRecord

# ==================================================
# Class Persistence (READ ONLY)
# ==================================================
# Classes are created elsewhere; this app only reads them.
# Ownership (teacher_id) is enforced by row-level security.
# ==================================================

CLASS_COLUMNS = "id, name, teacher_id"


class ClassRepository:
    def __init__(self, client):
        self.client = client

    def list_classes(self) -> List[ClassRecord]:
        """
        Returns every class row the current session may see.
        """
        response = call_backend(
            "Fetching classes",
            lambda: self.client.table("classes").select(CLASS_COLUMNS).execute(),
        )
        return [ClassRecord.from_row(r) for r in safe_rows(response.data)]
