from typing import Any, Dict, Iterable, List

import pandas as pd

from roster.models import ClassRecord, StudentRecord

UNKNOWN_CLASS = "Unknown Class"


def group_by_class(students: Iterable[StudentRecord]) -> Dict[Any, List[StudentRecord]]:
    """
    Partition students by class_id.

    Keys come out in order of first appearance and each group keeps the
    students' arrival order, so unchanged input always renders the same way.
    Classes without students get no entry.
    """
    groups: Dict[Any, List[StudentRecord]] = {}
    for student in students:
        groups.setdefault(student.class_id, []).append(student)
    return groups


def find_class(classes: Iterable[ClassRecord], class_id) -> ClassRecord | None:
    for cls in classes:
        if cls.id == class_id:
            return cls
    return None


def class_name(classes: Iterable[ClassRecord], class_id) -> str:
    cls = find_class(classes, class_id)
    return cls.name if cls and cls.name else UNKNOWN_CLASS


def roster_summary_frame(groups: Dict[Any, List[StudentRecord]], classes: List[ClassRecord]) -> pd.DataFrame:
    rows = [
        {"Class": class_name(classes, class_id), "Students": len(members)}
        for class_id, members in groups.items()
    ]
    return pd.DataFrame(rows, columns=["Class", "Students"])
