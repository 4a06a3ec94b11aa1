from datetime import date, datetime
from typing import Any, Dict, Optional

from ..models.student import Student as StudentRow
from ..schemas.student import Student

REQUIRED_TEXT_COLUMNS = ("student_no", "name", "gender", "major", "class_name")
OPTIONAL_TEXT_COLUMNS = ("phone", "email", "address")


def _optional_text(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    value = str(value).strip()
    return value or None


def _as_date(value: Any) -> Optional[date]:
    if isinstance(value, datetime):
        return value.date()
    return value


def row_to_student(row: StudentRow) -> Student:
    return Student(
        id=row.id,
        student_no=row.student_no,
        name=row.name,
        gender=row.gender,
        birth_date=_as_date(row.birth_date),
        major=row.major,
        class_name=row.class_name,
        phone=_optional_text(row.phone),
        email=_optional_text(row.email),
        address=_optional_text(row.address),
    )


def student_to_columns(student: Student) -> Dict[str, Any]:
    """Every persisted column except id"""
    columns = {name: (getattr(student, name) or "").strip() for name in REQUIRED_TEXT_COLUMNS}
    columns["birth_date"] = _as_date(student.birth_date)
    for name in OPTIONAL_TEXT_COLUMNS:
        columns[name] = _optional_text(getattr(student, name))
    return columns

