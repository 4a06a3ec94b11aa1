"""Formatting shared by the console menu and the desktop window."""

from datetime import date, datetime
from typing import Iterable, List, Optional, Tuple

from ..schemas.student import Student

DATE_FORMAT = "%Y-%m-%d"

TABLE_COLUMNS = ("Student No", "Name", "Age", "Gender", "Major")

_LIST_HEADER = ("ID", "Student No", "Name", "Gender", "Birth Date", "Major", "Class", "Phone", "Email", "Address")
_LIST_WIDTHS = (5, 12, 12, 7, 11, 16, 10, 12, 24, 20)


def calculate_age(birth_date: Optional[date], today: Optional[date] = None) -> Optional[int]:
    """Whole years between birth_date and today"""
    if birth_date is None:
        return None
    today = today or date.today()
    years = today.year - birth_date.year
    if (today.month, today.day) < (birth_date.month, birth_date.day):
        years -= 1
    return years


def table_row(student: Student, today: Optional[date] = None) -> Tuple:
    age = calculate_age(student.birth_date, today)
    return (
        student.student_no,
        student.name,
        "" if age is None else age,
        student.gender,
        student.major,
    )


def sort_by_number(students: Iterable[Student], descending: bool = False) -> List[Student]:
    return sorted(students, key=lambda s: s.student_no or "", reverse=descending)


def parse_date(text: str) -> Optional[date]:
    """Parse YYYY-MM-DD, None when the text is not a valid date"""
    try:
        return datetime.strptime(text.strip(), DATE_FORMAT).date()
    except (ValueError, AttributeError):
        return None


def format_date(value: Optional[date]) -> str:
    return value.strftime(DATE_FORMAT) if value else ""


def _cell(value, width: int) -> str:
    return f"{str(value):{width}}"


def format_student_table(students: Optional[List[Student]]) -> str:
    if not students:
        return "No students found."

    header = " ".join(_cell(col, w) for col, w in zip(_LIST_HEADER, _LIST_WIDTHS))
    lines = ["", "=" * 20 + " Student List " + "=" * 20, header, "-" * len(header)]
    for s in students:
        values = (
            s.id, s.student_no, s.name, s.gender, format_date(s.birth_date), s.major, s.class_name,
            s.phone or "N/A", s.email or "N/A", s.address or "N/A",
        )
        lines.append(" ".join(_cell(v, w) for v, w in zip(values, _LIST_WIDTHS)).rstrip())
    lines.append("-" * len(header))
    lines.append(f"{len(students)} student(s) found.")
    return "\n".join(lines)


def format_student_detail(student: Optional[Student]) -> str:
    if student is None:
        return "Student not found."

    not_provided = "Not provided"
    return "\n".join([
        "",
        "=" * 20 + " Student Details " + "=" * 20,
        f"ID: {student.id}",
        f"Student No: {student.student_no}",
        f"Name: {student.name}",
        f"Gender: {student.gender}",
        f"Birth Date: {format_date(student.birth_date)}",
        f"Major: {student.major}",
        f"Class: {student.class_name}",
        f"Phone: {student.phone or not_provided}",
        f"Email: {student.email or not_provided}",
        f"Address: {student.address or not_provided}",
        "=" * 57,
    ])
