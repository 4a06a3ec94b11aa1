"""
Business rules over the student repository.

Both the console and the desktop window go through this service; neither
surface repeats any of these checks.
"""

from typing import Optional
import logging

from ..core.outcome import Outcome, Reason
from ..core.validation import is_blank, validate_student
from ..crud.student import StudentRepository
from ..schemas.student import Student

logger = logging.getLogger(__name__)


def _invalid(message: str, value=None) -> Outcome:
    logger.info("Rejected: %s", message)
    return Outcome.failure(Reason.INVALID_ARGUMENT, message, value)


class StudentService:
    def __init__(self, repository: StudentRepository):
        self.repository = repository

    def add_student(self, student: Optional[Student]) -> Outcome:
        """Validate, check the student number is free, then insert"""
        validation = validate_student(student)
        if not validation:
            return validation

        student_no = student.student_no.strip()
        exists = self.repository.exists_by_number(student_no)
        if not exists:
            # could not check uniqueness, so do not insert
            return exists
        if exists.value:
            logger.info("Student number %s already exists", student_no)
            return Outcome.failure(Reason.CONFLICT, f"Student number {student_no} already exists")

        return self.repository.add(student)

    def update_student(self, student: Optional[Student]) -> Outcome:
        """Overwrite every field of the student identified by ``student.id``"""
        validation = validate_student(student)
        if not validation:
            return validation

        if student.id is None or student.id <= 0:
            return _invalid("Invalid student id")

        student_no = student.student_no.strip()
        existing = self.repository.get_by_number(student_no)
        if existing.is_storage_error:
            return existing
        if existing.value is not None and existing.value.id != student.id:
            logger.info("Student number %s is used by id %s", student_no, existing.value.id)
            return Outcome.failure(
                Reason.CONFLICT, f"Student number {student_no} is already used by another student"
            )

        return self.repository.update(student)

    def delete_student(self, student_id: int) -> Outcome:
        if student_id is None or student_id <= 0:
            return _invalid("Invalid student id")
        return self.repository.delete_by_id(student_id)

    def delete_student_by_number(self, student_no: Optional[str]) -> Outcome:
        if is_blank(student_no):
            return _invalid("Student number must not be empty")
        return self.repository.delete_by_number(student_no.strip())

    def get_student_by_id(self, student_id: int) -> Outcome:
        if student_id is None or student_id <= 0:
            return _invalid("Invalid student id")
        return self.repository.get_by_id(student_id)

    def get_student_by_number(self, student_no: Optional[str]) -> Outcome:
        if is_blank(student_no):
            return _invalid("Student number must not be empty")
        return self.repository.get_by_number(student_no.strip())

    def get_students_by_name(self, fragment: Optional[str]) -> Outcome:
        if is_blank(fragment):
            return _invalid("Name must not be empty", [])
        return self.repository.get_by_name_substring(fragment.strip())

    def get_students_by_major(self, major: Optional[str]) -> Outcome:
        if is_blank(major):
            return _invalid("Major must not be empty", [])
        return self.repository.get_by_major(major.strip())

    def get_all_students(self) -> Outcome:
        return self.repository.get_all()

    def test_connection(self) -> bool:
        return self.repository.test_connection()
