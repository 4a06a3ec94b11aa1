from typing import Any, Callable, List
import logging

from sqlalchemy import exists, func
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from ..core.outcome import Outcome, Reason
from ..database import ConfigurationError, ConnectionProvider
from ..models.student import Student as StudentRow
from ..schemas.student import Student
from .mapper import row_to_student, student_to_columns

logger = logging.getLogger(__name__)


class StudentRepository:
    """One statement per call against the students table.

    No method raises: configuration and database errors come back as failed
    ``Outcome`` values carrying the operation's empty value.
    """

    def __init__(self, provider: ConnectionProvider):
        self.provider = provider

    def test_connection(self) -> bool:
        return self.provider.test_connection()

    def _execute(self, action: str, work: Callable[[Session], Outcome], empty: Any = None) -> Outcome:
        try:
            with self.provider.session() as db:
                return work(db)
        except ConfigurationError as e:
            logger.error("Cannot %s: %s", action, e)
            return Outcome.failure(Reason.CONFIGURATION, str(e), empty)
        except SQLAlchemyError as e:
            logger.error("Database error while trying to %s: %s", action, e)
            return Outcome.failure(Reason.CONNECTIVITY, f"Database error, could not {action}", empty)

    def add(self, student: Student) -> Outcome:
        def work(db: Session) -> Outcome:
            row = StudentRow(**student_to_columns(student))
            db.add(row)
            db.flush()
            logger.info("Added student %s with id %s", row.student_no, row.id)
            return Outcome.success(row_to_student(row), "Student added")

        return self._execute("add student", work)

    def delete_by_id(self, student_id: int) -> Outcome:
        def work(db: Session) -> Outcome:
            deleted = (
                db.query(StudentRow)
                .filter(StudentRow.id == student_id)
                .delete(synchronize_session=False)
            )
            if deleted != 1:
                return Outcome.failure(Reason.NOT_FOUND, f"No student with id {student_id}")
            logger.info("Deleted student id %s", student_id)
            return Outcome.success(message="Student deleted")

        return self._execute("delete student", work)

    def delete_by_number(self, student_no: str) -> Outcome:
        def work(db: Session) -> Outcome:
            deleted = (
                db.query(StudentRow)
                .filter(StudentRow.student_no == student_no)
                .delete(synchronize_session=False)
            )
            if deleted != 1:
                return Outcome.failure(Reason.NOT_FOUND, f"No student with number {student_no}")
            logger.info("Deleted student %s", student_no)
            return Outcome.success(message="Student deleted")

        return self._execute("delete student", work)

    def update(self, student: Student) -> Outcome:
        columns = student_to_columns(student)

        def work(db: Session) -> Outcome:
            matched = (
                db.query(StudentRow)
                .filter(StudentRow.id == student.id)
                .update(columns, synchronize_session=False)
            )
            if matched != 1:
                return Outcome.failure(Reason.NOT_FOUND, f"No student with id {student.id}")
            logger.info("Updated student id %s", student.id)
            return Outcome.success(Student(id=student.id, **columns), "Student updated")

        return self._execute("update student", work)

    def get_by_id(self, student_id: int) -> Outcome:
        def work(db: Session) -> Outcome:
            row = db.query(StudentRow).filter(StudentRow.id == student_id).first()
            if row is None:
                return Outcome.failure(Reason.NOT_FOUND, f"No student with id {student_id}")
            return Outcome.success(row_to_student(row))

        return self._execute("look up student", work)

    def get_by_number(self, student_no: str) -> Outcome:
        def work(db: Session) -> Outcome:
            row = db.query(StudentRow).filter(StudentRow.student_no == student_no).first()
            if row is None:
                return Outcome.failure(Reason.NOT_FOUND, f"No student with number {student_no}")
            return Outcome.success(row_to_student(row))

        return self._execute("look up student", work)

    def get_by_name_substring(self, fragment: str) -> Outcome:
        def work(db: Session) -> Outcome:
            name = StudentRow.name
            if db.get_bind().dialect.name == "mysql":
                # the default _ci collations ignore case
                name = name.collate("utf8mb4_bin")
            rows = db.query(StudentRow).filter(name.like(f"%{fragment}%")).all()
            return Outcome.success(_to_students(rows))

        return self._execute("search students by name", work, [])

    def get_by_major(self, major: str) -> Outcome:
        def work(db: Session) -> Outcome:
            rows = db.query(StudentRow).filter(StudentRow.major == major).all()
            return Outcome.success(_to_students(rows))

        return self._execute("search students by major", work, [])

    def get_all(self) -> Outcome:
        def work(db: Session) -> Outcome:
            rows = db.query(StudentRow).order_by(StudentRow.id.asc()).all()
            return Outcome.success(_to_students(rows))

        return self._execute("list students", work, [])

    def exists_by_number(self, student_no: str) -> Outcome:
        def work(db: Session) -> Outcome:
            found = db.query(exists().where(StudentRow.student_no == student_no)).scalar()
            return Outcome.success(bool(found))

        return self._execute("check student number", work, False)

    def count(self) -> Outcome:
        def work(db: Session) -> Outcome:
            return Outcome.success(db.query(func.count(StudentRow.id)).scalar() or 0)

        return self._execute("count students", work, 0)


def _to_students(rows: List[StudentRow]) -> List[Student]:
    return [row_to_student(row) for row in rows]
