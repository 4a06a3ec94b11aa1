import json
import os
import sys

from pydantic import ValidationError

from student_manager.config import load_settings
from student_manager.core.outcome import Reason
from student_manager.database import ConnectionProvider
from student_manager.crud import StudentRepository
from student_manager.schemas import Student
from student_manager.services import StudentService

DEFAULT_IMPORT_PATH = os.path.join("data", "students.json")


def import_data_from_file(path=DEFAULT_IMPORT_PATH, settings=None):
    """Import students from a JSON file through the normal validation rules.

    Returns (imported, skipped, rejected) counts, or None when nothing could
    be read or the database is unreachable.
    """
    if not os.path.exists(path):
        print(f"❌ {path} not found")
        return None

    with open(path, "r", encoding="utf-8") as f:
        try:
            students_data = json.load(f)
        except json.JSONDecodeError as e:
            print(f"❌ {path} is not valid JSON: {e}")
            return None

    settings = settings or load_settings()
    provider = ConnectionProvider(settings)
    try:
        if not provider.init_db():
            print("❌ Could not reach the database, check DATABASE_URL")
            return None

        service = StudentService(StudentRepository(provider))
        print("📊 Importing students from JSON file...")

        imported = skipped = rejected = 0
        for student_data in students_data:
            try:
                student_data.pop("id", None)
                student = Student(**student_data)
            except (AttributeError, TypeError, ValidationError) as e:
                print(f"  ❌ Unreadable record {student_data!r}: {e}")
                rejected += 1
                continue

            outcome = service.add_student(student)
            if outcome:
                imported += 1
                print(f"  ✅ Imported student: {student.student_no}")
            elif outcome.reason == Reason.CONFLICT:
                skipped += 1
                print(f"  ⏭️  Student already exists: {student.student_no}")
            elif outcome.is_storage_error:
                print(f"❌ Import stopped: {outcome.message}")
                return None
            else:
                rejected += 1
                print(f"  ❌ Rejected {student.student_no}: {outcome.message}")

        print(f"🎓 Imported {imported} students, skipped {skipped}, rejected {rejected}")
        return imported, skipped, rejected
    finally:
        provider.dispose()


if __name__ == "__main__":
    source = sys.argv[1] if len(sys.argv) > 1 else DEFAULT_IMPORT_PATH
    result = import_data_from_file(source)
    sys.exit(0 if result is not None else 1)
