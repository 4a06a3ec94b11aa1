import json
import os
import sys

from student_manager.config import load_settings
from student_manager.crud import StudentRepository
from student_manager.database import ConnectionProvider

DEFAULT_EXPORT_PATH = os.path.join("data", "students.json")


def export_data_to_file(path=DEFAULT_EXPORT_PATH, settings=None):
    """Export all students to a JSON file"""
    settings = settings or load_settings()
    provider = ConnectionProvider(settings)

    try:
        print("Exporting students...")
        outcome = StudentRepository(provider).get_all()
        if not outcome:
            print(f"Error exporting data: {outcome.message}")
            return False

        students_data = [
            student.model_dump(mode="json", exclude={"id"})
            for student in outcome.value
        ]

        directory = os.path.dirname(path)
        if directory:
            os.makedirs(directory, exist_ok=True)
        with open(path, "w", encoding="utf-8") as f:
            json.dump(students_data, f, indent=2, ensure_ascii=False)
        print(f"Exported {len(students_data)} students to {path}")
        return True
    finally:
        provider.dispose()


if __name__ == "__main__":
    target = sys.argv[1] if len(sys.argv) > 1 else DEFAULT_EXPORT_PATH
    success = export_data_to_file(target)
    if not success:
        print("\nExport failed. Please check your database connection.")
    sys.exit(0 if success else 1)
