import json

from check_db import check_database_connection
from create_users import create_initial_users
from export_data import export_data_to_file
from import_data import import_data_from_file
from student_manager.services import AuthService


def test_check_database_connection(settings, provider, capsys):
    assert check_database_connection(settings)

    assert "Found 0 students" in capsys.readouterr().out


def test_create_initial_users_is_idempotent(settings, users):
    assert create_initial_users(settings)
    assert create_initial_users(settings)

    assert users.count().value == 1
    session = AuthService(users).new_session()
    assert session.authenticate("admin", "admin123")


def test_export_then_import_into_another_database(settings, service, make_student, tmp_path):
    from student_manager.config import Settings

    service.add_student(make_student(email="li@example.com"))
    service.add_student(make_student(student_no="S002", name="Wang Fang", gender="female"))
    path = tmp_path / "export" / "students.json"

    assert export_data_to_file(str(path), settings)
    exported = json.loads(path.read_text(encoding="utf-8"))
    assert [s["student_no"] for s in exported] == ["S001", "S002"]
    assert exported[0]["birth_date"] == "2001-05-01"
    assert "id" not in exported[0]

    other = Settings(database_url=f"sqlite:///{(tmp_path / 'other.db').as_posix()}", _env_file=None)
    assert import_data_from_file(str(path), other) == (2, 0, 0)
    assert import_data_from_file(str(path), other) == (0, 2, 0)


def test_import_reports_rejected_records(settings, tmp_path):
    path = tmp_path / "students.json"
    path.write_text(json.dumps([
        {"student_no": "S009", "name": "Chen Jie", "gender": "unknown", "birth_date": "2000-01-01",
         "major": "CS", "class_name": "CS-2"},
        "not a record",
    ]), encoding="utf-8")

    assert import_data_from_file(str(path), settings) == (0, 0, 2)


def test_import_missing_file(settings, tmp_path):
    assert import_data_from_file(str(tmp_path / "nope.json"), settings) is None
