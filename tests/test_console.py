from datetime import date

import pytest

from student_manager.crud import StudentRepository
from student_manager.services import StudentService
from student_manager.ui.console import ConsoleApp


class ScriptedInput:
    """Feeds prepared answers to the console, EOF when they run out"""

    def __init__(self, answers):
        self.answers = list(answers)
        self.prompts = []

    def __call__(self, prompt=""):
        self.prompts.append(prompt)
        if not self.answers:
            raise EOFError
        return self.answers.pop(0)


@pytest.fixture
def run_console(service, auth_service):
    def runner(answers, with_login=False, password="secret"):
        output = []
        app = ConsoleApp(
            service,
            auth_service if with_login else None,
            input_func=ScriptedInput(answers),
            print_func=lambda *args: output.append(" ".join(str(a) for a in args)),
            password_func=lambda prompt: password,
        )
        status = app.run()
        return status, "\n".join(output)

    return runner


def test_add_student_from_menu(run_console, service):
    status, output = run_console([
        "1", "S001", "Li Wei", "male", "2001-05-01", "CS", "CS-1", "", "li@example.com", "",
        "", "0",
    ])

    assert status == 0
    assert "Student added successfully" in output
    student = service.get_student_by_number("S001").value
    assert student.birth_date == date(2001, 5, 1)
    assert student.email == "li@example.com"
    assert student.phone is None


def test_add_retries_after_rejection(run_console, service, make_student):
    service.add_student(make_student())

    status, output = run_console([
        "1",
        "S001", "Zhang San", "male", "2000-01-01", "CS", "CS-1", "", "", "",
        "S002", "Zhang San", "male", "2000-01-01", "CS", "CS-1", "", "", "",
        "", "0",
    ])

    assert "Could not add student: Student number S001 already exists" in output
    assert service.get_student_by_number("S002").value.name == "Zhang San"


def test_add_reprompts_gender_and_date(run_console, service):
    run_console([
        "1", "S001", "Li Wei", "unknown", "male", "01/05/2001", "2001-05-01", "CS", "CS-1", "", "", "",
        "", "0",
    ])

    assert service.get_student_by_number("S001").value.gender == "male"


def test_zero_cancels_entry(run_console, repository):
    status, output = run_console(["1", "S001", "0", "", "0"])

    assert "Returning to the main menu." in output
    assert repository.count().value == 0


def test_update_keeps_defaults(run_console, service, make_student):
    added = service.add_student(make_student(phone="13812345678")).value

    run_console([
        "3", str(added.id),
        "", "", "", "", "EE", "", "", "", "",
        "", "0",
    ])

    after = service.get_student_by_id(added.id).value
    assert after.major == "EE"
    assert after.model_dump(exclude={"major"}) == added.model_dump(exclude={"major"})


def test_update_clears_optional_field(run_console, service, make_student):
    added = service.add_student(make_student(phone="13812345678")).value

    run_console(["3", str(added.id), "", "", "", "", "", "", "none", "", "", "", "0"])

    assert service.get_student_by_id(added.id).value.phone is None


def test_delete_with_confirmation(run_console, service, make_student):
    added = service.add_student(make_student()).value

    _, output = run_console(["2", str(added.id), "n", "", "2", str(added.id), "yes", "", "0"])

    assert "Delete cancelled." in output
    assert "Student deleted successfully." in output
    assert service.get_student_by_id(added.id).value is None


def test_queries(run_console, service, make_student):
    service.add_student(make_student())
    service.add_student(make_student(student_no="S002", name="Wang Fang", gender="female", major="EE"))

    _, output = run_console([
        "4", "1", "",
        "5", "S002", "",
        "6", "an", "",
        "7", "EE", "",
        "8", "",
        "4", "99", "",
        "0",
    ])

    assert "Student No: S001" in output
    assert "Student No: S002" in output
    assert "2 student(s) found." in output
    assert "No student found with id 99." in output


def test_invalid_input_reprompts(run_console):
    _, output = run_console(["abc", "9", "0"])

    assert "Please enter a valid number!" in output
    assert "Invalid choice, please try again." in output
    assert "goodbye" in output


def test_end_of_input_exits_cleanly(run_console):
    status, output = run_console([])

    assert status == 0
    assert "Goodbye!" in output


def test_login_gate(run_console, auth_service):
    auth_service.register("admin", "secret", "secret")

    status, output = run_console(["admin", "0"], with_login=True)

    assert status == 0
    assert "Login successful" in output


def test_login_gate_rejects_wrong_password(run_console, auth_service):
    auth_service.register("admin", "secret", "secret")

    status, output = run_console(["admin", "admin", "admin"], with_login=True, password="wrong")

    assert status == 1
    assert output.count("Wrong password") == 3
    assert "Main Menu" not in output


def test_unreachable_database_stops_before_menu(unconfigured_provider):
    output = []
    app = ConsoleApp(
        StudentService(StudentRepository(unconfigured_provider)),
        input_func=ScriptedInput(["0"]),
        print_func=output.append,
    )

    assert app.run() == 1
    assert any("Could not connect" in line for line in output)
