"""
Numbered console menu over StudentService.

Input and output are injected so the menu can be driven by a script.
"""

from getpass import getpass
from typing import Callable, Optional
import logging

from ..core.outcome import Reason
from ..core.validation import GENDERS
from ..schemas.student import Student
from ..services.auth_service import AuthService
from ..services.student_service import StudentService
from .presenters import format_date, format_student_detail, format_student_table, parse_date

logger = logging.getLogger(__name__)

CANCEL = "0"
NO_VALUE = "none"
MAX_LOGIN_ATTEMPTS = 3


class Cancelled(Exception):
    """The operator typed 0 during a multi-step entry"""


class ConsoleApp:
    def __init__(
        self,
        student_service: StudentService,
        auth_service: Optional[AuthService] = None,
        input_func: Callable[[str], str] = input,
        print_func: Callable[..., None] = print,
        password_func: Callable[[str], str] = getpass,
        app_name: str = "Student Management System",
    ):
        self.students = student_service
        self.auth = auth_service
        self.input = input_func
        self.print = print_func
        self.password = password_func
        self.app_name = app_name
        self.actions = {
            1: self.add_student,
            2: self.delete_student,
            3: self.update_student,
            4: self.query_by_id,
            5: self.query_by_number,
            6: self.query_by_name,
            7: self.query_by_major,
            8: self.show_all,
        }

    def run(self) -> int:
        self.print("=" * 50)
        self.print(f"    Welcome to the {self.app_name} (console)")
        self.print("=" * 50)

        if not self.students.test_connection():
            self.print("Could not connect to the database, check the configuration:")
            self.print("1. Make sure the database server is running")
            self.print("2. Check DATABASE_URL, DATABASE_USERNAME and DATABASE_PASSWORD in .env")
            return 1

        try:
            if self.auth is not None and not self.login():
                self.print("Login cancelled.")
                return 1
            self.menu_loop()
        except (EOFError, KeyboardInterrupt):
            self.print("\nGoodbye!")
        return 0

    def login(self) -> bool:
        session = self.auth.new_session()
        for _ in range(MAX_LOGIN_ATTEMPTS):
            username = self.input("Username (0 to cancel): ").strip()
            if username == CANCEL:
                return False
            password = self.password("Password: ")
            outcome = session.authenticate(username, password)
            self.print(outcome.message)
            if session.is_authenticated:
                return True
        self.print("Too many failed login attempts.")
        return False

    def show_menu(self) -> None:
        self.print("\n" + "=" * 50)
        self.print("                 Main Menu")
        self.print("=" * 50)
        self.print("1. Add student")
        self.print("2. Delete student")
        self.print("3. Update student")
        self.print("4. Find student by id")
        self.print("5. Find student by number")
        self.print("6. Find students by name")
        self.print("7. Find students by major")
        self.print("8. List all students")
        self.print("0. Exit")
        self.print("=" * 50)

    def menu_loop(self) -> None:
        while True:
            self.show_menu()
            choice = self.read_int("Choose an option")
            if choice == 0:
                self.print("Thank you for using the system, goodbye!")
                return

            action = self.actions.get(choice)
            if action is None:
                self.print("Invalid choice, please try again.")
                continue

            try:
                action()
            except (EOFError, KeyboardInterrupt):
                raise
            except Exception as e:
                logger.exception("Console action %s failed", choice)
                self.print(f"An error occurred: {e}")
            self.input("\nPress Enter to continue...")

    # Prompt helpers

    def ask(self, prompt: str) -> str:
        return self.input(f"{prompt}: ").strip()

    def read_int(self, prompt: str) -> int:
        while True:
            try:
                return int(self.ask(prompt))
            except ValueError:
                self.print("Please enter a valid number!")

    def ask_required(self, prompt: str) -> str:
        value = self.ask(f"{prompt} (0 to cancel)")
        if value == CANCEL:
            raise Cancelled()
        return value

    def ask_optional(self, prompt: str) -> Optional[str]:
        value = self.ask(f"{prompt} (optional, 0 to cancel)")
        if value == CANCEL:
            raise Cancelled()
        return value or None

    def ask_gender(self, default: Optional[str] = None) -> str:
        choices = "/".join(GENDERS)
        while True:
            if default is None:
                value = self.ask(f"Gender ({choices}, 0 to cancel)")
                if value == CANCEL:
                    raise Cancelled()
            else:
                value = self.ask(f"Gender ({choices}) [{default}]") or default
            if value in GENDERS:
                return value
            self.print(f"Gender must be one of: {', '.join(GENDERS)}")

    def ask_date(self, prompt: str, default=None):
        while True:
            if default is None:
                value = self.ask(f"{prompt} (YYYY-MM-DD, 0 to cancel)")
                if value == CANCEL:
                    raise Cancelled()
            else:
                value = self.ask(f"{prompt} (YYYY-MM-DD) [{format_date(default)}]")
                if not value:
                    return default
            parsed = parse_date(value)
            if parsed is not None:
                return parsed
            self.print("Invalid date, please use the YYYY-MM-DD format!")

    def ask_with_default(self, prompt: str, default: Optional[str]) -> Optional[str]:
        value = self.ask(f"{prompt} [{default}]")
        return value or default

    def ask_optional_with_default(self, prompt: str, default: Optional[str]) -> Optional[str]:
        value = self.ask(f"{prompt} [{default or NO_VALUE}]")
        if not value:
            return default
        return None if value.lower() == NO_VALUE else value

    # Menu actions

    def add_student(self) -> None:
        self.print("\n" + "=" * 20 + " Add Student " + "=" * 20)
        try:
            while True:
                student = Student(
                    student_no=self.ask_required("Student No"),
                    name=self.ask_required("Name"),
                    gender=self.ask_gender(),
                    birth_date=self.ask_date("Birth date"),
                    major=self.ask_required("Major"),
                    class_name=self.ask_required("Class"),
                    phone=self.ask_optional("Phone"),
                    email=self.ask_optional("Email"),
                    address=self.ask_optional("Address"),
                )
                outcome = self.students.add_student(student)
                if outcome:
                    self.print(f"Student added successfully (id {outcome.value.id}).")
                    return
                self.print(f"Could not add student: {outcome.message}")
        except Cancelled:
            self.print("Returning to the main menu.")

    def _find_by_id(self, prompt: str) -> Optional[Student]:
        student_id = self.read_int(prompt)
        outcome = self.students.get_student_by_id(student_id)
        if outcome.value is None:
            if outcome.reason == Reason.NOT_FOUND:
                self.print(f"No student found with id {student_id}.")
            else:
                self.print(outcome.message)
            return None
        return outcome.value

    def delete_student(self) -> None:
        self.print("\n" + "=" * 20 + " Delete Student " + "=" * 20)
        student = self._find_by_id("Enter the id of the student to delete")
        if student is None:
            return

        self.print(format_student_detail(student))
        confirm = self.ask("Delete this student? (y/n)").lower()
        if confirm not in ("y", "yes"):
            self.print("Delete cancelled.")
            return

        outcome = self.students.delete_student(student.id)
        self.print("Student deleted successfully." if outcome else f"Could not delete student: {outcome.message}")

    def update_student(self) -> None:
        self.print("\n" + "=" * 20 + " Update Student " + "=" * 20)
        current = self._find_by_id("Enter the id of the student to update")
        if current is None:
            return

        self.print("Current information:")
        self.print(format_student_detail(current))
        self.print(f"\nEnter the new values (press Enter to keep the current value, '{NO_VALUE}' clears an optional field):")

        updated = Student(
            id=current.id,
            student_no=self.ask_with_default("Student No", current.student_no),
            name=self.ask_with_default("Name", current.name),
            gender=self.ask_gender(current.gender),
            birth_date=self.ask_date("Birth date", current.birth_date),
            major=self.ask_with_default("Major", current.major),
            class_name=self.ask_with_default("Class", current.class_name),
            phone=self.ask_optional_with_default("Phone", current.phone),
            email=self.ask_optional_with_default("Email", current.email),
            address=self.ask_optional_with_default("Address", current.address),
        )
        outcome = self.students.update_student(updated)
        self.print("Student updated successfully." if outcome else f"Could not update student: {outcome.message}")

    def query_by_id(self) -> None:
        self.print("\n" + "=" * 20 + " Find Student by Id " + "=" * 20)
        student = self._find_by_id("Student id")
        if student is not None:
            self.print(format_student_detail(student))

    def query_by_number(self) -> None:
        self.print("\n" + "=" * 20 + " Find Student by Number " + "=" * 20)
        outcome = self.students.get_student_by_number(self.ask("Student No"))
        if outcome.is_storage_error or outcome.reason == Reason.INVALID_ARGUMENT:
            self.print(outcome.message)
            return
        self.print(format_student_detail(outcome.value))

    def query_by_name(self) -> None:
        self.print("\n" + "=" * 20 + " Find Students by Name " + "=" * 20)
        self._print_list(self.students.get_students_by_name(self.ask("Name contains")))

    def query_by_major(self) -> None:
        self.print("\n" + "=" * 20 + " Find Students by Major " + "=" * 20)
        self._print_list(self.students.get_students_by_major(self.ask("Major")))

    def show_all(self) -> None:
        self.print("\n" + "=" * 20 + " All Students " + "=" * 20)
        self._print_list(self.students.get_all_students())

    def _print_list(self, outcome) -> None:
        if not outcome:
            self.print(outcome.message)
            return
        self.print(format_student_table(outcome.value))
