"""
tkinter window over StudentService and AuthService.

Only widget plumbing lives here; every rule is in the services.
"""

import tkinter as tk
from tkinter import ttk, messagebox
import logging

from ..core.validation import GENDERS
from ..schemas.student import Student
from ..services.auth_service import AuthService
from ..services.student_service import StudentService
from .presenters import TABLE_COLUMNS, parse_date, sort_by_number, table_row

logger = logging.getLogger(__name__)

SORT_ASCENDING = "Student No ascending"
SORT_DESCENDING = "Student No descending"

SEARCH_BY_NUMBER = "Student No"
SEARCH_BY_NAME = "Name"
SEARCH_BY_MAJOR = "Major"


def _make_table(parent) -> ttk.Treeview:
    tree = ttk.Treeview(parent, columns=TABLE_COLUMNS, show="headings", selectmode="browse")
    for col in TABLE_COLUMNS:
        tree.heading(col, text=col)
        tree.column(col, width=60 if col == "Age" else 130, anchor="w")
    return tree


def _fill_table(tree: ttk.Treeview, students) -> None:
    for item in tree.get_children():
        tree.delete(item)
    for student in students:
        tree.insert("", tk.END, values=table_row(student))


class LoginDialog(tk.Toplevel):
    def __init__(self, parent, auth: AuthService, title: str):
        super().__init__(parent)
        self.auth = auth
        self.session = auth.new_session()
        self.title(title + " - Login")
        self.resizable(False, False)

        frame = ttk.Frame(self, padding=12)
        frame.pack(fill=tk.BOTH, expand=True)
        ttk.Label(frame, text="Username:").grid(row=0, column=0, sticky="w", pady=4)
        self.username = ttk.Entry(frame)
        self.username.grid(row=0, column=1, sticky="ew", padx=6, pady=4)
        ttk.Label(frame, text="Password:").grid(row=1, column=0, sticky="w", pady=4)
        self.password = ttk.Entry(frame, show="*")
        self.password.grid(row=1, column=1, sticky="ew", padx=6, pady=4)

        btns = ttk.Frame(frame)
        btns.grid(row=2, column=0, columnspan=2, pady=8)
        ttk.Button(btns, text="Login", command=self.authenticate).pack(side=tk.LEFT, padx=4)
        ttk.Button(btns, text="Register", command=self.open_register).pack(side=tk.LEFT, padx=4)
        ttk.Button(btns, text="Cancel", command=self.destroy).pack(side=tk.LEFT, padx=4)

        self.bind("<Return>", lambda e: self.authenticate())
        self.username.focus()
        self.grab_set()

    @property
    def authenticated(self) -> bool:
        return self.session.is_authenticated

    def authenticate(self):
        outcome = self.session.authenticate(self.username.get(), self.password.get())
        if outcome:
            self.destroy()
        else:
            messagebox.showerror("Login", outcome.message, parent=self)

    def open_register(self):
        dialog = RegisterDialog(self, self.auth)
        self.wait_window(dialog)
        self.grab_set()


class RegisterDialog(tk.Toplevel):
    def __init__(self, parent, auth: AuthService):
        super().__init__(parent)
        self.auth = auth
        self.title("Register")
        self.resizable(False, False)

        frame = ttk.Frame(self, padding=12)
        frame.pack(fill=tk.BOTH, expand=True)
        self.entries = {}
        for i, (key, label, show) in enumerate((
            ("username", "Username:", ""),
            ("password", "Password:", "*"),
            ("confirm", "Confirm password:", "*"),
        )):
            ttk.Label(frame, text=label).grid(row=i, column=0, sticky="w", pady=4)
            entry = ttk.Entry(frame, show=show)
            entry.grid(row=i, column=1, sticky="ew", padx=6, pady=4)
            self.entries[key] = entry

        btns = ttk.Frame(frame)
        btns.grid(row=3, column=0, columnspan=2, pady=8)
        ttk.Button(btns, text="Register", command=self.register).pack(side=tk.LEFT, padx=4)
        ttk.Button(btns, text="Cancel", command=self.destroy).pack(side=tk.LEFT, padx=4)
        self.grab_set()

    def register(self):
        outcome = self.auth.register(
            self.entries["username"].get(),
            self.entries["password"].get(),
            self.entries["confirm"].get(),
        )
        if outcome:
            messagebox.showinfo("Register", outcome.message, parent=self)
            self.destroy()
        else:
            messagebox.showerror("Register", outcome.message, parent=self)


class AddStudentDialog(tk.Toplevel):
    FIELDS = (
        ("student_no", "Student No:"),
        ("name", "Name:"),
        ("gender", "Gender:"),
        ("birth_date", "Birth date (YYYY-MM-DD):"),
        ("major", "Major:"),
        ("class_name", "Class:"),
        ("phone", "Phone:"),
        ("email", "Email:"),
        ("address", "Address:"),
    )

    def __init__(self, parent, service: StudentService):
        super().__init__(parent)
        self.service = service
        self.added = False
        self.title("Add Student")
        self.resizable(False, False)

        frame = ttk.Frame(self, padding=12)
        frame.pack(fill=tk.BOTH, expand=True)
        self.entries = {}
        for i, (key, label) in enumerate(self.FIELDS):
            ttk.Label(frame, text=label).grid(row=i, column=0, sticky="w", pady=3)
            if key == "gender":
                entry = ttk.Combobox(frame, values=GENDERS, state="readonly")
            else:
                entry = ttk.Entry(frame, width=32)
            entry.grid(row=i, column=1, sticky="ew", padx=6, pady=3)
            self.entries[key] = entry

        btns = ttk.Frame(frame)
        btns.grid(row=len(self.FIELDS), column=0, columnspan=2, pady=8)
        ttk.Button(btns, text="Save", command=self.save).pack(side=tk.LEFT, padx=4)
        ttk.Button(btns, text="Cancel", command=self.destroy).pack(side=tk.LEFT, padx=4)
        self.transient(parent)
        self.grab_set()

    def read_form(self) -> Student:
        values = {key: entry.get().strip() for key, entry in self.entries.items()}
        birth_text = values.pop("birth_date")
        return Student(birth_date=parse_date(birth_text) if birth_text else None, **values)

    def save(self):
        if self.entries["birth_date"].get().strip() and parse_date(self.entries["birth_date"].get()) is None:
            messagebox.showerror("Validation", "Invalid date, please use the YYYY-MM-DD format", parent=self)
            return

        outcome = self.service.add_student(self.read_form())
        if outcome:
            self.added = True
            messagebox.showinfo("Add Student", "Student added successfully", parent=self)
            self.destroy()
        else:
            messagebox.showerror("Add Student", outcome.message, parent=self)


class SearchDialog(tk.Toplevel):
    def __init__(self, parent, service: StudentService):
        super().__init__(parent)
        self.service = service
        self.title("Search Students")
        self.geometry("720x360")

        bar = ttk.Frame(self, padding=8)
        bar.pack(fill=tk.X)
        ttk.Label(bar, text="Search by:").pack(side=tk.LEFT)
        self.search_type = ttk.Combobox(
            bar, values=(SEARCH_BY_NUMBER, SEARCH_BY_NAME, SEARCH_BY_MAJOR), state="readonly", width=12
        )
        self.search_type.current(0)
        self.search_type.pack(side=tk.LEFT, padx=4)
        self.search_text = ttk.Entry(bar, width=24)
        self.search_text.pack(side=tk.LEFT, padx=4, fill=tk.X, expand=True)
        ttk.Button(bar, text="Search", command=self.perform_search).pack(side=tk.LEFT, padx=4)

        self.tree = _make_table(self)
        self.tree.pack(fill=tk.BOTH, expand=True, padx=8, pady=(0, 8))
        self.bind("<Return>", lambda e: self.perform_search())
        self.transient(parent)
        self.grab_set()

    def perform_search(self):
        text = self.search_text.get().strip()
        if not text:
            messagebox.showwarning("Search", "Please enter something to search for", parent=self)
            return

        search_type = self.search_type.get()
        if search_type == SEARCH_BY_NUMBER:
            outcome = self.service.get_student_by_number(text)
            results = [outcome.value] if outcome.value is not None else []
        elif search_type == SEARCH_BY_NAME:
            outcome = self.service.get_students_by_name(text)
            results = outcome.value or []
        else:
            outcome = self.service.get_students_by_major(text)
            results = outcome.value or []

        if outcome.is_storage_error:
            messagebox.showerror("Search", outcome.message, parent=self)
        _fill_table(self.tree, results)
        if not results and not outcome.is_storage_error:
            messagebox.showinfo("Search", "No matching students found", parent=self)


class MainWindow:
    def __init__(self, root: tk.Tk, service: StudentService, title: str):
        self.root = root
        self.service = service
        self.students = []
        self.root.title(title)
        self.root.geometry("820x520")
        self.root.minsize(640, 400)

        self.setup_ui()
        self.load_students()

    def setup_ui(self):
        header = ttk.Frame(self.root)
        header.pack(fill=tk.X)
        ttk.Label(header, text=self.root.title(), font=("Arial", 16, "bold")).pack(padx=10, pady=8)

        bar = ttk.Frame(self.root, padding=(8, 0))
        bar.pack(fill=tk.X)
        ttk.Label(bar, text="Find:").pack(side=tk.LEFT)
        self.quick_type = ttk.Combobox(bar, values=(SEARCH_BY_NUMBER, SEARCH_BY_NAME), state="readonly", width=10)
        self.quick_type.current(1)
        self.quick_type.pack(side=tk.LEFT, padx=4)
        self.quick_text = ttk.Entry(bar, width=20)
        self.quick_text.pack(side=tk.LEFT, padx=4)
        ttk.Button(bar, text="Go", command=self.quick_search).pack(side=tk.LEFT, padx=4)

        ttk.Label(bar, text="Sort:").pack(side=tk.LEFT, padx=(16, 0))
        self.sort_order = ttk.Combobox(bar, values=(SORT_ASCENDING, SORT_DESCENDING), state="readonly", width=22)
        self.sort_order.current(0)
        self.sort_order.pack(side=tk.LEFT, padx=4)
        ttk.Button(bar, text="Sort", command=self.sort_students).pack(side=tk.LEFT, padx=4)

        table_frame = ttk.Labelframe(self.root, text="Students", padding=6)
        table_frame.pack(fill=tk.BOTH, expand=True, padx=8, pady=6)
        self.tree = _make_table(table_frame)
        self.tree.pack(fill=tk.BOTH, expand=True)

        btns = ttk.Frame(self.root, padding=8)
        btns.pack(fill=tk.X)
        ttk.Button(btns, text="Add", command=self.add_student).pack(side=tk.LEFT, padx=6)
        ttk.Button(btns, text="Search", command=self.open_search).pack(side=tk.LEFT, padx=6)
        ttk.Button(btns, text="Delete", command=self.delete_student).pack(side=tk.LEFT, padx=6)
        ttk.Button(btns, text="Refresh", command=self.load_students).pack(side=tk.LEFT, padx=6)

    def show(self, students):
        self.students = list(students)
        _fill_table(self.tree, self.students)

    def load_students(self):
        outcome = self.service.get_all_students()
        if not outcome:
            messagebox.showerror("Students", outcome.message)
        self.show(outcome.value or [])

    def quick_search(self):
        text = self.quick_text.get().strip()
        if not text:
            messagebox.showwarning("Find", "Please enter something to search for")
            return

        if self.quick_type.get() == SEARCH_BY_NUMBER:
            outcome = self.service.get_student_by_number(text)
            found = [outcome.value] if outcome.value is not None else []
            empty_message = f"No student with number '{text}'"
        else:
            outcome = self.service.get_students_by_name(text)
            found = outcome.value or []
            empty_message = f"No student whose name contains '{text}'"

        if outcome.is_storage_error:
            messagebox.showerror("Find", outcome.message)
        elif not found:
            messagebox.showinfo("Find", empty_message)
        self.show(found)

    def sort_students(self):
        self.show(sort_by_number(self.students, descending=self.sort_order.get() == SORT_DESCENDING))

    def add_student(self):
        dialog = AddStudentDialog(self.root, self.service)
        self.root.wait_window(dialog)
        if dialog.added:
            self.load_students()

    def open_search(self):
        SearchDialog(self.root, self.service)

    def delete_student(self):
        selection = self.tree.selection()
        if not selection:
            messagebox.showwarning("Delete", "Please select a student first")
            return

        # row values are re-typed by Tk ("007" -> 7), so go back to the entity
        student_no = self.students[self.tree.index(selection[0])].student_no
        if not messagebox.askyesno("Confirm", f"Delete student {student_no}?"):
            return

        outcome = self.service.delete_student_by_number(student_no)
        if outcome:
            messagebox.showinfo("Delete", "Student deleted")
            self.load_students()
        else:
            messagebox.showerror("Delete", outcome.message)


def run_desktop(student_service: StudentService, auth_service: AuthService, title: str) -> int:
    """Show the login dialog, then the main window once authenticated"""
    root = tk.Tk()
    root.withdraw()

    login = LoginDialog(root, auth_service, title)
    root.wait_window(login)
    if not login.authenticated:
        logger.info("Login cancelled, exiting")
        root.destroy()
        return 1

    root.deiconify()
    MainWindow(root, student_service, title)
    root.mainloop()
    return 0
