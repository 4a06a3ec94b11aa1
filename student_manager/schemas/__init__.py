from .student import StudentBase, Student
from .user import UserCredential

__all__ = [
    "StudentBase", "Student",
    "UserCredential",
]
