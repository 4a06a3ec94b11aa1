from .student import StudentRepository
from .user import UserRepository

__all__ = [
    "StudentRepository",
    "UserRepository",
]
