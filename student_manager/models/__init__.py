from ..database import Base
from .user import User
from .student import Student

__all__ = [
    "Base",
    "User",
    "Student",
]
