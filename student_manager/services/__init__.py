from ..config import Settings
from ..crud import StudentRepository, UserRepository
from ..database import ConnectionProvider
from .auth_service import AuthService, LoginSession, SessionState
from .student_service import StudentService


def build_services(settings: Settings):
    """Wire the provider, repositories and services for one process"""
    provider = ConnectionProvider(settings)
    return (
        provider,
        StudentService(StudentRepository(provider)),
        AuthService(UserRepository(provider)),
    )


__all__ = [
    "AuthService",
    "LoginSession",
    "SessionState",
    "StudentService",
    "build_services",
]
