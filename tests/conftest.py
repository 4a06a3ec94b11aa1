from datetime import date

import pytest

from student_manager.config import Settings
from student_manager.crud import StudentRepository, UserRepository
from student_manager.database import ConnectionProvider
from student_manager.schemas import Student
from student_manager.services import AuthService, StudentService


@pytest.fixture
def settings(tmp_path):
    return Settings(database_url=f"sqlite:///{(tmp_path / 'students.db').as_posix()}", _env_file=None)


@pytest.fixture
def provider(settings):
    provider = ConnectionProvider(settings)
    assert provider.init_db()
    yield provider
    provider.dispose()


@pytest.fixture
def repository(provider):
    return StudentRepository(provider)


@pytest.fixture
def service(repository):
    return StudentService(repository)


@pytest.fixture
def users(provider):
    return UserRepository(provider)


@pytest.fixture
def auth_service(users):
    return AuthService(users)


@pytest.fixture
def unconfigured_provider():
    provider = ConnectionProvider(Settings(database_url=None, _env_file=None))
    yield provider
    provider.dispose()


@pytest.fixture
def unreachable_provider(tmp_path):
    missing_dir = tmp_path / "does" / "not" / "exist"
    provider = ConnectionProvider(
        Settings(database_url=f"sqlite:///{(missing_dir / 'students.db').as_posix()}", _env_file=None)
    )
    yield provider
    provider.dispose()


@pytest.fixture
def make_student():
    def factory(**overrides):
        fields = dict(
            student_no="S001",
            name="Li Wei",
            gender="male",
            birth_date=date(2001, 5, 1),
            major="CS",
            class_name="CS-1",
        )
        fields.update(overrides)
        return Student(**fields)

    return factory
