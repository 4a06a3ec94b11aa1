import hashlib

from student_manager.core.outcome import Reason
from student_manager.core.security import get_password_hash, verify_password
from student_manager.crud import UserRepository
from student_manager.services import AuthService, SessionState


def test_password_hash_is_hex_md5():
    assert get_password_hash("secret") == "5ebe2294ecd0e0f08eab7690d2a6ee69"
    assert verify_password("secret", "5ebe2294ecd0e0f08eab7690d2a6ee69")
    assert not verify_password("secret", None)
    assert not verify_password("secret", "")


def test_register_then_login(auth_service):
    assert auth_service.register("admin", "secret", "secret")

    session = auth_service.new_session()
    outcome = session.authenticate("admin", "secret")

    assert outcome
    assert session.state == SessionState.AUTHENTICATED
    assert session.username == "admin"


def test_register_stores_digest_not_password(auth_service, users):
    auth_service.register("admin", "secret", "secret")

    assert users.get_password_hash("admin").value == get_password_hash("secret")


def test_wrong_password_keeps_session_unauthenticated(auth_service):
    auth_service.register("admin", "secret", "secret")
    session = auth_service.new_session()

    for _ in range(3):
        outcome = session.authenticate("admin", "wrong")
        assert not outcome
        assert outcome.reason == Reason.AUTHENTICATION
        assert outcome.message == "Wrong password"
        assert session.state == SessionState.UNAUTHENTICATED


def test_unknown_user(auth_service):
    session = auth_service.new_session()

    outcome = session.authenticate("ghost", "secret")

    assert outcome.reason == Reason.AUTHENTICATION
    assert outcome.message == "User not found"
    assert not session.is_authenticated


def test_blank_credentials(auth_service):
    session = auth_service.new_session()

    assert session.authenticate("", "secret").reason == Reason.VALIDATION
    assert session.authenticate("admin", "   ").reason == Reason.VALIDATION


def test_authenticated_is_terminal(auth_service):
    auth_service.register("admin", "secret", "secret")
    session = auth_service.new_session()
    session.authenticate("admin", "secret")

    assert session.authenticate("admin", "wrong")
    assert session.is_authenticated


def test_digest_failure_fails_closed(auth_service, monkeypatch):
    auth_service.register("admin", "secret", "secret")
    session = auth_service.new_session()

    def broken_md5(*args, **kwargs):
        raise ValueError("md5 disabled")

    monkeypatch.setattr(hashlib, "md5", broken_md5)

    outcome = session.authenticate("admin", "secret")
    assert not outcome
    assert not session.is_authenticated


def test_register_validation(auth_service):
    assert auth_service.register("", "secret", "secret").reason == Reason.VALIDATION
    assert auth_service.register("admin", "", "").reason == Reason.VALIDATION

    mismatch = auth_service.register("admin", "secret", "secret2")
    assert mismatch.reason == Reason.VALIDATION
    assert mismatch.message == "The two passwords do not match"


def test_duplicate_registration_fails_at_storage(auth_service, users):
    assert auth_service.register("admin", "secret", "secret")

    outcome = auth_service.register("admin", "other", "other")

    assert not outcome
    assert outcome.message == "Registration failed"
    assert users.count().value == 1


def test_login_fails_closed_without_storage(unconfigured_provider):
    session = AuthService(UserRepository(unconfigured_provider)).new_session()

    outcome = session.authenticate("admin", "secret")

    assert outcome.reason == Reason.CONFIGURATION
    assert not session.is_authenticated
