from enum import Enum
from typing import Optional
import logging

from ..core.outcome import Outcome, Reason
from ..core.security import get_password_hash, verify_password
from ..core.validation import is_blank
from ..crud.user import UserRepository
from ..schemas.user import UserCredential

logger = logging.getLogger(__name__)


class SessionState(str, Enum):
    UNAUTHENTICATED = "unauthenticated"
    AUTHENTICATED = "authenticated"


class LoginSession:
    """Login gate for one run of the application.

    AUTHENTICATED is terminal: once reached, later calls succeed without
    checking credentials again.
    """

    def __init__(self, users: UserRepository):
        self.users = users
        self.state = SessionState.UNAUTHENTICATED
        self.username: Optional[str] = None

    @property
    def is_authenticated(self) -> bool:
        return self.state == SessionState.AUTHENTICATED

    def authenticate(self, username: Optional[str], password: Optional[str]) -> Outcome:
        if self.is_authenticated:
            return Outcome.success(self.username, "Already logged in")

        username = (username or "").strip()
        password = (password or "").strip()
        if not username or not password:
            return Outcome.failure(Reason.VALIDATION, "Username and password must not be empty")

        stored = self.users.get_password_hash(username)
        if stored.is_storage_error:
            return stored
        if stored.value is None:
            logger.warning("Login failed for %s: user not found", username)
            return Outcome.failure(Reason.AUTHENTICATION, "User not found")

        if not verify_password(password, stored.value):
            logger.warning("Login failed for %s: wrong password", username)
            return Outcome.failure(Reason.AUTHENTICATION, "Wrong password")

        self.state = SessionState.AUTHENTICATED
        self.username = username
        logger.info("User %s logged in", username)
        return Outcome.success(username, "Login successful")


class AuthService:
    def __init__(self, users: UserRepository):
        self.users = users

    def new_session(self) -> LoginSession:
        return LoginSession(self.users)

    def register(self, username: Optional[str], password: Optional[str], confirm: Optional[str]) -> Outcome:
        """Create a credential row; duplicates fail at the storage layer"""
        if is_blank(username) or is_blank(password):
            return Outcome.failure(Reason.VALIDATION, "Username and password must not be empty")

        username = username.strip()
        password = password.strip()
        if password != (confirm or "").strip():
            return Outcome.failure(Reason.VALIDATION, "The two passwords do not match")

        hashed = get_password_hash(password)
        if hashed is None:
            return Outcome.failure(Reason.AUTHENTICATION, "Password could not be encrypted")

        return self.users.add(UserCredential(username=username, password=hashed))
