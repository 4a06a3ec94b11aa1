import logging

from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from ..core.outcome import Outcome, Reason
from ..database import ConfigurationError, ConnectionProvider
from ..models.user import User
from ..schemas.user import UserCredential

logger = logging.getLogger(__name__)


class UserRepository:
    def __init__(self, provider: ConnectionProvider):
        self.provider = provider

    def get_password_hash(self, username: str) -> Outcome:
        """Stored digest for ``username``; NOT_FOUND when there is no such user"""
        try:
            with self.provider.session() as db:
                user = db.query(User).filter(User.username == username).first()
                if user is None:
                    return Outcome.failure(Reason.NOT_FOUND, "User not found")
                return Outcome.success(user.password)
        except ConfigurationError as e:
            logger.error("Cannot look up user: %s", e)
            return Outcome.failure(Reason.CONFIGURATION, str(e))
        except SQLAlchemyError as e:
            logger.error("Database error looking up user %s: %s", username, e)
            return Outcome.failure(Reason.CONNECTIVITY, "Database error, could not look up user")

    def add(self, credential: UserCredential) -> Outcome:
        try:
            with self.provider.session() as db:
                db.add(User(username=credential.username, password=credential.password))
            logger.info("Registered user %s", credential.username)
            return Outcome.success(message="Registration successful")
        except ConfigurationError as e:
            logger.error("Cannot register user: %s", e)
            return Outcome.failure(Reason.CONFIGURATION, str(e))
        except IntegrityError as e:
            # duplicate username, reported like any other storage failure
            logger.warning("Registration of %s rejected by the database: %s", credential.username, e.orig)
            return Outcome.failure(Reason.CONNECTIVITY, "Registration failed")
        except SQLAlchemyError as e:
            logger.error("Database error registering user %s: %s", credential.username, e)
            return Outcome.failure(Reason.CONNECTIVITY, "Registration failed")

    def count(self) -> Outcome:
        try:
            with self.provider.session() as db:
                return Outcome.success(db.query(User).count())
        except (ConfigurationError, SQLAlchemyError) as e:
            logger.error("Cannot count users: %s", e)
            reason = Reason.CONFIGURATION if isinstance(e, ConfigurationError) else Reason.CONNECTIVITY
            return Outcome.failure(reason, str(e), 0)
