from contextlib import contextmanager
from typing import Iterator, Optional
import logging

from sqlalchemy import create_engine, event, text
from sqlalchemy.engine import Engine
from sqlalchemy.exc import ArgumentError, SQLAlchemyError
from sqlalchemy.orm import Session, declarative_base

from .config import Settings

logger = logging.getLogger(__name__)

Base = declarative_base()


class ConfigurationError(Exception):
    """Raised when the database connection parameters are missing"""


def _sqlite_case_sensitive_like(dbapi_connection, connection_record):
    # SQLite LIKE folds ASCII case unless this pragma is set per connection
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA case_sensitive_like = ON")
    cursor.close()


class ConnectionProvider:
    """Opens one session per operation from an explicit settings value."""

    def __init__(self, settings: Settings):
        self.settings = settings
        self._engine: Optional[Engine] = None

    @property
    def engine(self) -> Engine:
        if self._engine is None:
            missing = self.settings.missing_keys()
            if missing:
                raise ConfigurationError(
                    "Database configuration missing: " + ", ".join(missing)
                )
            try:
                # Use pre_ping so a stale connection is replaced instead of failing the call
                self._engine = create_engine(
                    self.settings.sqlalchemy_url,
                    echo=self.settings.debug,
                    pool_pre_ping=True,
                )
            except (ArgumentError, ImportError) as e:
                raise ConfigurationError(f"Invalid database configuration: {e}") from e
            if self._engine.dialect.name == "sqlite":
                event.listen(self._engine, "connect", _sqlite_case_sensitive_like)
        return self._engine

    def connect(self) -> Session:
        """Open a new session; raises ConfigurationError or SQLAlchemyError"""
        return Session(bind=self.engine, autoflush=False, expire_on_commit=False)

    def close(self, db: Optional[Session]) -> None:
        if db is None:
            return
        try:
            db.close()
        except SQLAlchemyError as e:
            logger.error("Error closing database session: %s", e)

    @contextmanager
    def session(self) -> Iterator[Session]:
        """Scoped session: commit on success, roll back on error, always close"""
        db = self.connect()
        try:
            yield db
            db.commit()
        except Exception:
            db.rollback()
            raise
        finally:
            self.close(db)

    def test_connection(self) -> bool:
        try:
            with self.session() as db:
                db.execute(text("SELECT 1"))
            logger.info("Database connection test succeeded")
            return True
        except (ConfigurationError, SQLAlchemyError) as e:
            logger.error("Database connection test failed: %s", e)
            return False

    def init_db(self) -> bool:
        """Create any missing tables"""
        from . import models  # noqa: F401  registers the tables on Base

        try:
            Base.metadata.create_all(bind=self.engine)
            return True
        except (ConfigurationError, SQLAlchemyError) as e:
            logger.error("Could not create database tables: %s", e)
            return False

    def dispose(self) -> None:
        if self._engine is not None:
            self._engine.dispose()
            self._engine = None
