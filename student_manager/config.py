from pydantic import ValidationError
from pydantic_settings import BaseSettings
from sqlalchemy.engine import make_url
from sqlalchemy.exc import ArgumentError
from typing import List, Optional
import logging
import os

logger = logging.getLogger(__name__)

ENV_FILE_VARIABLE = "STUDENT_MANAGER_ENV_FILE"
DEFAULT_ENV_FILE = ".env"


class Settings(BaseSettings):
    # Database
    database_url: Optional[str] = None
    database_username: Optional[str] = None
    database_password: Optional[str] = None
    database_driver: Optional[str] = None

    # App
    app_name: str = "Student Management System"
    debug: bool = False
    log_level: str = "INFO"

    class Config:
        env_file = DEFAULT_ENV_FILE
        env_file_encoding = "utf-8"
        case_sensitive = False
        extra = "ignore"

    @property
    def is_sqlite(self) -> bool:
        backend = self.database_driver or self.database_url or ""
        return backend.startswith("sqlite")

    def missing_keys(self) -> List[str]:
        """Names of the connection keys that still have to be provided"""
        if not self.database_url:
            return ["DATABASE_URL"]
        if self.is_sqlite:
            return []

        try:
            url = make_url(self.database_url)
        except ArgumentError:
            return ["DATABASE_URL"]

        missing = []
        if not (self.database_username or url.username):
            missing.append("DATABASE_USERNAME")
        if self.database_password is None and url.password is None:
            missing.append("DATABASE_PASSWORD")
        return missing

    @property
    def is_configured(self) -> bool:
        return not self.missing_keys()

    @property
    def sqlalchemy_url(self):
        """Connection URL with the separately configured credentials merged in"""
        url = make_url(self.database_url)
        if self.database_driver:
            url = url.set(drivername=self.database_driver)
        if self.database_username:
            url = url.set(username=self.database_username)
        if self.database_password is not None:
            url = url.set(password=self.database_password)
        return url


def load_settings(env_file: Optional[str] = None) -> Settings:
    """Build the settings once at process entry.

    Never raises: an invalid file is logged and yields an unconfigured
    ``Settings`` so every data-access call fails closed.
    """
    env_file = env_file or os.getenv(ENV_FILE_VARIABLE, DEFAULT_ENV_FILE)
    if not os.path.exists(env_file):
        logger.warning("Configuration file %s not found, using environment only", env_file)

    try:
        settings = Settings(_env_file=env_file)
    except ValidationError as e:
        logger.error("Invalid configuration in %s: %s", env_file, e)
        return Settings.model_construct()

    missing = settings.missing_keys()
    if missing:
        logger.error("Database configuration incomplete, missing: %s", ", ".join(missing))
    return settings
