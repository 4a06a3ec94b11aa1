from typing import Optional
import hashlib
import hmac
import logging

logger = logging.getLogger(__name__)


def get_password_hash(password: str) -> Optional[str]:
    """Hash a password using unsalted MD5, hex encoded.

    Matches the credential rows already stored in the users table. Not a
    secure scheme; returns None if the digest is unavailable so callers fail
    closed.
    """
    try:
        return hashlib.md5(password.encode("utf-8")).hexdigest()
    except (ValueError, AttributeError) as e:
        logger.error("Password hashing failed: %s", e)
        return None


def verify_password(plain_password: str, hashed_password: Optional[str]) -> bool:
    """Verify a password against its stored hash"""
    if not hashed_password:
        return False
    computed = get_password_hash(plain_password)
    if computed is None:
        return False
    return hmac.compare_digest(computed.encode("utf-8"), hashed_password.encode("utf-8"))
