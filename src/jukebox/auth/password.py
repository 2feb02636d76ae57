"""Password hashing utilities.

Learn: Uses bcrypt for secure password hashing. bcrypt automatically
handles salting and is resistant to rainbow table attacks. The work
factor comes from settings (12 by default, ~100ms per hash); tests turn
it down to keep the suite fast.
"""

from functools import lru_cache
from typing import Optional

import bcrypt

from jukebox.config import settings


def hash_password(password: str, rounds: Optional[int] = None) -> str:
    """Hash a password with bcrypt.

    Passwords are truncated to 72 bytes (bcrypt's limit).
    """
    pw_bytes = password.encode("utf-8")[:72]
    salt = bcrypt.gensalt(rounds=rounds or settings.bcrypt_rounds)
    return bcrypt.hashpw(pw_bytes, salt).decode("utf-8")


def verify_password(password: str, password_hash: str) -> bool:
    """Verify a password against its bcrypt hash."""
    try:
        pw_bytes = password.encode("utf-8")[:72]
        return bcrypt.checkpw(pw_bytes, password_hash.encode("utf-8"))
    except (ValueError, TypeError):
        return False


@lru_cache
def dummy_hash() -> str:
    """A throwaway hash to check against when the username is unknown.

    Learn: Verifying against something costs the same as a real check, so
    response timing doesn't reveal whether a username exists.
    """
    return hash_password("not-a-real-password")
