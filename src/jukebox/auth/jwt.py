"""JWT token creation and verification.

Learn: JWT (JSON Web Token) provides stateless authentication. The token
carries the user id in "sub" plus issued-at and expiry; nothing is stored
server-side, so a token stays valid until it expires.

TokenService receives its secret through the constructor. The app builds
one from settings (get_token_service); tests build their own.
"""

from datetime import datetime, timedelta, timezone
from functools import lru_cache
from typing import Optional

import jwt

from jukebox.config import settings
from jukebox.errors import InvalidTokenError


class TokenService:
    """Issues and verifies signed, time-limited identity tokens."""

    def __init__(
        self,
        secret: str,
        algorithm: str = "HS256",
        ttl: timedelta = timedelta(days=1),
    ):
        self.secret = secret
        self.algorithm = algorithm
        self.ttl = ttl

    def issue(self, user_id: int, *, issued_at: Optional[datetime] = None) -> str:
        """Create a token for user_id that expires ttl after issued_at."""
        issued_at = issued_at or datetime.now(timezone.utc)
        payload = {
            "sub": str(user_id),
            "iat": issued_at,
            "exp": issued_at + self.ttl,
        }
        return jwt.encode(payload, self.secret, algorithm=self.algorithm)

    def verify(self, token: str) -> int:
        """Verify a token and return the user id it was issued for.

        Raises InvalidTokenError on a bad signature, a malformed payload,
        or an expired token.
        """
        try:
            payload = jwt.decode(
                token,
                self.secret,
                algorithms=[self.algorithm],
                options={"require": ["sub", "iat", "exp"]},
            )
        except jwt.ExpiredSignatureError:
            raise InvalidTokenError("Token has expired.")
        except jwt.InvalidTokenError as e:
            raise InvalidTokenError(f"Invalid token: {e}")

        try:
            return int(payload["sub"])
        except (TypeError, ValueError):
            raise InvalidTokenError("Invalid token: malformed subject")


@lru_cache
def get_token_service() -> TokenService:
    """FastAPI dependency: the process-wide token service."""
    return TokenService(
        settings.jwt_secret,
        algorithm=settings.jwt_algorithm,
        ttl=timedelta(minutes=settings.access_token_expire_minutes),
    )
