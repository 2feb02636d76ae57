"""FastAPI auth dependencies.

Learn: get_current_user_optional is attached to the top-level router, so
it runs for every API request before the route itself. FastAPI caches a
dependency per request, which means routes that also ask for it get the
same result without a second token check or database lookup.

- get_current_user_optional → Optional[User]: the "maybe user"
- get_current_user → User: the guard; 401 when nobody is logged in
"""

from typing import Optional

from fastapi import Depends, Header
from sqlalchemy.ext.asyncio import AsyncSession

from jukebox.auth.jwt import TokenService, get_token_service
from jukebox.db.engine import get_db
from jukebox.db.models import User, is_valid_id
from jukebox.errors import NotFoundError, UnauthorizedError


def bearer_token(authorization: Optional[str]) -> Optional[str]:
    """Pull the token out of an "Authorization: Bearer <token>" header.

    Returns None when the header is missing, uses another scheme, or
    carries no token.
    """
    if not authorization:
        return None
    scheme, _, token = authorization.partition(" ")
    if scheme.lower() != "bearer":
        return None
    return token.strip() or None


async def get_current_user_optional(
    authorization: Optional[str] = Header(None),
    db: AsyncSession = Depends(get_db),
    tokens: TokenService = Depends(get_token_service),
) -> Optional[User]:
    """Resolve the bearer token (if any) to a User.

    No token → None. A token that fails verification, or whose user no
    longer exists, fails the request instead of falling back to anonymous.
    """
    token = bearer_token(authorization)
    if token is None:
        return None

    user_id = tokens.verify(token)
    user = await db.get(User, user_id) if is_valid_id(user_id) else None
    if user is None:
        raise NotFoundError("User not found.")
    return user


async def get_current_user(
    user: Optional[User] = Depends(get_current_user_optional),
) -> User:
    """Require an authenticated user (401 otherwise)."""
    if user is None:
        raise UnauthorizedError(headers={"WWW-Authenticate": "Bearer"})
    return user
