"""User service — registration and credential checks.

Learn: Service layer separates business logic from HTTP routing. The
auth routes call register/authenticate and then issue a token; the
service never deals with tokens itself.
"""

import structlog
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from jukebox.auth.password import dummy_hash, hash_password, verify_password
from jukebox.db.models import User
from jukebox.errors import AuthenticationError, ConflictError

logger = structlog.get_logger()


class UserService:
    """Creates users and checks their credentials."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_by_username(self, username: str) -> User | None:
        result = await self.db.execute(
            select(User).where(User.username == username)
        )
        return result.scalars().first()

    async def register(self, username: str, password: str) -> User:
        """Create a user with a hashed password.

        Raises ConflictError if the username is taken. The unique
        constraint backs up the pre-check when two registrations race.
        """
        if await self.get_by_username(username):
            raise ConflictError("Username is already taken.")

        user = User(username=username, password_hash=hash_password(password))
        self.db.add(user)
        try:
            await self.db.commit()
        except IntegrityError:
            await self.db.rollback()
            raise ConflictError("Username is already taken.")

        logger.info("user.registered", user_id=user.id, username=username)
        return user

    async def authenticate(self, username: str, password: str) -> User:
        """Return the user if the password matches.

        Unknown username and wrong password raise the same
        AuthenticationError.
        """
        user = await self.get_by_username(username)
        if user is None:
            verify_password(password, dummy_hash())
            raise AuthenticationError()

        if not verify_password(password, user.password_hash):
            raise AuthenticationError()

        return user
