"""Auth API — registration and login.

Learn: Both routes answer with a single JWT:
- POST /register → create a user, 201 {"token": ...}
- POST /login → username/password, 200 {"token": ...}

Password checks and uniqueness live in UserService; the token comes from
the injected TokenService.
"""

from fastapi import APIRouter, Depends
from pydantic import BaseModel, Field
from sqlalchemy.ext.asyncio import AsyncSession

from jukebox.auth.jwt import TokenService, get_token_service
from jukebox.db.engine import get_db
from jukebox.services.user_service import UserService

router = APIRouter()


# ─── Schemas ─────────────────────────────────────────────


class Credentials(BaseModel):
    username: str = Field(min_length=1, max_length=50)
    password: str = Field(min_length=1)


class TokenResponse(BaseModel):
    token: str


def _svc(db: AsyncSession = Depends(get_db)) -> UserService:
    return UserService(db)


# ─── Register ────────────────────────────────────────────


@router.post("/register", response_model=TokenResponse, status_code=201)
async def register(
    body: Credentials,
    svc: UserService = Depends(_svc),
    tokens: TokenService = Depends(get_token_service),
):
    """Create a new user account and log it in."""
    user = await svc.register(body.username, body.password)
    return TokenResponse(token=tokens.issue(user.id))


# ─── Login ───────────────────────────────────────────────


@router.post("/login", response_model=TokenResponse)
async def login(
    body: Credentials,
    svc: UserService = Depends(_svc),
    tokens: TokenService = Depends(get_token_service),
):
    """Login with username and password → JWT."""
    user = await svc.authenticate(body.username, body.password)
    return TokenResponse(token=tokens.issue(user.id))
