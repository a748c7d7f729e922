"""Pydantic schemas package."""

from myflix.schemas.auth import LoginRequest, LoginResponse
from myflix.schemas.base import MessageResponse
from myflix.schemas.movie import (
    ActorRead,
    DirectorRead,
    GenreRead,
    MovieRead,
    MovieSummary,
)
from myflix.schemas.user import UserCreate, UserRead, UserUpdate

__all__ = [
    "ActorRead",
    "DirectorRead",
    "GenreRead",
    "LoginRequest",
    "LoginResponse",
    "MessageResponse",
    "MovieRead",
    "MovieSummary",
    "UserCreate",
    "UserRead",
    "UserUpdate",
]
