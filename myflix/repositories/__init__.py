"""Repository package for data access layer."""

from myflix.repositories.base import BaseRepository
from myflix.repositories.movie import MovieRepository
from myflix.repositories.user import UserRepository

__all__ = [
    "BaseRepository",
    "MovieRepository",
    "UserRepository",
]
