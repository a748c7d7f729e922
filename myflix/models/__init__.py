"""SQLAlchemy models package."""

from myflix.models.base import Base
from myflix.models.movie import Actor, Movie, MovieActor
from myflix.models.user import User, UserFavorite

__all__ = [
    "Actor",
    "Base",
    "Movie",
    "MovieActor",
    "User",
    "UserFavorite",
]
