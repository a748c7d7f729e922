"""Services package for business logic."""

from myflix.services.auth import AuthService
from myflix.services.favorites import FavoritesService
from myflix.services.movie import MovieService
from myflix.services.user import UserService

__all__ = [
    "AuthService",
    "FavoritesService",
    "MovieService",
    "UserService",
]
