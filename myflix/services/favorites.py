"""Favorites service maintaining the user <-> movie membership set."""

from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from myflix.core.exceptions import ErrorCode, NotFoundError
from myflix.core.logging import get_logger
from myflix.models.user import User
from myflix.repositories.movie import MovieRepository
from myflix.repositories.user import UserRepository
from myflix.schemas.user import UserRead

logger = get_logger("favorites")


class FavoritesService:
    """Adds and removes movies in a user's favorites.

    Both operations are idempotent: adding a present movie or removing an
    absent one succeeds without changing anything. The user and the movie
    are looked up before the set is touched; that check and the mutation
    are not one transaction, so a movie deleted in between can leave a
    stale reference.
    """

    def __init__(self, session: AsyncSession) -> None:
        """Initialize favorites service.

        Args:
            session: Async database session.
        """
        self.session = session
        self.user_repository = UserRepository(session)
        self.movie_repository = MovieRepository(session)

    async def add(self, user_id: UUID, movie_id: UUID) -> UserRead:
        """Add a movie to a user's favorites.

        Args:
            user_id: Owner of the favorites.
            movie_id: Movie to add.

        Returns:
            The user profile with the resulting favorites.

        Raises:
            NotFoundError: If the user or the movie does not exist.
        """
        user = await self._check_exists(user_id, movie_id)
        await self.user_repository.add_favorite(user_id, movie_id)
        logger.info(
            "Favorite added",
            extra={"user_id": str(user_id), "movie_id": str(movie_id)},
        )
        return await self._read(user)

    async def remove(self, user_id: UUID, movie_id: UUID) -> UserRead:
        """Remove a movie from a user's favorites.

        Args:
            user_id: Owner of the favorites.
            movie_id: Movie to remove.

        Returns:
            The user profile with the resulting favorites.

        Raises:
            NotFoundError: If the user or the movie does not exist.
        """
        user = await self._check_exists(user_id, movie_id)
        await self.user_repository.remove_favorite(user_id, movie_id)
        logger.info(
            "Favorite removed",
            extra={"user_id": str(user_id), "movie_id": str(movie_id)},
        )
        return await self._read(user)

    async def _check_exists(self, user_id: UUID, movie_id: UUID) -> User:
        user = await self.user_repository.get_by_id(user_id)
        if user is None:
            raise NotFoundError(
                resource="User",
                resource_id=user_id,
                code=ErrorCode.USER_NOT_FOUND,
            )
        if not await self.movie_repository.exists(movie_id):
            raise NotFoundError(
                resource="Movie",
                resource_id=movie_id,
                code=ErrorCode.MOVIE_NOT_FOUND,
            )
        return user

    async def _read(self, user: User) -> UserRead:
        favorites = await self.user_repository.get_favorite_ids(user.id)
        return UserRead.from_model(user, favorites)
