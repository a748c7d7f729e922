"""User repository for database operations."""

from collections import defaultdict
from collections.abc import Sequence
from datetime import date
from uuid import UUID

from sqlalchemy import delete, func, select
from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.ext.asyncio import AsyncSession

from myflix.models.movie import Movie
from myflix.models.user import User, UserFavorite
from myflix.repositories.base import BaseRepository


class UserRepository(BaseRepository[User]):
    """Repository for User entity operations, including the favorites set."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize user repository.

        Args:
            session: Async database session.
        """
        super().__init__(User, session)

    async def get_by_username(self, username: str) -> User | None:
        """Get a user by username.

        Args:
            username: Exact, case-sensitive username.

        Returns:
            User if found, None otherwise.
        """
        result = await self.session.execute(select(User).where(User.username == username))
        return result.scalar_one_or_none()

    async def username_exists(self, username: str, *, exclude_id: UUID | None = None) -> bool:
        """Check if a username is already registered.

        Args:
            username: Username to check.
            exclude_id: User to ignore (the one being renamed).

        Returns:
            True if another user holds the username.
        """
        query = select(func.count()).select_from(User).where(User.username == username)
        if exclude_id is not None:
            query = query.where(User.id != exclude_id)
        result = await self.session.execute(query)
        return result.scalar_one() > 0

    async def create_user(
        self,
        *,
        username: str,
        hashed_password: str,
        name: str,
        email: str,
        birthdate: date | None = None,
    ) -> User:
        """Create a new user.

        Args:
            username: Unique username.
            hashed_password: Pre-hashed password (Argon2).
            name: Display name.
            email: Email address.
            birthdate: Optional date of birth.

        Returns:
            Created user entity.
        """
        user = User(
            username=username,
            hashed_password=hashed_password,
            name=name,
            email=email,
            birthdate=birthdate,
        )
        self.session.add(user)
        await self.session.flush()
        await self.session.refresh(user)
        return user

    async def delete_user(self, user: User) -> None:
        """Delete a user together with their favorites.

        Args:
            user: User entity to delete.
        """
        await self.session.execute(delete(UserFavorite).where(UserFavorite.c.user_id == user.id))
        await self.delete(user)

    # ------------------------------------------------------------------
    # Favorites
    # ------------------------------------------------------------------

    async def add_favorite(self, user_id: UUID, movie_id: UUID) -> None:
        """Insert ``movie_id`` into the user's favorites set.

        A single INSERT ... ON CONFLICT DO NOTHING, so adding an existing
        member is a no-op even under concurrent requests.

        Args:
            user_id: Owner of the favorites set.
            movie_id: Movie to add.
        """
        dialect = self.session.get_bind().dialect.name
        if dialect == "postgresql":
            stmt = postgresql.insert(UserFavorite)
        elif dialect == "sqlite":
            stmt = sqlite.insert(UserFavorite)
        else:
            msg = f"Unsupported database dialect for favorites: {dialect}"
            raise NotImplementedError(msg)

        await self.session.execute(
            stmt.values(user_id=user_id, movie_id=movie_id).on_conflict_do_nothing(
                index_elements=["user_id", "movie_id"]
            )
        )

    async def remove_favorite(self, user_id: UUID, movie_id: UUID) -> None:
        """Remove ``movie_id`` from the user's favorites set if present.

        Args:
            user_id: Owner of the favorites set.
            movie_id: Movie to remove.
        """
        await self.session.execute(
            delete(UserFavorite).where(
                UserFavorite.c.user_id == user_id,
                UserFavorite.c.movie_id == movie_id,
            )
        )

    async def get_favorite_ids(self, user_id: UUID) -> list[UUID]:
        """Get the movie ids in a user's favorites set.

        Args:
            user_id: User's UUID.

        Returns:
            Movie ids, ordered for stable output.
        """
        result = await self.session.execute(
            select(UserFavorite.c.movie_id)
            .where(UserFavorite.c.user_id == user_id)
            .order_by(UserFavorite.c.movie_id)
        )
        return list(result.scalars().all())

    async def get_favorite_ids_for(self, user_ids: Sequence[UUID]) -> dict[UUID, list[UUID]]:
        """Get favorites for several users in one query.

        Args:
            user_ids: Users to look up.

        Returns:
            Mapping of user id to movie ids; users without favorites are absent.
        """
        favorites: dict[UUID, list[UUID]] = defaultdict(list)
        if not user_ids:
            return favorites

        result = await self.session.execute(
            select(UserFavorite.c.user_id, UserFavorite.c.movie_id)
            .where(UserFavorite.c.user_id.in_(user_ids))
            .order_by(UserFavorite.c.movie_id)
        )
        for user_id, movie_id in result.all():
            favorites[user_id].append(movie_id)
        return favorites

    async def get_favorite_titles(self, user_id: UUID) -> list[str]:
        """Get the titles of a user's favorite movies.

        Args:
            user_id: User's UUID.

        Returns:
            Movie titles in alphabetical order.
        """
        result = await self.session.execute(
            select(Movie.title)
            .join(UserFavorite, UserFavorite.c.movie_id == Movie.id)
            .where(UserFavorite.c.user_id == user_id)
            .order_by(Movie.title)
        )
        return list(result.scalars().all())
