"""Movie repository for catalog lookups."""

from uuid import UUID

from sqlalchemy import Select, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from myflix.models.movie import Actor, Movie
from myflix.repositories.base import BaseRepository


class MovieRepository(BaseRepository[Movie]):
    """Read-only access to the movie catalog.

    Movies are always returned with their cast, and each cast member with
    their movies, loaded up front. Async sessions cannot lazy-load.
    """

    def __init__(self, session: AsyncSession) -> None:
        """Initialize movie repository.

        Args:
            session: Async database session.
        """
        super().__init__(Movie, session)

    def _select_with_cast(self) -> Select[tuple[Movie]]:
        # populate_existing also fills movies already in the identity map
        return (
            select(Movie)
            .options(selectinload(Movie.actors).selectinload(Actor.movies))
            .execution_options(populate_existing=True)
        )

    async def get_by_id(self, entity_id: UUID) -> Movie | None:
        """Get one movie with its cast, None if it does not exist."""
        result = await self.session.scalars(self._select_with_cast().where(Movie.id == entity_id))
        return result.one_or_none()

    async def list_movies(self) -> list[Movie]:
        """Get every movie, alphabetically by title."""
        result = await self.session.scalars(self._select_with_cast().order_by(Movie.title))
        return list(result.all())

    async def get_first_by_genre(self, genre_name: str) -> Movie | None:
        """Get any movie whose genre has the given name.

        Args:
            genre_name: Exact genre name.

        Returns:
            A movie carrying the genre, None if no movie has it.
        """
        result = await self.session.execute(
            select(Movie).where(Movie.genre_name == genre_name).order_by(Movie.title).limit(1)
        )
        return result.scalar_one_or_none()

    async def get_first_by_director(self, director_name: str) -> Movie | None:
        """Get any movie directed by the named director.

        Args:
            director_name: Exact director name.

        Returns:
            A movie by the director, None if there is none.
        """
        result = await self.session.execute(
            select(Movie).where(Movie.director_name == director_name).order_by(Movie.title).limit(1)
        )
        return result.scalar_one_or_none()
