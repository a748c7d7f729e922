"""Movie service for read-only catalog lookups."""

from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from myflix.core.exceptions import ErrorCode, NotFoundError
from myflix.repositories.movie import MovieRepository
from myflix.schemas.movie import DirectorRead, GenreRead, MovieRead, director_of, genre_of


class MovieService:
    """Service for catalog reads: movies, genres and directors."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize movie service.

        Args:
            session: Async database session.
        """
        self.session = session
        self.repository = MovieRepository(session)

    async def list_movies(self) -> list[MovieRead]:
        """Get every movie with actor, director and genre detail."""
        movies = await self.repository.list_movies()
        return [MovieRead.from_model(m) for m in movies]

    async def get_by_id(self, movie_id: UUID) -> MovieRead:
        """Get one movie.

        Raises:
            NotFoundError: If the movie does not exist.
        """
        movie = await self.repository.get_by_id(movie_id)
        if movie is None:
            raise NotFoundError(
                resource="Movie",
                resource_id=movie_id,
                code=ErrorCode.MOVIE_NOT_FOUND,
            )
        return MovieRead.from_model(movie)

    async def get_genre(self, name: str) -> GenreRead:
        """Get a genre by name.

        Raises:
            NotFoundError: If no movie carries the genre.
        """
        movie = await self.repository.get_first_by_genre(name)
        genre = genre_of(movie) if movie is not None else None
        if genre is None:
            raise NotFoundError(
                resource="Genre",
                resource_id=name,
                code=ErrorCode.GENRE_NOT_FOUND,
            )
        return genre

    async def get_director(self, name: str) -> DirectorRead:
        """Get a director by name.

        Raises:
            NotFoundError: If no movie is by the director.
        """
        movie = await self.repository.get_first_by_director(name)
        director = director_of(movie) if movie is not None else None
        if director is None:
            raise NotFoundError(
                resource="Director",
                resource_id=name,
                code=ErrorCode.DIRECTOR_NOT_FOUND,
            )
        return director
