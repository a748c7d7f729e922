"""Read-only catalog endpoints."""

from uuid import UUID

from fastapi import APIRouter

from myflix.api.deps import CurrentUser, MovieServiceDep
from myflix.schemas.movie import DirectorRead, GenreRead, MovieRead

router = APIRouter()


@router.get(
    "",
    response_model=list[MovieRead],
    summary="List movies",
)
async def list_movies(
    _user: CurrentUser,
    service: MovieServiceDep,
) -> list[MovieRead]:
    """List every movie with its director, genre and actors."""
    return await service.list_movies()


@router.get(
    "/genre/{name}",
    response_model=GenreRead,
    summary="Get genre",
)
async def get_genre(
    name: str,
    _user: CurrentUser,
    service: MovieServiceDep,
) -> GenreRead:
    """Get a genre's name and description."""
    return await service.get_genre(name)


@router.get(
    "/director/{name}",
    response_model=DirectorRead,
    summary="Get director",
)
async def get_director(
    name: str,
    _user: CurrentUser,
    service: MovieServiceDep,
) -> DirectorRead:
    """Get a director's name, bio and birth year."""
    return await service.get_director(name)


@router.get(
    "/{movie_id}",
    response_model=MovieRead,
    summary="Get movie",
)
async def get_movie(
    movie_id: UUID,
    _user: CurrentUser,
    service: MovieServiceDep,
) -> MovieRead:
    """Get one movie."""
    return await service.get_by_id(movie_id)
