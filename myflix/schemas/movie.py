"""Catalog schemas for movies, actors, genres and directors."""

from uuid import UUID

from pydantic import Field

from myflix.models.movie import Actor, Movie
from myflix.schemas.base import BaseSchema


class DirectorRead(BaseSchema):
    """Director embedded in a movie."""

    name: str
    bio: str | None = None
    birth_year: int | None = None


class GenreRead(BaseSchema):
    """Genre embedded in a movie."""

    name: str
    description: str | None = None


class MovieSummary(BaseSchema):
    """Movie reference as listed under an actor."""

    id: UUID
    title: str


class ActorRead(BaseSchema):
    """Actor with the movies they appear in."""

    id: UUID
    name: str
    birth_year: int | None = None
    movies: list[MovieSummary] = Field(default_factory=list)

    @classmethod
    def from_model(cls, actor: Actor) -> "ActorRead":
        return cls(
            id=actor.id,
            name=actor.name,
            birth_year=actor.birth_year,
            movies=[MovieSummary(id=m.id, title=m.title) for m in actor.movies],
        )


class MovieRead(BaseSchema):
    """Movie with director, genre and cast detail."""

    id: UUID
    title: str
    description: str
    release_year: int | None = None
    director: DirectorRead | None = None
    genre: GenreRead | None = None
    actors: list[ActorRead] = Field(default_factory=list)

    @classmethod
    def from_model(cls, movie: Movie) -> "MovieRead":
        """Assemble the nested representation from a movie row."""
        return cls(
            id=movie.id,
            title=movie.title,
            description=movie.description,
            release_year=movie.release_year,
            director=director_of(movie),
            genre=genre_of(movie),
            actors=[ActorRead.from_model(a) for a in movie.actors],
        )


def director_of(movie: Movie) -> DirectorRead | None:
    """Extract the embedded director, None if the movie has none."""
    if movie.director_name is None:
        return None
    return DirectorRead(
        name=movie.director_name,
        bio=movie.director_bio,
        birth_year=movie.director_birth_year,
    )


def genre_of(movie: Movie) -> GenreRead | None:
    """Extract the embedded genre, None if the movie has none."""
    if movie.genre_name is None:
        return None
    return GenreRead(name=movie.genre_name, description=movie.genre_description)
