"""Catalog models: movies and actors."""

from uuid import UUID, uuid4

from sqlalchemy import Column, ForeignKey, Integer, String, Table, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from myflix.models.base import Base, TimestampMixin

# Association table for Movie <-> Actor (many-to-many)
MovieActor = Table(
    "movie_actors",
    Base.metadata,
    Column(
        "movie_id",
        ForeignKey("movies.id", ondelete="CASCADE"),
        primary_key=True,
    ),
    Column(
        "actor_id",
        ForeignKey("actors.id", ondelete="CASCADE"),
        primary_key=True,
    ),
)


class Movie(Base, TimestampMixin):
    """Movie in the catalog.

    Director and genre are embedded value objects, stored as column
    groups on the movie row rather than as separate tables.

    Attributes:
        id: Unique identifier (UUID).
        title: Movie title.
        description: Synopsis.
        release_year: Year of release.
        director_name, director_bio, director_birth_year: Director details.
        genre_name, genre_description: Genre details.
        actors: Cast members.
    """

    id: Mapped[UUID] = mapped_column(
        primary_key=True,
        default=uuid4,
    )

    title: Mapped[str] = mapped_column(
        String(300),
        nullable=False,
        index=True,
    )

    description: Mapped[str] = mapped_column(
        Text,
        nullable=False,
    )

    release_year: Mapped[int | None] = mapped_column(
        Integer,
        nullable=True,
    )

    director_name: Mapped[str | None] = mapped_column(
        String(200),
        nullable=True,
        index=True,
    )

    director_bio: Mapped[str | None] = mapped_column(
        Text,
        nullable=True,
    )

    director_birth_year: Mapped[int | None] = mapped_column(
        Integer,
        nullable=True,
    )

    genre_name: Mapped[str | None] = mapped_column(
        String(100),
        nullable=True,
        index=True,
    )

    genre_description: Mapped[str | None] = mapped_column(
        Text,
        nullable=True,
    )

    # Relationships
    actors: Mapped[list["Actor"]] = relationship(
        "Actor",
        secondary=MovieActor,
        back_populates="movies",
        lazy="selectin",
    )

    def __repr__(self) -> str:
        return f"<Movie {self.title[:30]}>"


class Actor(Base, TimestampMixin):
    """Cast member, with back-references to the movies they appear in.

    Attributes:
        id: Unique identifier (UUID).
        name: Actor's name.
        birth_year: Year of birth.
        movies: Movies this actor appears in.
    """

    id: Mapped[UUID] = mapped_column(
        primary_key=True,
        default=uuid4,
    )

    name: Mapped[str] = mapped_column(
        String(200),
        nullable=False,
    )

    birth_year: Mapped[int | None] = mapped_column(
        Integer,
        nullable=True,
    )

    movies: Mapped[list[Movie]] = relationship(
        Movie,
        secondary=MovieActor,
        back_populates="actors",
        lazy="selectin",
    )

    def __repr__(self) -> str:
        return f"<Actor {self.name}>"
