"""User model and the user <-> movie favorites association."""

from datetime import date
from uuid import UUID, uuid4

from sqlalchemy import Column, Date, ForeignKey, String, Table
from sqlalchemy.orm import Mapped, mapped_column

from myflix.models.base import Base, TimestampMixin

# Association table for User <-> Movie favorites (many-to-many).
# The composite primary key makes each (user, movie) pair a set member.
# Deleting a user removes their rows. movie_id has no delete action, so
# favorites are never removed on a movie's behalf.
UserFavorite = Table(
    "user_favorites",
    Base.metadata,
    Column(
        "user_id",
        ForeignKey("users.id", ondelete="CASCADE"),
        primary_key=True,
    ),
    Column(
        "movie_id",
        ForeignKey("movies.id"),
        primary_key=True,
    ),
)


class User(Base, TimestampMixin):
    """Registered account.

    Attributes:
        id: Unique identifier (UUID), assigned at creation and never changed.
        username: Unique, case-sensitive login name.
        hashed_password: Argon2 hashed password.
        name: Display name.
        email: Contact email address.
        birthdate: Optional date of birth.
    """

    id: Mapped[UUID] = mapped_column(
        primary_key=True,
        default=uuid4,
    )

    username: Mapped[str] = mapped_column(
        String(50),
        unique=True,
        index=True,
        nullable=False,
    )

    hashed_password: Mapped[str] = mapped_column(
        String(128),  # Argon2 hash length
        nullable=False,
    )

    name: Mapped[str] = mapped_column(
        String(100),
        nullable=False,
    )

    email: Mapped[str] = mapped_column(
        String(320),  # Max email length per RFC 5321
        nullable=False,
    )

    birthdate: Mapped[date | None] = mapped_column(
        Date,
        nullable=True,
    )

    def __repr__(self) -> str:
        return f"<User {self.username}>"
