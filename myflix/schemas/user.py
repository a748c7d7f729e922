"""User schemas for request/response validation."""

import re
from datetime import date
from typing import TYPE_CHECKING
from uuid import UUID

from pydantic import AliasChoices, ConfigDict, EmailStr, Field, field_validator

from myflix.schemas.base import BaseSchema

if TYPE_CHECKING:
    from myflix.models.user import User

USERNAME_MIN_LENGTH = 5
USERNAME_MAX_LENGTH = 50
PASSWORD_MIN_LENGTH = 8
PASSWORD_MAX_LENGTH = 128

_ALPHANUMERIC = re.compile(r"^[A-Za-z0-9]+$")


def validate_username(value: str) -> str:
    """Enforce the username rules shared by registration and profile updates."""
    if len(value) < USERNAME_MIN_LENGTH:
        msg = f"Username must be at least {USERNAME_MIN_LENGTH} characters"
        raise ValueError(msg)
    if not _ALPHANUMERIC.match(value):
        msg = "Username contains non-alphanumeric characters - not allowed"
        raise ValueError(msg)
    return value


class UserCreate(BaseSchema):
    """Schema for user registration.

    Passwords are taken verbatim; surrounding whitespace is part of the
    secret.
    """

    model_config = ConfigDict(str_strip_whitespace=False)

    name: str = Field(
        ...,
        min_length=1,
        max_length=100,
        validation_alias=AliasChoices("name", "Name"),
        description="User's full name",
        examples=["John Doe"],
    )
    username: str = Field(
        ...,
        max_length=USERNAME_MAX_LENGTH,
        validation_alias=AliasChoices("username", "Username"),
        description="Alphanumeric username, at least 5 characters",
        examples=["JohnnyD1"],
    )
    password: str = Field(
        ...,
        min_length=PASSWORD_MIN_LENGTH,
        max_length=PASSWORD_MAX_LENGTH,
        validation_alias=AliasChoices("password", "Password"),
        description="Password, at least 8 characters",
        examples=["password1"],
    )
    email: EmailStr = Field(
        ...,
        validation_alias=AliasChoices("email", "Email"),
        description="User's email address",
        examples=["jdoe@example.com"],
    )
    birthdate: date | None = Field(
        default=None,
        validation_alias=AliasChoices("birthdate", "Birthdate"),
        description="Date of birth (YYYY-MM-DD)",
        examples=["1990-01-01"],
    )

    @field_validator("name")
    @classmethod
    def strip_name(cls, v: str) -> str:
        """Reject names made only of whitespace."""
        v = v.strip()
        if not v:
            msg = "Name is required"
            raise ValueError(msg)
        return v

    @field_validator("username")
    @classmethod
    def check_username(cls, v: str) -> str:
        return validate_username(v)


class UserUpdate(BaseSchema):
    """Schema for a partial profile update.

    All fields are optional - only provided fields will be updated.
    Only ``birthdate`` may be cleared with an explicit null.
    """

    model_config = ConfigDict(str_strip_whitespace=False)

    name: str | None = Field(
        default=None,
        min_length=1,
        max_length=100,
        validation_alias=AliasChoices("name", "Name"),
    )
    username: str | None = Field(
        default=None,
        max_length=USERNAME_MAX_LENGTH,
        validation_alias=AliasChoices("username", "Username"),
    )
    password: str | None = Field(
        default=None,
        min_length=PASSWORD_MIN_LENGTH,
        max_length=PASSWORD_MAX_LENGTH,
        validation_alias=AliasChoices("password", "Password"),
    )
    email: EmailStr | None = Field(
        default=None,
        validation_alias=AliasChoices("email", "Email"),
    )
    birthdate: date | None = Field(
        default=None,
        validation_alias=AliasChoices("birthdate", "Birthdate"),
    )

    @field_validator("name", "username", "password", "email")
    @classmethod
    def reject_null(cls, v: str | None) -> str | None:
        if v is None:
            msg = "Field may not be null"
            raise ValueError(msg)
        return v

    @field_validator("name")
    @classmethod
    def strip_name(cls, v: str) -> str:
        v = v.strip()
        if not v:
            msg = "Name may not be blank"
            raise ValueError(msg)
        return v

    @field_validator("username")
    @classmethod
    def check_username(cls, v: str) -> str:
        return validate_username(v)


class UserRead(BaseSchema):
    """Schema for reading user data (public profile, never the password hash)."""

    id: UUID
    name: str
    username: str
    email: str
    birthdate: date | None = None
    favorites: list[UUID] = Field(
        default_factory=list,
        description="Ids of the user's favorite movies",
    )

    @classmethod
    def from_model(cls, user: "User", favorites: list[UUID] | None = None) -> "UserRead":
        """Build the public profile from a user row and its favorites."""
        return cls(
            id=user.id,
            name=user.name,
            username=user.username,
            email=user.email,
            birthdate=user.birthdate,
            favorites=favorites or [],
        )
