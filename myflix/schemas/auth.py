"""Authentication schemas for request/response validation."""

from pydantic import AliasChoices, ConfigDict, Field

from myflix.schemas.base import BaseSchema
from myflix.schemas.user import UserRead


class LoginRequest(BaseSchema):
    """Schema for login request."""

    model_config = ConfigDict(str_strip_whitespace=False)

    username: str = Field(
        ...,
        min_length=1,
        validation_alias=AliasChoices("username", "Username"),
        description="Registered username",
        examples=["JohnnyD1"],
    )
    password: str = Field(
        ...,
        min_length=1,
        validation_alias=AliasChoices("password", "Password"),
        description="User's password",
        examples=["password1"],
    )


class LoginResponse(BaseSchema):
    """Schema for a successful login: the profile plus a bearer token."""

    user: UserRead
    token: str = Field(
        ...,
        description="JWT access token for API authentication",
    )
    token_type: str = Field(
        default="bearer",
        description="Token type (always 'bearer')",
    )
    expires_in: int = Field(
        ...,
        description="Token lifetime in seconds",
        examples=[604800],
    )
