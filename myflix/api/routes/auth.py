"""Authentication endpoints for registration and login."""

from fastapi import APIRouter, status

from myflix.api.deps import AuthServiceDep
from myflix.schemas.auth import LoginRequest, LoginResponse
from myflix.schemas.user import UserCreate, UserRead

router = APIRouter()


@router.post(
    "/users",
    response_model=UserRead,
    status_code=status.HTTP_201_CREATED,
    summary="Register new user",
    description="Create a new user account. No token is required.",
)
async def register(
    data: UserCreate,
    service: AuthServiceDep,
) -> UserRead:
    """Register a new user account.

    - **name**: Full name
    - **username**: Alphanumeric, at least 5 characters (must be unique)
    - **password**: At least 8 characters
    - **email**: Valid email address
    - **birthdate**: Optional date of birth

    Returns the created user profile (without the password hash).
    """
    return await service.register(data)


@router.post(
    "/login",
    response_model=LoginResponse,
    summary="Login",
    description="Authenticate with username and password to obtain an access token.",
)
async def login(
    data: LoginRequest,
    service: AuthServiceDep,
) -> LoginResponse:
    """Authenticate and obtain a token.

    Returns:
    - **user**: The caller's profile
    - **token**: JWT for API authentication (7 day expiry)
    - **expires_in**: Token lifetime in seconds
    """
    return await service.login(data)
