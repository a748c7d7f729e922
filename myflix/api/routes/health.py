"""Health check and system endpoints."""

from fastapi import APIRouter

from myflix import __version__
from myflix.api.deps import SettingsDep

router = APIRouter()


@router.get("/")
async def welcome() -> dict[str, str]:
    """Landing message for the API root."""
    return {"message": "Welcome to myFlix!"}


@router.get("/health")
async def health_check() -> dict[str, str]:
    """Health check endpoint for container orchestration."""
    return {"status": "healthy"}


@router.get("/version")
async def get_version(settings: SettingsDep) -> dict[str, str]:
    """Get API version information.

    Returns:
        Version information including API version and environment.
    """
    return {
        "version": __version__,
        "environment": settings.environment,
    }
