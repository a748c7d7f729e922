"""API router aggregating all endpoints."""

from fastapi import APIRouter

from myflix.api.routes import auth, health, movies, users

api_router = APIRouter()

# Include all routers
api_router.include_router(
    health.router,
    prefix="",
    tags=["System"],
)

api_router.include_router(
    auth.router,
    prefix="",
    tags=["Authentication"],
)

api_router.include_router(
    users.router,
    prefix="/users",
    tags=["Users"],
)

api_router.include_router(
    movies.router,
    prefix="/movies",
    tags=["Movies"],
)
