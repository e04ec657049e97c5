"""Primary API router definition."""

from fastapi import APIRouter

from . import admin, auth, leaderboard, sessions, suggestions, users

api_router = APIRouter()

api_router.include_router(auth.router)
api_router.include_router(users.router)
api_router.include_router(sessions.router)
api_router.include_router(suggestions.router)
api_router.include_router(admin.router)
api_router.include_router(leaderboard.router)


@api_router.get("/health", tags=["health"])
async def healthcheck() -> dict[str, str]:
    """Basic health probe endpoint."""
    return {"status": "ok"}
