"""Admin dashboard endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Depends

from ...schemas import PlatformStats, UserSummary
from ...services import admin_service, commands
from ...services.snapshot_store import SnapshotStore
from ..deps import get_store, unwrap

router = APIRouter(prefix="/admin", tags=["admin"])


@router.get("/stats", response_model=PlatformStats, summary="Platform activity")
def get_stats(store: SnapshotStore = Depends(get_store)) -> PlatformStats:
    return admin_service.platform_stats(commands.read(store))


@router.post(
    "/users/{user_id}/ban",
    response_model=UserSummary,
    summary="Ban or unban a user",
    responses={404: {"description": "User not found"}},
)
def toggle_ban(user_id: str, store: SnapshotStore = Depends(get_store)) -> UserSummary:
    return unwrap(commands.execute(store, admin_service.toggle_ban, user_id=user_id))
