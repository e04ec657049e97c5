"""Leaderboard endpoint."""

from __future__ import annotations

from typing import List

from fastapi import APIRouter, Depends, Query

from ...schemas import LeaderboardEntry
from ...services import commands, leaderboard_service
from ...services.snapshot_store import SnapshotStore
from ..deps import get_store

router = APIRouter(prefix="/leaderboard", tags=["leaderboard"])


@router.get(
    "",
    response_model=List[LeaderboardEntry],
    summary="Top points holders",
    responses={
        200: {
            "description": "Students ordered by points balance",
            "content": {
                "application/json": {
                    "example": [
                        {"rank": 1, "user_id": "u1", "name": "Alice Johnson", "branch": "CSE", "total_points": 50},
                        {"rank": 2, "user_id": "u2", "name": "Bob Smith", "branch": "ECE", "total_points": 30},
                    ]
                }
            },
        }
    },
)
def get_leaderboard(
    limit: int = Query(3, ge=1, le=100, description="Number of top students to return"),
    store: SnapshotStore = Depends(get_store),
) -> List[LeaderboardEntry]:
    return leaderboard_service.top_earners(commands.read(store), limit=limit)
