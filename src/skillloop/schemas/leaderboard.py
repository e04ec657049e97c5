"""Leaderboard response schemas."""

from pydantic import BaseModel, Field


class LeaderboardEntry(BaseModel):
    """Ranked points balance of one member."""

    rank: int = Field(..., ge=1)
    user_id: str
    name: str
    branch: str
    total_points: int
