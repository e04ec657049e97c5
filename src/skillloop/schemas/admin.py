"""Admin dashboard response schemas."""

from typing import List

from pydantic import BaseModel, Field


class SkillPopularity(BaseModel):
    skill_name: str
    sessions: int = Field(..., ge=0)


class PlatformStats(BaseModel):
    """Aggregated platform activity."""

    total_users: int = Field(..., ge=0)
    active_sessions: int = Field(..., ge=0)
    completed_sessions: int = Field(..., ge=0)
    points_traded: int = Field(..., ge=0)
    popular_skills: List[SkillPopularity] = Field(default_factory=list)
