"""Pydantic models for users, skills and onboarding payloads."""

import enum
from datetime import datetime
from typing import List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field


class SkillType(str, enum.Enum):
    """Direction of a user's relationship to a skill."""

    CAN_TEACH = "CAN_TEACH"
    WANT_TO_LEARN = "WANT_TO_LEARN"


class SkillLevel(str, enum.Enum):
    """Self-reported proficiency."""

    BEGINNER = "Beginner"
    INTERMEDIATE = "Intermediate"
    ADVANCED = "Advanced"


class UserRole(str, enum.Enum):
    STUDENT = "STUDENT"
    ADMIN = "ADMIN"


class Skill(BaseModel):
    """Catalog entry shared by every user."""

    model_config = ConfigDict(frozen=True)

    id: str
    name: str


class UserSkill(BaseModel):
    """A skill a user teaches or wants to learn."""

    model_config = ConfigDict(frozen=True)

    skill_id: str
    name: str
    type: SkillType
    level: SkillLevel = SkillLevel.BEGINNER


class User(BaseModel):
    """Campus member, owner of a points balance and a skill list."""

    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    email: str
    password_hash: str
    branch: str = ""
    year: int = 1
    bio: str = ""
    availability: Optional[str] = None
    avatar_url: str = ""
    total_points: int = 0
    rating_average: float = 0.0
    rating_count: int = 0
    skills: Tuple[UserSkill, ...] = ()
    role: UserRole = UserRole.STUDENT
    created_at: datetime
    is_banned: bool = False

    def skills_of_type(self, skill_type: SkillType) -> Tuple[UserSkill, ...]:
        return tuple(skill for skill in self.skills if skill.type == skill_type)

    def teaches(self, skill_name: str) -> bool:
        return any(
            skill.name == skill_name and skill.type == SkillType.CAN_TEACH for skill in self.skills
        )


class UserSummary(BaseModel):
    """Public projection of a user, without credentials."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    email: str
    branch: str
    year: int
    bio: str
    availability: Optional[str]
    avatar_url: str
    total_points: int
    rating_average: float
    rating_count: int
    skills: List[UserSkill]
    role: UserRole
    is_banned: bool


class SkillSelection(BaseModel):
    """One skill picked during onboarding."""

    skill_id: str
    type: SkillType
    level: SkillLevel = SkillLevel.BEGINNER


class OnboardingUpdate(BaseModel):
    """Request body completing a user's profile."""

    skills: List[SkillSelection] = Field(default_factory=list)
    branch: str = Field(..., max_length=80)
    year: int = Field(..., ge=0, le=6)
    bio: str = Field("", max_length=500)
    availability: str = Field("", max_length=200)
