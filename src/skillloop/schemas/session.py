"""Pydantic models for mentorship sessions and reviews."""

import enum
from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class SessionStatus(str, enum.Enum):
    """Lifecycle states of a mentorship session."""

    REQUESTED = "REQUESTED"
    CONFIRMED = "CONFIRMED"
    COMPLETED = "COMPLETED"
    CANCELLED = "CANCELLED"


class SessionMode(str, enum.Enum):
    ONLINE = "Online"
    OFFLINE = "Offline"


class MentorshipSession(BaseModel):
    """A single mentoring engagement between a mentor and a learner."""

    model_config = ConfigDict(frozen=True)

    id: str
    mentor_id: str
    learner_id: str
    skill_id: str
    skill_name: str
    status: SessionStatus = SessionStatus.REQUESTED
    mode: SessionMode = SessionMode.ONLINE
    scheduled_at: datetime
    duration_minutes: int
    points: int
    note: Optional[str] = None
    created_at: datetime


class Review(BaseModel):
    """Rating left by one participant about the other."""

    model_config = ConfigDict(frozen=True)

    id: str
    session_id: str
    reviewer_id: str
    reviewee_id: str
    rating: int = Field(..., ge=1, le=5)
    comment: Optional[str] = None
    created_at: datetime


class SessionCreate(BaseModel):
    """Request body for booking a session with a mentor."""

    learner_id: str
    mentor_id: str
    skill_id: str
    duration_minutes: int = Field(60, gt=0)
    mode: SessionMode = SessionMode.ONLINE
    note: Optional[str] = Field(None, max_length=1000)
    scheduled_at: Optional[datetime] = None


class SessionStatusUpdate(BaseModel):
    """Request body moving a session along its lifecycle."""

    status: SessionStatus
    actor_id: Optional[str] = Field(None, description="User performing the change.")


class SessionStatusReceipt(BaseModel):
    """Response returned after a status change."""

    session: MentorshipSession
    points_transferred: bool
    warnings: List[str] = Field(default_factory=list)
