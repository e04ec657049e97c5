"""Pydantic models for match suggestions and advisor output."""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class MatchSuggestion(BaseModel):
    """A mentor proposed to a learner for one skill."""

    model_config = ConfigDict(frozen=True)

    learner_id: str
    mentor_id: str
    skill_id: str = ""
    skill_name: str
    score: float
    reason: Optional[str] = None
    compatibility_tag: Optional[str] = None


class Persona(BaseModel):
    model_config = ConfigDict(frozen=True)

    title: str
    desc: str


class AdvisorText(BaseModel):
    """Single block of generated guidance."""

    text: str


class AgendaRequest(BaseModel):
    """Request body asking for a session agenda."""

    mentor_id: str
    skill_name: str
    note: str = Field("", max_length=1000)
