"""Aggregate snapshot holding every persisted entity."""

from typing import Optional, Tuple

from pydantic import BaseModel, ConfigDict

from .session import MentorshipSession, Review
from .suggestion import MatchSuggestion
from .user import Skill, User


class Snapshot(BaseModel):
    """Immutable view of the whole application state.

    Every command returns a new snapshot; ``version`` is the stored revision
    the snapshot was loaded from and is checked again on save.
    """

    model_config = ConfigDict(frozen=True)

    users: Tuple[User, ...] = ()
    sessions: Tuple[MentorshipSession, ...] = ()
    skills: Tuple[Skill, ...] = ()
    reviews: Tuple[Review, ...] = ()
    match_suggestions: Tuple[MatchSuggestion, ...] = ()
    current_user_id: Optional[str] = None
    version: int = 0

    def find_user(self, user_id: str) -> Optional[User]:
        return next((user for user in self.users if user.id == user_id), None)

    def find_user_by_email(self, email: str) -> Optional[User]:
        return next((user for user in self.users if user.email == email), None)

    def find_session(self, session_id: str) -> Optional[MentorshipSession]:
        return next((item for item in self.sessions if item.id == session_id), None)

    def find_skill(self, skill_id: str) -> Optional[Skill]:
        return next((skill for skill in self.skills if skill.id == skill_id), None)

    def replace_user(self, user: User) -> "Snapshot":
        users = tuple(user if existing.id == user.id else existing for existing in self.users)
        return self.model_copy(update={"users": users})

    def replace_session(self, session: MentorshipSession) -> "Snapshot":
        sessions = tuple(session if existing.id == session.id else existing for existing in self.sessions)
        return self.model_copy(update={"sessions": sessions})
