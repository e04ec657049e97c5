"""Public schema exports."""

from .admin import PlatformStats, SkillPopularity
from .auth import LoginRequest, SignupRequest
from .leaderboard import LeaderboardEntry
from .session import (
	MentorshipSession,
	Review,
	SessionCreate,
	SessionMode,
	SessionStatus,
	SessionStatusReceipt,
	SessionStatusUpdate,
)
from .snapshot import Snapshot
from .suggestion import AdvisorText, AgendaRequest, MatchSuggestion, Persona
from .user import (
	OnboardingUpdate,
	Skill,
	SkillLevel,
	SkillSelection,
	SkillType,
	User,
	UserRole,
	UserSkill,
	UserSummary,
)

__all__ = [
	"AdvisorText",
	"AgendaRequest",
	"LeaderboardEntry",
	"LoginRequest",
	"MatchSuggestion",
	"MentorshipSession",
	"OnboardingUpdate",
	"Persona",
	"PlatformStats",
	"Review",
	"SessionCreate",
	"SessionMode",
	"SessionStatus",
	"SessionStatusReceipt",
	"SessionStatusUpdate",
	"SignupRequest",
	"Skill",
	"SkillLevel",
	"SkillPopularity",
	"SkillSelection",
	"SkillType",
	"Snapshot",
	"User",
	"UserRole",
	"UserSkill",
	"UserSummary",
]
