"""Service layer exports."""

from . import (
	admin_service,
	auth_service,
	commands,
	explore_service,
	leaderboard_service,
	ledger_service,
	matching_service,
	review_service,
	session_service,
	snapshot_store,
)

__all__ = [
	"admin_service",
	"auth_service",
	"commands",
	"explore_service",
	"leaderboard_service",
	"ledger_service",
	"matching_service",
	"review_service",
	"session_service",
	"snapshot_store",
]
