"""Platform moderation and activity statistics."""

from __future__ import annotations

import logging
from collections import Counter

from ..core.errors import UserNotFound
from ..schemas import PlatformStats, SessionStatus, SkillPopularity, Snapshot, User
from .ledger_service import points_traded

logger = logging.getLogger(__name__)

ACTIVE_STATUSES = (SessionStatus.REQUESTED, SessionStatus.CONFIRMED)


def platform_stats(snapshot: Snapshot) -> PlatformStats:
    """Summarise users, sessions and the most requested skills."""

    counts = Counter(item.skill_name for item in snapshot.sessions)
    popular = sorted(counts.items(), key=lambda entry: (-entry[1], entry[0]))
    return PlatformStats(
        total_users=len(snapshot.users),
        active_sessions=sum(1 for item in snapshot.sessions if item.status in ACTIVE_STATUSES),
        completed_sessions=sum(1 for item in snapshot.sessions if item.status == SessionStatus.COMPLETED),
        points_traded=points_traded(snapshot),
        popular_skills=[SkillPopularity(skill_name=name, sessions=count) for name, count in popular],
    )


def toggle_ban(snapshot: Snapshot, *, user_id: str) -> tuple[Snapshot, User]:
    user = snapshot.find_user(user_id)
    if user is None:
        raise UserNotFound(user_id)
    updated = user.model_copy(update={"is_banned": not user.is_banned})
    logger.info("user %s banned=%s", user_id, updated.is_banned)
    return snapshot.replace_user(updated), updated
