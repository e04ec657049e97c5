"""Leaderboard aggregation services."""

from __future__ import annotations

from ..schemas import LeaderboardEntry, Snapshot, UserRole


def top_earners(snapshot: Snapshot, *, limit: int = 3) -> list[LeaderboardEntry]:
    """Return students ordered by points balance, then by user id.

    Admin and banned accounts are not ranked.
    """

    limit = max(1, min(limit, 100))

    ranked = sorted(
        (user for user in snapshot.users if user.role == UserRole.STUDENT and not user.is_banned),
        key=lambda user: (-user.total_points, user.id),
    )
    return [
        LeaderboardEntry(
            rank=position,
            user_id=user.id,
            name=user.name,
            branch=user.branch,
            total_points=user.total_points,
        )
        for position, user in enumerate(ranked[:limit], start=1)
    ]
