"""Points balance rules."""

from __future__ import annotations

import math

from ..core.config import get_settings
from ..core.errors import LoopRuleViolation
from ..schemas import MentorshipSession, SessionStatus, Snapshot, User


class InsufficientPoints(LoopRuleViolation):
    """Raised when a learner cannot cover a session's cost."""

    def __init__(self, balance: int, needed: int) -> None:
        super().__init__(f"Insufficient points: {needed} needed, {balance} available.")
        self.balance = balance
        self.needed = needed


def initial_grant() -> int:
    """Balance every new account starts with."""

    return get_settings().initial_points


def points_for_duration(duration_minutes: int) -> int:
    """Cost of a session, rounded up to a whole point."""

    return math.ceil(duration_minutes / 60 * get_settings().points_per_hour)


def ensure_affordable(learner: User, needed: int) -> None:
    if learner.total_points < needed:
        raise InsufficientPoints(learner.total_points, needed)


def apply_completion(
    users: tuple[User, ...],
    session: MentorshipSession,
    *,
    block_overdraft: bool = False,
) -> tuple[User, ...]:
    """Move a completed session's points from the learner to the mentor.

    Users other than the two participants are returned untouched. Both
    participants must be present in ``users``.
    """

    learner = next(user for user in users if user.id == session.learner_id)
    if block_overdraft:
        ensure_affordable(learner, session.points)

    updated = []
    for user in users:
        if user.id == session.mentor_id:
            user = user.model_copy(update={"total_points": user.total_points + session.points})
        elif user.id == session.learner_id:
            user = user.model_copy(update={"total_points": user.total_points - session.points})
        updated.append(user)
    return tuple(updated)


def points_traded(snapshot: Snapshot) -> int:
    """Sum of points moved by completed sessions."""

    return sum(item.points for item in snapshot.sessions if item.status == SessionStatus.COMPLETED)
