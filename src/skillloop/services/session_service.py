"""Domain logic for the mentorship session lifecycle."""

from __future__ import annotations

import logging
import uuid
from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional

from ..core.config import get_settings
from ..core.errors import AccountBanned, LoopRuleViolation, UserNotFound
from ..schemas import MentorshipSession, SessionMode, SessionStatus, SkillType, Snapshot
from ..utils.datetime import default_schedule, utcnow
from . import ledger_service

logger = logging.getLogger(__name__)

PARTICIPANT_MISSING = "PARTICIPANT_MISSING"

# Allowed edges and the participants who may take them.
TRANSITIONS: dict[tuple[SessionStatus, SessionStatus], frozenset[str]] = {
    (SessionStatus.REQUESTED, SessionStatus.CONFIRMED): frozenset({"mentor"}),
    (SessionStatus.REQUESTED, SessionStatus.CANCELLED): frozenset({"mentor", "learner"}),
    (SessionStatus.CONFIRMED, SessionStatus.COMPLETED): frozenset({"mentor", "learner"}),
}


class SessionNotFound(LoopRuleViolation):
    status_code = 404

    def __init__(self, session_id: str) -> None:
        super().__init__(f"Session {session_id} not found")
        self.session_id = session_id


class InvalidTransition(LoopRuleViolation):
    status_code = 409

    def __init__(self, current: SessionStatus, requested: SessionStatus) -> None:
        super().__init__(f"Cannot move a {current.value} session to {requested.value}.")
        self.current = current
        self.requested = requested


class NotSessionParticipant(LoopRuleViolation):
    status_code = 403


class SelfBooking(LoopRuleViolation):
    def __init__(self) -> None:
        super().__init__("Students cannot book a session with themselves.")


class InvalidDuration(LoopRuleViolation):
    def __init__(self, duration_minutes: int, allowed: tuple[int, ...]) -> None:
        allowed_text = ", ".join(str(value) for value in allowed)
        super().__init__(f"Duration {duration_minutes} is not one of: {allowed_text} minutes.")
        self.duration_minutes = duration_minutes


class SkillNotOffered(LoopRuleViolation):
    def __init__(self, mentor_id: str, skill_id: str) -> None:
        super().__init__(f"User {mentor_id} does not teach skill {skill_id}.")


@dataclass(frozen=True)
class StatusChange:
    """Outcome of ``update_status``."""

    snapshot: Snapshot
    session: MentorshipSession
    points_transferred: bool = False
    warnings: tuple[str, ...] = field(default_factory=tuple)


def request_session(
    snapshot: Snapshot,
    *,
    learner_id: str,
    mentor_id: str,
    skill_id: str,
    duration_minutes: int,
    mode: SessionMode = SessionMode.ONLINE,
    note: Optional[str] = None,
    scheduled_at: Optional[datetime] = None,
    now: Optional[datetime] = None,
) -> tuple[Snapshot, MentorshipSession]:
    """Create a REQUESTED session; balances are not touched until completion."""

    if learner_id == mentor_id:
        raise SelfBooking()

    learner = snapshot.find_user(learner_id)
    if learner is None:
        raise UserNotFound(learner_id)
    mentor = snapshot.find_user(mentor_id)
    if mentor is None:
        raise UserNotFound(mentor_id)
    if learner.is_banned:
        raise AccountBanned()
    if mentor.is_banned:
        raise AccountBanned(f"User {mentor_id} is not accepting sessions.")

    allowed = get_settings().allowed_durations
    if duration_minutes not in allowed:
        raise InvalidDuration(duration_minutes, allowed)

    offered = next(
        (
            skill
            for skill in mentor.skills
            if skill.skill_id == skill_id and skill.type == SkillType.CAN_TEACH
        ),
        None,
    )
    if offered is None:
        raise SkillNotOffered(mentor_id, skill_id)

    points_needed = ledger_service.points_for_duration(duration_minutes)
    ledger_service.ensure_affordable(learner, points_needed)

    created = now or utcnow()
    session = MentorshipSession(
        id=str(uuid.uuid4()),
        mentor_id=mentor.id,
        learner_id=learner.id,
        skill_id=offered.skill_id,
        skill_name=f"{offered.name} ({offered.level.value})",
        status=SessionStatus.REQUESTED,
        mode=mode,
        scheduled_at=scheduled_at or default_schedule(created),
        duration_minutes=duration_minutes,
        points=points_needed,
        note=note,
        created_at=created,
    )
    logger.info(
        "session %s requested: learner=%s mentor=%s points=%d",
        session.id,
        learner.id,
        mentor.id,
        points_needed,
    )
    return snapshot.model_copy(update={"sessions": snapshot.sessions + (session,)}), session


def _role_of(session: MentorshipSession, actor_id: str) -> Optional[str]:
    if actor_id == session.mentor_id:
        return "mentor"
    if actor_id == session.learner_id:
        return "learner"
    return None


def update_status(
    snapshot: Snapshot,
    *,
    session_id: str,
    new_status: SessionStatus,
    actor_id: Optional[str] = None,
) -> StatusChange:
    """Apply a lifecycle transition, moving points on completion."""

    session = snapshot.find_session(session_id)
    if session is None:
        raise SessionNotFound(session_id)

    permitted = TRANSITIONS.get((session.status, new_status))
    if permitted is None:
        raise InvalidTransition(session.status, new_status)

    if actor_id is not None and _role_of(session, actor_id) not in permitted:
        raise NotSessionParticipant(
            f"User {actor_id} may not move session {session_id} to {new_status.value}."
        )

    updated_session = session.model_copy(update={"status": new_status})
    updated = snapshot.replace_session(updated_session)

    if new_status != SessionStatus.COMPLETED:
        logger.info("session %s moved to %s", session_id, new_status.value)
        return StatusChange(snapshot=updated, session=updated_session)

    if snapshot.find_user(session.mentor_id) is None or snapshot.find_user(session.learner_id) is None:
        logger.warning(
            "session %s completed without points transfer: mentor or learner record missing",
            session_id,
        )
        return StatusChange(snapshot=updated, session=updated_session, warnings=(PARTICIPANT_MISSING,))

    users = ledger_service.apply_completion(
        updated.users,
        session,
        block_overdraft=get_settings().block_overdrawn_completion,
    )
    logger.info(
        "session %s completed: %d points from %s to %s",
        session_id,
        session.points,
        session.learner_id,
        session.mentor_id,
    )
    return StatusChange(
        snapshot=updated.model_copy(update={"users": users}),
        session=updated_session,
        points_transferred=True,
    )


def sessions_for_user(snapshot: Snapshot, user_id: str) -> list[MentorshipSession]:
    """Sessions the user takes part in, newest first."""

    sessions = [item for item in snapshot.sessions if user_id in (item.mentor_id, item.learner_id)]
    return sorted(sessions, key=lambda item: item.created_at, reverse=True)
