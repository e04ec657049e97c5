"""Account creation, authentication and onboarding."""

from __future__ import annotations

import logging
import uuid
from datetime import datetime
from typing import Optional, Sequence

from ..core.config import get_settings
from ..core.errors import AccountBanned, LoopRuleViolation, UserNotFound
from ..core.security import hash_password, verify_password
from ..schemas import SkillSelection, Snapshot, User, UserSkill
from ..utils.datetime import utcnow
from . import ledger_service

logger = logging.getLogger(__name__)


class DomainRejected(LoopRuleViolation):
    def __init__(self, domain: str) -> None:
        super().__init__(f"Only {domain} emails are permitted.")
        self.domain = domain


class EmailTaken(LoopRuleViolation):
    status_code = 409

    def __init__(self) -> None:
        super().__init__("Email already registered.")


class InvalidCredential(LoopRuleViolation):
    status_code = 401

    def __init__(self) -> None:
        super().__init__("Invalid email or password.")


class DuplicateSkill(LoopRuleViolation):
    def __init__(self, skill_id: str, skill_type: str) -> None:
        super().__init__(f"Skill {skill_id} is listed twice as {skill_type}.")


class UnknownSkill(LoopRuleViolation):
    def __init__(self, skill_id: str) -> None:
        super().__init__(f"Skill {skill_id} is not in the catalog.")


def signup(
    snapshot: Snapshot,
    *,
    name: str,
    email: str,
    password: str,
    now: Optional[datetime] = None,
) -> tuple[Snapshot, User]:
    """Register a student and make them the active user.

    The domain check runs before the uniqueness check, so an address that is
    both foreign and taken reports ``DomainRejected``.
    """

    domain = get_settings().campus_domain
    if not email.endswith(domain):
        raise DomainRejected(domain)
    if snapshot.find_user_by_email(email) is not None:
        raise EmailTaken()

    user = User(
        id=uuid.uuid4().hex[:9],
        name=name,
        email=email,
        password_hash=hash_password(password),
        avatar_url=f"https://picsum.photos/seed/{name}/200",
        total_points=ledger_service.initial_grant(),
        created_at=now or utcnow(),
    )
    logger.info("account %s created for %s", user.id, email)
    updated = snapshot.model_copy(
        update={"users": snapshot.users + (user,), "current_user_id": user.id}
    )
    return updated, user


def login(snapshot: Snapshot, *, email: str, password: str) -> tuple[Snapshot, User]:
    """Authenticate by email and password and make the user active."""

    user = snapshot.find_user_by_email(email)
    if user is None or not verify_password(password, user.password_hash):
        raise InvalidCredential()
    if user.is_banned:
        raise AccountBanned()
    return snapshot.model_copy(update={"current_user_id": user.id}), user


def logout(snapshot: Snapshot) -> tuple[Snapshot, None]:
    """Clear the active user along with the suggestions generated for them."""

    return snapshot.model_copy(update={"current_user_id": None, "match_suggestions": ()}), None


def complete_onboarding(
    snapshot: Snapshot,
    *,
    user_id: str,
    skills: Sequence[SkillSelection],
    branch: str,
    year: int,
    bio: str = "",
    availability: str = "",
) -> tuple[Snapshot, User]:
    """Replace a user's profile fields and skill list."""

    user = snapshot.find_user(user_id)
    if user is None:
        raise UserNotFound(user_id)

    seen: set[tuple[str, str]] = set()
    user_skills: list[UserSkill] = []
    for selection in skills:
        pair = (selection.skill_id, selection.type.value)
        if pair in seen:
            raise DuplicateSkill(*pair)
        seen.add(pair)

        catalog_entry = snapshot.find_skill(selection.skill_id)
        if catalog_entry is None:
            raise UnknownSkill(selection.skill_id)
        user_skills.append(
            UserSkill(
                skill_id=catalog_entry.id,
                name=catalog_entry.name,
                type=selection.type,
                level=selection.level,
            )
        )

    updated_user = user.model_copy(
        update={
            "skills": tuple(user_skills),
            "branch": branch,
            "year": year,
            "bio": bio,
            "availability": availability,
        }
    )
    return snapshot.replace_user(updated_user), updated_user
