"""Reference data written the first time a snapshot is loaded."""

from __future__ import annotations

from datetime import datetime

from ..schemas import Skill, SkillLevel, SkillType, Snapshot, User, UserRole, UserSkill
from ..utils.datetime import utcnow
from .security import hash_password

DEFAULT_PASSWORD = "password123"

INITIAL_SKILLS = (
    Skill(id="s1", name="C Programming"),
    Skill(id="s2", name="Logo Design"),
    Skill(id="s3", name="Video Editing"),
    Skill(id="s4", name="Python"),
    Skill(id="s5", name="UI/UX Design"),
    Skill(id="s6", name="Public Speaking"),
    Skill(id="s7", name="React Development"),
    Skill(id="s8", name="Financial Literacy"),
)


def _skill(skill_id: str, skill_type: SkillType, level: SkillLevel) -> UserSkill:
    catalog = {skill.id: skill.name for skill in INITIAL_SKILLS}
    return UserSkill(skill_id=skill_id, name=catalog[skill_id], type=skill_type, level=level)


def seed_users(now: datetime | None = None) -> tuple[User, ...]:
    """Build the demo accounts, including the platform administrator."""

    created = now or utcnow()
    password_hash = hash_password(DEFAULT_PASSWORD)
    return (
        User(
            id="u1",
            name="Alice Johnson",
            email="alice@krce.ac.in",
            password_hash=password_hash,
            branch="CSE",
            year=3,
            bio="Passionate about React and UI design.",
            availability="Mon-Wed: 6 PM - 9 PM, Weekends flexible",
            avatar_url="https://picsum.photos/seed/alice/200",
            total_points=50,
            rating_average=4.8,
            rating_count=12,
            created_at=created,
            skills=(
                _skill("s7", SkillType.CAN_TEACH, SkillLevel.ADVANCED),
                _skill("s5", SkillType.CAN_TEACH, SkillLevel.INTERMEDIATE),
                _skill("s8", SkillType.WANT_TO_LEARN, SkillLevel.BEGINNER),
            ),
        ),
        User(
            id="u2",
            name="Bob Smith",
            email="bob@krce.ac.in",
            password_hash=password_hash,
            branch="ECE",
            year=2,
            bio="Avid coder and Python enthusiast.",
            availability="Daily after 5 PM",
            avatar_url="https://picsum.photos/seed/bob/200",
            total_points=30,
            rating_average=4.2,
            rating_count=8,
            created_at=created,
            skills=(
                _skill("s4", SkillType.CAN_TEACH, SkillLevel.ADVANCED),
                _skill("s1", SkillType.CAN_TEACH, SkillLevel.INTERMEDIATE),
                _skill("s3", SkillType.WANT_TO_LEARN, SkillLevel.BEGINNER),
            ),
        ),
        User(
            id="admin1",
            name="SkillLoop Admin",
            email="admin@krce.ac.in",
            password_hash=password_hash,
            branch="Administration",
            year=0,
            bio="Platform administrator.",
            availability="Office hours only",
            avatar_url="https://picsum.photos/seed/admin/200",
            total_points=9999,
            rating_average=5.0,
            rating_count=0,
            role=UserRole.ADMIN,
            created_at=created,
        ),
    )


def default_snapshot(now: datetime | None = None) -> Snapshot:
    """Return the snapshot an empty store starts from."""

    return Snapshot(users=seed_users(now), skills=INITIAL_SKILLS)
