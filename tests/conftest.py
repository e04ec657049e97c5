"""
Pytest Configuration and Fixtures.

Shared builders for users and snapshots plus an in-memory SQLite database.
"""
from datetime import datetime, timezone

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from skillloop.core.database import Base
from skillloop.core.security import hash_password
from skillloop import models  # noqa: F401  registers tables on Base.metadata
from skillloop.schemas import (
    Skill,
    SkillLevel,
    SkillType,
    Snapshot,
    User,
    UserSkill,
)

NOW = datetime(2026, 10, 19, 9, 0, tzinfo=timezone.utc)

CATALOG = (
    Skill(id="s1", name="C Programming"),
    Skill(id="s3", name="Video Editing"),
    Skill(id="s4", name="Python"),
    Skill(id="s5", name="UI/UX Design"),
    Skill(id="s8", name="Financial Literacy"),
)


def pytest_configure(config):
    """Configure pytest markers."""
    config.addinivalue_line("markers", "unit: Unit tests")
    config.addinivalue_line("markers", "integration: Integration tests (in-memory database)")


def pytest_collection_modifyitems(config, items):
    """Automatically mark tests based on their location."""
    for item in items:
        if "unit" in str(item.fspath):
            item.add_marker(pytest.mark.unit)
        elif "integration" in str(item.fspath):
            item.add_marker(pytest.mark.integration)


def teach(skill_id, name, level=SkillLevel.INTERMEDIATE):
    return UserSkill(skill_id=skill_id, name=name, type=SkillType.CAN_TEACH, level=level)


def learn(skill_id, name):
    return UserSkill(skill_id=skill_id, name=name, type=SkillType.WANT_TO_LEARN)


def make_user(user_id, points=10, skills=(), banned=False, **extra):
    fields = dict(
        id=user_id,
        name=extra.pop("name", user_id.title()),
        email=extra.pop("email", f"{user_id}@krce.ac.in"),
        password_hash=extra.pop("password_hash", ""),
        total_points=points,
        skills=tuple(skills),
        is_banned=banned,
        created_at=NOW,
    )
    fields.update(extra)
    return User(**fields)


@pytest.fixture
def learner():
    return make_user("learner", points=12, skills=[learn("s4", "Python"), learn("s3", "Video Editing")])


@pytest.fixture
def mentor():
    return make_user("mentor", points=30, skills=[teach("s4", "Python", SkillLevel.ADVANCED)])


@pytest.fixture
def bystander():
    return make_user("bystander", points=7, skills=[teach("s3", "Video Editing")])


@pytest.fixture
def snapshot(learner, mentor, bystander):
    return Snapshot(users=(learner, mentor, bystander), skills=CATALOG)


@pytest.fixture
def password_user():
    return make_user("carol", password_hash=hash_password("s3cret!"))


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
        future=True,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(bind=engine, autoflush=False, autocommit=False, future=True)


@pytest.fixture
def db(session_factory):
    session = session_factory()
    try:
        yield session
    finally:
        session.close()
