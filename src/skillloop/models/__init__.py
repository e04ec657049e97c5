"""SQLAlchemy models for SkillLoop."""

from .snapshot import SnapshotRecord

__all__ = [
    "SnapshotRecord",
]
