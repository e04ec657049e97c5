"""Stored aggregate snapshot model."""

from datetime import datetime

from sqlalchemy import JSON, CheckConstraint, Column, DateTime, Integer, String

from ..core.database import Base


class SnapshotRecord(Base):
    """One JSON document per aggregate, overwritten as a whole on save."""

    __tablename__ = "snapshots"
    __table_args__ = (
        CheckConstraint("version >= 0", name="snapshots_version_positive"),
    )

    key = Column(String, primary_key=True)
    payload = Column(JSON, nullable=False)
    version = Column(Integer, nullable=False, default=0)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, nullable=False)
