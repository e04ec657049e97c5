"""Persistence adapter storing the aggregate snapshot as one JSON document."""

from __future__ import annotations

import logging
from datetime import datetime

from pydantic import ValidationError
from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from ..core.config import get_settings
from ..core.errors import PersistenceFailure, SnapshotConflict
from ..core.seed import default_snapshot
from ..models import SnapshotRecord
from ..schemas import Snapshot

logger = logging.getLogger(__name__)


class SnapshotStore:
    """Load and save the whole aggregate under a single key."""

    def __init__(self, session: Session, key: str | None = None) -> None:
        self.session = session
        self.key = key or get_settings().snapshot_key

    def _fetch(self) -> SnapshotRecord | None:
        stmt = select(SnapshotRecord).where(SnapshotRecord.key == self.key).with_for_update()
        try:
            return self.session.execute(stmt).scalar_one_or_none()
        except SQLAlchemyError as exc:
            raise PersistenceFailure(f"Snapshot {self.key!r} could not be read") from exc

    def load(self) -> Snapshot:
        """Return the stored snapshot, seeding the default one when absent."""

        record = self._fetch()
        if record is None:
            logger.info("no snapshot stored under %r, writing seed data", self.key)
            seeded = self.save(default_snapshot())
            self.commit()
            return seeded

        try:
            snapshot = Snapshot.model_validate(record.payload)
        except ValidationError as exc:
            raise PersistenceFailure(f"Snapshot {self.key!r} is corrupt") from exc
        return snapshot.model_copy(update={"version": record.version})

    def save(self, snapshot: Snapshot) -> Snapshot:
        """Overwrite the stored document and return the snapshot at its new version."""

        record = self._fetch()
        found = record.version if record is not None else 0
        if found != snapshot.version:
            raise SnapshotConflict(self.key, snapshot.version, found)

        payload = snapshot.model_dump(mode="json", exclude={"version"})
        now = datetime.utcnow()
        try:
            if record is None:
                record = SnapshotRecord(key=self.key, payload=payload, version=1, created_at=now, updated_at=now)
                self.session.add(record)
            else:
                record.payload = payload
                record.version = found + 1
                record.updated_at = now
            self.session.flush()
        except SQLAlchemyError as exc:
            raise PersistenceFailure(f"Snapshot {self.key!r} could not be written") from exc

        return snapshot.model_copy(update={"version": record.version})

    def commit(self) -> None:
        try:
            self.session.commit()
        except SQLAlchemyError as exc:
            self.session.rollback()
            raise PersistenceFailure(f"Snapshot {self.key!r} could not be committed") from exc

    def rollback(self) -> None:
        self.session.rollback()
