"""Background refresh of a learner's mentor suggestions."""

from __future__ import annotations

import logging
from typing import Callable

from sqlalchemy.orm import Session

from ..core.database import SessionLocal
from ..integrations import Advisor
from ..services import commands, matching_service
from ..services.snapshot_store import SnapshotStore

logger = logging.getLogger(__name__)


async def refresh_match_suggestions(
    learner_id: str,
    advisor: Advisor,
    session_factory: Callable[[], Session] = SessionLocal,
) -> None:
    """Ask the advisor for matches and store them if the learner is still active.

    The snapshot is reloaded after the advisor answers so that a logout or a
    different login in the meantime discards the result.
    """

    session = session_factory()
    try:
        store = SnapshotStore(session)
        snapshot = commands.read(store)
        learner = snapshot.find_user(learner_id)
        if learner is None:
            logger.info("suggestion refresh skipped: user %s no longer exists", learner_id)
            return
        store.rollback()

        suggestions = await advisor.match_mentors(learner, snapshot.users)
        result = commands.execute(
            store,
            matching_service.apply_suggestions,
            learner_id=learner_id,
            suggestions=suggestions,
        )
        logger.info("stored %d suggestions for %s", len(result.value), learner_id)
    except Exception:  # pragma: no cover - safeguard for background job
        session.rollback()
        logger.exception("suggestion refresh for %s failed", learner_id)
        raise
    finally:
        session.close()
