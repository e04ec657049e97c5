"""Shared request dependencies."""

from __future__ import annotations

from typing import Callable, NoReturn

from fastapi import Depends, HTTPException
from sqlalchemy.orm import Session

from ..core.database import SessionLocal, get_db
from ..core.errors import UserNotFound
from ..integrations import Advisor, get_advisor
from ..schemas import Snapshot, User
from ..services.commands import CommandResult, Failure
from ..services.snapshot_store import SnapshotStore


def get_store(db: Session = Depends(get_db)) -> SnapshotStore:
    return SnapshotStore(db)


def get_session_factory() -> Callable[[], Session]:
    """Session factory used by work that outlives the request."""

    return SessionLocal


def get_advisor_dependency() -> Advisor:
    return get_advisor()


def raise_for_failure(failure: Failure) -> NoReturn:
    raise HTTPException(status_code=failure.status_code, detail=failure.detail) from failure.error


def unwrap(result: CommandResult):
    """Return the command's value or raise the matching HTTP error."""

    if isinstance(result, Failure):
        raise_for_failure(result)
    return result.value


def require_user(snapshot: Snapshot, user_id: str) -> User:
    user = snapshot.find_user(user_id)
    if user is None:
        error = UserNotFound(user_id)
        raise HTTPException(status_code=error.status_code, detail=error.detail)
    return user
