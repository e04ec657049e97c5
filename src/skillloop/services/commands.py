"""Single mutation entry point wrapping each use case in a load/apply/save cycle."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Callable, Generic, TypeVar, Union

from ..core.errors import LoopRuleViolation
from ..schemas import Snapshot
from .snapshot_store import SnapshotStore

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass(frozen=True)
class Success(Generic[T]):
    snapshot: Snapshot
    value: T

    ok = True


@dataclass(frozen=True)
class Failure:
    error: LoopRuleViolation

    ok = False

    @property
    def detail(self) -> str:
        return self.error.detail

    @property
    def status_code(self) -> int:
        return self.error.status_code


CommandResult = Union[Success[T], Failure]


def _unpack(outcome: Any) -> tuple[Snapshot, Any]:
    if isinstance(outcome, tuple):
        return outcome
    return outcome.snapshot, outcome


def execute(store: SnapshotStore, command: Callable[..., Any], **kwargs: Any) -> CommandResult:
    """Run ``command`` against the current snapshot and persist its result.

    Rule violations come back as ``Failure`` with nothing written. Storage
    errors are raised.
    """

    snapshot = store.load()
    try:
        new_snapshot, value = _unpack(command(snapshot, **kwargs))
    except LoopRuleViolation as exc:
        store.rollback()
        logger.info("%s rejected: %s", getattr(command, "__name__", command), exc.detail)
        return Failure(exc)

    saved = store.save(new_snapshot)
    store.commit()
    return Success(saved, value)


def read(store: SnapshotStore) -> Snapshot:
    """Return the current snapshot without writing."""

    return store.load()
