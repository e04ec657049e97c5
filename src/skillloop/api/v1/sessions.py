"""Mentorship session endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Depends, status

from ...schemas import MentorshipSession, SessionCreate, SessionStatusReceipt, SessionStatusUpdate
from ...services import commands, session_service
from ...services.snapshot_store import SnapshotStore
from ..deps import get_store, unwrap

router = APIRouter(prefix="/sessions", tags=["sessions"])


@router.post(
    "",
    response_model=MentorshipSession,
    status_code=status.HTTP_201_CREATED,
    summary="Request a session",
    responses={
        201: {
            "description": "Session requested",
            "content": {
                "application/json": {
                    "example": {
                        "id": "6f1c2d7e-0b5a-4f7e-9d55-1d2b3c4d5e6f",
                        "mentor_id": "u2",
                        "learner_id": "u1",
                        "skill_id": "s4",
                        "skill_name": "Python (Advanced)",
                        "status": "REQUESTED",
                        "mode": "Online",
                        "scheduled_at": "2026-10-20T10:15:30+00:00",
                        "duration_minutes": 60,
                        "points": 10,
                        "note": "Help with list comprehensions",
                        "created_at": "2026-10-19T10:15:30+00:00",
                    }
                }
            },
        },
        400: {"description": "Business rule violation"},
        404: {"description": "Learner or mentor not found"},
    },
)
def request_session(
    payload: SessionCreate,
    store: SnapshotStore = Depends(get_store),
) -> MentorshipSession:
    """Book a mentor. Points move only when the session is completed.

    Example request body::

        {
            "learner_id": "u1",
            "mentor_id": "u2",
            "skill_id": "s4",
            "duration_minutes": 60,
            "mode": "Online",
            "note": "Help with list comprehensions"
        }
    """

    result = commands.execute(
        store,
        session_service.request_session,
        learner_id=payload.learner_id,
        mentor_id=payload.mentor_id,
        skill_id=payload.skill_id,
        duration_minutes=payload.duration_minutes,
        mode=payload.mode,
        note=payload.note,
        scheduled_at=payload.scheduled_at,
    )
    return unwrap(result)


@router.patch(
    "/{session_id}/status",
    response_model=SessionStatusReceipt,
    summary="Confirm, cancel or complete a session",
    responses={
        403: {"description": "Actor may not take this transition"},
        404: {"description": "Session not found"},
        409: {"description": "Transition not allowed from the current status"},
    },
)
def update_session_status(
    session_id: str,
    payload: SessionStatusUpdate,
    store: SnapshotStore = Depends(get_store),
) -> SessionStatusReceipt:
    change = unwrap(
        commands.execute(
            store,
            session_service.update_status,
            session_id=session_id,
            new_status=payload.status,
            actor_id=payload.actor_id,
        )
    )
    return SessionStatusReceipt(
        session=change.session,
        points_transferred=change.points_transferred,
        warnings=list(change.warnings),
    )
