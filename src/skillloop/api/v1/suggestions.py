"""Match suggestions and advisor text endpoints."""

from __future__ import annotations

from typing import List

from fastapi import APIRouter, Depends

from ...integrations import Advisor
from ...schemas import AdvisorText, AgendaRequest, MatchSuggestion, Persona
from ...services import commands, matching_service
from ...services.snapshot_store import SnapshotStore
from ..deps import get_advisor_dependency, get_store, require_user, unwrap

router = APIRouter(tags=["advisor"])


@router.get(
    "/suggestions/{user_id}",
    response_model=List[MatchSuggestion],
    summary="Stored mentor suggestions",
)
def get_suggestions(user_id: str, store: SnapshotStore = Depends(get_store)) -> List[MatchSuggestion]:
    return matching_service.suggestions_for(commands.read(store), user_id)


@router.post(
    "/suggestions/{user_id}/refresh",
    response_model=List[MatchSuggestion],
    summary="Regenerate mentor suggestions now",
)
async def refresh_suggestions(
    user_id: str,
    store: SnapshotStore = Depends(get_store),
    advisor: Advisor = Depends(get_advisor_dependency),
) -> List[MatchSuggestion]:
    """Ask the advisor for fresh matches; stored only while the user is active."""

    snapshot = commands.read(store)
    learner = require_user(snapshot, user_id)
    store.rollback()

    suggestions = await advisor.match_mentors(learner, snapshot.users)
    unwrap(
        commands.execute(
            store,
            matching_service.apply_suggestions,
            learner_id=user_id,
            suggestions=suggestions,
        )
    )
    return suggestions


@router.get("/advisor/{user_id}/persona", response_model=Persona, summary="Profile persona")
async def get_persona(
    user_id: str,
    store: SnapshotStore = Depends(get_store),
    advisor: Advisor = Depends(get_advisor_dependency),
) -> Persona:
    return await advisor.profile_persona(require_user(commands.read(store), user_id))


@router.get("/advisor/{user_id}/roadmap", response_model=AdvisorText, summary="Learning roadmap")
async def get_roadmap(
    user_id: str,
    store: SnapshotStore = Depends(get_store),
    advisor: Advisor = Depends(get_advisor_dependency),
) -> AdvisorText:
    user = require_user(commands.read(store), user_id)
    return AdvisorText(text=await advisor.growth_roadmap(user))


@router.get("/advisor/{user_id}/advice", response_model=AdvisorText, summary="Personal advice")
async def get_advice(
    user_id: str,
    store: SnapshotStore = Depends(get_store),
    advisor: Advisor = Depends(get_advisor_dependency),
) -> AdvisorText:
    user = require_user(commands.read(store), user_id)
    return AdvisorText(text=await advisor.advisor_advice(user))


@router.get("/advisor/pulse", response_model=AdvisorText, summary="Campus trend one-liner")
async def get_campus_pulse(
    store: SnapshotStore = Depends(get_store),
    advisor: Advisor = Depends(get_advisor_dependency),
) -> AdvisorText:
    return AdvisorText(text=await advisor.campus_pulse(commands.read(store).sessions))


@router.post("/advisor/agenda", response_model=AdvisorText, summary="Suggested session agenda")
async def get_session_agenda(
    payload: AgendaRequest,
    store: SnapshotStore = Depends(get_store),
    advisor: Advisor = Depends(get_advisor_dependency),
) -> AdvisorText:
    mentor = require_user(commands.read(store), payload.mentor_id)
    return AdvisorText(text=await advisor.session_agenda(mentor, payload.skill_name, payload.note))
