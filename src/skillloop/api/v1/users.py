"""User profile and mentor directory endpoints."""

from __future__ import annotations

from typing import Callable, List, Optional

from fastapi import APIRouter, BackgroundTasks, Depends, Query
from sqlalchemy.orm import Session

from ...integrations import Advisor
from ...jobs import refresh_match_suggestions
from ...schemas import MentorshipSession, OnboardingUpdate, Review, UserSummary
from ...services import auth_service, commands, explore_service, review_service, session_service
from ...services.snapshot_store import SnapshotStore
from ..deps import get_advisor_dependency, get_session_factory, get_store, require_user, unwrap

router = APIRouter(tags=["users"])


@router.get("/users/{user_id}", response_model=UserSummary, summary="Fetch a user profile")
def get_user(user_id: str, store: SnapshotStore = Depends(get_store)) -> UserSummary:
    return require_user(commands.read(store), user_id)


@router.put(
    "/users/{user_id}/onboarding",
    response_model=UserSummary,
    summary="Complete onboarding",
    responses={
        400: {"description": "Unknown or duplicated skill"},
        404: {"description": "User not found"},
    },
)
def complete_onboarding(
    user_id: str,
    payload: OnboardingUpdate,
    background_tasks: BackgroundTasks,
    store: SnapshotStore = Depends(get_store),
    advisor: Advisor = Depends(get_advisor_dependency),
    session_factory: Callable[[], Session] = Depends(get_session_factory),
) -> UserSummary:
    """Save skills and profile details, then refresh suggestions.

    Example request body::

        {
            "skills": [
                {"skill_id": "s4", "type": "CAN_TEACH", "level": "Advanced"},
                {"skill_id": "s7", "type": "WANT_TO_LEARN", "level": "Beginner"}
            ],
            "branch": "CSE",
            "year": 2,
            "bio": "Robotics club member.",
            "availability": "Weekends"
        }
    """

    result = commands.execute(
        store,
        auth_service.complete_onboarding,
        user_id=user_id,
        skills=payload.skills,
        branch=payload.branch,
        year=payload.year,
        bio=payload.bio,
        availability=payload.availability,
    )
    user = unwrap(result)
    background_tasks.add_task(refresh_match_suggestions, user.id, advisor, session_factory)
    return user


@router.get(
    "/users/{user_id}/sessions",
    response_model=List[MentorshipSession],
    summary="Sessions a user takes part in",
)
def list_user_sessions(user_id: str, store: SnapshotStore = Depends(get_store)) -> List[MentorshipSession]:
    snapshot = commands.read(store)
    require_user(snapshot, user_id)
    return session_service.sessions_for_user(snapshot, user_id)


@router.get(
    "/users/{user_id}/reviews",
    response_model=List[Review],
    summary="Reviews a user has received",
    responses={404: {"description": "User not found"}},
)
def list_user_reviews(
    user_id: str,
    rating: Optional[int] = Query(None, ge=1, le=5, description="Only reviews with this many stars"),
    store: SnapshotStore = Depends(get_store),
) -> List[Review]:
    snapshot = commands.read(store)
    require_user(snapshot, user_id)
    return review_service.reviews_for(snapshot, user_id, rating=rating)


@router.get("/mentors", response_model=List[UserSummary], summary="Browse mentors")
async def list_mentors(
    *,
    viewer_id: Optional[str] = Query(None, description="User browsing the directory"),
    search: str = Query("", description="Name or branch fragment"),
    skill: Optional[str] = Query(None, description="Only mentors teaching this skill name"),
    semantic: bool = Query(False, description="Rank results with the advisor"),
    store: SnapshotStore = Depends(get_store),
    advisor: Advisor = Depends(get_advisor_dependency),
) -> List[UserSummary]:
    """Return teaching users, optionally ranked by advisor relevance."""

    snapshot = commands.read(store)
    if not semantic:
        return explore_service.find_mentors(snapshot, viewer_id=viewer_id, search=search, skill_name=skill)

    mentors = explore_service.find_mentors(snapshot, viewer_id=viewer_id)
    ranked_ids = await advisor.semantic_search(search, mentors)
    return explore_service.rank_by_ids(mentors, ranked_ids)
