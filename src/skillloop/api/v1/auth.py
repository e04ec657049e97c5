"""Signup, login and logout endpoints."""

from __future__ import annotations

from typing import Callable

from fastapi import APIRouter, BackgroundTasks, Depends, Response, status
from sqlalchemy.orm import Session

from ...integrations import Advisor
from ...jobs import refresh_match_suggestions
from ...schemas import LoginRequest, SignupRequest, UserSummary
from ...services import auth_service, commands
from ...services.snapshot_store import SnapshotStore
from ..deps import get_advisor_dependency, get_session_factory, get_store, unwrap

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post(
    "/signup",
    response_model=UserSummary,
    status_code=status.HTTP_201_CREATED,
    summary="Create a student account",
    responses={
        400: {"description": "Email outside the campus domain"},
        409: {"description": "Email already registered"},
    },
)
def signup(payload: SignupRequest, store: SnapshotStore = Depends(get_store)) -> UserSummary:
    """Register a campus student with the starting points grant.

    Example request body::

        {
            "name": "Priya Raman",
            "email": "priya@krce.ac.in",
            "password": "correct horse battery staple"
        }
    """

    result = commands.execute(
        store,
        auth_service.signup,
        name=payload.name,
        email=payload.email,
        password=payload.password,
    )
    return unwrap(result)


@router.post(
    "/login",
    response_model=UserSummary,
    summary="Log in",
    responses={
        401: {"description": "Unknown email or wrong password"},
        403: {"description": "Account banned"},
    },
)
def login(
    payload: LoginRequest,
    background_tasks: BackgroundTasks,
    store: SnapshotStore = Depends(get_store),
    advisor: Advisor = Depends(get_advisor_dependency),
    session_factory: Callable[[], Session] = Depends(get_session_factory),
) -> UserSummary:
    """Authenticate and start a background refresh of mentor suggestions."""

    user = unwrap(commands.execute(store, auth_service.login, email=payload.email, password=payload.password))
    background_tasks.add_task(refresh_match_suggestions, user.id, advisor, session_factory)
    return user


@router.post("/logout", status_code=status.HTTP_204_NO_CONTENT, summary="Log out")
def logout(store: SnapshotStore = Depends(get_store)) -> Response:
    unwrap(commands.execute(store, auth_service.logout))
    return Response(status_code=status.HTTP_204_NO_CONTENT)
