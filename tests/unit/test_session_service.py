"""
Unit tests for the mentorship session lifecycle.
"""
from datetime import timedelta

import pytest

from skillloop.core.config import Settings
from skillloop.core.errors import AccountBanned, UserNotFound
from skillloop.schemas import SessionMode, SessionStatus
from skillloop.services import session_service
from skillloop.services.ledger_service import InsufficientPoints
from skillloop.services.session_service import (
    PARTICIPANT_MISSING,
    InvalidDuration,
    InvalidTransition,
    NotSessionParticipant,
    SelfBooking,
    SessionNotFound,
    SkillNotOffered,
)
from tests.conftest import NOW, make_user, teach


def _request(snapshot, duration=60, learner_id="learner", mentor_id="mentor", skill_id="s4", **kwargs):
    return session_service.request_session(
        snapshot,
        learner_id=learner_id,
        mentor_id=mentor_id,
        skill_id=skill_id,
        duration_minutes=duration,
        now=NOW,
        **kwargs,
    )


def _balances(snapshot):
    return {user.id: user.total_points for user in snapshot.users}


def _advance(snapshot, session_id, *statuses):
    for status in statuses:
        snapshot = session_service.update_status(snapshot, session_id=session_id, new_status=status).snapshot
    return snapshot


class TestRequestSession:
    def test_creates_requested_session_without_touching_balances(self, snapshot):
        updated, session = _request(snapshot, note="Need help with loops", mode=SessionMode.OFFLINE)

        assert session.status == SessionStatus.REQUESTED
        assert session.points == 10
        assert session.mode == SessionMode.OFFLINE
        assert session.note == "Need help with loops"
        assert session.skill_name == "Python (Advanced)"
        assert updated.sessions == (session,)
        assert _balances(updated) == _balances(snapshot)
        assert snapshot.sessions == ()

    def test_defaults_schedule_to_next_day(self, snapshot):
        _, session = _request(snapshot)
        assert session.scheduled_at == NOW + timedelta(hours=24)
        assert session.created_at == NOW

    def test_keeps_explicit_schedule(self, snapshot):
        slot = NOW + timedelta(days=3)
        _, session = _request(snapshot, scheduled_at=slot)
        assert session.scheduled_at == slot

    @pytest.mark.parametrize("duration,cost", [(30, 5), (60, 10), (90, 15), (120, 20)])
    def test_cost_per_band(self, snapshot, duration, cost):
        richer = snapshot.replace_user(make_user("learner", points=100))
        _, session = _request(richer, duration=duration)
        assert session.points == cost

    def test_rejects_unlisted_duration(self, snapshot):
        with pytest.raises(InvalidDuration):
            _request(snapshot, duration=45)

    def test_insufficient_points(self, snapshot):
        poor = snapshot.replace_user(make_user("learner", points=4))
        with pytest.raises(InsufficientPoints):
            _request(poor, duration=30)

    def test_balance_equal_to_cost_succeeds(self, snapshot):
        exact = snapshot.replace_user(make_user("learner", points=10))
        _, session = _request(exact, duration=60)
        assert session.points == 10

    def test_self_booking_rejected(self, snapshot):
        with pytest.raises(SelfBooking):
            _request(snapshot, learner_id="mentor", mentor_id="mentor")

    def test_unknown_mentor(self, snapshot):
        with pytest.raises(UserNotFound):
            _request(snapshot, mentor_id="ghost")

    def test_banned_mentor(self, snapshot):
        banned = snapshot.replace_user(
            make_user("mentor", points=30, skills=[teach("s4", "Python")], banned=True)
        )
        with pytest.raises(AccountBanned):
            _request(banned)

    def test_skill_must_be_taught_by_mentor(self, snapshot):
        with pytest.raises(SkillNotOffered):
            _request(snapshot, skill_id="s3")


class TestUpdateStatus:
    def test_unknown_session(self, snapshot):
        with pytest.raises(SessionNotFound):
            session_service.update_status(snapshot, session_id="nope", new_status=SessionStatus.CONFIRMED)

    def test_completion_transfers_points(self, snapshot):
        requested, session = _request(snapshot)
        confirmed = _advance(requested, session.id, SessionStatus.CONFIRMED)

        change = session_service.update_status(
            confirmed, session_id=session.id, new_status=SessionStatus.COMPLETED
        )

        assert change.points_transferred is True
        assert change.warnings == ()
        assert change.session.status == SessionStatus.COMPLETED
        assert _balances(change.snapshot) == {"learner": 2, "mentor": 40, "bystander": 7}

    def test_confirm_changes_status_only(self, snapshot):
        requested, session = _request(snapshot)
        confirmed = _advance(requested, session.id, SessionStatus.CONFIRMED)
        assert confirmed.find_session(session.id).status == SessionStatus.CONFIRMED
        assert _balances(confirmed) == _balances(snapshot)

    def test_cancel_changes_status_only(self, snapshot):
        requested, session = _request(snapshot)
        cancelled = _advance(requested, session.id, SessionStatus.CANCELLED)
        assert cancelled.find_session(session.id).status == SessionStatus.CANCELLED
        assert _balances(cancelled) == _balances(snapshot)

    def test_cannot_complete_unconfirmed_session(self, snapshot):
        requested, session = _request(snapshot)
        with pytest.raises(InvalidTransition):
            session_service.update_status(requested, session_id=session.id, new_status=SessionStatus.COMPLETED)

    def test_confirmed_session_cannot_be_cancelled(self, snapshot):
        requested, session = _request(snapshot)
        confirmed = _advance(requested, session.id, SessionStatus.CONFIRMED)
        with pytest.raises(InvalidTransition):
            session_service.update_status(confirmed, session_id=session.id, new_status=SessionStatus.CANCELLED)

    @pytest.mark.parametrize("terminal_path", [
        (SessionStatus.CONFIRMED, SessionStatus.COMPLETED),
        (SessionStatus.CANCELLED,),
    ])
    @pytest.mark.parametrize("target", list(SessionStatus))
    def test_terminal_sessions_are_frozen(self, snapshot, terminal_path, target):
        requested, session = _request(snapshot)
        finished = _advance(requested, session.id, *terminal_path)
        with pytest.raises(InvalidTransition):
            session_service.update_status(finished, session_id=session.id, new_status=target)

    def test_completing_twice_does_not_pay_twice(self, snapshot):
        requested, session = _request(snapshot)
        completed = _advance(requested, session.id, SessionStatus.CONFIRMED, SessionStatus.COMPLETED)
        with pytest.raises(InvalidTransition):
            session_service.update_status(completed, session_id=session.id, new_status=SessionStatus.COMPLETED)
        assert _balances(completed)["learner"] == 2

    def test_only_mentor_confirms(self, snapshot):
        requested, session = _request(snapshot)
        with pytest.raises(NotSessionParticipant):
            session_service.update_status(
                requested, session_id=session.id, new_status=SessionStatus.CONFIRMED, actor_id="learner"
            )
        change = session_service.update_status(
            requested, session_id=session.id, new_status=SessionStatus.CONFIRMED, actor_id="mentor"
        )
        assert change.session.status == SessionStatus.CONFIRMED

    @pytest.mark.parametrize("actor", ["mentor", "learner"])
    def test_either_party_cancels_request(self, snapshot, actor):
        requested, session = _request(snapshot)
        change = session_service.update_status(
            requested, session_id=session.id, new_status=SessionStatus.CANCELLED, actor_id=actor
        )
        assert change.session.status == SessionStatus.CANCELLED

    def test_outsider_cannot_complete(self, snapshot):
        requested, session = _request(snapshot)
        confirmed = _advance(requested, session.id, SessionStatus.CONFIRMED)
        with pytest.raises(NotSessionParticipant):
            session_service.update_status(
                confirmed, session_id=session.id, new_status=SessionStatus.COMPLETED, actor_id="bystander"
            )

    def test_missing_participant_completes_with_warning(self, snapshot):
        requested, session = _request(snapshot)
        confirmed = _advance(requested, session.id, SessionStatus.CONFIRMED)
        without_mentor = confirmed.model_copy(
            update={"users": tuple(user for user in confirmed.users if user.id != "mentor")}
        )

        change = session_service.update_status(
            without_mentor, session_id=session.id, new_status=SessionStatus.COMPLETED
        )

        assert change.session.status == SessionStatus.COMPLETED
        assert change.points_transferred is False
        assert change.warnings == (PARTICIPANT_MISSING,)
        assert _balances(change.snapshot) == _balances(without_mentor)

    def test_overdraft_policy_blocks_completion(self, snapshot, monkeypatch):
        requested, session = _request(snapshot)
        confirmed = _advance(requested, session.id, SessionStatus.CONFIRMED)
        drained = confirmed.replace_user(confirmed.find_user("learner").model_copy(update={"total_points": 3}))

        monkeypatch.setattr(
            session_service, "get_settings", lambda: Settings(block_overdrawn_completion=True)
        )
        with pytest.raises(InsufficientPoints):
            session_service.update_status(drained, session_id=session.id, new_status=SessionStatus.COMPLETED)

    def test_overdraft_allowed_by_default(self, snapshot):
        requested, session = _request(snapshot)
        confirmed = _advance(requested, session.id, SessionStatus.CONFIRMED)
        drained = confirmed.replace_user(confirmed.find_user("learner").model_copy(update={"total_points": 3}))
        change = session_service.update_status(drained, session_id=session.id, new_status=SessionStatus.COMPLETED)
        assert change.snapshot.find_user("learner").total_points == -7


def test_sessions_for_user_newest_first(snapshot):
    first, older = _request(snapshot)
    later = first.replace_user(make_user("learner", points=50))
    second, newer = session_service.request_session(
        later,
        learner_id="learner",
        mentor_id="mentor",
        skill_id="s4",
        duration_minutes=30,
        now=NOW + timedelta(hours=1),
    )
    assert [item.id for item in session_service.sessions_for_user(second, "mentor")] == [newer.id, older.id]
    assert session_service.sessions_for_user(second, "bystander") == []
