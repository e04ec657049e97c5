"""
Integration tests for snapshot persistence and the command runner.
"""
import pytest
from sqlalchemy.exc import OperationalError

from skillloop.core.errors import PersistenceFailure, SnapshotConflict
from skillloop.core.security import verify_password
from skillloop.models import SnapshotRecord
from skillloop.schemas import MatchSuggestion, SessionStatus, UserRole
from skillloop.services import auth_service, commands, matching_service, session_service
from skillloop.services.commands import Failure, Success
from skillloop.services.snapshot_store import SnapshotStore


def test_first_load_seeds_catalog_and_accounts(db):
    snapshot = SnapshotStore(db, key="test").load()

    assert [skill.id for skill in snapshot.skills] == [f"s{index}" for index in range(1, 9)]
    assert [user.email for user in snapshot.users] == [
        "alice@krce.ac.in",
        "bob@krce.ac.in",
        "admin@krce.ac.in",
    ]
    assert snapshot.find_user("admin1").role == UserRole.ADMIN
    assert verify_password("password123", snapshot.find_user("u1").password_hash)
    assert snapshot.version == 1
    assert db.get(SnapshotRecord, "test") is not None


def test_seed_is_written_once(db):
    first = SnapshotStore(db, key="test").load()
    second = SnapshotStore(db, key="test").load()
    assert first == second


def test_save_round_trips_whole_aggregate(db):
    store = SnapshotStore(db, key="test")
    snapshot = store.load()
    updated, session = session_service.request_session(
        snapshot, learner_id="u1", mentor_id="u2", skill_id="s4", duration_minutes=60
    )

    saved = store.save(updated)
    store.commit()

    assert saved.version == snapshot.version + 1
    reloaded = SnapshotStore(db, key="test").load()
    assert reloaded.find_session(session.id) == session
    assert reloaded == saved


def test_stale_save_conflicts(db):
    store = SnapshotStore(db, key="test")
    stale = store.load()
    store.save(stale)
    store.commit()

    with pytest.raises(SnapshotConflict) as exc_info:
        store.save(stale)
    assert exc_info.value.expected == stale.version
    assert exc_info.value.found == stale.version + 1


def test_corrupt_payload_is_a_hard_failure(db):
    db.add(SnapshotRecord(key="broken", payload={"users": "not a list"}, version=3))
    db.commit()

    with pytest.raises(PersistenceFailure):
        SnapshotStore(db, key="broken").load()


def test_unavailable_storage_is_a_hard_failure(db, monkeypatch):
    store = SnapshotStore(db, key="test")

    def broken_execute(*args, **kwargs):
        raise OperationalError("SELECT", {}, Exception("disk I/O error"))

    monkeypatch.setattr(db, "execute", broken_execute)
    with pytest.raises(PersistenceFailure):
        store.load()


def test_execute_success_persists(db):
    store = SnapshotStore(db, key="test")

    result = commands.execute(
        store,
        session_service.request_session,
        learner_id="u1",
        mentor_id="u2",
        skill_id="s4",
        duration_minutes=30,
    )

    assert isinstance(result, Success)
    assert result.ok
    assert result.value.status == SessionStatus.REQUESTED
    assert SnapshotStore(db, key="test").load().find_session(result.value.id) is not None


def test_execute_failure_writes_nothing(db):
    store = SnapshotStore(db, key="test")
    before = store.load()

    result = commands.execute(
        store,
        auth_service.signup,
        name="Mallory",
        email="mallory@other.edu",
        password="pw",
    )

    assert isinstance(result, Failure)
    assert not result.ok
    assert result.error.__class__.__name__ == "DomainRejected"
    assert result.status_code == 400
    assert SnapshotStore(db, key="test").load() == before


def test_execute_unwraps_status_change(db):
    store = SnapshotStore(db, key="test")
    requested = commands.execute(
        store,
        session_service.request_session,
        learner_id="u1",
        mentor_id="u2",
        skill_id="s4",
        duration_minutes=60,
    )
    session_id = requested.value.id

    commands.execute(store, session_service.update_status, session_id=session_id, new_status=SessionStatus.CONFIRMED)
    completed = commands.execute(
        store, session_service.update_status, session_id=session_id, new_status=SessionStatus.COMPLETED
    )

    assert completed.value.points_transferred is True
    balances = {user.id: user.total_points for user in SnapshotStore(db, key="test").load().users}
    assert balances == {"u1": 40, "u2": 40, "admin1": 9999}


def _bob_for_alice():
    return MatchSuggestion(learner_id="u1", mentor_id="u2", skill_id="s4", skill_name="Python", score=0.9)


def test_execute_stores_suggestions_for_active_user(db):
    store = SnapshotStore(db, key="test")
    commands.execute(store, auth_service.login, email="alice@krce.ac.in", password="password123")

    result = commands.execute(
        store, matching_service.apply_suggestions, learner_id="u1", suggestions=[_bob_for_alice()]
    )

    assert isinstance(result, Success)
    assert result.value == (_bob_for_alice(),)
    reloaded = SnapshotStore(db, key="test").load()
    assert reloaded.match_suggestions == (_bob_for_alice(),)


def test_execute_discards_suggestions_for_inactive_user(db):
    store = SnapshotStore(db, key="test")
    commands.execute(store, auth_service.login, email="bob@krce.ac.in", password="password123")

    result = commands.execute(
        store, matching_service.apply_suggestions, learner_id="u1", suggestions=[_bob_for_alice()]
    )

    assert isinstance(result, Success)
    assert result.value == ()
    assert SnapshotStore(db, key="test").load().match_suggestions == ()
