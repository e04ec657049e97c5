"""Date-time helpers for session scheduling."""

from datetime import datetime, timedelta, timezone

DEFAULT_LEAD_TIME = timedelta(hours=24)


def utcnow() -> datetime:
    """Return the current time as an aware UTC timestamp."""

    return datetime.now(timezone.utc)


def default_schedule(now: datetime | None = None) -> datetime:
    """Return the slot a new session gets when the learner picks none."""

    current = now.astimezone(timezone.utc) if now else utcnow()
    return current + DEFAULT_LEAD_TIME
