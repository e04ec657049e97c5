"""Read access to peer reviews."""

from __future__ import annotations

from typing import Optional

from ..core.errors import UserNotFound
from ..schemas import Review, Snapshot


def reviews_for(snapshot: Snapshot, user_id: str, rating: Optional[int] = None) -> list[Review]:
    """Reviews received by ``user_id``, optionally only those with ``rating`` stars."""

    if snapshot.find_user(user_id) is None:
        raise UserNotFound(user_id)
    received = [review for review in snapshot.reviews if review.reviewee_id == user_id]
    if rating is None:
        return received
    return [review for review in received if review.rating == rating]
