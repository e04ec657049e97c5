"""Mentor directory lookups."""

from __future__ import annotations

from typing import Optional, Sequence

from ..schemas import SkillType, Snapshot, User


def find_mentors(
    snapshot: Snapshot,
    *,
    viewer_id: Optional[str] = None,
    search: str = "",
    skill_name: Optional[str] = None,
) -> list[User]:
    """Return teaching users matching a name/branch search and a skill filter."""

    term = search.strip().lower()
    results = []
    for user in snapshot.users:
        if user.id == viewer_id or user.is_banned:
            continue
        if not user.skills_of_type(SkillType.CAN_TEACH):
            continue
        if term and term not in user.name.lower() and term not in user.branch.lower():
            continue
        if skill_name and not user.teaches(skill_name):
            continue
        results.append(user)
    return results


def rank_by_ids(mentors: Sequence[User], ranked_ids: Sequence[str]) -> list[User]:
    """Keep only ranked mentors, in ranking order."""

    position = {mentor_id: index for index, mentor_id in enumerate(ranked_ids)}
    ranked = [mentor for mentor in mentors if mentor.id in position]
    return sorted(ranked, key=lambda mentor: position[mentor.id])
