"""Local mentor matching and suggestion bookkeeping."""

from __future__ import annotations

import logging
from typing import Iterable, Sequence

from ..schemas import MatchSuggestion, SkillType, Snapshot, User

logger = logging.getLogger(__name__)

MAX_SUGGESTIONS = 5
FALLBACK_SCORE = 0.8
FALLBACK_REASON = "Manual match"
FALLBACK_TAG = "Skill Match"


def eligible_mentors(learner: User, pool: Iterable[User]) -> list[User]:
    """Users a learner may be matched with: everyone else who is not banned."""

    return [user for user in pool if user.id != learner.id and not user.is_banned]


def fallback_matching(learner: User, pool: Sequence[User]) -> list[MatchSuggestion]:
    """Pair each wanted skill with every user teaching a skill of that name.

    Results keep discovery order (wanted skills first, then pool order) and are
    cut at ``MAX_SUGGESTIONS``.
    """

    suggestions: list[MatchSuggestion] = []
    mentors = eligible_mentors(learner, pool)
    for wanted in learner.skills_of_type(SkillType.WANT_TO_LEARN):
        for mentor in mentors:
            if not mentor.teaches(wanted.name):
                continue
            suggestions.append(
                MatchSuggestion(
                    learner_id=learner.id,
                    mentor_id=mentor.id,
                    skill_id=wanted.skill_id,
                    skill_name=wanted.name,
                    score=FALLBACK_SCORE,
                    reason=FALLBACK_REASON,
                    compatibility_tag=FALLBACK_TAG,
                )
            )
    return suggestions[:MAX_SUGGESTIONS]


def apply_suggestions(
    snapshot: Snapshot,
    *,
    learner_id: str,
    suggestions: Sequence[MatchSuggestion],
) -> tuple[Snapshot, tuple[MatchSuggestion, ...]]:
    """Replace the stored suggestions if the learner is still the active user.

    Returns the snapshot and the suggestions actually stored, which is empty
    when the result arrived for a user who is no longer active.
    """

    if snapshot.current_user_id != learner_id:
        logger.info("discarding %d suggestions for inactive user %s", len(suggestions), learner_id)
        return snapshot, ()
    stored = tuple(suggestions)
    return snapshot.model_copy(update={"match_suggestions": stored}), stored


def suggestions_for(snapshot: Snapshot, learner_id: str) -> list[MatchSuggestion]:
    return [item for item in snapshot.match_suggestions if item.learner_id == learner_id]
