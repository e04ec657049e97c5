"""Generative text advisor with mandatory fallbacks.

Every call is bounded by a timeout and returns a usable value when the model
is unreachable, slow, unconfigured or returns something unparsable. Mentor
matching degrades to :func:`fallback_matching`; text calls degrade to static
strings.
"""

from __future__ import annotations

import asyncio
import json
import logging
from typing import Any, Optional, Protocol, Sequence

from pydantic import BaseModel, Field, ValidationError

from ..core.config import get_settings
from ..schemas import MatchSuggestion, MentorshipSession, Persona, SkillType, User
from ..services.matching_service import MAX_SUGGESTIONS, eligible_mentors, fallback_matching
from . import prompts

logger = logging.getLogger(__name__)

FALLBACK_PERSONA = Persona(title="Knowledge Pioneer", desc="Passionate about sharing and learning.")
FALLBACK_ROADMAP = "Complete 3 peer sessions to level up your mastery."
FALLBACK_PULSE = "Technical skills are the top trade this week."
FALLBACK_AGENDA = "Review fundamentals, Live Demo, Q&A."
FALLBACK_ADVICE = "Ready for your next skill swap?"

# Returned without calling the model when no API key is configured.
IDLE_PERSONA = Persona(title="Skill Seeker", desc="A valued member of KRCE Loop.")
IDLE_ROADMAP = "1. Find a mentor. 2. Schedule session. 3. Practice."
IDLE_PULSE = "Web Dev is trending this week!"
IDLE_AGENDA = "1. Basics 2. Exercise 3. Q&A"
IDLE_ADVICE = "Keep sharing your skills!"

MIN_SEARCH_LENGTH = 3
PULSE_WINDOW = 10


class SuggestionSourceUnavailable(Exception):
    """Raised internally when the model cannot produce a usable answer."""


class Advisor(Protocol):
    """Capabilities the application expects from a suggestion source."""

    async def match_mentors(self, learner: User, pool: Sequence[User]) -> list[MatchSuggestion]: ...

    async def profile_persona(self, user: User) -> Persona: ...

    async def growth_roadmap(self, user: User) -> str: ...

    async def campus_pulse(self, sessions: Sequence[MentorshipSession]) -> str: ...

    async def session_agenda(self, mentor: User, skill_name: str, note: str) -> str: ...

    async def advisor_advice(self, user: User) -> str: ...

    async def semantic_search(self, query: str, mentors: Sequence[User]) -> list[str]: ...


class _RawMatch(BaseModel):
    mentor_id: str = Field(..., alias="mentorId")
    skill_id: str = Field("", alias="skillId")
    skill_name: str = Field(..., alias="skillName")
    score: float
    reason: Optional[str] = None
    compatibility_tag: Optional[str] = Field(None, alias="compatibilityTag")


def _skill_names(user: User, skill_type: SkillType) -> list[str]:
    return [skill.name for skill in user.skills_of_type(skill_type)]


class GeminiAdvisor:
    """Advisor backed by Google's Gemini models."""

    def __init__(
        self,
        api_key: Optional[str] = None,
        model_name: Optional[str] = None,
        timeout: Optional[float] = None,
        model: Any = None,
    ) -> None:
        settings = get_settings()
        self.api_key = api_key if api_key is not None else settings.gemini_api_key
        self.model_name = model_name or settings.gemini_model
        self.timeout = timeout if timeout is not None else settings.advisor_timeout_seconds
        self._model = model

    @property
    def is_available(self) -> bool:
        return self._model is not None or bool(self.api_key)

    def _client(self) -> Any:
        if self._model is None:
            import google.generativeai as genai

            genai.configure(api_key=self.api_key)
            self._model = genai.GenerativeModel(self.model_name)
        return self._model

    async def _generate(self, prompt: str, *, json_output: bool = False) -> str:
        if not self.is_available:
            raise SuggestionSourceUnavailable("no API key configured")

        kwargs = {}
        if json_output:
            kwargs["generation_config"] = {"response_mime_type": "application/json"}

        try:
            response = await asyncio.wait_for(
                asyncio.to_thread(self._client().generate_content, prompt, **kwargs),
                timeout=self.timeout,
            )
            text = (response.text or "").strip()
        except asyncio.TimeoutError as exc:
            raise SuggestionSourceUnavailable(f"no answer within {self.timeout}s") from exc
        except Exception as exc:
            raise SuggestionSourceUnavailable(str(exc)) from exc

        if not text:
            raise SuggestionSourceUnavailable("empty response")
        return text

    async def _text(self, label: str, prompt: str, fallback: str, idle: str) -> str:
        if not self.is_available:
            return idle
        try:
            return await self._generate(prompt)
        except SuggestionSourceUnavailable as exc:
            logger.warning("%s fell back to default text: %s", label, exc)
            return fallback

    async def match_mentors(self, learner: User, pool: Sequence[User]) -> list[MatchSuggestion]:
        learning = _skill_names(learner, SkillType.WANT_TO_LEARN)
        if not learning:
            return []

        mentors = eligible_mentors(learner, pool)
        prompt = prompts.MATCH_PROMPT.format(
            learner=json.dumps(
                {"name": learner.name, "branch": learner.branch, "year": learner.year, "learning": learning}
            ),
            mentors=json.dumps(
                [
                    {
                        "id": mentor.id,
                        "name": mentor.name,
                        "branch": mentor.branch,
                        "year": mentor.year,
                        "teaching": [
                            {"skillId": skill.skill_id, "skillName": skill.name}
                            for skill in mentor.skills_of_type(SkillType.CAN_TEACH)
                        ],
                    }
                    for mentor in mentors
                ]
            ),
        )
        try:
            raw = await self._generate(prompt, json_output=True)
            return self._parse_matches(raw, learner, mentors)
        except SuggestionSourceUnavailable as exc:
            logger.warning("mentor matching fell back to local rules: %s", exc)
            return fallback_matching(learner, pool)

    @staticmethod
    def _parse_matches(raw: str, learner: User, mentors: Sequence[User]) -> list[MatchSuggestion]:
        try:
            items = json.loads(raw)
            if not isinstance(items, list):
                raise ValueError("expected a JSON array")
            parsed = [_RawMatch.model_validate(item) for item in items]
        except (ValueError, ValidationError) as exc:
            raise SuggestionSourceUnavailable(f"malformed match payload: {exc}") from exc

        known = {mentor.id for mentor in mentors}
        suggestions = [
            MatchSuggestion(
                learner_id=learner.id,
                mentor_id=item.mentor_id,
                skill_id=item.skill_id,
                skill_name=item.skill_name,
                score=item.score,
                reason=item.reason,
                compatibility_tag=item.compatibility_tag,
            )
            for item in parsed
            if item.mentor_id in known
        ]
        if not suggestions:
            raise SuggestionSourceUnavailable("no usable mentors in response")
        return suggestions[:MAX_SUGGESTIONS]

    async def profile_persona(self, user: User) -> Persona:
        if not self.is_available:
            return IDLE_PERSONA
        prompt = prompts.PERSONA_PROMPT.format(
            teaching=", ".join(_skill_names(user, SkillType.CAN_TEACH)),
            learning=", ".join(_skill_names(user, SkillType.WANT_TO_LEARN)),
        )
        try:
            raw = await self._generate(prompt, json_output=True)
            persona = Persona.model_validate_json(raw)
        except (SuggestionSourceUnavailable, ValidationError) as exc:
            logger.warning("persona fell back to default: %s", exc)
            return FALLBACK_PERSONA
        if not persona.title.strip() or not persona.desc.strip():
            return FALLBACK_PERSONA
        return persona

    async def growth_roadmap(self, user: User) -> str:
        prompt = prompts.ROADMAP_PROMPT.format(
            name=user.name,
            learning=", ".join(_skill_names(user, SkillType.WANT_TO_LEARN)),
            branch=user.branch,
            year=user.year,
        )
        return await self._text("roadmap", prompt, FALLBACK_ROADMAP, IDLE_ROADMAP)

    async def campus_pulse(self, sessions: Sequence[MentorshipSession]) -> str:
        if not sessions:
            return IDLE_PULSE
        recent = [item.skill_name for item in list(sessions)[-PULSE_WINDOW:]]
        prompt = prompts.PULSE_PROMPT.format(sessions=json.dumps(recent))
        return await self._text("campus pulse", prompt, FALLBACK_PULSE, IDLE_PULSE)

    async def session_agenda(self, mentor: User, skill_name: str, note: str) -> str:
        prompt = prompts.AGENDA_PROMPT.format(mentor=mentor.name, skill=skill_name, note=note or "none")
        return await self._text("agenda", prompt, FALLBACK_AGENDA, IDLE_AGENDA)

    async def advisor_advice(self, user: User) -> str:
        prompt = prompts.ADVICE_PROMPT.format(name=user.name, points=user.total_points)
        return await self._text("advice", prompt, FALLBACK_ADVICE, IDLE_ADVICE)

    async def semantic_search(self, query: str, mentors: Sequence[User]) -> list[str]:
        default = [mentor.id for mentor in mentors]
        if len(query.strip()) < MIN_SEARCH_LENGTH:
            return default

        prompt = prompts.SEARCH_PROMPT.format(
            query=query,
            mentors=json.dumps(
                [
                    {"id": mentor.id, "bio": mentor.bio, "skills": [skill.name for skill in mentor.skills]}
                    for mentor in mentors
                ]
            ),
        )
        try:
            ranked = json.loads(await self._generate(prompt, json_output=True))
        except (SuggestionSourceUnavailable, ValueError) as exc:
            logger.warning("semantic search fell back to directory order: %s", exc)
            return default
        if not isinstance(ranked, list):
            return default

        known = set(default)
        result = [mentor_id for mentor_id in ranked if isinstance(mentor_id, str) and mentor_id in known]
        return result or default
