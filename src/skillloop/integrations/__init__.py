"""External collaborators."""

from functools import lru_cache

from .advisor import Advisor, GeminiAdvisor, SuggestionSourceUnavailable


@lru_cache(maxsize=1)
def get_advisor() -> Advisor:
    """Return the process-wide advisor."""

    return GeminiAdvisor()


__all__ = [
    "Advisor",
    "GeminiAdvisor",
    "SuggestionSourceUnavailable",
    "get_advisor",
]
