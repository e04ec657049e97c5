"""Background jobs."""

from .suggestion_refresh import refresh_match_suggestions

__all__ = ["refresh_match_suggestions"]
