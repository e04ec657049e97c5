"""Prompt templates for advisor calls."""

MATCH_PROMPT = """Analyze this learner and provide the top 5 mentor matches.
Learner: {learner}
Mentors Pool: {mentors}
Return top 5 results as a JSON array of objects with mentorId, skillId, skillName,
score (0-1), a one-sentence reason, and a short compatibilityTag
(e.g. "Senior Guide", "Branch Peer").
Return ONLY valid JSON, no markdown."""

PERSONA_PROMPT = """Based on these skills, give this student a cool "Persona" title and 1-sentence description.
Teaching: {teaching}
Learning: {learning}
Return as JSON: {{"title": "...", "desc": "..."}}"""

ROADMAP_PROMPT = """Generate a 3-step learning roadmap for {name}.
They want to learn: {learning}.
They are currently in {branch}, Year {year}.
Format: Return 3 concise points."""

PULSE_PROMPT = """Analyze these campus sessions and give a 1-sentence witty trend report.
Sessions: {sessions}"""

AGENDA_PROMPT = """Write a 3-point agenda for {mentor} teaching {skill}.
Learner note: {note}"""

ADVICE_PROMPT = """Give friendly one-paragraph advice to {name}, a student with {points} points
on a peer skill-exchange platform."""

SEARCH_PROMPT = """Rank these mentor IDs by relevance to: "{query}".
Mentors: {mentors}
Return ONLY a JSON array of mentor id strings."""
