"""SkillLoop: campus peer-tutoring marketplace."""

__version__ = "0.1.0"
