"""Story persistence."""

from .stories import StoryStore

__all__ = ["StoryStore"]
