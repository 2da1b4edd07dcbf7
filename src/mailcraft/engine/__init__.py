"""Suggestion engines: map a user utterance to proposed content blocks."""

from .base import SuggestionEngine, SuggestionResult
from .factory import create_suggestion_engine
from .keyword import KeywordSuggestionEngine

__all__ = [
    "KeywordSuggestionEngine",
    "SuggestionEngine",
    "SuggestionResult",
    "create_suggestion_engine",
]
