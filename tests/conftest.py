"""Shared test fixtures for all test modules."""

import pytest

from mailcraft.engine.keyword import KeywordSuggestionEngine
from mailcraft.models.blocks import create_button_block, create_text_block, create_title_block
from tests.helpers import ControlledEngine


@pytest.fixture
def keyword_engine():
    """Keyword engine without simulated latency."""
    return KeywordSuggestionEngine(delay=0.0)


@pytest.fixture
def controlled_engine():
    """Engine whose replies are released manually by the test."""
    return ControlledEngine()


@pytest.fixture
def sample_blocks():
    """Three distinct blocks in a fixed order."""
    return [
        create_title_block("Spring Sale"),
        create_text_block("Everything is 20% off this week."),
        create_button_block("Browse", "https://example.com/sale"),
    ]
