"""
Shared pytest fixtures for the right-of-way referee tests.

This module provides:
- vocabulary: The packaged prompt/label text
- engine: A fresh PhraseEngine at the START stage
- play: Factory fixture replaying choice ids into a fresh engine
- Custom markers for test categorization
"""

from __future__ import annotations

from collections.abc import Callable

import pytest

from rightofway.engine.phrase import PhraseEngine
from rightofway.engine.vocabulary import DEFAULT_VOCABULARY_PATH, Vocabulary, load_vocabulary


# =============================================================================
# Pytest Configuration
# =============================================================================


def pytest_configure(config: pytest.Config) -> None:
    """Register custom markers."""
    config.addinivalue_line("markers", "integration: marks tests as integration tests")


# =============================================================================
# Engine Fixtures
# =============================================================================


@pytest.fixture
def vocabulary() -> Vocabulary:
    """The packaged vocabulary, independent of RIGHTOFWAY_VOCABULARY."""
    return load_vocabulary(DEFAULT_VOCABULARY_PATH)


@pytest.fixture
def engine(vocabulary: Vocabulary) -> PhraseEngine:
    """A fresh engine waiting for the opening action."""
    return PhraseEngine(vocabulary)


@pytest.fixture
def play(vocabulary: Vocabulary) -> Callable[..., PhraseEngine]:
    """Factory fixture to replay choices into a fresh engine.

    Usage:
        def test_something(play):
            engine = play("attack-left", "arrives")
    """

    def _factory(*choices: str) -> PhraseEngine:
        return PhraseEngine.replay(choices, vocabulary)

    return _factory
