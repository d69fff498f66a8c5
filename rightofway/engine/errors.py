"""
Errors raised by the phrase engine.
"""

from __future__ import annotations

from rightofway.models.state import EngineStage


class PhraseError(Exception):
    """Base class for phrase engine errors."""


class InvalidChoiceError(PhraseError):
    """A choice id outside the currently legal set was submitted.

    This is a wiring error in the presentation layer. The engine state is
    left untouched.

    Attributes:
        choice: The rejected id, as submitted
        stage: Stage the engine was in
        legal: Ids that would have been accepted
    """

    def __init__(self, choice: str, stage: EngineStage, legal: list[str]):
        self.choice = choice
        self.stage = stage
        self.legal = legal
        allowed = ", ".join(legal) if legal else "nothing (reset required)"
        super().__init__(
            f"Choice '{choice}' is not legal in stage '{stage.value}'; expected {allowed}"
        )


class MalformedPhraseError(PhraseError):
    """The recorded actions cannot form a valid last phrase.

    The message is meant for display. The engine stays in the INVALID
    stage until reset() is called.
    """

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)
