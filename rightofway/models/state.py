"""
Engine state models.

These describe what the presentation layer sees after every step: the
pending prompt, the legal choices, the call built so far, and whether the
phrase is finished.
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, Field

from rightofway.models.action import Fencer


class EngineStage(str, Enum):
    """Which prompt the engine is waiting on.

    Attributes:
        START: Nothing recorded yet; asking for the opening action
        AWAITING_OUTCOME: An aggressive action needs its result
        AWAITING_RIPOSTE_DECISION: A parry landed; was there a riposte?
        AWAITING_DEFENDER_RESPONSE: The attack missed; did the defender counter?
        AWAITING_CONTINUATION: Did the fencer with priority continue (remise)?
        DONE: The phrase is complete
        INVALID: The phrase cannot be a valid last phrase; reset required
    """

    START = "start"
    AWAITING_OUTCOME = "awaiting-outcome"
    AWAITING_RIPOSTE_DECISION = "awaiting-riposte-decision"
    AWAITING_DEFENDER_RESPONSE = "awaiting-defender-response"
    AWAITING_CONTINUATION = "awaiting-continuation"
    DONE = "done"
    INVALID = "invalid"


class ChoiceId(str, Enum):
    """Identifiers of every choice the engine can offer."""

    # Opening
    ATTACK_LEFT = "attack-left"
    ATTACK_RIGHT = "attack-right"
    POINT_IN_LINE_LEFT = "point-in-line-left"
    POINT_IN_LINE_RIGHT = "point-in-line-right"
    SIMULTANEOUS = "simultaneous"

    # Outcome of an aggressive action
    ARRIVES = "arrives"
    OFF_TARGET = "off-target"
    MISSES = "misses"  # original attack only
    MISSES_2ND = "misses2nd"  # riposte, counterattack, remise
    PARRIED = "parried"
    COUNTERPARRIED = "counterparried"

    # Follow-ups
    RIPOSTE_YES = "riposte-yes"
    RIPOSTE_NO = "riposte-no"
    COUNTERATTACK_YES = "counterattack-yes"
    COUNTERATTACK_NO = "counterattack-no"
    REMISE = "remise"
    NO_CONTINUATION = "no-continuation"


class Choice(BaseModel):
    """One option offered to the user."""

    id: ChoiceId
    label: str


class PhraseSnapshot(BaseModel):
    """Everything the presentation layer needs to display one step.

    Attributes:
        stage: The pending prompt's stage
        prompt: Human-readable question (or the error message when invalid)
        choices: Legal choices in display order (empty when done/invalid)
        call: Referee call built so far
        priority: Fencer currently holding right-of-way
        done: True once the phrase is complete
        error: Displayable message if the phrase turned out malformed
    """

    stage: EngineStage
    prompt: str
    choices: list[Choice] = Field(default_factory=list)
    call: str = ""
    priority: Fencer = Fencer.NONE
    done: bool = False
    error: str | None = None
