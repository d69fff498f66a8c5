"""
Action models for the phrase engine.

An Action is one discrete event in a fencing phrase: an attack, a riposte,
a remise, a counterattack, a point-in-line, a simultaneous call, or the
absence of a riposte. Each action is tagged with the fencer who performed
it and its outcome.

Key concepts:
    - Fencer: Side of the piste (left, right, or none)
    - ActionKind: What was done; decides which outcomes are allowed
    - Outcome: How the action ended
    - Action: Immutable (kind, fencer, outcome) record

Example:
    >>> action = Action(kind=ActionKind.ATTACK, fencer=Fencer.LEFT)
    >>> str(action.with_outcome(Outcome.ARRIVES))
    'attack left arrives'
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, model_validator


class Fencer(str, Enum):
    """Side of the bout.

    NONE is used for actions that belong to neither fencer (simultaneous)
    and for the priority before the first attack.
    """

    LEFT = "left"
    RIGHT = "right"
    NONE = "none"

    @property
    def opposite(self) -> "Fencer":
        """The other side.

        Raises:
            ValueError: If called on NONE
        """
        if self is Fencer.LEFT:
            return Fencer.RIGHT
        if self is Fencer.RIGHT:
            return Fencer.LEFT
        raise ValueError("Fencer.NONE has no opposite side")


class ActionKind(str, Enum):
    """Kinds of action that can appear in a phrase.

    Categories:
        Aggressive: ATTACK, RIPOSTE, COUNTERATTACK, REMISE
        Phrase openers: POINT_IN_LINE, SIMULTANEOUS
        Defensive: NO_RIPOSTE (parry held without a riposte)
    """

    ATTACK = "attack"
    RIPOSTE = "riposte"
    COUNTERATTACK = "counterattack"
    REMISE = "remise"
    POINT_IN_LINE = "point-in-line"
    SIMULTANEOUS = "simultaneous"
    NO_RIPOSTE = "no-riposte"

    @property
    def text(self) -> str:
        """Wording used in a referee call."""
        if self is ActionKind.NO_RIPOSTE:
            return "no riposte"
        return self.value


class Outcome(str, Enum):
    """How an action ended.

    NONE doubles as "not settled yet" for aggressive actions whose result
    has not been chosen.
    """

    ARRIVES = "arrives"
    OFF_TARGET = "is-off-target"
    NO = "is-no"
    PARRIED = "is-parried"
    COUNTERPARRIED = "is-counterparried"
    NONE = "none"

    @property
    def text(self) -> str:
        """Wording used in a referee call."""
        if self is Outcome.NONE:
            return ""
        return self.value.replace("-", " ")


# Outcomes that end a phrase on their own
TERMINAL_OUTCOMES = frozenset({Outcome.ARRIVES, Outcome.OFF_TARGET})

# Kinds whose call text is just the kind
_BARE_KINDS = frozenset({ActionKind.SIMULTANEOUS, ActionKind.NO_RIPOSTE})


class Action(BaseModel):
    """A single fencing action.

    Per-kind constraints are checked at construction, so a malformed
    kind/fencer/outcome combination can never exist:

        - SIMULTANEOUS: fencer NONE, outcome NONE
        - POINT_IN_LINE: a real side, outcome ARRIVES
        - NO_RIPOSTE: a real side, outcome NONE
        - everything else: a real side

    Attributes:
        kind: What was done
        fencer: Who did it
        outcome: How it ended (NONE while unsettled)

    Example:
        >>> Action.point_in_line(Fencer.RIGHT)
        Action(kind=<ActionKind.POINT_IN_LINE: 'point-in-line'>, ...)
    """

    kind: ActionKind
    fencer: Fencer
    outcome: Outcome = Outcome.NONE

    model_config = {"frozen": True}

    @model_validator(mode="after")
    def check_kind_constraints(self) -> "Action":
        """Reject kind/fencer/outcome combinations the kind does not allow."""
        if self.kind is ActionKind.SIMULTANEOUS:
            if self.fencer is not Fencer.NONE or self.outcome is not Outcome.NONE:
                raise ValueError("simultaneous has no fencer and no outcome")
            return self

        if self.fencer is Fencer.NONE:
            raise ValueError(f"{self.kind.value} must be performed by a fencer")

        if self.kind is ActionKind.POINT_IN_LINE and self.outcome is not Outcome.ARRIVES:
            raise ValueError("point-in-line always arrives")
        if self.kind is ActionKind.NO_RIPOSTE and self.outcome is not Outcome.NONE:
            raise ValueError("no-riposte has no outcome")
        return self

    @classmethod
    def point_in_line(cls, fencer: Fencer) -> "Action":
        return cls(kind=ActionKind.POINT_IN_LINE, fencer=fencer, outcome=Outcome.ARRIVES)

    @classmethod
    def simultaneous(cls) -> "Action":
        return cls(kind=ActionKind.SIMULTANEOUS, fencer=Fencer.NONE)

    @classmethod
    def no_riposte(cls, fencer: Fencer) -> "Action":
        return cls(kind=ActionKind.NO_RIPOSTE, fencer=fencer)

    @property
    def is_settled(self) -> bool:
        """True once the action carries an outcome (or never needs one)."""
        return self.kind in _BARE_KINDS or self.outcome is not Outcome.NONE

    def with_outcome(self, outcome: Outcome) -> "Action":
        """Return a copy of this action with its outcome settled.

        Goes through the constructor so the kind constraints are checked
        again.
        """
        return Action(kind=self.kind, fencer=self.fencer, outcome=outcome)

    def render(self) -> str:
        """Canonical call text, e.g. 'riposte right is counterparried'."""
        if self.kind in _BARE_KINDS:
            return self.kind.text
        parts = [self.kind.text, self.fencer.value]
        if self.outcome is not Outcome.NONE:
            parts.append(self.outcome.text)
        return " ".join(parts)

    def __str__(self) -> str:
        return self.render()
