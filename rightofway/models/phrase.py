"""
Phrase aggregate.

A Phrase is the ordered list of actions in one right-of-way exchange plus
the final result. It owns the canonical referee call text and decides,
from its actions alone, whether the exchange is complete.

Example:
    >>> phrase = Phrase()
    >>> phrase.add_action(Action(kind=ActionKind.ATTACK, fencer=Fencer.LEFT))
    >>> phrase.settle_last(Outcome.ARRIVES)
    >>> phrase.set_result(Fencer.LEFT)
    >>> phrase.render()
    'Attack left arrives. Touch left.'
"""

from __future__ import annotations

from pydantic import BaseModel, Field

from rightofway.models.action import (
    TERMINAL_OUTCOMES,
    Action,
    ActionKind,
    Fencer,
    Outcome,
)

# First actions that end the phrase on their own
_SELF_CONTAINED_KINDS = frozenset({ActionKind.SIMULTANEOUS, ActionKind.POINT_IN_LINE})

_RESULT_CLAUSES = {
    Fencer.LEFT: ". Touch left.",
    Fencer.RIGHT: ". Touch right.",
}
_NO_TOUCH_CLAUSE = ". No touch."


class Phrase(BaseModel):
    """Ordered actions of one phrase and its final result.

    Attributes:
        actions: Actions in the order they happened (append-only)
        result: Side awarded the touch, Fencer.NONE for no touch,
            or None while the phrase is still open

    Two phrases are equal when their action sequences are equal; the
    result does not take part.
    """

    actions: list[Action] = Field(default_factory=list)
    result: Fencer | None = None

    @property
    def last_action(self) -> Action | None:
        """The most recent action, or None for an empty phrase."""
        if not self.actions:
            return None
        return self.actions[-1]

    def add_action(self, action: Action) -> None:
        """Append an action to the phrase."""
        self.actions.append(action)

    def settle_last(self, outcome: Outcome) -> Action:
        """Settle the outcome of the most recent action.

        Actions are immutable, so the last action is replaced by a copy.

        Args:
            outcome: The outcome to record

        Returns:
            The settled action

        Raises:
            ValueError: If the phrase has no actions or the last action is
                already settled
        """
        if not self.actions:
            raise ValueError("Cannot settle an outcome on an empty phrase")
        if self.actions[-1].is_settled:
            raise ValueError(f"'{self.actions[-1].render()}' is already settled")
        settled = self.actions[-1].with_outcome(outcome)
        self.actions[-1] = settled
        return settled

    def set_result(self, result: Fencer) -> None:
        """Record who gets the touch (Fencer.NONE for no touch)."""
        self.result = result

    def is_complete(self) -> bool:
        """Whether the phrase represents a finished exchange.

        A phrase is complete when it opened with a simultaneous call or a
        point-in-line, or when its last action arrived or went off target.
        """
        if not self.actions:
            return False
        if self.actions[0].kind in _SELF_CONTAINED_KINDS:
            return True
        return self.actions[-1].outcome in TERMINAL_OUTCOMES

    def render(self) -> str:
        """Referee call text, e.g. 'Attack left is no, counterattack right
        arrives. Touch right.'

        Returns an empty string for an empty phrase. The result clause is
        only appended once the phrase is complete.
        """
        if not self.actions:
            return ""

        text = ", ".join(action.render() for action in self.actions)
        text = text[0].upper() + text[1:]

        if self.is_complete():
            text += _RESULT_CLAUSES.get(self.result, _NO_TOUCH_CLAUSE)
        return text

    def __str__(self) -> str:
        return self.render()

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Phrase):
            return NotImplemented
        return self.actions == other.actions
