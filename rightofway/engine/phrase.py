"""
Phrase engine - the right-of-way state machine.

The engine owns one Phrase and the current priority. The presentation
layer asks it what to offer (legal_choices), sends back one choice id at a
time (submit_choice), and reads the call text and completion status.

Stage flow:

    START --attack--> AWAITING_OUTCOME(attack)
          --point-in-line / simultaneous--> DONE

    AWAITING_OUTCOME --arrives / off-target--> DONE
                     --misses (attack)--> AWAITING_DEFENDER_RESPONSE
                     --misses2nd--> AWAITING_CONTINUATION
                     --parried / counterparried--> AWAITING_RIPOSTE_DECISION

    AWAITING_RIPOSTE_DECISION --yes--> AWAITING_OUTCOME(riposte)
                              --no--> AWAITING_CONTINUATION

    AWAITING_DEFENDER_RESPONSE --yes--> AWAITING_OUTCOME(counterattack)
                               --no--> AWAITING_CONTINUATION

    AWAITING_CONTINUATION --remise--> AWAITING_OUTCOME(remise)
                          --no--> AWAITING_CONTINUATION (other side) or INVALID

Every successful defense (a miss, a parry, a held parry, a declined
counterattack) flips priority.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable

from rightofway.engine.errors import InvalidChoiceError, MalformedPhraseError
from rightofway.engine.vocabulary import Vocabulary, get_vocabulary
from rightofway.models.action import Action, ActionKind, Fencer, Outcome
from rightofway.models.phrase import Phrase
from rightofway.models.state import Choice, ChoiceId, EngineStage, PhraseSnapshot

logger = logging.getLogger(__name__)


OPENING_CHOICES = [
    ChoiceId.ATTACK_LEFT,
    ChoiceId.ATTACK_RIGHT,
    ChoiceId.POINT_IN_LINE_LEFT,
    ChoiceId.POINT_IN_LINE_RIGHT,
    ChoiceId.SIMULTANEOUS,
]

# Result choices offered for each kind of aggressive action
OUTCOME_CHOICES: dict[ActionKind, list[ChoiceId]] = {
    ActionKind.ATTACK: [
        ChoiceId.ARRIVES,
        ChoiceId.OFF_TARGET,
        ChoiceId.MISSES,
        ChoiceId.PARRIED,
    ],
    ActionKind.RIPOSTE: [
        ChoiceId.ARRIVES,
        ChoiceId.OFF_TARGET,
        ChoiceId.MISSES_2ND,
        ChoiceId.COUNTERPARRIED,
    ],
    ActionKind.COUNTERATTACK: [
        ChoiceId.ARRIVES,
        ChoiceId.OFF_TARGET,
        ChoiceId.MISSES_2ND,
        ChoiceId.PARRIED,
    ],
    ActionKind.REMISE: [
        ChoiceId.ARRIVES,
        ChoiceId.OFF_TARGET,
        ChoiceId.MISSES_2ND,
        ChoiceId.PARRIED,
    ],
}

STAGE_CHOICES: dict[EngineStage, list[ChoiceId]] = {
    EngineStage.START: OPENING_CHOICES,
    EngineStage.AWAITING_RIPOSTE_DECISION: [ChoiceId.RIPOSTE_YES, ChoiceId.RIPOSTE_NO],
    EngineStage.AWAITING_DEFENDER_RESPONSE: [
        ChoiceId.COUNTERATTACK_YES,
        ChoiceId.COUNTERATTACK_NO,
    ],
    EngineStage.AWAITING_CONTINUATION: [ChoiceId.REMISE, ChoiceId.NO_CONTINUATION],
    EngineStage.DONE: [],
    EngineStage.INVALID: [],
}

_OPENING_SIDES = {
    ChoiceId.ATTACK_LEFT: Fencer.LEFT,
    ChoiceId.ATTACK_RIGHT: Fencer.RIGHT,
    ChoiceId.POINT_IN_LINE_LEFT: Fencer.LEFT,
    ChoiceId.POINT_IN_LINE_RIGHT: Fencer.RIGHT,
}

# Outcome recorded on the pending action for each result choice
_SETTLED_OUTCOMES = {
    ChoiceId.ARRIVES: Outcome.ARRIVES,
    ChoiceId.OFF_TARGET: Outcome.OFF_TARGET,
    ChoiceId.MISSES: Outcome.NO,
    ChoiceId.MISSES_2ND: Outcome.NO,
    ChoiceId.PARRIED: Outcome.PARRIED,
    ChoiceId.COUNTERPARRIED: Outcome.COUNTERPARRIED,
}


class PhraseEngine:
    """Right-of-way state machine for a single phrase.

    Attributes:
        vocabulary: Prompt and label text

    Example:
        >>> engine = PhraseEngine.replay(["attack-left", "arrives"])
        >>> engine.rendered_call()
        'Attack left arrives. Touch left.'
    """

    def __init__(self, vocabulary: Vocabulary | None = None):
        """Initialize an engine at the START stage.

        Args:
            vocabulary: Prompt/label text; defaults to the global vocabulary
        """
        self.vocabulary = vocabulary or get_vocabulary()

        self._handlers: dict[EngineStage, Callable[[ChoiceId], None]] = {
            EngineStage.START: self._on_opening,
            EngineStage.AWAITING_OUTCOME: self._on_outcome,
            EngineStage.AWAITING_RIPOSTE_DECISION: self._on_riposte_decision,
            EngineStage.AWAITING_DEFENDER_RESPONSE: self._on_defender_response,
            EngineStage.AWAITING_CONTINUATION: self._on_continuation,
        }
        self.reset()

    @classmethod
    def replay(
        cls, choices: Iterable[str | ChoiceId], vocabulary: Vocabulary | None = None
    ) -> "PhraseEngine":
        """Build a fresh engine and submit each choice in order.

        Raises:
            InvalidChoiceError: If a choice is not legal when submitted
            MalformedPhraseError: If the choices describe an invalid phrase
        """
        engine = cls(vocabulary)
        for choice in choices:
            engine.submit_choice(choice)
        return engine

    # =========================================================================
    # State
    # =========================================================================

    def reset(self) -> None:
        """Discard the current phrase and go back to START."""
        self._phrase = Phrase()
        self._priority = Fencer.NONE
        self._stage = EngineStage.START
        self._pending_kind: ActionKind | None = None
        self._error: str | None = None

    @property
    def phrase(self) -> Phrase:
        return self._phrase

    @property
    def priority(self) -> Fencer:
        """Fencer currently holding right-of-way."""
        return self._priority

    @property
    def stage(self) -> EngineStage:
        return self._stage

    @property
    def pending_kind(self) -> ActionKind | None:
        """Kind of action awaiting its result, while in AWAITING_OUTCOME."""
        return self._pending_kind

    @property
    def error(self) -> str | None:
        """Displayable message once the phrase has turned out malformed."""
        return self._error

    def is_done(self) -> bool:
        return self._stage is EngineStage.DONE

    def rendered_call(self) -> str:
        return self._phrase.render()

    # =========================================================================
    # Boundary contract
    # =========================================================================

    def legal_choice_ids(self) -> list[ChoiceId]:
        """Choice ids accepted in the current stage, in display order."""
        if self._stage is EngineStage.AWAITING_OUTCOME:
            return list(OUTCOME_CHOICES[self._pending_kind])
        return list(STAGE_CHOICES[self._stage])

    def legal_choices(self) -> list[Choice]:
        """Choices to offer in the current stage, with their labels."""
        kind = self._pending_kind.text if self._pending_kind else ""
        return [
            Choice(id=choice, label=self.vocabulary.label(choice, kind=kind))
            for choice in self.legal_choice_ids()
        ]

    def current_prompt(self) -> str:
        """Question to show for the current stage."""
        if self._stage is EngineStage.INVALID:
            return self._error or self.vocabulary.malformed_phrase
        if self._stage is EngineStage.AWAITING_OUTCOME:
            return self.vocabulary.prompt(self._stage, kind=self._pending_kind.text)
        if self._stage is EngineStage.DONE:
            return self.vocabulary.prompt(self._stage, call=self.rendered_call())
        return self.vocabulary.prompt(self._stage, fencer=self._priority.value)

    def snapshot(self) -> PhraseSnapshot:
        """Everything the presentation layer needs for the current step."""
        return PhraseSnapshot(
            stage=self._stage,
            prompt=self.current_prompt(),
            choices=self.legal_choices(),
            call=self.rendered_call(),
            priority=self._priority,
            done=self.is_done(),
            error=self._error,
        )

    def submit_choice(self, choice: str | ChoiceId) -> PhraseSnapshot:
        """Apply one user choice.

        Args:
            choice: A choice id (string or ChoiceId) from legal_choices()

        Returns:
            Snapshot after the transition

        Raises:
            InvalidChoiceError: If the id is not legal right now; nothing
                is changed
            MalformedPhraseError: If declining to continue leaves a phrase
                that cannot be valid; the engine moves to INVALID
        """
        legal = self.legal_choice_ids()
        choice_id = self._coerce(choice)

        if choice_id is None or choice_id not in legal:
            raw = choice.value if isinstance(choice, ChoiceId) else str(choice)
            logger.warning(f"Rejected choice '{raw}' in stage {self._stage.value}")
            raise InvalidChoiceError(raw, self._stage, [c.value for c in legal])

        previous = self._stage
        self._handlers[self._stage](choice_id)
        logger.debug(
            f"{previous.value} --{choice_id.value}--> {self._stage.value} "
            f"(priority: {self._priority.value})"
        )
        return self.snapshot()

    @staticmethod
    def _coerce(choice: str | ChoiceId) -> ChoiceId | None:
        try:
            return ChoiceId(choice)
        except ValueError:
            return None

    # =========================================================================
    # Transitions
    # =========================================================================

    def _on_opening(self, choice: ChoiceId) -> None:
        if choice is ChoiceId.SIMULTANEOUS:
            self._phrase.add_action(Action.simultaneous())
            self._finish(Fencer.NONE)
            return

        side = _OPENING_SIDES[choice]
        self._priority = side
        if choice in (ChoiceId.ATTACK_LEFT, ChoiceId.ATTACK_RIGHT):
            self._begin(ActionKind.ATTACK)
        else:
            self._phrase.add_action(Action.point_in_line(side))
            self._finish(side)

    def _on_outcome(self, choice: ChoiceId) -> None:
        self._phrase.settle_last(_SETTLED_OUTCOMES[choice])
        self._pending_kind = None

        if choice is ChoiceId.ARRIVES:
            self._finish(self._priority)
        elif choice is ChoiceId.OFF_TARGET:
            self._finish(Fencer.NONE)
        elif choice is ChoiceId.MISSES:
            self._switch_priority()
            self._stage = EngineStage.AWAITING_DEFENDER_RESPONSE
        elif choice is ChoiceId.MISSES_2ND:
            self._switch_priority()
            self._stage = EngineStage.AWAITING_CONTINUATION
        else:
            # parried / counterparried
            self._switch_priority()
            self._stage = EngineStage.AWAITING_RIPOSTE_DECISION

    def _on_riposte_decision(self, choice: ChoiceId) -> None:
        if choice is ChoiceId.RIPOSTE_YES:
            self._begin(ActionKind.RIPOSTE)
            return
        self._phrase.add_action(Action.no_riposte(self._priority))
        self._switch_priority()
        self._stage = EngineStage.AWAITING_CONTINUATION

    def _on_defender_response(self, choice: ChoiceId) -> None:
        if choice is ChoiceId.COUNTERATTACK_YES:
            self._begin(ActionKind.COUNTERATTACK)
            return
        self._switch_priority()
        self._stage = EngineStage.AWAITING_CONTINUATION

    def _on_continuation(self, choice: ChoiceId) -> None:
        if choice is ChoiceId.REMISE:
            self._begin(ActionKind.REMISE)
            return

        # Declining to continue is only a valid ending when the last action
        # belongs to the other fencer and was not a held parry.
        last = self._phrase.last_action
        if (
            last is not None
            and last.kind is not ActionKind.NO_RIPOSTE
            and last.fencer is not self._priority
        ):
            self._switch_priority()
            return

        self._stage = EngineStage.INVALID
        self._error = self.vocabulary.malformed_phrase
        logger.warning(f"Malformed phrase: {self._phrase.render()!r}")
        raise MalformedPhraseError(self._error)

    # =========================================================================
    # Helpers
    # =========================================================================

    def _begin(self, kind: ActionKind) -> None:
        """Record an aggressive action by the priority fencer and ask for its result."""
        self._phrase.add_action(Action(kind=kind, fencer=self._priority))
        self._pending_kind = kind
        self._stage = EngineStage.AWAITING_OUTCOME

    def _finish(self, result: Fencer) -> None:
        self._phrase.set_result(result)
        self._stage = EngineStage.DONE
        logger.info(f"Referee calls: {self._phrase.render()}")

    def _switch_priority(self) -> None:
        self._priority = self._priority.opposite
