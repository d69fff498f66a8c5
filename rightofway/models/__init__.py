"""Pydantic models for the right-of-way referee"""

from rightofway.models.action import Action, ActionKind, Fencer, Outcome
from rightofway.models.phrase import Phrase
from rightofway.models.state import Choice, ChoiceId, EngineStage, PhraseSnapshot

__all__ = [
    # Action models
    "Action",
    "ActionKind",
    "Fencer",
    "Outcome",
    # Phrase aggregate
    "Phrase",
    # Engine state models
    "Choice",
    "ChoiceId",
    "EngineStage",
    "PhraseSnapshot",
]
