"""Phrase engine components.

- PhraseEngine: Right-of-way state machine (phrase.py)
- Vocabulary: Prompt and label text loaded from YAML (vocabulary.py)
- Errors: InvalidChoiceError, MalformedPhraseError (errors.py)
"""

from rightofway.engine.errors import InvalidChoiceError, MalformedPhraseError, PhraseError
from rightofway.engine.phrase import PhraseEngine
from rightofway.engine.vocabulary import Vocabulary, get_vocabulary, load_vocabulary

__all__ = [
    "PhraseEngine",
    "PhraseError",
    "InvalidChoiceError",
    "MalformedPhraseError",
    "Vocabulary",
    "get_vocabulary",
    "load_vocabulary",
]
