"""
Vocabulary loader - prompt and choice-label text from YAML.

The packaged vocabulary lives in data/vocabulary.yaml next to this module.
An alternative file (e.g. a translation) can be configured with the
RIGHTOFWAY_VOCABULARY environment variable.

Text may use the placeholders {kind}, {fencer} and {call}; anything else
is rejected at load time so a bad file fails on startup rather than in the
middle of a phrase.
"""

from __future__ import annotations

import logging
from pathlib import Path

import yaml
from pydantic import BaseModel, model_validator

from rightofway.config import get_vocabulary_path
from rightofway.models.state import ChoiceId, EngineStage

logger = logging.getLogger(__name__)

DEFAULT_VOCABULARY_PATH = Path(__file__).parent / "data" / "vocabulary.yaml"

# Stages that show a prompt from the vocabulary (INVALID shows the error)
PROMPTED_STAGES = [stage for stage in EngineStage if stage is not EngineStage.INVALID]

_SAMPLE_FIELDS = {"kind": "attack", "fencer": "left", "call": "Attack left arrives."}


class Vocabulary(BaseModel):
    """Prompt and label text for every stage and choice.

    Attributes:
        prompts: Question shown for each stage
        labels: Button text for each choice id
        malformed_phrase: Message shown when a phrase cannot be valid
    """

    prompts: dict[EngineStage, str]
    labels: dict[ChoiceId, str]
    malformed_phrase: str

    @model_validator(mode="after")
    def check_complete(self) -> "Vocabulary":
        """Every stage and choice needs text, and only known placeholders."""
        missing_prompts = [s.value for s in PROMPTED_STAGES if s not in self.prompts]
        if missing_prompts:
            raise ValueError(f"Missing prompts for: {', '.join(missing_prompts)}")

        missing_labels = [c.value for c in ChoiceId if c not in self.labels]
        if missing_labels:
            raise ValueError(f"Missing labels for: {', '.join(missing_labels)}")

        for text in [*self.prompts.values(), *self.labels.values()]:
            try:
                text.format(**_SAMPLE_FIELDS)
            except (KeyError, IndexError, ValueError) as e:
                raise ValueError(f"Bad placeholder in {text!r}: {e}") from e
        return self

    def prompt(self, stage: EngineStage, **fields: str) -> str:
        """Formatted prompt for a stage."""
        return self.prompts[stage].format(**{**_SAMPLE_FIELDS, **fields})

    def label(self, choice: ChoiceId, **fields: str) -> str:
        """Formatted label for a choice."""
        return self.labels[choice].format(**{**_SAMPLE_FIELDS, **fields})


def load_vocabulary(path: Path | None = None) -> Vocabulary:
    """
    Load and validate a vocabulary file.

    Args:
        path: YAML file to read. Defaults to the configured file, or the
              packaged one when nothing is configured.

    Returns:
        The validated Vocabulary

    Raises:
        FileNotFoundError: If the file does not exist
        pydantic.ValidationError: If the file is incomplete or malformed
    """
    if path is None:
        path = get_vocabulary_path() or DEFAULT_VOCABULARY_PATH
    path = Path(path)

    if not path.exists():
        raise FileNotFoundError(f"Vocabulary file not found: {path}")

    logger.debug(f"Loading vocabulary: {path}")
    with open(path, encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}

    return Vocabulary.model_validate(data)


# Global instance - loaded on first use
_vocabulary: Vocabulary | None = None


def get_vocabulary() -> Vocabulary:
    """Get the global vocabulary instance."""
    global _vocabulary
    if _vocabulary is None:
        _vocabulary = load_vocabulary()
        logger.info(f"Loaded vocabulary with {len(_vocabulary.labels)} labels")
    return _vocabulary


def reload_vocabulary() -> Vocabulary:
    """Drop the cached vocabulary and load it again."""
    global _vocabulary
    _vocabulary = None
    return get_vocabulary()
