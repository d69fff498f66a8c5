"""
Phrase API endpoints - Drive a phrase engine one choice at a time
"""

import logging
import uuid

from fastapi import APIRouter, HTTPException
from pydantic import BaseModel

from rightofway.engine.errors import InvalidChoiceError, MalformedPhraseError
from rightofway.engine.phrase import PhraseEngine
from rightofway.models.state import PhraseSnapshot

logger = logging.getLogger(__name__)

router = APIRouter()

# In-memory phrase sessions (one engine per session, nothing is persisted)
phrase_sessions: dict[str, PhraseEngine] = {}


class NewPhraseResponse(BaseModel):
    """Response after starting a new phrase"""

    session_id: str
    snapshot: PhraseSnapshot


class ChoiceRequest(BaseModel):
    """A single user choice for a phrase session"""

    session_id: str
    choice: str


def _get_engine(session_id: str) -> PhraseEngine:
    if session_id not in phrase_sessions:
        raise HTTPException(status_code=404, detail="Phrase session not found")
    return phrase_sessions[session_id]


@router.post("/new", response_model=NewPhraseResponse)
async def new_phrase():
    """Start a new phrase session"""
    session_id = str(uuid.uuid4())
    engine = PhraseEngine()
    phrase_sessions[session_id] = engine
    logger.info(f"Started phrase session {session_id}")

    return NewPhraseResponse(session_id=session_id, snapshot=engine.snapshot())


@router.post("/choice", response_model=PhraseSnapshot)
async def submit_choice(request: ChoiceRequest):
    """Apply a choice and return what to display next.

    A malformed phrase is not a request error: the snapshot comes back with
    `error` set and no choices, and the client is expected to reset.
    """
    engine = _get_engine(request.session_id)

    try:
        return engine.submit_choice(request.choice)
    except InvalidChoiceError as e:
        raise HTTPException(
            status_code=400,
            detail={"message": str(e), "choice": e.choice, "legal": e.legal},
        )
    except MalformedPhraseError:
        return engine.snapshot()


@router.get("/{session_id}", response_model=PhraseSnapshot)
async def get_phrase(session_id: str):
    """Get the current snapshot of a phrase session"""
    return _get_engine(session_id).snapshot()


@router.post("/{session_id}/reset", response_model=PhraseSnapshot)
async def reset_phrase(session_id: str):
    """Abandon the current phrase and start over"""
    engine = _get_engine(session_id)
    engine.reset()
    return engine.snapshot()


@router.delete("/{session_id}")
async def delete_phrase(session_id: str):
    """Drop a phrase session"""
    _get_engine(session_id)
    del phrase_sessions[session_id]
    logger.info(f"Closed phrase session {session_id}")
    return {"deleted": session_id}
