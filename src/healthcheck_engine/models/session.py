"""Session and response models — the contract between the engine and callers.

``SessionState`` is the engine's private, mutable aggregate: exactly one
engine instance owns it and nothing else writes to it.  Everything handed
back to callers (``EngineResponse``, ``EngineState``, ``ProgressUpdate``,
``AnswerRecord``) is immutable.

Lifecycle::

    not_started -> awaiting_consent   (start_session)
    awaiting_consent -> in_progress   (affirmative consent)
    in_progress -> finished           (last question answered)
    any -> not_started                (reset)
"""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict

from healthcheck_engine.models.question import AnswerKind, AnswerRange
from healthcheck_engine.models.summary import SessionSummary


class SessionStatus(str, enum.Enum):
    """Named states of the check-in state machine."""

    NOT_STARTED = "not_started"
    AWAITING_CONSENT = "awaiting_consent"
    IN_PROGRESS = "in_progress"
    FINISHED = "finished"


class AnswerRecord(BaseModel):
    """One parsed answer, created once per answered question."""

    model_config = ConfigDict(frozen=True)

    qid: str
    value: str | float
    recorded_at: datetime


@dataclass
class SessionState:
    """Mutable session aggregate owned by a single engine instance.

    ``position_index`` is -1 before the session starts, 0..N-1 while on a
    question, and N once finished.
    """

    status: SessionStatus = SessionStatus.NOT_STARTED
    position_index: int = -1
    answers: dict[str, AnswerRecord] = field(default_factory=dict)
    started_at: datetime | None = None
    consent_pending: bool = False
    stress_empathy_given: bool = False
    # Built exactly once on the transition to FINISHED
    summary: SessionSummary | None = None


class ProgressUpdate(BaseModel):
    """Progress snapshot for UI chrome (progress bar, answer widget)."""

    model_config = ConfigDict(frozen=True)

    question_index: int
    total_questions: int
    # Category value of the current question, or "complete"
    category: str
    percent_complete: int
    answer_kind: Optional[AnswerKind] = None
    range: Optional[AnswerRange] = None


class EngineResponse(BaseModel):
    """What the engine returns for every processed utterance."""

    model_config = ConfigDict(frozen=True)

    message_text: str
    finished: bool
    status: SessionStatus
    # Hint of the question being asked, also embedded in message_text
    hint: Optional[str] = None
    progress: Optional[ProgressUpdate] = None
    summary: Optional[SessionSummary] = None


class EngineState(BaseModel):
    """Read-only introspection of the session position."""

    model_config = ConfigDict(frozen=True)

    position: int
    total_questions: int
    answered_count: int
    active: bool
    status: SessionStatus
