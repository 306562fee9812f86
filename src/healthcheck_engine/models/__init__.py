"""Public model re-exports for healthcheck_engine.

Consumers should import from ``healthcheck_engine.models`` rather than
reaching into sub-modules directly.
"""

# --- Profile ---
from healthcheck_engine.models.profile import (
    BiometricSnapshot,
    MedicalBaseline,
    UserProfile,
)

# --- Questions / branching ---
from healthcheck_engine.models.question import (
    AnswerKind,
    AnswerRange,
    BranchRule,
    Condition,
    LeadInVariant,
    QuestionCategory,
    QuestionDefinition,
)

# --- Summary ---
from healthcheck_engine.models.summary import (
    HealthScores,
    RedFlags,
    SessionSummary,
)

# --- Session / response ---
from healthcheck_engine.models.session import (
    AnswerRecord,
    EngineResponse,
    EngineState,
    ProgressUpdate,
    SessionState,
    SessionStatus,
)

__all__ = [
    # Profile
    "BiometricSnapshot",
    "MedicalBaseline",
    "UserProfile",
    # Questions
    "AnswerKind",
    "AnswerRange",
    "BranchRule",
    "Condition",
    "LeadInVariant",
    "QuestionCategory",
    "QuestionDefinition",
    # Summary
    "HealthScores",
    "RedFlags",
    "SessionSummary",
    # Session
    "AnswerRecord",
    "EngineResponse",
    "EngineState",
    "ProgressUpdate",
    "SessionState",
    "SessionStatus",
]
