"""healthcheck_engine — Scripted, LLM-free health check-in SDK.

Public API:
    HealthCheckEngine — state machine driving one check-in session
    QuestionCatalog   — loads the YAML question flow into typed models
    BranchingRules    — answer-driven lead-ins between questions
    DialogueRenderer  — Jinja2 renderer for all user-facing text
    parse_answer      — free text → typed answer for a question

Assessment pipeline:
    calculate_scores         — five category scores + overall composite
    identify_red_flags       — critical / warning / notice tiers
    generate_recommendations — threshold-gated action list
    build_summary            — assembles the immutable SessionSummary

Configuration:
    EngineSettings / load_settings — HEALTHCHECK_* environment variables
"""

from healthcheck_engine.branching import BranchingRules, BranchOutcome
from healthcheck_engine.catalog import QuestionCatalog
from healthcheck_engine.config import EngineSettings, load_settings
from healthcheck_engine.dialogue import DialogueRenderer
from healthcheck_engine.engine import HealthCheckEngine
from healthcheck_engine.models import (
    AnswerKind,
    AnswerRange,
    AnswerRecord,
    BiometricSnapshot,
    BranchRule,
    Condition,
    EngineResponse,
    EngineState,
    HealthScores,
    LeadInVariant,
    MedicalBaseline,
    ProgressUpdate,
    QuestionCategory,
    QuestionDefinition,
    RedFlags,
    SessionState,
    SessionStatus,
    SessionSummary,
    UserProfile,
)
from healthcheck_engine.parser import AnswerParser, parse_answer
from healthcheck_engine.red_flags import identify_red_flags
from healthcheck_engine.scoring import calculate_scores
from healthcheck_engine.summary import build_summary, generate_recommendations

__all__ = [
    # Engine & catalog
    "HealthCheckEngine",
    "QuestionCatalog",
    "BranchingRules",
    "BranchOutcome",
    "DialogueRenderer",
    "AnswerParser",
    "parse_answer",
    # Assessment pipeline
    "calculate_scores",
    "identify_red_flags",
    "generate_recommendations",
    "build_summary",
    # Configuration
    "EngineSettings",
    "load_settings",
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
    # Session / step
    "AnswerRecord",
    "EngineResponse",
    "EngineState",
    "ProgressUpdate",
    "SessionState",
    "SessionStatus",
    # Summary
    "HealthScores",
    "RedFlags",
    "SessionSummary",
]
