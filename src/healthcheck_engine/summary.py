"""Recommendation and summary generation.

Turns scores and red flags into the final :class:`SessionSummary`:

    answers + profile
        -> calculate_scores      (scoring.py)
        -> identify_red_flags    (red_flags.py)
        -> generate_recommendations
        -> narrative             (dialogue/template/narrative.md.jinja2)
"""

from __future__ import annotations

from datetime import datetime
from typing import Mapping

from healthcheck_engine.dialogue import DialogueRenderer
from healthcheck_engine.models.profile import UserProfile
from healthcheck_engine.models.session import AnswerRecord
from healthcheck_engine.models.summary import HealthScores, RedFlags, SessionSummary
from healthcheck_engine.red_flags import identify_red_flags
from healthcheck_engine.scoring import calculate_scores, round_half_up

# (score field, inclusive threshold, recommendation), in output order
_SCORE_RECOMMENDATIONS: tuple[tuple[str, int, str], ...] = (
    (
        "sleep_score", 5,
        "Prioritize sleep: Aim for 7-9 hours. Create a bedtime routine and "
        "avoid screens 1 hour before bed.",
    ),
    (
        "activity_score", 5,
        "Increase daily movement: Start with a 15-minute walk, gradually "
        "building to 10,000 steps/day.",
    ),
    (
        "stress_score", 5,
        "Stress management: Try deep breathing, meditation, or talk to a "
        "mental health professional.",
    ),
    (
        "loneliness_score", 5,
        "Build social connections: Reach out to a friend, join a group "
        "activity, or seek community support.",
    ),
    (
        "lifestyle_score", 6,
        "Consider lifestyle changes: Reduce alcohol intake and explore "
        "smoking cessation programs if applicable.",
    ),
)

CONSULT_PROVIDER_RECOMMENDATION = (
    "Consult a healthcare provider: Your assessment suggests professional "
    "medical advice would be beneficial."
)


def generate_recommendations(scores: HealthScores, red_flags: RedFlags) -> tuple[str, ...]:
    """Ordered, threshold-gated recommendations."""
    recommendations = [
        text
        for field_name, threshold, text in _SCORE_RECOMMENDATIONS
        if getattr(scores, field_name) <= threshold
    ]
    if red_flags.has_critical or scores.overall_score <= 5:
        recommendations.append(CONSULT_PROVIDER_RECOMMENDATION)
    return tuple(recommendations)


def overall_assessment(overall_score: int) -> str:
    """One-line label for the overall score."""
    if overall_score >= 8:
        return "Excellent Health"
    if overall_score >= 6:
        return "Good Health"
    if overall_score >= 4:
        return "Fair - Needs Improvement"
    return "Poor - Immediate Action Needed"


def duration_minutes(started_at: datetime | None, completed_at: datetime) -> int:
    """Whole minutes between start and completion; 0 if never started."""
    if started_at is None:
        return 0
    return round_half_up((completed_at - started_at).total_seconds() / 60)


def build_summary(
    answers: Mapping[str, AnswerRecord],
    profile: UserProfile,
    started_at: datetime | None,
    *,
    renderer: DialogueRenderer,
    completed_at: datetime,
) -> SessionSummary:
    """Run the scoring pipeline and assemble an immutable summary."""
    scores = calculate_scores(answers, profile)
    red_flags = identify_red_flags(scores, answers, profile.biometrics)
    assessment = overall_assessment(scores.overall_score)

    return SessionSummary(
        scores=scores,
        red_flags=red_flags,
        overall_assessment=assessment,
        narrative_text=renderer.narrative(
            display_name=profile.display_name,
            scores=scores,
            red_flags=red_flags,
            overall_assessment=assessment,
        ),
        recommendations=generate_recommendations(scores, red_flags),
        completed_at=completed_at,
        duration_minutes=duration_minutes(started_at, completed_at),
    )
