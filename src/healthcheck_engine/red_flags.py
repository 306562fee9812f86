"""Red-flag detection — classifies scores and answers into three tiers.

    critical — issues needing prompt attention
    warnings — signs that need monitoring
    notices  — general areas for improvement

Flags are threshold-driven and independent: several may fire at once and
none suppresses another.  Within a tier, order follows evaluation order.
"""

from __future__ import annotations

from typing import Mapping, Optional

from healthcheck_engine.constants import (
    CIGARETTES_PER_DAY_QID,
    DEFAULT_CIGARETTES_PER_DAY,
    DEFAULT_SMOKING_STATUS,
    SMOKING_STATUS_QID,
)
from healthcheck_engine.dialogue.renderer import format_number, format_thousands
from healthcheck_engine.models.profile import BiometricSnapshot
from healthcheck_engine.models.session import AnswerRecord
from healthcheck_engine.models.summary import HealthScores, RedFlags
from healthcheck_engine.scoring import affirms_yes, answer_as_number, answer_as_text


def identify_red_flags(
    scores: HealthScores,
    answers: Mapping[str, AnswerRecord],
    biometrics: Optional[BiometricSnapshot] = None,
) -> RedFlags:
    """Derive the three flag tiers.

    Args:
        scores: display scores from :func:`calculate_scores`
        answers: raw answers keyed by qid (smoking detail is read directly)
        biometrics: when given, wearable readings are cited in flag text
    """
    critical: list[str] = []
    warnings: list[str] = []
    notices: list[str] = []

    # --- Critical ---
    if scores.sleep_score <= 3:
        if biometrics is not None:
            critical.append(
                "Severely inadequate sleep detected - only "
                f"{format_number(biometrics.sleep_hours_last_night)} hours last night"
            )
        else:
            critical.append("Severely inadequate sleep detected")

    if scores.stress_score <= 3:
        critical.append("Dangerously high stress levels (7+/10)")

    smoking = answer_as_text(answers, SMOKING_STATUS_QID, DEFAULT_SMOKING_STATUS)
    if affirms_yes(smoking):
        per_day = answer_as_number(answers, CIGARETTES_PER_DAY_QID, DEFAULT_CIGARETTES_PER_DAY)
        if per_day > 10:
            critical.append(f"Heavy smoking detected ({format_number(per_day)} cigarettes/day)")

    # --- Warnings ---
    if 3 < scores.sleep_score <= 5:
        warnings.append("Poor sleep quality affecting overall health")

    if scores.activity_score <= 4:
        if biometrics is not None:
            warnings.append(
                "Very low physical activity - only "
                f"{format_thousands(biometrics.daily_steps)} steps today"
            )
        else:
            warnings.append("Very low physical activity")

    if 3 < scores.stress_score <= 5:
        warnings.append("Elevated stress levels need attention")

    if scores.loneliness_score <= 4:
        warnings.append("Social isolation concerns detected")

    # --- Notices ---
    if 4 < scores.activity_score <= 6:
        notices.append("Physical activity below recommended levels")

    if 5 < scores.sleep_score <= 7:
        notices.append("Sleep quality could be improved")

    if scores.lifestyle_score <= 7:
        notices.append("Lifestyle factors (alcohol/smoking) present health risks")

    return RedFlags(
        critical=tuple(critical),
        warnings=tuple(warnings),
        notices=tuple(notices),
    )
