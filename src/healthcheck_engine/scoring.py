"""Health scoring — derives category scores from answers and biometrics.

Pure functions of the collected answers and the user profile.  Every input
has a fallback, so a partial or skipped session still yields a complete
score set.

Scores are "higher is better" on a 1-10 display scale.  Category scores are
rounded for display, but the overall composite is weighted from the
unrounded category values and rounded once.
"""

from __future__ import annotations

import math
from typing import Mapping

from healthcheck_engine.constants import (
    ALCOHOL_FREQUENCY_QID,
    ALCOHOL_PENALTIES,
    CIGARETTES_PER_DAY_QID,
    DEFAULT_ALCOHOL_FREQUENCY,
    DEFAULT_CIGARETTES_PER_DAY,
    DEFAULT_ENERGY_LEVEL,
    DEFAULT_EXERCISE_DAYS,
    DEFAULT_LONELINESS_LEVEL,
    DEFAULT_SLEEP_QUALITY,
    DEFAULT_SMOKING_STATUS,
    DEFAULT_SOCIAL_SUPPORT,
    DEFAULT_STRESS_LEVEL,
    ENERGY_LEVEL_QID,
    EXERCISE_DAYS_QID,
    LONELINESS_LEVEL_QID,
    SCORE_MAX,
    SCORE_MIN,
    SCORE_WEIGHTS,
    SLEEP_HOURS_QID,
    SLEEP_QUALITY_QID,
    SMOKING_PENALTIES,
    SMOKING_STATUS_QID,
    SOCIAL_SUPPORT_BONUS,
    SOCIAL_SUPPORT_QID,
    STEPS_BAND_FLOOR,
    STEPS_BANDS,
    STRESS_LEVEL_QID,
)
from healthcheck_engine.models.profile import UserProfile
from healthcheck_engine.models.session import AnswerRecord
from healthcheck_engine.models.summary import HealthScores


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves away from zero for positives.

    Python's ``round`` uses banker's rounding (``round(4.5) == 4``); scores
    and progress percentages need 4.5 -> 5.
    """
    return int(math.floor(value + 0.5))


def _clamp(value: float) -> float:
    return max(SCORE_MIN, min(SCORE_MAX, value))


# ---------------------------------------------------------------------------
# Answer accessors
# ---------------------------------------------------------------------------

def answer_as_number(
    answers: Mapping[str, AnswerRecord], qid: str, default: float
) -> float:
    """Numeric answer for ``qid``; ``default`` if missing or not a number."""
    record = answers.get(qid)
    if record is None or isinstance(record.value, str):
        return default
    return record.value


def answer_as_text(
    answers: Mapping[str, AnswerRecord], qid: str, default: str
) -> str:
    """Answer for ``qid`` as a string; ``default`` if missing."""
    record = answers.get(qid)
    if record is None:
        return default
    return str(record.value)


def affirms_yes(text: str) -> bool:
    return "yes" in text.lower()


# ---------------------------------------------------------------------------
# Band scores
# ---------------------------------------------------------------------------

def score_sleep_hours(hours: float) -> int:
    """Map nightly sleep hours to a band score (7-9 h is ideal)."""
    if 7 <= hours <= 9:
        return 10
    if 6 <= hours < 7:
        return 7
    if 5 <= hours < 6:
        return 5
    if hours < 5:
        return 2
    if 9 < hours <= 10:
        return 7
    return 4


def score_steps(daily_steps: int) -> int:
    """Map a daily step count to a band score."""
    for threshold, score in STEPS_BANDS:
        if daily_steps >= threshold:
            return score
    return STEPS_BAND_FLOOR


def lifestyle_score(answers: Mapping[str, AnswerRecord]) -> float:
    """10 minus alcohol and smoking penalties, floored at 1."""
    score = SCORE_MAX

    alcohol = answer_as_text(answers, ALCOHOL_FREQUENCY_QID, DEFAULT_ALCOHOL_FREQUENCY).lower()
    for keywords, penalty in ALCOHOL_PENALTIES:
        if any(k in alcohol for k in keywords):
            score -= penalty
            break

    smoking = answer_as_text(answers, SMOKING_STATUS_QID, DEFAULT_SMOKING_STATUS)
    if affirms_yes(smoking):
        per_day = answer_as_number(answers, CIGARETTES_PER_DAY_QID, DEFAULT_CIGARETTES_PER_DAY)
        for threshold, penalty in SMOKING_PENALTIES:
            if per_day > threshold:
                score -= penalty
                break

    return max(SCORE_MIN, score)


# ---------------------------------------------------------------------------
# Composite
# ---------------------------------------------------------------------------

def calculate_scores(
    answers: Mapping[str, AnswerRecord], profile: UserProfile
) -> HealthScores:
    """Compute the five category scores and the overall composite."""
    biometrics = profile.biometrics

    stress_level = answer_as_number(answers, STRESS_LEVEL_QID, DEFAULT_STRESS_LEVEL)
    sleep_quality = answer_as_number(answers, SLEEP_QUALITY_QID, DEFAULT_SLEEP_QUALITY)
    sleep_hours = answer_as_number(answers, SLEEP_HOURS_QID, biometrics.sleep_hours_last_night)
    exercise_days = answer_as_number(answers, EXERCISE_DAYS_QID, DEFAULT_EXERCISE_DAYS)
    energy_level = answer_as_number(answers, ENERGY_LEVEL_QID, DEFAULT_ENERGY_LEVEL)
    loneliness_level = answer_as_number(answers, LONELINESS_LEVEL_QID, DEFAULT_LONELINESS_LEVEL)
    social_support = answer_as_text(answers, SOCIAL_SUPPORT_QID, DEFAULT_SOCIAL_SUPPORT)

    # Invert stress: low stress = high score
    stress = 11 - stress_level

    sleep = _clamp(sleep_quality * 0.6 + score_sleep_hours(sleep_hours) * 0.4)

    # Exercise days (0-7) count one point per day, unscaled
    activity = _clamp(
        exercise_days + energy_level * 0.3 + score_steps(biometrics.daily_steps) * 0.3
    )

    loneliness = 11 - loneliness_level
    if affirms_yes(social_support):
        loneliness += SOCIAL_SUPPORT_BONUS
    loneliness = min(SCORE_MAX, loneliness)

    lifestyle = lifestyle_score(answers)

    overall = (
        stress * SCORE_WEIGHTS["stress"]
        + sleep * SCORE_WEIGHTS["sleep"]
        + activity * SCORE_WEIGHTS["activity"]
        + loneliness * SCORE_WEIGHTS["loneliness"]
        + lifestyle * SCORE_WEIGHTS["lifestyle"]
    )

    return HealthScores(
        stress_score=round_half_up(stress),
        sleep_score=round_half_up(sleep),
        activity_score=round_half_up(activity),
        loneliness_score=round_half_up(loneliness),
        lifestyle_score=round_half_up(lifestyle),
        overall_score=round_half_up(overall),
    )
