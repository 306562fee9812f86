"""Health check-in constants shared across the SDK.

These values are referenced by the parser, engine, scorer, and red-flag
detector.  Question IDs mirror the conventions encoded in the packaged
``data/questions.yaml`` catalog.

Scoring weights and thresholds are deliberately plain module constants (not
environment overrides): two deployments fed the same answers must produce
the same scores.
"""

# ---------------------------------------------------------------------------
# Keyword sets (case-insensitive substring matching)
# ---------------------------------------------------------------------------

# Consent to begin the assessment.
AFFIRMATIVE_KEYWORDS: tuple[str, ...] = ("yes", "sure", "ready", "ok", "yeah", "yep", "go ahead")

# yes-no answers.  YES is checked before NO, so "yes, no problem" is "yes".
YES_KEYWORDS: tuple[str, ...] = ("yes", "yeah", "yep")
NO_KEYWORDS: tuple[str, ...] = ("no", "nope", "nah")

# First decimal number in free text; a leading minus is kept so that
# out-of-range negatives clamp to the range floor.
NUMBER_PATTERN = r"-?\d+(\.\d+)?"

# ---------------------------------------------------------------------------
# Question IDs the scorer and red-flag detector read
# ---------------------------------------------------------------------------

STRESS_LEVEL_QID = "stress_01"
SLEEP_QUALITY_QID = "sleep_01"
SLEEP_HOURS_QID = "sleep_03"
EXERCISE_DAYS_QID = "activity_01"
ENERGY_LEVEL_QID = "activity_03"
LONELINESS_LEVEL_QID = "loneliness_01"
SOCIAL_SUPPORT_QID = "loneliness_02"
ALCOHOL_FREQUENCY_QID = "alcohol_01"
SMOKING_STATUS_QID = "smoking_01"
CIGARETTES_PER_DAY_QID = "smoking_02"

# ---------------------------------------------------------------------------
# Scoring
# ---------------------------------------------------------------------------

# Fallbacks for unanswered (or non-numeric) questions.
DEFAULT_STRESS_LEVEL = 5
DEFAULT_SLEEP_QUALITY = 5
DEFAULT_EXERCISE_DAYS = 0
DEFAULT_ENERGY_LEVEL = 5
DEFAULT_LONELINESS_LEVEL = 5
DEFAULT_SOCIAL_SUPPORT = "no"
DEFAULT_ALCOHOL_FREQUENCY = "never"
DEFAULT_SMOKING_STATUS = "no"
DEFAULT_CIGARETTES_PER_DAY = 0

# Overall composite weights (sum to 1.0).
SCORE_WEIGHTS: dict[str, float] = {
    "stress": 0.25,
    "sleep": 0.25,
    "activity": 0.20,
    "loneliness": 0.15,
    "lifestyle": 0.15,
}

SCORE_MIN = 1
SCORE_MAX = 10

# Daily steps → band score, checked top-down.
STEPS_BANDS: tuple[tuple[int, int], ...] = (
    (10000, 10),
    (7500, 8),
    (5000, 6),
    (2500, 4),
)
STEPS_BAND_FLOOR = 2

# Alcohol frequency substring → lifestyle penalty, first match wins.
ALCOHOL_PENALTIES: tuple[tuple[tuple[str, ...], int], ...] = (
    (("daily", "every day"), 4),
    (("week",), 2),
    (("month",), 1),
)

# Cigarettes per day (strictly greater than) → lifestyle penalty.
SMOKING_PENALTIES: tuple[tuple[int, int], ...] = (
    (20, 6),
    (10, 4),
    (0, 3),
)

SOCIAL_SUPPORT_BONUS = 2

# ---------------------------------------------------------------------------
# Dialogue
# ---------------------------------------------------------------------------

# Category label used in the completion progress update.
COMPLETE_CATEGORY = "complete"
