"""Assessment output models — scores, red flags, and the session summary.

All three are derived values: they are rebuilt from the collected answers
whenever a summary is requested and are immutable once built.
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict


class HealthScores(BaseModel):
    """Category scores on a 1-10 display scale plus the weighted composite."""

    model_config = ConfigDict(frozen=True)

    stress_score: int
    sleep_score: int
    activity_score: int
    loneliness_score: int
    lifestyle_score: int
    overall_score: int


class RedFlags(BaseModel):
    """Health concerns by tier.  Order within a tier is evaluation order."""

    model_config = ConfigDict(frozen=True)

    critical: tuple[str, ...] = ()
    warnings: tuple[str, ...] = ()
    notices: tuple[str, ...] = ()

    @property
    def has_critical(self) -> bool:
        return bool(self.critical)


class SessionSummary(BaseModel):
    """Final assessment produced once when the session finishes."""

    model_config = ConfigDict(frozen=True)

    scores: HealthScores
    red_flags: RedFlags
    overall_assessment: str
    narrative_text: str
    recommendations: tuple[str, ...]
    completed_at: datetime
    duration_minutes: int
