"""User profile models — the read-only context a session is started with.

The host application supplies one ``UserProfile`` per session.  The engine
never mutates it: the biometric snapshot is cited verbatim in dialogue text
and used as a scoring fallback, and the baseline is carried for context.
"""

from datetime import date
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class BiometricSnapshot(BaseModel):
    """Latest wearable readings, captured once at session start."""

    model_config = ConfigDict(frozen=True)

    # Hours of sleep from the previous night
    sleep_hours_last_night: float = Field(ge=0)
    # Resting heart rate in beats per minute
    resting_heart_rate: int = Field(ge=0)
    # Total steps taken today
    daily_steps: int = Field(ge=0)


class MedicalBaseline(BaseModel):
    """Historical context for the user (baseline stress, conditions, medication)."""

    model_config = ConfigDict(frozen=True)

    baseline_stress_level: int = Field(ge=1, le=10)
    conditions: frozenset[str] = frozenset()
    medications: frozenset[str] = frozenset()
    last_checkup: Optional[date] = None


class UserProfile(BaseModel):
    """Complete user profile: display name + biometrics + medical baseline."""

    model_config = ConfigDict(frozen=True)

    display_name: str
    biometrics: BiometricSnapshot
    baseline: MedicalBaseline
