from datetime import datetime, timedelta, timezone

import pytest

from healthcheck_engine.catalog import QuestionCatalog
from healthcheck_engine.config import EngineSettings
from healthcheck_engine.dialogue import DialogueRenderer
from healthcheck_engine.engine import HealthCheckEngine
from healthcheck_engine.models.profile import (
    BiometricSnapshot,
    MedicalBaseline,
    UserProfile,
)
from healthcheck_engine.models.session import AnswerRecord

T0 = datetime(2026, 3, 1, 9, 0, tzinfo=timezone.utc)


class FakeClock:
    """Manually advanced clock so timestamps and durations are predictable."""

    def __init__(self, start: datetime = T0) -> None:
        self.now = start

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> None:
        self.now += timedelta(**kwargs)


@pytest.fixture(scope="session")
def catalog():
    store = QuestionCatalog()
    store.load()
    return store


@pytest.fixture(scope="session")
def renderer():
    return DialogueRenderer()


@pytest.fixture
def profile():
    """Demo user: short sleep (5.5 h) and very few steps (1,200)."""
    return UserProfile(
        display_name="Amit",
        biometrics=BiometricSnapshot(
            sleep_hours_last_night=5.5,
            resting_heart_rate=72,
            daily_steps=1200,
        ),
        baseline=MedicalBaseline(baseline_stress_level=3),
    )


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def make_engine(catalog, renderer, profile, clock):
    """Factory for engines sharing the loaded catalog and a fake clock."""

    def _make(user_profile=None, **kwargs):
        kwargs.setdefault("settings", EngineSettings())
        kwargs.setdefault("renderer", renderer)
        kwargs.setdefault("clock", clock)
        return HealthCheckEngine(user_profile or profile, catalog, **kwargs)

    return _make


@pytest.fixture
def engine(make_engine):
    return make_engine()


@pytest.fixture
def make_answers():
    """Build an answers mapping from {qid: value}."""

    def _make(values: dict) -> dict[str, AnswerRecord]:
        return {
            qid: AnswerRecord(qid=qid, value=value, recorded_at=T0)
            for qid, value in values.items()
        }

    return _make
