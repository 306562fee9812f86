"""HealthCheckEngine — the state machine behind one health check-in session.

One engine instance serves exactly one session for one user.  It is
synchronous and holds no locks: the host must not call it concurrently.

State overview:
    not_started       — only start_session() does anything useful
    awaiting_consent  — greeting sent, waiting for the user to agree
    in_progress       — one question at a time, in catalog order
    finished          — summary built once; later calls replay it

Every call to :meth:`process_response` is dispatched on the current
:class:`SessionStatus` through a single handler table.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Callable

from healthcheck_engine.branching import BranchingRules
from healthcheck_engine.catalog import QuestionCatalog
from healthcheck_engine.config import EngineSettings, load_settings
from healthcheck_engine.constants import AFFIRMATIVE_KEYWORDS, COMPLETE_CATEGORY
from healthcheck_engine.dialogue import DialogueRenderer
from healthcheck_engine.models.profile import UserProfile
from healthcheck_engine.models.question import BranchRule
from healthcheck_engine.models.session import (
    AnswerRecord,
    EngineResponse,
    EngineState,
    ProgressUpdate,
    SessionState,
    SessionStatus,
)
from healthcheck_engine.models.summary import SessionSummary
from healthcheck_engine.parser import AnswerParser
from healthcheck_engine.scoring import round_half_up
from healthcheck_engine.summary import build_summary

logger = logging.getLogger(__name__)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class HealthCheckEngine:
    """Drives the scripted check-in dialogue.

    Args:
        profile: the user being assessed (name, biometrics, baseline)
        catalog: a loaded :class:`QuestionCatalog`; loaded from
            ``settings.catalog_path`` when omitted
        settings: engine settings; read from the environment when omitted
        renderer: dialogue renderer; built from ``settings`` when omitted
        rules: branch rules; default to the catalog's ``branches``
        clock: returns the current time (injectable for tests)
    """

    def __init__(
        self,
        profile: UserProfile,
        catalog: QuestionCatalog | None = None,
        *,
        settings: EngineSettings | None = None,
        renderer: DialogueRenderer | None = None,
        rules: list[BranchRule] | None = None,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        if settings is None:
            settings = load_settings()
        if catalog is None:
            catalog = QuestionCatalog(settings.catalog_path)
            catalog.load()
        if renderer is None:
            renderer = DialogueRenderer(
                settings.template_dir, assistant_name=settings.assistant_name,
            )

        self._profile = profile
        self._catalog = catalog
        self._renderer = renderer
        self._parser = AnswerParser()
        self._branching = BranchingRules(catalog, renderer, rules)
        self._clock = clock or _utcnow
        self._state = SessionState()

        self._handlers: dict[SessionStatus, Callable[[str], EngineResponse]] = {
            SessionStatus.NOT_STARTED: self._handle_not_started,
            SessionStatus.AWAITING_CONSENT: self._handle_consent,
            SessionStatus.IN_PROGRESS: self._handle_answer,
            SessionStatus.FINISHED: self._handle_finished,
        }

    # ==================================================================
    # Public API
    # ==================================================================

    @property
    def profile(self) -> UserProfile:
        return self._profile

    @property
    def catalog(self) -> QuestionCatalog:
        return self._catalog

    @property
    def branching(self) -> BranchingRules:
        return self._branching

    @property
    def status(self) -> SessionStatus:
        return self._state.status

    @property
    def is_finished(self) -> bool:
        return self._state.status == SessionStatus.FINISHED

    @property
    def summary(self) -> SessionSummary | None:
        """The summary built on completion, or None before that."""
        return self._state.summary

    @property
    def answers(self) -> dict[str, AnswerRecord]:
        """Copy of the answers recorded so far, keyed by qid."""
        return dict(self._state.answers)

    @property
    def stress_empathy_given(self) -> bool:
        return self._state.stress_empathy_given

    def start_session(self, profile: UserProfile | None = None) -> str:
        """Start (or restart) the session and return the greeting.

        A ``profile`` passed here replaces the one given at construction
        for this and later sessions.
        """
        if profile is not None:
            self._profile = profile
        if self._state.status != SessionStatus.NOT_STARTED:
            logger.info("Restarting session (was %s)", self._state.status.value)

        self._state = SessionState(
            status=SessionStatus.AWAITING_CONSENT,
            position_index=0,
            started_at=self._clock(),
            consent_pending=True,
        )
        logger.info("Session started for %s", self._profile.display_name)
        return self._renderer.greeting(self._profile)

    def process_response(self, raw_text: str) -> EngineResponse:
        """Feed one user utterance to the state machine.  Never raises."""
        handler = self._handlers[self._state.status]
        return handler(raw_text or "")

    def current_state(self) -> EngineState:
        position = self._state.position_index
        return EngineState(
            position=position,
            total_questions=self._catalog.count(),
            answered_count=len(self._state.answers),
            active=position >= 0,
            status=self._state.status,
        )

    def reset(self) -> None:
        """Return to not_started, discarding answers and any summary."""
        self._state = SessionState()
        logger.info("Session reset")

    def preview_summary(self) -> SessionSummary:
        """Build a summary from the answers so far without changing state.

        Useful for hosts that show interim scores; unanswered questions fall
        back to scoring defaults.
        """
        return build_summary(
            self._state.answers,
            self._profile,
            self._state.started_at,
            renderer=self._renderer,
            completed_at=self._clock(),
        )

    # ==================================================================
    # State handlers
    # ==================================================================

    def _handle_not_started(self, raw_text: str) -> EngineResponse:
        logger.warning("process_response called before start_session")
        return self._response(self._renderer.not_started())

    def _handle_consent(self, raw_text: str) -> EngineResponse:
        lowered = raw_text.lower()
        if not any(word in lowered for word in AFFIRMATIVE_KEYWORDS):
            return self._response(self._renderer.consent_deferral())

        state = self._state
        state.consent_pending = False
        state.position_index = 0
        state.status = SessionStatus.IN_PROGRESS
        logger.info("Consent given, starting assessment")

        first = self._catalog.question_at(0)
        return self._response(
            self._renderer.consent_hook(self._profile, first),
            hint=first.hint,
            progress=self._progress_at(0),
        )

    def _handle_answer(self, raw_text: str) -> EngineResponse:
        state = self._state
        question = self._catalog.question_at(state.position_index)

        value = self._parser.parse(raw_text, question)
        state.answers[question.qid] = AnswerRecord(
            qid=question.qid, value=value, recorded_at=self._clock(),
        )
        logger.debug("Recorded %s = %r", question.qid, value)

        outcome = self._branching.evaluate(
            question, value, state.position_index, state.stress_empathy_given,
        )
        if outcome.injected_message is not None:
            state.position_index = outcome.new_position_index
            state.stress_empathy_given = outcome.empathy_given
            next_question = self._catalog.question_at(state.position_index)
            return self._response(
                outcome.injected_message,
                hint=next_question.hint,
                progress=self._progress_at(state.position_index),
            )

        state.position_index += 1
        if state.position_index >= self._catalog.count():
            return self._finish()

        next_question = self._catalog.question_at(state.position_index)
        return self._response(
            self._renderer.question_prompt(next_question),
            hint=next_question.hint,
            progress=self._progress_at(state.position_index),
        )

    def _handle_finished(self, raw_text: str) -> EngineResponse:
        # Idempotent replay: the stored summary is returned as-is
        logger.warning("process_response called after session finished; replaying summary")
        return self._response(
            self._renderer.already_finished(self._profile),
            progress=self._completion_progress(),
            summary=self._state.summary,
        )

    def _finish(self) -> EngineResponse:
        state = self._state
        state.position_index = self._catalog.count()
        state.status = SessionStatus.FINISHED
        state.summary = build_summary(
            state.answers,
            self._profile,
            state.started_at,
            renderer=self._renderer,
            completed_at=self._clock(),
        )
        logger.info(
            "Session finished: overall=%d critical=%d warnings=%d",
            state.summary.scores.overall_score,
            len(state.summary.red_flags.critical),
            len(state.summary.red_flags.warnings),
        )
        return self._response(
            self._renderer.closing(self._profile),
            progress=self._completion_progress(),
            summary=state.summary,
        )

    # ==================================================================
    # Helpers
    # ==================================================================

    def _response(
        self,
        message: str,
        *,
        hint: str | None = None,
        progress: ProgressUpdate | None = None,
        summary: SessionSummary | None = None,
    ) -> EngineResponse:
        return EngineResponse(
            message_text=message,
            finished=self._state.status == SessionStatus.FINISHED,
            status=self._state.status,
            hint=hint,
            progress=progress,
            summary=summary,
        )

    def _progress_at(self, index: int) -> ProgressUpdate:
        total = self._catalog.count()
        question = self._catalog.question_at(index)
        return ProgressUpdate(
            question_index=index,
            total_questions=total,
            category=question.category.value,
            percent_complete=round_half_up(index / total * 100),
            answer_kind=question.answer_kind,
            range=question.range,
        )

    def _completion_progress(self) -> ProgressUpdate:
        total = self._catalog.count()
        return ProgressUpdate(
            question_index=total,
            total_questions=total,
            category=COMPLETE_CATEGORY,
            percent_complete=100,
        )
