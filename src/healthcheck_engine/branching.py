"""BranchingRules — answer-driven interjections between questions.

After the engine stores an answer it asks :meth:`BranchingRules.evaluate`
whether anything should be said before the next question.  Rules are keyed
by the qid of the question just answered and are evaluated in registration
order; the first rule whose ``when`` conditions all hold fires.

A firing rule renders its lead-in, appends the next question's prompt, and
moves the position to that next question.  The next question's answer is
still expected next: the lead-in never consumes a question slot.

Rules come from the catalog YAML (``branches:``) and can be added at
runtime with :meth:`BranchingRules.register` without touching the engine.
"""

from __future__ import annotations

import logging
import re
from typing import Any, NamedTuple

from healthcheck_engine.catalog import QuestionCatalog
from healthcheck_engine.dialogue import DialogueRenderer
from healthcheck_engine.models.question import (
    BranchRule,
    Condition,
    LeadInVariant,
    QuestionDefinition,
)

logger = logging.getLogger(__name__)


class BranchOutcome(NamedTuple):
    """Result of evaluating the rules for one answer.

    ``injected_message`` is None when no rule fired; the position and flag
    are then returned unchanged.
    """

    injected_message: str | None
    new_position_index: int
    empathy_given: bool


class BranchingRules:
    """Registry of :class:`BranchRule` objects keyed by qid.

    Args:
        catalog: a loaded :class:`QuestionCatalog`
        renderer: renders lead-ins and the next question's prompt
        rules: initial rules; defaults to ``catalog.branches``
    """

    def __init__(
        self,
        catalog: QuestionCatalog,
        renderer: DialogueRenderer,
        rules: list[BranchRule] | None = None,
    ) -> None:
        self._catalog = catalog
        self._renderer = renderer
        self._rules: dict[str, list[BranchRule]] = {}
        for rule in catalog.branches if rules is None else rules:
            self.register(rule)

    def register(self, rule: BranchRule) -> None:
        """Add a rule.  Raises ``KeyError`` if its qid is not in the catalog."""
        self._catalog.index_of(rule.qid)
        self._rules.setdefault(rule.qid, []).append(rule)

    def rules_for(self, qid: str) -> list[BranchRule]:
        return list(self._rules.get(qid, []))

    def evaluate(
        self,
        question: QuestionDefinition,
        answer: str | float,
        position_index: int,
        empathy_given: bool,
    ) -> BranchOutcome:
        """Decide whether answering ``question`` injects a message.

        Args:
            question: the question that was just answered
            answer: its parsed value
            position_index: the question's position in the flow
            empathy_given: whether a ``once`` rule already fired this session

        Returns:
            A :class:`BranchOutcome`.  When a rule fires the new position is
            ``position_index + 1`` and the message is the lead-in followed by
            that question's prompt.
        """
        no_branch = BranchOutcome(None, position_index, empathy_given)
        next_index = position_index + 1

        for rule in self._rules.get(question.qid, []):
            if rule.once and empathy_given:
                continue
            if not all(self._check(cond, answer) for cond in rule.when):
                continue
            # The last question must finish through the normal advance
            if next_index >= self._catalog.count():
                logger.debug("Branch %s skipped: no question after %s", rule.id, question.qid)
                continue
            variant = self._select_variant(rule.variants, answer)
            if variant is None:
                continue

            next_question = self._catalog.question_at(next_index)
            message = self._renderer.compose(
                self._renderer.lead_in(variant.template, answer=answer, question=question),
                self._renderer.question_prompt(next_question),
            )
            logger.debug("Branch %s fired on %s (answer=%r)", rule.id, question.qid, answer)
            return BranchOutcome(message, next_index, empathy_given or rule.once)

        return no_branch

    # ------------------------------------------------------------------
    # Condition evaluation
    # ------------------------------------------------------------------

    def _select_variant(
        self, variants: list[LeadInVariant], answer: str | float
    ) -> LeadInVariant | None:
        """First variant whose conditions all hold."""
        for variant in variants:
            if all(self._check(cond, answer) for cond in variant.when):
                return variant
        return None

    @staticmethod
    def _check(cond: Condition, answer: str | float) -> bool:
        return _compare(cond.op, answer, cond.value)


def _is_number(value: Any) -> bool:
    # bool is a subclass of int in Python, so reject it explicitly
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _compare(op: str, answer: Any, value: Any) -> bool:
    """Apply an operator to an answer and an expected value.

    Numeric operators only match numeric answers: an ambiguous yes-no or
    free-text answer never satisfies ``gt``.
    """
    if op == "eq":
        return answer == value

    if op == "ne":
        return answer != value

    # --- Numeric comparisons ---
    if op in ("lt", "le", "gt", "ge", "between"):
        if not _is_number(answer):
            return False

        if op == "lt":
            return answer < float(value)
        if op == "le":
            return answer <= float(value)
        if op == "gt":
            return answer > float(value)
        if op == "ge":
            return answer >= float(value)
        # value is expected to be [min, max]
        lo, hi = float(value[0]), float(value[1])
        return lo <= answer <= hi

    # --- Text matching ---
    if op == "contains":
        return str(value).lower() in str(answer).lower()

    if op == "matches":
        return bool(re.search(str(value), str(answer)))

    logger.warning("Unknown condition operator: %s", op)
    return False
