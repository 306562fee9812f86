"""Answer parsing — turns transcribed free text into a typed answer value.

Parsing never fails.  Speech-to-text output is often noisy, so an answer
that cannot be interpreted degrades to a default (numbers) or is kept
verbatim (yes-no, text) instead of stalling the check-in.
"""

from __future__ import annotations

import logging
import re

from healthcheck_engine.constants import NO_KEYWORDS, NUMBER_PATTERN, YES_KEYWORDS
from healthcheck_engine.models.question import AnswerKind, QuestionDefinition

logger = logging.getLogger(__name__)

_NUMBER_RE = re.compile(NUMBER_PATTERN)


def parse_answer(raw_text: str | None, question: QuestionDefinition) -> str | float:
    """Parse ``raw_text`` according to ``question.answer_kind``.

    Returns:
        - yes-no: ``"yes"`` / ``"no"``, or the trimmed text if ambiguous
        - scale / numeric: the first number found, clamped into the
          question's range; ``0.0`` when the text holds no number
        - text: the trimmed text
    """
    text = (raw_text or "").strip()
    kind = question.answer_kind

    if kind == AnswerKind.YES_NO:
        lowered = text.lower()
        if any(word in lowered for word in YES_KEYWORDS):
            return "yes"
        if any(word in lowered for word in NO_KEYWORDS):
            return "no"
        return text

    if kind in (AnswerKind.SCALE, AnswerKind.NUMERIC):
        match = _NUMBER_RE.search(text)
        if match is None:
            logger.debug("No number in answer to %s, defaulting to 0", question.qid)
            return 0.0
        num = float(match.group(0))
        if question.range is not None:
            num = max(question.range.min, min(question.range.max, num))
        return num

    return text


class AnswerParser:
    """Object wrapper around :func:`parse_answer` for dependency injection."""

    def parse(self, raw_text: str | None, question: QuestionDefinition) -> str | float:
        return parse_answer(raw_text, question)
