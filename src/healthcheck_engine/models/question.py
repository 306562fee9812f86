"""Question and branch-rule models for the check-in catalog.

Each question declares the shape of the answer it expects:

    - scale:   1-10 self-rating, always carries a range
    - yes-no:  canonicalised to "yes" / "no" when recognisable
    - numeric: arbitrary number, optionally range-clamped
    - text:    free text, kept verbatim

Branch rules are declared next to the questions in the catalog YAML.  A
rule is keyed by the qid of the question that was just answered; when all
of its ``when`` conditions hold against the parsed answer, the first
matching lead-in variant is rendered in front of the next question.
"""

from __future__ import annotations

import enum
from typing import Any, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, model_validator


class QuestionCategory(str, enum.Enum):
    """Question categories.  Declaration order is the traversal order."""

    STRESS = "stress"
    SLEEP = "sleep"
    ACTIVITY = "activity"
    LONELINESS = "loneliness"
    ALCOHOL = "alcohol"
    SMOKING = "smoking"


class AnswerKind(str, enum.Enum):
    """Expected shape of a question's answer."""

    SCALE = "scale"
    YES_NO = "yes-no"
    NUMERIC = "numeric"
    TEXT = "text"


class AnswerRange(BaseModel):
    """Inclusive clamp range for scale/numeric answers."""

    model_config = ConfigDict(frozen=True)

    min: float
    max: float

    @model_validator(mode="after")
    def _chk(self):
        if self.min >= self.max:
            raise ValueError("range min must be < max")
        return self


class QuestionDefinition(BaseModel):
    """One static question in the catalog."""

    model_config = ConfigDict(frozen=True)

    qid: str
    category: QuestionCategory
    prompt: str
    answer_kind: AnswerKind
    range: Optional[AnswerRange] = None
    hint: Optional[str] = None

    @model_validator(mode="after")
    def _chk(self):
        if self.range is not None and self.answer_kind not in (AnswerKind.SCALE, AnswerKind.NUMERIC):
            raise ValueError(
                f"question {self.qid}: range is only valid for scale/numeric answers"
            )
        return self


# --- Branching ---

class Condition(BaseModel):
    """A single test against the parsed answer of the current question.

    Operators:
      - eq, ne: equality / inequality
      - lt, le, gt, ge: numeric comparisons (numeric answers only)
      - between: value is [min, max] inclusive (numeric answers only)
      - contains: case-insensitive substring of a text answer
      - matches: regex search against a text answer
    """

    model_config = ConfigDict(frozen=True)

    op: Literal["eq", "ne", "lt", "le", "gt", "ge", "between", "contains", "matches"]
    value: Any


class LeadInVariant(BaseModel):
    """Template to render when all ``when`` conditions hold (empty = always)."""

    model_config = ConfigDict(frozen=True)

    when: List[Condition] = []
    template: str


class BranchRule(BaseModel):
    """Inject a lead-in message after answering ``qid``.

    ``once`` rules share the session's empathy flag: they fire only while it
    is unset and they set it when they fire.
    """

    model_config = ConfigDict(frozen=True)

    id: str
    qid: str
    when: List[Condition] = []
    once: bool = True
    variants: List[LeadInVariant]

    @model_validator(mode="after")
    def _chk(self):
        if not self.variants:
            raise ValueError(f"branch rule {self.id}: at least one variant is required")
        return self
