"""QuestionCatalog — loads the check-in question flow from YAML into typed models.

This is the single source of truth for question data at runtime.  The
catalog is loaded once per engine and provides lookup by position, qid, and
category.

Usage::

    catalog = QuestionCatalog()     # defaults to the packaged data/questions.yaml
    catalog.load()                  # parse + validate

    q = catalog.question_at(0)
    catalog.category_of(4)          # QuestionCategory.SLEEP
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Iterator

import yaml

from healthcheck_engine.models.question import (
    BranchRule,
    QuestionCategory,
    QuestionDefinition,
)

logger = logging.getLogger(__name__)

DEFAULT_CATALOG_PATH = Path(__file__).parent / "data" / "questions.yaml"

# Canonical traversal order (enum declaration order)
CATEGORY_ORDER: list[QuestionCategory] = list(QuestionCategory)


def load_yaml(path: Path | str) -> Any:
    """Load a single YAML file and return the parsed contents."""
    if isinstance(path, str):
        path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Missing YAML file: {path}")
    with path.open("r", encoding="utf-8") as f:
        return yaml.safe_load(f)


class QuestionCatalog:
    """Ordered question flow plus the branch rules declared alongside it.

    Attributes populated after :meth:`load`:

        branches — list[BranchRule] in YAML order
    """

    def __init__(self, path: str | Path | None = None) -> None:
        self._path = Path(path) if path is not None else DEFAULT_CATALOG_PATH

        # Populated by load()
        self._questions: list[QuestionDefinition] = []
        self._index: dict[str, int] = {}
        self.branches: list[BranchRule] = []

    # ------------------------------------------------------------------
    # Loading
    # ------------------------------------------------------------------

    def load(self) -> None:
        """Parse and validate the catalog YAML.

        Raises ``FileNotFoundError`` if the file is missing and
        ``ValueError`` if the content breaks catalog invariants.
        """
        raw = load_yaml(self._path) or {}
        if not isinstance(raw, dict):
            raise ValueError(f"Catalog {self._path} must be a mapping with a 'questions' list")

        questions = [QuestionDefinition(**q) for q in raw.get("questions") or []]
        if not questions:
            raise ValueError(f"Catalog {self._path} defines no questions")

        index: dict[str, int] = {}
        for i, q in enumerate(questions):
            if q.qid in index:
                raise ValueError(f"Duplicate qid '{q.qid}' in catalog {self._path}")
            index[q.qid] = i
        self._check_category_order(questions)

        branches = [BranchRule(**b) for b in raw.get("branches") or []]
        for rule in branches:
            if rule.qid not in index:
                raise ValueError(
                    f"Branch rule '{rule.id}' targets unknown qid '{rule.qid}'"
                )

        self._questions = questions
        self._index = index
        self.branches = branches
        logger.info(
            "QuestionCatalog loaded: %d questions, %d categories, %d branch rules",
            len(questions),
            len(self.categories()),
            len(branches),
        )

    @staticmethod
    def _check_category_order(questions: list[QuestionDefinition]) -> None:
        """Categories must appear as contiguous blocks in canonical order."""
        last_rank = -1
        for q in questions:
            rank = CATEGORY_ORDER.index(q.category)
            if rank < last_rank:
                raise ValueError(
                    f"Question '{q.qid}' ({q.category.value}) breaks the category order "
                    f"{' -> '.join(c.value for c in CATEGORY_ORDER)}"
                )
            last_rank = rank

    # ------------------------------------------------------------------
    # Positional contract
    # ------------------------------------------------------------------

    def question_at(self, index: int) -> QuestionDefinition:
        return self._questions[index]

    def count(self) -> int:
        return len(self._questions)

    def category_of(self, index: int) -> QuestionCategory:
        return self._questions[index].category

    def __len__(self) -> int:
        return len(self._questions)

    def __iter__(self) -> Iterator[QuestionDefinition]:
        return iter(self._questions)

    # ------------------------------------------------------------------
    # Lookup helpers
    # ------------------------------------------------------------------

    def get_question(self, qid: str) -> QuestionDefinition:
        """Look up a question by qid.

        Raises:
            KeyError: if the qid is not in the catalog.
        """
        return self._questions[self._index[qid]]

    def index_of(self, qid: str) -> int:
        """Position of ``qid`` in the flow.  Raises ``KeyError`` if unknown."""
        return self._index[qid]

    def questions_for_category(self, category: QuestionCategory | str) -> list[QuestionDefinition]:
        """All questions of one category, in flow order."""
        category = QuestionCategory(category)
        return [q for q in self._questions if q.category == category]

    def categories(self) -> list[QuestionCategory]:
        """Categories present in the catalog, in traversal order."""
        seen: list[QuestionCategory] = []
        for q in self._questions:
            if q.category not in seen:
                seen.append(q.category)
        return seen
