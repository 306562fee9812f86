"""DialogueRenderer — Jinja2-based renderer for every user-facing message.

Loads templates from the ``template/`` directory and renders greetings,
question prompts, empathy lead-ins, closing lines, and the summary
narrative.  Keeping wording in templates lets hosts re-word the dialogue
(``HEALTHCHECK_TEMPLATE_DIR``) without touching engine logic.
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

import jinja2

from healthcheck_engine.models.profile import UserProfile
from healthcheck_engine.models.question import QuestionDefinition

if TYPE_CHECKING:
    from healthcheck_engine.models.summary import HealthScores, RedFlags


def format_number(value: float | int) -> str:
    """Render a number the way a person would say it: 8.0 -> "8", 5.5 -> "5.5"."""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def format_thousands(value: float | int) -> str:
    """Integer with thousands separators: 1200 -> "1,200"."""
    return f"{int(value):,}"


class DialogueRenderer:
    """Jinja2-based renderer for dialogue text.

    Args:
        template_dir: optional override for the template directory.
            Defaults to ``template/`` sibling of this module.
        assistant_name: persona introduced in the greeting.
    """

    def __init__(
        self,
        template_dir: str | Path | None = None,
        *,
        assistant_name: str = "Lisa",
    ) -> None:
        if template_dir is None:
            template_dir = Path(__file__).parent / "template"
        template_dir = Path(template_dir)
        if not template_dir.is_dir():
            raise FileNotFoundError(f"Missing template directory: {template_dir}")

        self._env = jinja2.Environment(
            loader=jinja2.FileSystemLoader(str(template_dir)),
            # Block tags swallow their own line
            trim_blocks=True,
            lstrip_blocks=True,
            undefined=jinja2.StrictUndefined,
        )
        self._env.filters["num"] = format_number
        self._env.filters["thousands"] = format_thousands
        self.assistant_name = assistant_name

    def render(self, template_name: str, **context) -> str:
        """Render a named template with arbitrary context."""
        template = self._env.get_template(template_name)
        return template.render(**context).strip()

    @staticmethod
    def compose(*parts: str | None) -> str:
        """Join message parts with a blank line, skipping empty parts."""
        return "\n\n".join(p for p in parts if p)

    # --- Session lifecycle ---

    def greeting(self, profile: UserProfile) -> str:
        return self.render(
            "greeting.jinja2",
            name=profile.display_name,
            assistant_name=self.assistant_name,
        )

    def not_started(self) -> str:
        return self.render("not_started.jinja2")

    def consent_deferral(self) -> str:
        return self.render("consent_deferral.jinja2")

    def consent_hook(self, profile: UserProfile, question: QuestionDefinition) -> str:
        """Biometric hook that opens the assessment, followed by the first question."""
        return self.render(
            "consent_hook.jinja2",
            biometrics=profile.biometrics,
            prompt=self.question_prompt(question),
        )

    def closing(self, profile: UserProfile) -> str:
        return self.render("closing.jinja2", name=profile.display_name)

    def already_finished(self, profile: UserProfile) -> str:
        return self.render("already_finished.jinja2", name=profile.display_name)

    # --- Questions ---

    def question_prompt(self, question: QuestionDefinition) -> str:
        """Prompt text with the hint appended when the question has one."""
        return self.render("question.jinja2", question=question)

    def lead_in(self, template_name: str, *, answer: str | float, question: QuestionDefinition) -> str:
        """Render a branch-rule lead-in for the answer just given."""
        return self.render(template_name, answer=answer, question=question)

    # --- Summary ---

    def narrative(
        self,
        *,
        display_name: str,
        scores: HealthScores,
        red_flags: RedFlags,
        overall_assessment: str,
    ) -> str:
        return self.render(
            "narrative.md.jinja2",
            name=display_name,
            scores=scores,
            red_flags=red_flags,
            overall_assessment=overall_assessment,
        )
