"""DialogueRenderer tests — template rendering, filters, and overrides.

Uses the packaged templates except where a test writes its own directory to
``tmp_path`` to check that hosts can re-word the dialogue.
"""

import jinja2
import pytest

from healthcheck_engine.dialogue import DialogueRenderer
from healthcheck_engine.dialogue.renderer import format_number, format_thousands


class TestFilters:
    @pytest.mark.parametrize("value, text", [(8.0, "8"), (5.5, "5.5"), (7, "7"), (0.0, "0")])
    def test_format_number(self, value, text):
        assert format_number(value) == text

    @pytest.mark.parametrize("value, text", [(1200, "1,200"), (950, "950"), (12000.0, "12,000")])
    def test_format_thousands(self, value, text):
        assert format_thousands(value) == text


class TestLifecycleMessages:
    def test_greeting(self, renderer, profile):
        text = renderer.greeting(profile)
        assert text.startswith("Hello Amit, my name is Lisa")
        assert text.endswith("Are you ready to start?")

    def test_custom_assistant_name(self, profile):
        text = DialogueRenderer(assistant_name="Nora").greeting(profile)
        assert "my name is Nora" in text

    def test_consent_hook_cites_wearable(self, renderer, profile, catalog):
        text = renderer.consent_hook(profile, catalog.question_at(0))
        assert "5.5 hours of sleep" in text
        assert "1,200 steps" in text
        assert f"First question: {catalog.question_at(0).prompt}" in text

    def test_consent_hook_whole_hours(self, renderer, profile, catalog):
        rested = profile.model_copy(
            update={"biometrics": profile.biometrics.model_copy(update={"sleep_hours_last_night": 8.0})}
        )
        assert "got 8 hours" in renderer.consent_hook(rested, catalog.question_at(0))

    def test_closing_and_replay(self, renderer, profile):
        assert renderer.closing(profile).startswith("Thank you for completing the health check-in, Amit!")
        assert "already completed" in renderer.already_finished(profile)

    def test_not_started_and_deferral(self, renderer):
        assert "begin" in renderer.not_started()
        assert "take your time" in renderer.consent_deferral()


class TestQuestionPrompt:
    def test_prompt_with_hint(self, renderer, catalog):
        q = catalog.get_question("stress_01")
        assert renderer.question_prompt(q) == f"{q.prompt}\n\n💡 {q.hint}"

    def test_prompt_without_hint(self, renderer, catalog):
        q = catalog.get_question("stress_01").model_copy(update={"hint": None})
        assert renderer.question_prompt(q) == q.prompt


class TestCompose:
    def test_joins_with_blank_line(self):
        assert DialogueRenderer.compose("a", "b") == "a\n\nb"

    def test_skips_empty_parts(self):
        assert DialogueRenderer.compose("a", "", None, "b") == "a\n\nb"


class TestOverrides:
    def test_missing_directory(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            DialogueRenderer(tmp_path / "nope")

    def test_custom_template_dir(self, tmp_path, profile):
        (tmp_path / "greeting.jinja2").write_text("Hi {{ name }}, {{ assistant_name }} here.\n")
        renderer = DialogueRenderer(tmp_path, assistant_name="Max")
        assert renderer.greeting(profile) == "Hi Amit, Max here."

    def test_missing_variable_is_an_error(self, tmp_path):
        (tmp_path / "broken.jinja2").write_text("{{ nothing }}")
        with pytest.raises(jinja2.UndefinedError):
            DialogueRenderer(tmp_path).render("broken.jinja2")

    def test_missing_template(self, tmp_path):
        with pytest.raises(jinja2.TemplateNotFound):
            DialogueRenderer(tmp_path).render("absent.jinja2")
