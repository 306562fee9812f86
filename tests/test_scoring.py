"""Scoring tests — band tables, category formulas, fallbacks, and rounding.

Reference profile (conftest): 5.5 h sleep (band 5) and 1,200 steps
(band 2).  Expected values are worked by hand from the formulas:

    stress     = 11 - stress_level
    sleep      = quality * 0.6 + band(hours) * 0.4            clamp 1..10
    activity   = days + energy * 0.3 + band(steps) * 0.3      clamp 1..10
    loneliness = 11 - level (+2 with support), max 10
    lifestyle  = 10 - alcohol - smoking penalties, min 1
"""

import pytest

from healthcheck_engine.models.session import AnswerRecord
from healthcheck_engine.scoring import (
    affirms_yes,
    answer_as_number,
    answer_as_text,
    calculate_scores,
    lifestyle_score,
    round_half_up,
    score_sleep_hours,
    score_steps,
)

E2E_ANSWERS = {
    "stress_01": 8.0,
    "stress_02": "work deadlines and money",
    "sleep_01": 3.0,
    "sleep_02": "yes",
    "sleep_03": 5.0,
    "activity_01": 0.0,
    "activity_02": "none really",
    "activity_03": 2.0,
    "loneliness_01": 6.0,
    "loneliness_02": "no",
    "loneliness_03": 2.0,
    "alcohol_01": "weekly",
    "alcohol_02": 2.0,
    "smoking_01": "no",
    "smoking_02": 0.0,
}


class TestRoundHalfUp:
    @pytest.mark.parametrize(
        "value, expected",
        [(4.5, 5), (2.5, 3), (0.5, 1), (3.89, 4), (1.2, 1), (4.49, 4), (10.0, 10)],
    )
    def test_rounding(self, value, expected):
        assert round_half_up(value) == expected


class TestBands:
    @pytest.mark.parametrize(
        "hours, expected",
        [(8, 10), (7, 10), (9, 10), (6.5, 7), (6, 7), (5.5, 5), (5, 5), (4.9, 2), (0, 2),
         (9.5, 7), (10, 7), (11, 4)],
    )
    def test_sleep_hours(self, hours, expected):
        assert score_sleep_hours(hours) == expected

    @pytest.mark.parametrize(
        "steps, expected",
        [(12000, 10), (10000, 10), (9999, 8), (7500, 8), (5000, 6), (2500, 4), (2499, 2), (0, 2)],
    )
    def test_steps(self, steps, expected):
        assert score_steps(steps) == expected


class TestAnswerAccessors:
    def test_number_default_when_missing(self, make_answers):
        assert answer_as_number(make_answers({}), "stress_01", 5) == 5

    def test_number_default_when_text(self, make_answers):
        answers = make_answers({"stress_01": "pretty bad"})
        assert answer_as_number(answers, "stress_01", 5) == 5

    def test_number_present(self, make_answers):
        assert answer_as_number(make_answers({"stress_01": 9.0}), "stress_01", 5) == 9.0

    def test_text_of_number(self, make_answers):
        assert answer_as_text(make_answers({"smoking_02": 3.0}), "smoking_02", "") == "3.0"

    def test_affirms_yes(self):
        assert affirms_yes("Yes")
        assert not affirms_yes("sometimes")


class TestLifestyle:
    @pytest.mark.parametrize(
        "alcohol, expected",
        [("never", 10), ("daily", 6), ("every day", 6), ("Weekly", 8), ("weekends", 8),
         ("once a month", 9), ("rarely", 10)],
    )
    def test_alcohol_penalty(self, make_answers, alcohol, expected):
        assert lifestyle_score(make_answers({"alcohol_01": alcohol})) == expected

    @pytest.mark.parametrize("per_day, expected", [(25.0, 4), (15.0, 6), (5.0, 7), (0.0, 10)])
    def test_smoking_penalty(self, make_answers, per_day, expected):
        answers = make_answers({"smoking_01": "yes", "smoking_02": per_day})
        assert lifestyle_score(answers) == expected

    def test_cigarettes_ignored_for_non_smoker(self, make_answers):
        answers = make_answers({"smoking_01": "no", "smoking_02": 30.0})
        assert lifestyle_score(answers) == 10

    def test_floor_at_one(self, make_answers):
        answers = make_answers({"alcohol_01": "daily", "smoking_01": "yes", "smoking_02": 40.0})
        assert lifestyle_score(answers) == 1


class TestCalculateScores:
    def test_end_to_end_answers(self, make_answers, profile):
        scores = calculate_scores(make_answers(E2E_ANSWERS), profile)
        assert scores.stress_score == 3
        assert scores.sleep_score == 4       # 3*0.6 + 5*0.4 = 3.8
        assert scores.activity_score == 1    # 0 + 0.6 + 0.6 = 1.2
        assert scores.loneliness_score == 5
        assert scores.lifestyle_score == 8
        assert scores.overall_score == 4     # 3.89

    def test_all_defaults(self, make_answers, profile):
        """No answers: every input falls back, sleep hours come from the wearable."""
        scores = calculate_scores(make_answers({}), profile)
        assert scores.stress_score == 6
        assert scores.sleep_score == 5
        assert scores.activity_score == 2
        assert scores.loneliness_score == 6
        assert scores.lifestyle_score == 10
        assert scores.overall_score == 6     # 5.57

    def test_reported_sleep_hours_override_wearable(self, make_answers, profile):
        scores = calculate_scores(make_answers({"sleep_01": 5.0, "sleep_03": 8.0}), profile)
        assert scores.sleep_score == 7       # 3 + 4

    def test_critical_sleep(self, make_answers, profile):
        scores = calculate_scores(make_answers({"sleep_01": 1.0, "sleep_03": 4.0}), profile)
        assert scores.sleep_score == 1       # 0.6 + 0.8 = 1.4

    def test_social_support_bonus_capped(self, make_answers, profile):
        answers = make_answers({"loneliness_01": 2.0, "loneliness_02": "yes"})
        assert calculate_scores(answers, profile).loneliness_score == 10

    def test_social_support_bonus(self, make_answers, profile):
        answers = make_answers({"loneliness_01": 6.0, "loneliness_02": "yes"})
        assert calculate_scores(answers, profile).loneliness_score == 7

    def test_activity_clamped_to_ten(self, make_answers, profile):
        active = profile.model_copy(
            update={"biometrics": profile.biometrics.model_copy(update={"daily_steps": 12000})}
        )
        answers = make_answers({"activity_01": 7.0, "activity_03": 10.0})
        assert calculate_scores(answers, active).activity_score == 10

    def test_exercise_days_count_one_point_each(self, make_answers, profile):
        answers = make_answers({"activity_01": 4.0, "activity_03": 5.0})
        # 4 + 1.5 + 0.6 = 6.1
        assert calculate_scores(answers, profile).activity_score == 6

    def test_unparsed_stress_scores_above_ten(self, make_answers, profile):
        """A 0.0 fallback stress answer is not clamped on the way in."""
        scores = calculate_scores(make_answers({"stress_01": 0.0}), profile)
        assert scores.stress_score == 11

    def test_text_in_numeric_slot_uses_default(self, make_answers, profile):
        scores = calculate_scores(make_answers({"stress_01": "awful"}), profile)
        assert scores.stress_score == 6

    def test_deterministic(self, make_answers, profile):
        answers = make_answers(E2E_ANSWERS)
        assert calculate_scores(answers, profile) == calculate_scores(answers, profile)

    def test_answer_records_are_not_mutated(self, make_answers, profile):
        answers = make_answers(E2E_ANSWERS)
        before = dict(answers)
        calculate_scores(answers, profile)
        assert answers == before
        assert all(isinstance(r, AnswerRecord) for r in answers.values())
