"""Tests for readiness scoring."""

import itertools
import random
from decimal import ROUND_HALF_UP, Decimal

import pytest

from fitcheck.services.catalog import DAILY, EXTENDED, get_questionnaire
from fitcheck.services.recommendation import level
from fitcheck.services.scoring import (
    RECOVERY_COMPONENTS,
    compute_readiness,
    muscle_group_score,
    recovery_readiness,
    round_half_up,
    workout_focus_score,
    workout_recency_score,
)
from tests.conftest import BEST_CASE_ANSWERS

daily = get_questionnaire(DAILY)
extended = get_questionnaire(EXTENDED)


def _weighted(physical, mental, recovery):
    exact = (
        Decimal("0.4") * physical + Decimal("0.3") * mental + Decimal("0.3") * recovery
    )
    return int(exact.quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def _random_answers(rng, questionnaire):
    answers = {}
    for question in questionnaire.questions:
        if question.answer_type.value == "scale":
            answers[question.id] = rng.randint(question.min, question.max)
        elif question.is_multi_select:
            values = question.option_values()
            answers[question.id] = frozenset(
                rng.sample(values, rng.randint(0, len(values)))
            )
        else:
            answers[question.id] = rng.choice(question.option_values())
    return answers


class TestScenarios:
    def test_best_case_daily_is_perfect(self):
        score = compute_readiness(BEST_CASE_ANSWERS, daily)
        assert score.physical == 100
        assert score.mental == 100
        assert score.recovery == 100
        assert score.overall == 100
        assert level(score.overall).value == "excellent"

    def test_empty_response_uses_defaults(self):
        score = compute_readiness({}, daily)
        assert score.physical == 30
        assert score.mental == 10
        assert score.recovery == 30
        assert score.overall == 24
        assert level(score.overall).value == "low"

    def test_empty_response_extended(self):
        # recovery: (0 + 60 + 75 + 100) / 4 = 58.75
        score = compute_readiness({}, extended)
        assert score.physical == 30
        assert score.mental == 10
        assert score.recovery == 59
        assert score.overall == 33

    def test_mixed_answers(self):
        answers = {
            "sleep_hours": 6,
            "sleep_quality": 3,
            "energy_level": 3,
            "overall_soreness": 2,
            "sore_muscle_groups": frozenset({"upper-body"}),
            "stress_level": 3,
            "motivation": 4,
            "previous_day_training": 4,
        }
        score = compute_readiness(answers, daily)
        assert score.physical == 70
        assert score.mental == 70
        assert score.recovery == 50
        assert score.overall == 64
        assert level(score.overall).value == "good"

    def test_extended_folds_in_workout_history(self):
        score = compute_readiness(BEST_CASE_ANSWERS, extended)
        # last_workout defaults to 2 -> recency 75
        assert score.recovery == 94
        assert score.overall == 98

        answers = dict(BEST_CASE_ANSWERS, last_workout=1, workout_focus=frozenset())
        assert compute_readiness(answers, extended).recovery == 100


class TestDefaults:
    def test_missing_soreness_counts_as_worst(self):
        answers = dict(BEST_CASE_ANSWERS)
        del answers["overall_soreness"]
        # soreness sub-score 20
        assert compute_readiness(answers, daily).physical == 80

    def test_missing_stress_counts_as_worst(self):
        answers = dict(BEST_CASE_ANSWERS)
        del answers["stress_level"]
        assert compute_readiness(answers, daily).mental == 60

    def test_missing_training_is_moderate(self):
        answers = dict(BEST_CASE_ANSWERS)
        del answers["previous_day_training"]
        assert compute_readiness(answers, daily).recovery == 80

    def test_last_workout_today_uses_default(self):
        answers = dict(BEST_CASE_ANSWERS, last_workout=0, workout_focus=frozenset())
        assert workout_recency_score(answers) == 75
        # (100 + 100 + 75 + 100) / 4 = 93.75
        assert compute_readiness(answers, extended).recovery == 94

    @pytest.mark.parametrize("days, expected", [(1, 100), (2, 75), (3, 50), (4, 25)])
    def test_workout_recency(self, days, expected):
        assert workout_recency_score({"last_workout": days}) == expected


class TestSubScores:
    @pytest.mark.parametrize(
        "groups, expected",
        [
            (frozenset(), 100),
            (frozenset({"core"}), pytest.approx(66.667, abs=1e-3)),
            (frozenset({"core", "upper-body"}), pytest.approx(33.333, abs=1e-3)),
            (frozenset({"core", "upper-body", "lower-body"}), 0),
        ],
    )
    def test_muscle_group_score(self, groups, expected):
        assert muscle_group_score({"sore_muscle_groups": groups}) == expected

    @pytest.mark.parametrize("count, expected", [(0, 100), (1, 90), (3, 70), (5, 50), (7, 50)])
    def test_workout_focus_score_floors_at_50(self, count, expected):
        tokens = frozenset(f"tag-{i}" for i in range(count))
        assert workout_focus_score({"workout_focus": tokens}) == expected

    def test_recovery_rounds_half_up(self):
        answers = {
            "sleep_quality": 3,
            "previous_day_training": 4,
            "last_workout": 3,
            "workout_focus": frozenset(),
        }
        # (60 + 40 + 50 + 100) / 4 = 62.5
        assert recovery_readiness(answers, extended.recovery_components) == 63

    def test_unknown_recovery_component(self):
        with pytest.raises(ValueError):
            recovery_readiness({}, ["heart_rate_variability"])

    def test_round_half_up(self):
        assert round_half_up(62.5) == 63
        assert round_half_up(62.4999) == 62
        assert round_half_up(0) == 0


class TestProperties:
    @pytest.mark.parametrize("name", [DAILY, EXTENDED])
    def test_scores_in_range_and_weighted(self, name):
        questionnaire = get_questionnaire(name)
        rng = random.Random(20240611)
        for _ in range(500):
            score = compute_readiness(_random_answers(rng, questionnaire), questionnaire)
            for value in (score.physical, score.mental, score.recovery, score.overall):
                assert isinstance(value, int)
                assert 0 <= value <= 100
            assert score.overall == _weighted(score.physical, score.mental, score.recovery)

    def test_recovery_sub_scores_stay_in_range(self):
        for question_id in ("sleep_quality", "previous_day_training", "last_workout"):
            question = extended.question(question_id)
            for value in question.option_values() or range(question.min, question.max + 1):
                answers = {question_id: value}
                for component in RECOVERY_COMPONENTS.values():
                    assert 0 <= component(answers) <= 100

    def test_idempotent(self):
        answers = dict(BEST_CASE_ANSWERS, energy_level=2, motivation=3)
        first = compute_readiness(answers, daily)
        second = compute_readiness(answers, daily)
        assert first == second
        assert answers["energy_level"] == 2

    def test_more_sleep_never_lowers_physical(self):
        base = dict(BEST_CASE_ANSWERS, energy_level=3, overall_soreness=3)
        physical = [
            compute_readiness(dict(base, sleep_hours=hours), daily).physical
            for hours in range(4, 9)
        ]
        assert all(a <= b for a, b in itertools.pairwise(physical))

    def test_best_case_physical_for_both_questionnaires(self):
        answers = {
            "sleep_hours": 8,
            "energy_level": 5,
            "overall_soreness": 1,
            "sore_muscle_groups": frozenset(),
        }
        assert compute_readiness(answers, daily).physical == 100
        assert compute_readiness(answers, extended).physical == 100
