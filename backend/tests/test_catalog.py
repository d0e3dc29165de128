"""Tests for the question catalog."""

import pytest

from fitcheck.errors import UnknownQuestion, UnknownQuestionnaire
from fitcheck.models.readiness import AnswerType, Category
from fitcheck.services.catalog import (
    DAILY,
    EXTENDED,
    MUSCLE_GROUPS,
    QUESTIONNAIRES,
    Questionnaire,
    get_questionnaire,
)

BASE_IDS = [
    "sleep_hours",
    "sleep_quality",
    "energy_level",
    "overall_soreness",
    "sore_muscle_groups",
    "stress_level",
    "motivation",
    "previous_day_training",
]


def test_daily_questionnaire():
    daily = get_questionnaire(DAILY)
    assert [q.id for q in daily.questions] == BASE_IDS
    assert len(daily) == 8
    assert daily.question("sleep_hours").option_values() == [3, 4, 5, 6, 7, 8, 9, 10]
    assert daily.recovery_components == ("sleep_quality", "training_load")


def test_extended_questionnaire():
    extended = get_questionnaire(EXTENDED)
    assert [q.id for q in extended.questions] == BASE_IDS + ["workout_focus", "last_workout"]
    assert extended.question("sleep_hours").option_values() == [3, 5, 6, 7, 8]
    assert extended.question("last_workout").option_values() == [0, 1, 2, 3, 4]
    assert extended.question("workout_focus").extended
    assert len(extended.recovery_components) == 4


@pytest.mark.parametrize("name", sorted(QUESTIONNAIRES))
def test_question_shapes(name):
    for question in get_questionnaire(name).questions:
        assert question.text
        assert isinstance(question.category, Category)
        if question.answer_type == AnswerType.SCALE:
            assert (question.min, question.max) == (1, 5)
            assert not question.options
        else:
            assert question.options


def test_muscle_groups_match_options():
    question = get_questionnaire(DAILY).question("sore_muscle_groups")
    assert question.is_multi_select
    assert set(question.option_values()) == set(MUSCLE_GROUPS)


def test_required_questions_skip_multi_select():
    required = [q.id for q in get_questionnaire(EXTENDED).required_questions()]
    assert "sore_muscle_groups" not in required
    assert "workout_focus" not in required
    assert len(required) == 8


def test_unknown_question():
    with pytest.raises(UnknownQuestion):
        get_questionnaire(DAILY).question("last_workout")


def test_unknown_questionnaire():
    with pytest.raises(UnknownQuestionnaire):
        get_questionnaire("weekly")


def test_default_from_environment(monkeypatch):
    monkeypatch.setenv("READINESS_QUESTIONNAIRE", "Daily")
    assert get_questionnaire().name == DAILY
    monkeypatch.delenv("READINESS_QUESTIONNAIRE")
    assert get_questionnaire().name == EXTENDED
    assert get_questionnaire(" EXTENDED ").name == EXTENDED


def test_duplicate_ids_rejected():
    question = get_questionnaire(DAILY).question("energy_level")
    with pytest.raises(ValueError):
        Questionnaire(
            name="broken",
            questions=(question, question),
            recovery_components=("sleep_quality",),
        )
