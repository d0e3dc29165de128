"""Readiness question catalog.

Two questionnaires share one scoring engine. ``daily`` is the single-page
checklist with the eight base questions. ``extended`` is the guided flow,
which swaps in coarser sleep buckets and adds the previous-workout questions
whose sub-scores are folded into the recovery average.
"""

import os
from dataclasses import dataclass
from typing import Dict, Optional, Tuple

from fitcheck.errors import UnknownQuestion, UnknownQuestionnaire
from fitcheck.models.readiness import AnswerOption, AnswerType, Category, Question

DAILY = "daily"
EXTENDED = "extended"

# Recovery sub-score names understood by fitcheck.services.scoring.
SLEEP_QUALITY = "sleep_quality"
TRAINING_LOAD = "training_load"
WORKOUT_RECENCY = "workout_recency"
WORKOUT_FOCUS = "workout_focus"

MUSCLE_GROUPS = ("upper-body", "lower-body", "core")


def _scale(id: str, text: str, category: Category, icon: str) -> Question:
    return Question(
        id=id,
        text=text,
        category=category,
        answer_type=AnswerType.SCALE,
        icon=icon,
        min=1,
        max=5,
    )


def _options(*pairs) -> list:
    return [AnswerOption(value=value, label=label) for value, label in pairs]


DAILY_SLEEP_HOURS = Question(
    id="sleep_hours",
    text="How many hours of sleep did you get last night?",
    category=Category.RECOVERY,
    answer_type=AnswerType.SINGLE_SELECT,
    icon="moon",
    options=_options(
        (3, "3 hours or less"),
        (4, "4 hours"),
        (5, "5 hours"),
        (6, "6 hours"),
        (7, "7 hours"),
        (8, "8 hours"),
        (9, "9 hours"),
        (10, "10+ hours"),
    ),
)

EXTENDED_SLEEP_HOURS = DAILY_SLEEP_HOURS.model_copy(
    update={
        "options": _options(
            (3, "4 hours or less"),
            (5, "5 hours"),
            (6, "6 hours"),
            (7, "7 hours"),
            (8, "8+ hours"),
        )
    }
)

SLEEP_QUALITY_Q = _scale(
    "sleep_quality",
    "Rate your sleep quality (1 = very poor, 5 = excellent)",
    Category.RECOVERY,
    "moon",
)
ENERGY_LEVEL_Q = _scale(
    "energy_level",
    "Rate your current energy level (1 = completely drained, 5 = fully energized)",
    Category.PHYSICAL,
    "zap",
)
OVERALL_SORENESS_Q = _scale(
    "overall_soreness",
    "Rate your overall muscle soreness (1 = no soreness, 5 = very sore)",
    Category.PHYSICAL,
    "activity",
)
SORE_MUSCLE_GROUPS_Q = Question(
    id="sore_muscle_groups",
    text="Which muscle groups feel sore or fatigued today?",
    category=Category.PHYSICAL,
    answer_type=AnswerType.MULTI_SELECT,
    icon="dumbbell",
    options=_options(
        ("upper-body", "Upper body"),
        ("lower-body", "Lower body"),
        ("core", "Core"),
    ),
)
STRESS_LEVEL_Q = _scale(
    "stress_level",
    "Rate your current stress level (1 = very relaxed, 5 = very stressed)",
    Category.MENTAL,
    "brain",
)
MOTIVATION_Q = _scale(
    "motivation",
    "Rate your motivation to exercise today (1 = no motivation, 5 = highly motivated)",
    Category.MENTAL,
    "target",
)
PREVIOUS_DAY_TRAINING_Q = Question(
    id="previous_day_training",
    text="How intense was your training/activity yesterday?",
    category=Category.RECOVERY,
    answer_type=AnswerType.SINGLE_SELECT,
    icon="activity",
    options=_options(
        (1, "Rest day/no training"),
        (2, "Light activity"),
        (3, "Moderate training"),
        (4, "High intensity training"),
        (5, "Very intense/competition"),
    ),
)
WORKOUT_FOCUS_Q = Question(
    id="workout_focus",
    text="What was the focus of your previous workout?",
    category=Category.RECOVERY,
    answer_type=AnswerType.MULTI_SELECT,
    icon="dumbbell",
    extended=True,
    options=_options(
        ("upper-body", "Upper body strength"),
        ("lower-body", "Lower body strength"),
        ("cardio", "Cardiovascular training"),
        ("full-body", "Full body workout"),
        ("flexibility", "Flexibility/mobility"),
        ("sport-specific", "Sport-specific training"),
        ("no-workout", "No previous workout"),
    ),
)
LAST_WORKOUT_Q = Question(
    id="last_workout",
    text="When was your last workout?",
    category=Category.RECOVERY,
    answer_type=AnswerType.SINGLE_SELECT,
    icon="calendar",
    extended=True,
    options=_options(
        (0, "Today"),
        (1, "Yesterday"),
        (2, "2 days ago"),
        (3, "3 days ago"),
        (4, "More than 3 days ago"),
    ),
)


@dataclass(frozen=True)
class Questionnaire:
    """An ordered question set plus the recovery sub-scores it activates."""

    name: str
    questions: Tuple[Question, ...]
    recovery_components: Tuple[str, ...]

    def __post_init__(self) -> None:
        ids = [question.id for question in self.questions]
        if not ids:
            raise ValueError(f"Questionnaire {self.name} has no questions")
        if len(ids) != len(set(ids)):
            raise ValueError(f"Questionnaire {self.name} has duplicate question ids")
        if not self.recovery_components:
            raise ValueError(f"Questionnaire {self.name} has no recovery sub-scores")

    def __len__(self) -> int:
        return len(self.questions)

    def question(self, question_id: str) -> Question:
        for question in self.questions:
            if question.id == question_id:
                return question
        raise UnknownQuestion(question_id)

    def required_questions(self) -> Tuple[Question, ...]:
        return tuple(q for q in self.questions if not q.is_multi_select)


def _base_questions(sleep_hours: Question) -> Tuple[Question, ...]:
    return (
        sleep_hours,
        SLEEP_QUALITY_Q,
        ENERGY_LEVEL_Q,
        OVERALL_SORENESS_Q,
        SORE_MUSCLE_GROUPS_Q,
        STRESS_LEVEL_Q,
        MOTIVATION_Q,
        PREVIOUS_DAY_TRAINING_Q,
    )


QUESTIONNAIRES: Dict[str, Questionnaire] = {
    DAILY: Questionnaire(
        name=DAILY,
        questions=_base_questions(DAILY_SLEEP_HOURS),
        recovery_components=(SLEEP_QUALITY, TRAINING_LOAD),
    ),
    EXTENDED: Questionnaire(
        name=EXTENDED,
        questions=_base_questions(EXTENDED_SLEEP_HOURS)
        + (WORKOUT_FOCUS_Q, LAST_WORKOUT_Q),
        recovery_components=(
            SLEEP_QUALITY,
            TRAINING_LOAD,
            WORKOUT_RECENCY,
            WORKOUT_FOCUS,
        ),
    ),
}


def default_questionnaire_name() -> str:
    return os.environ.get("READINESS_QUESTIONNAIRE", EXTENDED).strip().lower() or EXTENDED


def get_questionnaire(name: Optional[str] = None) -> Questionnaire:
    """Look up a questionnaire by name, falling back to the configured default."""
    key = (name or default_questionnaire_name()).strip().lower()
    questionnaire = QUESTIONNAIRES.get(key)
    if questionnaire is None:
        raise UnknownQuestionnaire(key)
    return questionnaire
