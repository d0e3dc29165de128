"""Readiness scoring.

Maps a (possibly partial) set of check-in answers to physical, mental,
recovery and overall scores on a 0-100 scale. Unanswered negative-signal
questions default to their worst value so a skipped answer never inflates
the score. Every sub-score stays within [0, 100] for answers inside the
catalog domains.
"""

import math
from typing import Callable, Dict, Iterable, Mapping

from fitcheck.models.readiness import ReadinessScore
from fitcheck.services.catalog import (
    MUSCLE_GROUPS,
    SLEEP_QUALITY,
    TRAINING_LOAD,
    WORKOUT_FOCUS,
    WORKOUT_RECENCY,
    Questionnaire,
)

# Tenths, so the weighted sum stays in integer arithmetic.
OVERALL_WEIGHTS = {"physical": 4, "mental": 3, "recovery": 3}

SCALAR_DEFAULTS = {
    "overall_soreness": 5,
    "stress_level": 5,
    "previous_day_training": 3,
    "last_workout": 2,
}


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def _scalar(answers: Mapping, question_id: str) -> float:
    value = answers.get(question_id)
    # Zero falls back to the default as well, so "Today" scores as two days ago.
    if not value and question_id in SCALAR_DEFAULTS:
        return SCALAR_DEFAULTS[question_id]
    return value or 0


def _selected(answers: Mapping, question_id: str) -> int:
    return len(answers.get(question_id) or ())


def sleep_score(answers: Mapping) -> float:
    return min(100.0, (_scalar(answers, "sleep_hours") / 8) * 100)


def energy_score(answers: Mapping) -> float:
    return (_scalar(answers, "energy_level") / 5) * 100


def soreness_score(answers: Mapping) -> float:
    return ((5 - _scalar(answers, "overall_soreness") + 1) / 5) * 100


def muscle_group_score(answers: Mapping) -> float:
    count = min(_selected(answers, "sore_muscle_groups"), len(MUSCLE_GROUPS))
    if count == 0:
        return 100.0
    return ((len(MUSCLE_GROUPS) - count) / len(MUSCLE_GROUPS)) * 100


def stress_score(answers: Mapping) -> float:
    return ((5 - _scalar(answers, "stress_level") + 1) / 5) * 100


def motivation_score(answers: Mapping) -> float:
    return (_scalar(answers, "motivation") / 5) * 100


def sleep_quality_score(answers: Mapping) -> float:
    return (_scalar(answers, "sleep_quality") / 5) * 100


def training_load_score(answers: Mapping) -> float:
    return ((5 - _scalar(answers, "previous_day_training") + 1) / 5) * 100


def workout_recency_score(answers: Mapping) -> float:
    return ((4 - _scalar(answers, "last_workout") + 1) / 4) * 100


def workout_focus_score(answers: Mapping) -> float:
    count = _selected(answers, "workout_focus")
    if count == 0:
        return 100.0
    return max(50.0, 100.0 - count * 10)


RECOVERY_COMPONENTS: Dict[str, Callable[[Mapping], float]] = {
    SLEEP_QUALITY: sleep_quality_score,
    TRAINING_LOAD: training_load_score,
    WORKOUT_RECENCY: workout_recency_score,
    WORKOUT_FOCUS: workout_focus_score,
}


def _mean(values: Iterable[float]) -> float:
    values = list(values)
    return sum(values) / len(values)


def physical_readiness(answers: Mapping) -> int:
    return round_half_up(
        _mean(
            [
                sleep_score(answers),
                energy_score(answers),
                soreness_score(answers),
                muscle_group_score(answers),
            ]
        )
    )


def mental_readiness(answers: Mapping) -> int:
    return round_half_up(_mean([stress_score(answers), motivation_score(answers)]))


def recovery_readiness(answers: Mapping, components: Iterable[str]) -> int:
    scores = []
    for name in components:
        try:
            component = RECOVERY_COMPONENTS[name]
        except KeyError:
            raise ValueError(f"Unknown recovery sub-score: {name}") from None
        scores.append(component(answers))
    if not scores:
        raise ValueError("At least one recovery sub-score is required")
    return round_half_up(_mean(scores))


def overall_readiness(physical: int, mental: int, recovery: int) -> int:
    weighted = (
        physical * OVERALL_WEIGHTS["physical"]
        + mental * OVERALL_WEIGHTS["mental"]
        + recovery * OVERALL_WEIGHTS["recovery"]
    )
    return (weighted + 5) // 10


def compute_readiness(answers: Mapping, questionnaire: Questionnaire) -> ReadinessScore:
    """Compute the four readiness scores. Pure; safe to call mid-check-in."""
    physical = physical_readiness(answers)
    mental = mental_readiness(answers)
    recovery = recovery_readiness(answers, questionnaire.recovery_components)
    return ReadinessScore(
        physical=physical,
        mental=mental,
        recovery=recovery,
        overall=overall_readiness(physical, mental, recovery),
    )
