"""Response collection for a readiness check-in."""

import logging
from collections.abc import Collection
from datetime import datetime, timezone
from typing import Callable, Dict, FrozenSet, List, Mapping, Optional, Union

from fitcheck.errors import CheckinAlreadyCompleted, IncompleteResponse, InvalidAnswer
from fitcheck.models.readiness import AnswerType, Question, ReadinessScore
from fitcheck.services.catalog import Questionnaire
from fitcheck.services.scoring import compute_readiness

logger = logging.getLogger("fitcheck")

Answer = Union[int, str, FrozenSet[str]]
ReadinessCallback = Callable[[ReadinessScore], None]


def validate_answer(question: Question, value: object) -> Answer:
    """Check a value against the question's domain and return its stored form."""
    if question.answer_type == AnswerType.SCALE:
        if isinstance(value, bool) or not isinstance(value, int):
            raise InvalidAnswer(question.id, value, "scale answers must be integers")
        if not question.min <= value <= question.max:
            raise InvalidAnswer(
                question.id,
                value,
                f"{value} is outside [{question.min}, {question.max}]",
            )
        return value

    if question.answer_type == AnswerType.SINGLE_SELECT:
        if isinstance(value, bool):
            raise InvalidAnswer(question.id, value, "not a declared option")
        for option in question.options:
            if type(option.value) is type(value) and option.value == value:
                return value
        raise InvalidAnswer(question.id, value, f"{value!r} is not a declared option")

    if isinstance(value, (str, bytes)) or not isinstance(value, Collection):
        raise InvalidAnswer(question.id, value, "multi-select answers must be a list")
    allowed = set(question.option_values())
    tokens = frozenset(value)
    unknown = sorted(str(token) for token in tokens if token not in allowed)
    if unknown:
        raise InvalidAnswer(
            question.id, value, f"unknown option(s): {', '.join(unknown)}"
        )
    return tokens


class ResponseCollector:
    """Gathers one answer per question, validating each write."""

    def __init__(self, questionnaire: Questionnaire, checkin_id: str = ""):
        self.questionnaire = questionnaire
        self.checkin_id = checkin_id
        self.sealed = False
        self._answers: Dict[str, Answer] = {}

    def seal(self) -> None:
        """Freeze the answers; later writes raise CheckinAlreadyCompleted."""
        self.sealed = True

    def _check_open(self) -> None:
        if self.sealed:
            raise CheckinAlreadyCompleted(self.checkin_id)

    def record(self, question_id: str, value: object) -> Answer:
        self._check_open()
        question = self.questionnaire.question(question_id)
        stored = validate_answer(question, value)
        self._answers[question_id] = stored
        return stored

    def toggle(self, question_id: str, token: str, checked: bool) -> FrozenSet[str]:
        """Add or remove one multi-select token."""
        self._check_open()
        question = self.questionnaire.question(question_id)
        if not question.is_multi_select:
            raise InvalidAnswer(question_id, token, "toggle applies to multi-select only")
        current = self._answers.get(question_id, frozenset())
        updated = current | {token} if checked else current - {token}
        return self.record(question_id, updated)

    def get(self, question_id: str) -> Optional[Answer]:
        return self._answers.get(question_id)

    def is_answered(self, question: Question) -> bool:
        # Zero selections is a valid terminal state for multi-select.
        return question.is_multi_select or question.id in self._answers

    def missing(self) -> List[str]:
        return [
            question.id
            for question in self.questionnaire.questions
            if not self.is_answered(question)
        ]

    def remaining(self) -> int:
        return len(self.missing())

    def is_complete(self) -> bool:
        return not self.missing()

    def answers(self) -> Mapping[str, Answer]:
        return dict(self._answers)

    def clear(self) -> None:
        self._check_open()
        self._answers.clear()


def remaining_label(count: int) -> str:
    if count == 0:
        return "All questions answered"
    return f"{count} remaining"


class CheckinSession:
    """One check-in: a collector plus wizard cursor and completion state.

    In guided mode questions are answered one at a time in catalog order and
    ``advance()`` from the last question finishes the session. Otherwise the
    whole checklist is answered at once and ``submit()`` finishes it.
    ``on_readiness_complete`` is invoked at most once, from ``continue_``.
    """

    def __init__(
        self,
        checkin_id: str,
        questionnaire: Questionnaire,
        guided: bool = True,
        on_readiness_complete: Optional[ReadinessCallback] = None,
    ):
        self.checkin_id = checkin_id
        self.questionnaire = questionnaire
        self.guided = guided
        self.collector = ResponseCollector(questionnaire, checkin_id)
        self.on_readiness_complete = on_readiness_complete
        self.started_at = datetime.now(timezone.utc)
        self.cursor = 0
        self.finished = False
        self.completed_at: Optional[datetime] = None
        self.final_score: Optional[ReadinessScore] = None

    @property
    def total(self) -> int:
        return len(self.questionnaire)

    @property
    def position(self) -> int:
        return self.cursor + 1

    @property
    def current_question(self) -> Question:
        return self.questionnaire.questions[self.cursor]

    @property
    def is_last(self) -> bool:
        return self.cursor == self.total - 1

    def can_advance(self) -> bool:
        return self.collector.is_answered(self.current_question)

    def advance(self) -> bool:
        """Move to the next question; returns True once the last one is passed."""
        if not self.can_advance():
            raise IncompleteResponse([self.current_question.id])
        if self.is_last:
            self._finish()
            return True
        self.cursor += 1
        return False

    def retreat(self) -> None:
        if self.cursor > 0:
            self.cursor -= 1

    def submit(self) -> None:
        self._finish()

    def _finish(self) -> None:
        missing = self.collector.missing()
        if missing:
            raise IncompleteResponse(missing)
        self.finished = True

    def preview(self) -> ReadinessScore:
        return compute_readiness(self.collector.answers(), self.questionnaire)

    def result(self) -> ReadinessScore:
        if self.final_score is not None:
            return self.final_score
        if not self.finished:
            raise IncompleteResponse(self.collector.missing())
        return compute_readiness(self.collector.answers(), self.questionnaire)

    def continue_(self) -> ReadinessScore:
        """Hand the final score to the dashboard; only the first call does so."""
        if self.completed_at is not None:
            raise CheckinAlreadyCompleted(self.checkin_id)
        score = self.result()
        if self.on_readiness_complete is not None:
            self.on_readiness_complete(score)
        # Only a successful hand-off marks the check-in complete.
        self.completed_at = datetime.now(timezone.utc)
        self.final_score = score
        self.collector.seal()
        logger.info("Check-in %s complete: overall=%s", self.checkin_id, score.overall)
        return score

    def reset(self) -> None:
        if self.completed_at is not None:
            raise CheckinAlreadyCompleted(self.checkin_id)
        self.collector.clear()
        self.cursor = 0
        self.finished = False
