"""Errors raised by the readiness core."""

from typing import Any, List, Optional


class ReadinessError(Exception):
    """Base class for readiness check-in errors."""


class UnknownQuestionnaire(ReadinessError):
    def __init__(self, name: str):
        super().__init__(f"Unknown questionnaire: {name}")
        self.name = name


class UnknownQuestion(ReadinessError):
    def __init__(self, question_id: str):
        super().__init__(f"Unknown question: {question_id}")
        self.question_id = question_id


class InvalidAnswer(ReadinessError):
    """A value outside the question's declared answer domain."""

    def __init__(self, question_id: str, value: Any, reason: str):
        super().__init__(f"Invalid answer for {question_id}: {reason}")
        self.question_id = question_id
        self.value = value
        self.reason = reason


class IncompleteResponse(ReadinessError):
    """A final score was requested while required questions are unanswered."""

    def __init__(self, missing: Optional[List[str]] = None):
        self.missing = list(missing or [])
        super().__init__(
            f"{len(self.missing)} question(s) remaining: {', '.join(self.missing)}"
        )


class CheckinAlreadyCompleted(ReadinessError):
    """The check-in's score was already handed to the dashboard."""

    def __init__(self, checkin_id: str):
        label = f"Check-in {checkin_id}" if checkin_id else "Check-in"
        super().__init__(f"{label} is already completed")
        self.checkin_id = checkin_id
