"""Readiness check-in Pydantic models."""

from datetime import datetime
from enum import Enum
from typing import Dict, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, model_validator


class Category(str, Enum):
    PHYSICAL = "physical"
    MENTAL = "mental"
    RECOVERY = "recovery"


class AnswerType(str, Enum):
    SINGLE_SELECT = "single-select"
    SCALE = "scale"
    MULTI_SELECT = "multi-select"


class ReadinessLevel(str, Enum):
    EXCELLENT = "excellent"
    GOOD = "good"
    MODERATE = "moderate"
    LOW = "low"


OptionValue = Union[int, str]
AnswerValue = Union[int, str, List[str]]


class AnswerOption(BaseModel):
    model_config = ConfigDict(frozen=True)

    value: OptionValue
    label: str


class Question(BaseModel):
    """One readiness question and its valid answer domain."""

    model_config = ConfigDict(frozen=True)

    id: str
    text: str
    category: Category
    answer_type: AnswerType
    icon: str = "activity"
    options: List[AnswerOption] = Field(default_factory=list)
    min: Optional[int] = None
    max: Optional[int] = None
    extended: bool = False

    @model_validator(mode="after")
    def _check_domain(self) -> "Question":
        if self.answer_type == AnswerType.SCALE:
            if self.min is None or self.max is None or self.min > self.max:
                raise ValueError(f"{self.id}: scale questions need min <= max")
        elif not self.options:
            raise ValueError(f"{self.id}: select questions need options")
        return self

    @property
    def is_multi_select(self) -> bool:
        return self.answer_type == AnswerType.MULTI_SELECT

    def option_values(self) -> List[OptionValue]:
        return [option.value for option in self.options]


class ReadinessScore(BaseModel):
    model_config = ConfigDict(frozen=True)

    physical: int = Field(ge=0, le=100)
    mental: int = Field(ge=0, le=100)
    recovery: int = Field(ge=0, le=100)
    overall: int = Field(ge=0, le=100)


class ReadinessLevels(BaseModel):
    physical: ReadinessLevel
    mental: ReadinessLevel
    recovery: ReadinessLevel
    overall: ReadinessLevel


class QuestionnaireResponse(BaseModel):
    name: str
    questions: List[Question]
    recovery_components: List[str]


class CheckinStartRequest(BaseModel):
    questionnaire: Optional[str] = None
    guided: bool = True


class AnswerRequest(BaseModel):
    value: AnswerValue


class ToggleRequest(BaseModel):
    value: str
    checked: bool


class Progress(BaseModel):
    position: int
    total: int
    current_question: Question
    can_advance: bool
    is_last: bool


class CheckinState(BaseModel):
    checkin_id: str
    questionnaire: str
    guided: bool
    started_at: datetime
    answers: Dict[str, AnswerValue]
    is_complete: bool
    remaining: int
    remaining_label: str
    finished: bool
    progress: Optional[Progress] = None


class CheckinResult(BaseModel):
    checkin_id: str
    score: ReadinessScore
    levels: ReadinessLevels
    recommendation: str
    is_complete: bool


class CheckinContinueResponse(BaseModel):
    checkin_id: str
    score: ReadinessScore
    completed_at: datetime
