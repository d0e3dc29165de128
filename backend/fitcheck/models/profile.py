"""User profile and onboarding Pydantic models."""

import re
from datetime import date, datetime
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, Field, field_validator, model_validator

from fitcheck.models.readiness import ReadinessLevels, ReadinessScore

EMAIL_PATTERN = re.compile(r"\S+@\S+\.\S+")
MIN_PASSWORD_LENGTH = 6
MAX_MAIN_GOALS = 2


class Gender(str, Enum):
    MALE = "male"
    FEMALE = "female"
    OTHER = "other"
    PREFER_NOT_TO_SAY = "prefer-not-to-say"


class HeightUnit(str, Enum):
    FEET = "feet"
    CM = "cm"


class WeightUnit(str, Enum):
    LBS = "lbs"
    KG = "kg"


class MainGoal(str, Enum):
    BUILD_MUSCLE = "build-muscle"
    LOSE_FAT = "lose-fat"
    IMPROVE_ENDURANCE = "improve-endurance"
    INCREASE_SPEED = "increase-speed"
    ENHANCE_FLEXIBILITY = "enhance-flexibility"


class ActivityLevel(str, Enum):
    NOT_VERY_ACTIVE = "not-very-active"
    MODERATELY_ACTIVE = "moderately-active"
    ACTIVE = "active"
    VERY_ACTIVE = "very-active"


class WorkoutFrequency(str, Enum):
    ONCE = "1x"
    TWICE = "2x"
    THREE = "3x"
    FOUR = "4x"
    FIVE = "5x"
    SIX = "6x"
    DAILY = "7x"


class WorkoutDuration(str, Enum):
    SHORT = "30-45"
    STANDARD = "45-60"
    EXTENDED = "60-90"
    LONG = "90-120"


class OnboardingStep(str, Enum):
    PERSONAL_INFO = "personal-info"
    WEIGHT_GOALS = "weight-goals"
    FITNESS_GOALS = "fitness-goals"
    ACTIVITY_LEVEL = "activity-level"
    WORKOUT_PREFERENCES = "workout-preferences"
    DASHBOARD = "dashboard"


def normalize_email(value: str) -> str:
    value = (value or "").strip().lower()
    if not value:
        raise ValueError("Email is required")
    if not EMAIL_PATTERN.search(value):
        raise ValueError("Email is invalid")
    return value


def _required_text(value: str, message: str) -> str:
    if not (value or "").strip():
        raise ValueError(message)
    return value.strip()


class UserData(BaseModel):
    name: str
    email: str
    password: str

    @field_validator("name")
    @classmethod
    def _name(cls, value: str) -> str:
        return _required_text(value, "Name is required")

    @field_validator("email")
    @classmethod
    def _email(cls, value: str) -> str:
        return normalize_email(value)

    @field_validator("password")
    @classmethod
    def _password(cls, value: str) -> str:
        if not (value or "").strip():
            raise ValueError("Password is required")
        if len(value) < MIN_PASSWORD_LENGTH:
            raise ValueError(
                f"Password must be at least {MIN_PASSWORD_LENGTH} characters"
            )
        return value


class GoalsData(BaseModel):
    birthday: Optional[date] = None
    gender: Optional[Gender] = None
    height_unit: HeightUnit = HeightUnit.FEET
    height_feet: Optional[int] = None
    height_inches: Optional[int] = None
    height_cm: Optional[float] = None
    current_weight: Optional[float] = None
    goal_weight: Optional[float] = None
    weight_unit: WeightUnit = WeightUnit.LBS
    main_goals: List[MainGoal] = Field(default_factory=list)
    activity_level: Optional[ActivityLevel] = None
    workout_frequency: Optional[WorkoutFrequency] = None
    workout_duration: Optional[WorkoutDuration] = None


class StoredUserProfile(BaseModel):
    user_data: UserData
    goals_data: GoalsData = Field(default_factory=GoalsData)
    has_completed_onboarding: bool = False


class SignUpRequest(UserData):
    confirm_password: str

    @model_validator(mode="after")
    def _passwords_match(self) -> "SignUpRequest":
        if not self.confirm_password.strip():
            raise ValueError("Please confirm your password")
        if self.password != self.confirm_password:
            raise ValueError("Passwords do not match")
        return self


class SignInRequest(BaseModel):
    email: str
    password: str

    @field_validator("email")
    @classmethod
    def _email(cls, value: str) -> str:
        return normalize_email(value)

    @field_validator("password")
    @classmethod
    def _password(cls, value: str) -> str:
        if not (value or "").strip():
            raise ValueError("Password is required")
        return value


class PersonalInfoRequest(BaseModel):
    birthday: date
    gender: Gender
    height_unit: HeightUnit = HeightUnit.FEET
    height_feet: Optional[int] = Field(default=None, ge=0)
    height_inches: Optional[int] = Field(default=None, ge=0, le=11)
    height_cm: Optional[float] = Field(default=None, gt=0)

    @model_validator(mode="after")
    def _height_present(self) -> "PersonalInfoRequest":
        if self.height_unit == HeightUnit.FEET:
            if self.height_feet is None:
                raise ValueError("Height in feet is required")
            if self.height_inches is None:
                raise ValueError("Height in inches is required")
        elif self.height_cm is None:
            raise ValueError("Height in cm is required")
        return self


class WeightGoalsRequest(BaseModel):
    weight_unit: WeightUnit = WeightUnit.LBS
    current_weight: float = Field(gt=0)
    goal_weight: float = Field(gt=0)


class FitnessGoalsRequest(BaseModel):
    main_goals: List[MainGoal]

    @field_validator("main_goals")
    @classmethod
    def _goal_count(cls, value: List[MainGoal]) -> List[MainGoal]:
        goals = list(dict.fromkeys(value))
        if not goals:
            raise ValueError("Please select at least one main goal")
        if len(goals) > MAX_MAIN_GOALS:
            raise ValueError(f"Select at most {MAX_MAIN_GOALS} main goals")
        return goals


class ActivityLevelRequest(BaseModel):
    activity_level: ActivityLevel


class WorkoutPreferencesRequest(BaseModel):
    workout_frequency: WorkoutFrequency
    workout_duration: WorkoutDuration


class UserUpdateRequest(BaseModel):
    name: Optional[str] = None
    password: Optional[str] = None

    @field_validator("name")
    @classmethod
    def _name(cls, value: Optional[str]) -> Optional[str]:
        if value is None:
            return value
        return _required_text(value, "Name is required")

    @field_validator("password")
    @classmethod
    def _password(cls, value: Optional[str]) -> Optional[str]:
        if value is not None and len(value) < MIN_PASSWORD_LENGTH:
            raise ValueError(
                f"Password must be at least {MIN_PASSWORD_LENGTH} characters"
            )
        return value


class MeResponse(BaseModel):
    name: str
    email: str
    has_completed_onboarding: bool = False


class SignInResponse(BaseModel):
    user: MeResponse
    next_step: OnboardingStep


class OnboardingResponse(BaseModel):
    goals_data: GoalsData
    next_step: OnboardingStep
    has_completed_onboarding: bool


class ProfileResponse(BaseModel):
    user: MeResponse
    goals_data: GoalsData


class DashboardState(BaseModel):
    readiness: Optional[ReadinessScore] = None
    checkin_id: Optional[str] = None
    completed_at: Optional[datetime] = None


class DashboardResponse(BaseModel):
    greeting: str
    has_completed_checkin: bool
    readiness: Optional[ReadinessScore] = None
    levels: Optional[ReadinessLevels] = None
    recommendation: Optional[str] = None
    completed_at: Optional[datetime] = None
