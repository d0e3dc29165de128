"""Pydantic models for the FitCheck readiness API."""

from fitcheck.models.readiness import (
    Category,
    AnswerType,
    ReadinessLevel,
    AnswerOption,
    Question,
    ReadinessScore,
    ReadinessLevels,
    QuestionnaireResponse,
    CheckinStartRequest,
    AnswerRequest,
    ToggleRequest,
    Progress,
    CheckinState,
    CheckinResult,
    CheckinContinueResponse,
)
from fitcheck.models.profile import (
    UserData,
    GoalsData,
    StoredUserProfile,
    SignUpRequest,
    SignInRequest,
    PersonalInfoRequest,
    WeightGoalsRequest,
    FitnessGoalsRequest,
    ActivityLevelRequest,
    WorkoutPreferencesRequest,
    UserUpdateRequest,
    MeResponse,
    SignInResponse,
    OnboardingStep,
    OnboardingResponse,
    ProfileResponse,
    DashboardState,
    DashboardResponse,
)
from fitcheck.models.health import HealthStatus

__all__ = [
    # Readiness
    "Category",
    "AnswerType",
    "ReadinessLevel",
    "AnswerOption",
    "Question",
    "ReadinessScore",
    "ReadinessLevels",
    "QuestionnaireResponse",
    "CheckinStartRequest",
    "AnswerRequest",
    "ToggleRequest",
    "Progress",
    "CheckinState",
    "CheckinResult",
    "CheckinContinueResponse",
    # Profile
    "UserData",
    "GoalsData",
    "StoredUserProfile",
    "SignUpRequest",
    "SignInRequest",
    "PersonalInfoRequest",
    "WeightGoalsRequest",
    "FitnessGoalsRequest",
    "ActivityLevelRequest",
    "WorkoutPreferencesRequest",
    "UserUpdateRequest",
    "MeResponse",
    "SignInResponse",
    "OnboardingStep",
    "OnboardingResponse",
    "ProfileResponse",
    "DashboardState",
    "DashboardResponse",
    # Health
    "HealthStatus",
]
