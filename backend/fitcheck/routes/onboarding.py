"""Onboarding wizard routes: one route per profile step."""

import logging

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from fitcheck.auth import require_current_user, save_profile
from fitcheck.db import KeyValueStore
from fitcheck.dependencies import get_kv_store
from fitcheck.models.profile import (
    ActivityLevelRequest,
    FitnessGoalsRequest,
    OnboardingResponse,
    OnboardingStep,
    PersonalInfoRequest,
    StoredUserProfile,
    WeightGoalsRequest,
    WorkoutPreferencesRequest,
)

router = APIRouter()
logger = logging.getLogger("fitcheck")


def _apply_step(
    store: KeyValueStore,
    profile: StoredUserProfile,
    payload: BaseModel,
    next_step: OnboardingStep,
    completes_onboarding: bool = False,
) -> OnboardingResponse:
    """Merge one step's fields into the stored goals and persist."""
    goals = profile.goals_data.model_copy(update=payload.model_dump())
    updated = profile.model_copy(
        update={
            "goals_data": goals,
            "has_completed_onboarding": profile.has_completed_onboarding
            or completes_onboarding,
        }
    )
    save_profile(store, updated)
    logger.info(
        "Onboarding step stored for %s: %s",
        profile.user_data.email,
        sorted(payload.model_fields_set),
    )
    return OnboardingResponse(
        goals_data=goals,
        next_step=next_step,
        has_completed_onboarding=updated.has_completed_onboarding,
    )


@router.put("/personal-info", response_model=OnboardingResponse)
def personal_info(
    payload: PersonalInfoRequest,
    user: StoredUserProfile = Depends(require_current_user),
    store: KeyValueStore = Depends(get_kv_store),
) -> OnboardingResponse:
    return _apply_step(store, user, payload, OnboardingStep.WEIGHT_GOALS)


@router.put("/weight-goals", response_model=OnboardingResponse)
def weight_goals(
    payload: WeightGoalsRequest,
    user: StoredUserProfile = Depends(require_current_user),
    store: KeyValueStore = Depends(get_kv_store),
) -> OnboardingResponse:
    return _apply_step(store, user, payload, OnboardingStep.FITNESS_GOALS)


@router.put("/fitness-goals", response_model=OnboardingResponse)
def fitness_goals(
    payload: FitnessGoalsRequest,
    user: StoredUserProfile = Depends(require_current_user),
    store: KeyValueStore = Depends(get_kv_store),
) -> OnboardingResponse:
    return _apply_step(store, user, payload, OnboardingStep.ACTIVITY_LEVEL)


@router.put("/activity-level", response_model=OnboardingResponse)
def activity_level(
    payload: ActivityLevelRequest,
    user: StoredUserProfile = Depends(require_current_user),
    store: KeyValueStore = Depends(get_kv_store),
) -> OnboardingResponse:
    return _apply_step(store, user, payload, OnboardingStep.WORKOUT_PREFERENCES)


@router.put("/workout-preferences", response_model=OnboardingResponse)
def workout_preferences(
    payload: WorkoutPreferencesRequest,
    user: StoredUserProfile = Depends(require_current_user),
    store: KeyValueStore = Depends(get_kv_store),
) -> OnboardingResponse:
    """Last step; marks onboarding complete."""
    return _apply_step(
        store, user, payload, OnboardingStep.DASHBOARD, completes_onboarding=True
    )
