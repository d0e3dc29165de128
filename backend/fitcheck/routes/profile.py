"""Profile view and in-place edit routes."""

from fastapi import APIRouter, Depends, HTTPException

from fitcheck.auth import require_current_user, save_profile
from fitcheck.db import KeyValueStore
from fitcheck.dependencies import get_kv_store
from fitcheck.models.profile import (
    GoalsData,
    MAX_MAIN_GOALS,
    ProfileResponse,
    StoredUserProfile,
    UserUpdateRequest,
)
from fitcheck.routes.auth import me_response

router = APIRouter()


def _profile_response(profile: StoredUserProfile) -> ProfileResponse:
    return ProfileResponse(user=me_response(profile), goals_data=profile.goals_data)


@router.get("", response_model=ProfileResponse)
def get_profile(user: StoredUserProfile = Depends(require_current_user)) -> ProfileResponse:
    """Get the current user's profile (the password is never returned)."""
    return _profile_response(user)


@router.put("/user", response_model=ProfileResponse)
def update_user(
    payload: UserUpdateRequest,
    user: StoredUserProfile = Depends(require_current_user),
    store: KeyValueStore = Depends(get_kv_store),
) -> ProfileResponse:
    """Edit the display name or password."""
    changes = payload.model_dump(exclude_none=True)
    updated = user.model_copy(
        update={"user_data": user.user_data.model_copy(update=changes)}
    )
    save_profile(store, updated)
    return _profile_response(updated)


@router.put("/goals", response_model=ProfileResponse)
def update_goals(
    payload: GoalsData,
    user: StoredUserProfile = Depends(require_current_user),
    store: KeyValueStore = Depends(get_kv_store),
) -> ProfileResponse:
    """Replace the stored goals with an edited copy."""
    if len(set(payload.main_goals)) > MAX_MAIN_GOALS:
        raise HTTPException(
            status_code=422, detail=f"Select at most {MAX_MAIN_GOALS} main goals"
        )
    updated = user.model_copy(update={"goals_data": payload})
    save_profile(store, updated)
    return _profile_response(updated)
