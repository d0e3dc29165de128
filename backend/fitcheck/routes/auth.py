"""Sign-up, sign-in and sign-out routes."""

from fastapi import APIRouter, Depends

from fitcheck.auth import (
    authenticate_user,
    create_user,
    next_onboarding_step,
    sign_out,
)
from fitcheck.db import KeyValueStore
from fitcheck.dependencies import get_kv_store
from fitcheck.models.profile import (
    MeResponse,
    OnboardingStep,
    SignInRequest,
    SignInResponse,
    SignUpRequest,
    StoredUserProfile,
)

router = APIRouter()


def me_response(profile: StoredUserProfile) -> MeResponse:
    return MeResponse(
        name=profile.user_data.name,
        email=profile.user_data.email,
        has_completed_onboarding=profile.has_completed_onboarding,
    )


@router.post("/signup", response_model=SignInResponse)
def signup(
    payload: SignUpRequest, store: KeyValueStore = Depends(get_kv_store)
) -> SignInResponse:
    """Create a user profile and sign it in."""
    profile = create_user(store, payload)
    return SignInResponse(
        user=me_response(profile), next_step=OnboardingStep.PERSONAL_INFO
    )


@router.post("/signin", response_model=SignInResponse)
def signin(
    payload: SignInRequest, store: KeyValueStore = Depends(get_kv_store)
) -> SignInResponse:
    """Sign in and resume onboarding where it was left off."""
    profile = authenticate_user(store, payload.email, payload.password)
    return SignInResponse(
        user=me_response(profile), next_step=next_onboarding_step(profile)
    )


@router.post("/signout")
def signout(store: KeyValueStore = Depends(get_kv_store)):
    """Clear the current-user pointer."""
    sign_out(store)
    return {"signed_out": True}
