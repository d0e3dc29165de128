from __future__ import annotations

import logging
from typing import Optional

from fastapi import Depends, HTTPException
from pymongo.errors import PyMongoError

from fitcheck.db import KeyValueStore
from fitcheck.dependencies import get_kv_store
from fitcheck.models.profile import (
    OnboardingStep,
    SignUpRequest,
    StoredUserProfile,
    UserData,
)

logger = logging.getLogger("fitcheck")

CURRENT_USER_KEY = "currentUser"


def profile_key(email: str) -> str:
    return f"userProfile_{email}"


def _unavailable(e: Exception) -> HTTPException:
    return HTTPException(status_code=503, detail=f"Store unavailable: {e.__class__.__name__}")


def get_profile(store: KeyValueStore, email: str) -> Optional[StoredUserProfile]:
    try:
        raw = store.get(profile_key(email))
    except PyMongoError as e:
        raise _unavailable(e)
    if raw is None:
        return None
    return StoredUserProfile.model_validate(raw)


def save_profile(store: KeyValueStore, profile: StoredUserProfile) -> None:
    """Persist the profile and point the current-user marker at it."""
    email = profile.user_data.email
    try:
        store.set(profile_key(email), profile.model_dump(mode="json"))
        store.set(CURRENT_USER_KEY, email)
    except PyMongoError as e:
        raise _unavailable(e)


def create_user(store: KeyValueStore, payload: SignUpRequest) -> StoredUserProfile:
    if get_profile(store, payload.email) is not None:
        raise HTTPException(
            status_code=409, detail="User already exists. Please sign in instead."
        )
    profile = StoredUserProfile(
        user_data=UserData(
            name=payload.name, email=payload.email, password=payload.password
        )
    )
    save_profile(store, profile)
    logger.info("User signed up: %s", payload.email)
    return profile


def authenticate_user(store: KeyValueStore, email: str, password: str) -> StoredUserProfile:
    profile = get_profile(store, email)
    if profile is None:
        raise HTTPException(
            status_code=404, detail="User not found. Please sign up first."
        )
    # Passwords are kept in plain form; there is no credential hashing.
    if profile.user_data.password != password:
        raise HTTPException(status_code=401, detail="Invalid password")
    try:
        store.set(CURRENT_USER_KEY, email)
    except PyMongoError as e:
        raise _unavailable(e)
    logger.info("User signed in: %s", email)
    return profile


def next_onboarding_step(profile: StoredUserProfile) -> OnboardingStep:
    if profile.has_completed_onboarding:
        return OnboardingStep.DASHBOARD
    return OnboardingStep.PERSONAL_INFO


def sign_out(store: KeyValueStore) -> None:
    try:
        store.delete(CURRENT_USER_KEY)
    except PyMongoError as e:
        raise _unavailable(e)


def current_user_email(store: KeyValueStore) -> Optional[str]:
    try:
        return store.get(CURRENT_USER_KEY)
    except PyMongoError as e:
        raise _unavailable(e)


def get_current_user(
    store: KeyValueStore = Depends(get_kv_store),
) -> Optional[StoredUserProfile]:
    email = current_user_email(store)
    if not email:
        return None
    return get_profile(store, email)


def require_current_user(
    user: Optional[StoredUserProfile] = Depends(get_current_user),
) -> StoredUserProfile:
    if user is None:
        raise HTTPException(status_code=401, detail="Not signed in")
    return user
