"""Dashboard route for the signed-in athlete."""

from fastapi import APIRouter, Depends, HTTPException
from pymongo.errors import PyMongoError

from fitcheck.auth import require_current_user
from fitcheck.db import KeyValueStore
from fitcheck.dependencies import get_kv_store
from fitcheck.models.profile import DashboardResponse, StoredUserProfile
from fitcheck.services.dashboard import build_dashboard, get_dashboard_state

router = APIRouter()


@router.get("", response_model=DashboardResponse)
def dashboard(
    user: StoredUserProfile = Depends(require_current_user),
    store: KeyValueStore = Depends(get_kv_store),
) -> DashboardResponse:
    """Greeting, today's check-in status and the latest readiness score."""
    if not user.has_completed_onboarding:
        raise HTTPException(status_code=409, detail="Onboarding is not complete")
    try:
        state = get_dashboard_state(store, user.user_data.email)
    except PyMongoError as e:
        raise HTTPException(
            status_code=503, detail=f"Store unavailable: {e.__class__.__name__}"
        )
    return build_dashboard(user, state)
