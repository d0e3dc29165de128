"""Dashboard state: the latest readiness score handed over by a check-in."""

import logging
from datetime import date, datetime, timezone
from typing import Callable, Optional

from fitcheck.db import KeyValueStore
from fitcheck.models.profile import DashboardResponse, DashboardState, StoredUserProfile
from fitcheck.models.readiness import ReadinessScore
from fitcheck.services.recommendation import levels, recommend

logger = logging.getLogger("fitcheck")


def readiness_key(email: str) -> str:
    return f"readiness_{email}"


def get_dashboard_state(store: KeyValueStore, email: str) -> DashboardState:
    raw = store.get(readiness_key(email))
    if raw is None:
        return DashboardState()
    return DashboardState.model_validate(raw)


def readiness_receiver(
    store: KeyValueStore, email: str, checkin_id: str
) -> Callable[[ReadinessScore], None]:
    """Build the callback a check-in invokes with its final score."""

    def on_readiness_complete(score: ReadinessScore) -> None:
        state = DashboardState(
            readiness=score,
            checkin_id=checkin_id,
            completed_at=datetime.now(timezone.utc),
        )
        store.set(readiness_key(email), state.model_dump(mode="json"))
        logger.info("Dashboard readiness updated for %s: %s", email, score.model_dump())

    return on_readiness_complete


def build_dashboard(
    profile: StoredUserProfile,
    state: DashboardState,
    today: Optional[date] = None,
) -> DashboardResponse:
    """The check-in card is shown until a check-in completes on the current (UTC) day."""
    greeting = f"Welcome back, {profile.user_data.name}"
    if state.readiness is None:
        return DashboardResponse(greeting=greeting, has_completed_checkin=False)
    today = today or datetime.now(timezone.utc).date()
    completed_today = (
        state.completed_at is not None
        and state.completed_at.astimezone(timezone.utc).date() == today
    )
    return DashboardResponse(
        greeting=greeting,
        has_completed_checkin=completed_today,
        readiness=state.readiness,
        levels=levels(state.readiness),
        recommendation=recommend(state.readiness.overall, brief=True),
        completed_at=state.completed_at,
    )
