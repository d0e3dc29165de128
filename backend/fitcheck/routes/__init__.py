"""API route modules for the FitCheck readiness API."""

from fastapi import Depends

from fitcheck.auth import require_current_user
from fitcheck.models.profile import MeResponse, StoredUserProfile
from fitcheck.routes.health import router as health_router
from fitcheck.routes.auth import me_response, router as auth_router
from fitcheck.routes.onboarding import router as onboarding_router
from fitcheck.routes.profile import router as profile_router
from fitcheck.routes.checkins import router as checkins_router
from fitcheck.routes.dashboard import router as dashboard_router


def register_routes(app) -> None:
    """Register all route modules with the FastAPI app."""
    app.include_router(health_router)
    app.include_router(auth_router, prefix="/auth", tags=["auth"])
    app.include_router(onboarding_router, prefix="/onboarding", tags=["onboarding"])
    app.include_router(profile_router, prefix="/profile", tags=["profile"])
    app.include_router(checkins_router, prefix="/checkins", tags=["checkins"])
    app.include_router(dashboard_router, prefix="/dashboard", tags=["dashboard"])

    # Standalone /me endpoint at root level
    @app.get("/me", response_model=MeResponse)
    def me(user: StoredUserProfile = Depends(require_current_user)) -> MeResponse:
        """Get current user information."""
        return me_response(user)
