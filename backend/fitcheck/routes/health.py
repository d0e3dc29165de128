"""Health check endpoint."""

from datetime import datetime, timezone

from fastapi import APIRouter

from fitcheck.db import store_check
from fitcheck.models.health import HealthStatus
from fitcheck.services.catalog import default_questionnaire_name

router = APIRouter()


@router.get("/health", response_model=HealthStatus)
def health_check() -> HealthStatus:
    """Check API and store health status."""
    ok, summary, err = store_check()
    return HealthStatus(
        time=datetime.now(timezone.utc),
        store="ok" if ok else "error",
        store_backend=summary.get("backend", "unknown"),
        mongo_host=summary.get("host"),
        mongo_db=summary.get("db"),
        store_error=err,
        questionnaire=default_questionnaire_name(),
    )
