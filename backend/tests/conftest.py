"""Pytest configuration and fixtures."""

import os

os.environ["STORE_BACKEND"] = "memory"
os.environ.setdefault("READINESS_QUESTIONNAIRE", "extended")

import pytest
from fastapi.testclient import TestClient

from fitcheck.db import get_store
from fitcheck.routes.checkins import CHECKINS

BEST_CASE_ANSWERS = {
    "sleep_hours": 8,
    "sleep_quality": 5,
    "energy_level": 5,
    "overall_soreness": 1,
    "sore_muscle_groups": [],
    "stress_level": 1,
    "motivation": 5,
    "previous_day_training": 1,
}


@pytest.fixture(autouse=True)
def reset_state(monkeypatch):
    """Fresh in-memory store and check-in cache for every test."""
    monkeypatch.setenv("STORE_BACKEND", "memory")
    get_store.cache_clear()
    CHECKINS.clear()
    yield
    get_store.cache_clear()
    CHECKINS.clear()


@pytest.fixture
def client():
    from fitcheck.main import app

    return TestClient(app)


@pytest.fixture
def onboarded_client(client):
    """A client whose current user has finished onboarding."""
    client.post(
        "/auth/signup",
        json={
            "name": "Sam Rivera",
            "email": "sam@example.com",
            "password": "secret1",
            "confirm_password": "secret1",
        },
    )
    client.put(
        "/onboarding/personal-info",
        json={
            "birthday": "1994-03-02",
            "gender": "prefer-not-to-say",
            "height_unit": "cm",
            "height_cm": 172,
        },
    )
    client.put(
        "/onboarding/weight-goals",
        json={"weight_unit": "kg", "current_weight": 70, "goal_weight": 68},
    )
    client.put("/onboarding/fitness-goals", json={"main_goals": ["lose-fat"]})
    client.put("/onboarding/activity-level", json={"activity_level": "active"})
    client.put(
        "/onboarding/workout-preferences",
        json={"workout_frequency": "4x", "workout_duration": "45-60"},
    )
    return client
