"""Readiness level labels and training recommendations."""

from typing import List, Tuple

from fitcheck.models.readiness import ReadinessLevel, ReadinessLevels, ReadinessScore

# (lower bound, level, full recommendation, dashboard recommendation)
TIERS: List[Tuple[int, ReadinessLevel, str, str]] = [
    (
        80,
        ReadinessLevel.EXCELLENT,
        "You're in an excellent state today! This is your optimal performance "
        "window. Go ahead and engage in high-intensity training protocols.",
        "You're in an excellent state today! This is your optimal performance window.",
    ),
    (
        60,
        ReadinessLevel.GOOD,
        "You're showing solid readiness today! Your body is prepared for "
        "moderate to high intensity training.",
        "You're showing solid readiness today! Your body is prepared for "
        "moderate to high intensity training.",
    ),
    (
        40,
        ReadinessLevel.MODERATE,
        "You're in a moderate readiness state today. Focus on technique "
        "refinement and active recovery protocols.",
        "You're in a moderate readiness state today. Focus on technique "
        "refinement and active recovery.",
    ),
    (
        0,
        ReadinessLevel.LOW,
        "Your body is asking for recovery today. Prioritize restoration, "
        "hydration, and system reset.",
        "Your body is asking for recovery today. Prioritize restoration and "
        "system reset.",
    ),
]


def _tier(score: int) -> Tuple[int, ReadinessLevel, str, str]:
    if not 0 <= score <= 100:
        raise ValueError(f"Readiness score must be within [0, 100], got {score}")
    for tier in TIERS:
        if score >= tier[0]:
            return tier
    raise AssertionError("unreachable")


def level(score: int) -> ReadinessLevel:
    return _tier(score)[1]


def recommend(overall: int, brief: bool = False) -> str:
    """Training recommendation for an overall readiness score."""
    _, _, full, short = _tier(overall)
    return short if brief else full


def levels(score: ReadinessScore) -> ReadinessLevels:
    return ReadinessLevels(
        physical=level(score.physical),
        mental=level(score.mental),
        recovery=level(score.recovery),
        overall=level(score.overall),
    )
