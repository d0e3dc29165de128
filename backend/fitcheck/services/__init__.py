"""Readiness scoring and check-in services."""

from fitcheck.services.catalog import Questionnaire, get_questionnaire
from fitcheck.services.collector import CheckinSession, ResponseCollector
from fitcheck.services.scoring import compute_readiness
from fitcheck.services.recommendation import level, levels, recommend

__all__ = [
    "Questionnaire",
    "get_questionnaire",
    "CheckinSession",
    "ResponseCollector",
    "compute_readiness",
    "level",
    "levels",
    "recommend",
]
