"""Daily readiness check-in routes."""

import logging
import os
from datetime import datetime, timedelta, timezone
from typing import Dict, Optional
from uuid import uuid4

from fastapi import APIRouter, Depends, HTTPException
from pymongo.errors import PyMongoError

from fitcheck.auth import require_current_user
from fitcheck.db import KeyValueStore
from fitcheck.dependencies import get_kv_store
from fitcheck.errors import (
    CheckinAlreadyCompleted,
    IncompleteResponse,
    InvalidAnswer,
    UnknownQuestion,
    UnknownQuestionnaire,
)
from fitcheck.models.profile import StoredUserProfile
from fitcheck.models.readiness import (
    AnswerRequest,
    CheckinContinueResponse,
    CheckinResult,
    CheckinStartRequest,
    CheckinState,
    Progress,
    QuestionnaireResponse,
    ToggleRequest,
)
from fitcheck.services.catalog import Questionnaire, get_questionnaire
from fitcheck.services.collector import CheckinSession, remaining_label
from fitcheck.services.dashboard import readiness_receiver
from fitcheck.services.recommendation import levels, recommend

router = APIRouter()
logger = logging.getLogger("fitcheck")

# In-memory cache for active check-ins
CHECKINS: Dict[str, CheckinSession] = {}


def _max_age_hours() -> float:
    return float(os.environ.get("CHECKIN_MAX_AGE_HOURS", "24"))


def sweep_checkins(max_age_hours: float, now: Optional[datetime] = None) -> int:
    """Drop cached check-ins started more than ``max_age_hours`` ago."""
    cutoff = (now or datetime.now(timezone.utc)) - timedelta(hours=max_age_hours)
    stale = [cid for cid, session in CHECKINS.items() if session.started_at < cutoff]
    for checkin_id in stale:
        CHECKINS.pop(checkin_id, None)
    if stale:
        logger.info("Dropped %d stale check-in(s)", len(stale))
    return len(stale)


def _questionnaire(name: Optional[str]) -> Questionnaire:
    try:
        return get_questionnaire(name)
    except UnknownQuestionnaire as e:
        raise HTTPException(status_code=404, detail=str(e))


def _load_checkin(checkin_id: str) -> CheckinSession:
    session = CHECKINS.get(checkin_id)
    if session is None:
        raise HTTPException(status_code=404, detail="Check-in not found")
    return session


def _incomplete(e: IncompleteResponse) -> HTTPException:
    return HTTPException(
        status_code=422,
        detail={
            "message": "Check-in data is incomplete",
            "missing": e.missing,
            "remaining": remaining_label(len(e.missing)),
        },
    )


def _serialize_answers(session: CheckinSession) -> dict:
    answers = {}
    for question_id, value in session.collector.answers().items():
        answers[question_id] = sorted(value) if isinstance(value, frozenset) else value
    return answers


def _state(session: CheckinSession) -> CheckinState:
    collector = session.collector
    remaining = collector.remaining()
    progress = None
    if session.guided:
        progress = Progress(
            position=session.position,
            total=session.total,
            current_question=session.current_question,
            can_advance=session.can_advance(),
            is_last=session.is_last,
        )
    return CheckinState(
        checkin_id=session.checkin_id,
        questionnaire=session.questionnaire.name,
        guided=session.guided,
        started_at=session.started_at,
        answers=_serialize_answers(session),
        is_complete=collector.is_complete(),
        remaining=remaining,
        remaining_label=remaining_label(remaining),
        finished=session.finished,
        progress=progress,
    )


@router.get("/questions", response_model=QuestionnaireResponse)
def list_questions(questionnaire: Optional[str] = None) -> QuestionnaireResponse:
    """Get the question catalog for a questionnaire."""
    config = _questionnaire(questionnaire)
    return QuestionnaireResponse(
        name=config.name,
        questions=list(config.questions),
        recovery_components=list(config.recovery_components),
    )


@router.post("/start", response_model=CheckinState)
def start_checkin(
    payload: CheckinStartRequest,
    user: StoredUserProfile = Depends(require_current_user),
    store: KeyValueStore = Depends(get_kv_store),
) -> CheckinState:
    """Start a new check-in session for the current user."""
    sweep_checkins(_max_age_hours())
    config = _questionnaire(payload.questionnaire)
    checkin_id = str(uuid4())
    session = CheckinSession(
        checkin_id=checkin_id,
        questionnaire=config,
        guided=payload.guided,
        on_readiness_complete=readiness_receiver(
            store, user.user_data.email, checkin_id
        ),
    )
    CHECKINS[checkin_id] = session
    logger.info(
        "Check-in %s started for %s (%s, guided=%s)",
        checkin_id,
        user.user_data.email,
        config.name,
        payload.guided,
    )
    return _state(session)


@router.post("/cleanup-abandoned")
def cleanup_abandoned_checkins(max_age_hours: Optional[float] = None):
    """Drop check-ins older than max_age_hours (default CHECKIN_MAX_AGE_HOURS)."""
    if max_age_hours is None:
        max_age_hours = _max_age_hours()
    removed = sweep_checkins(max_age_hours)
    return {"removed": removed, "active": len(CHECKINS)}


@router.get("/{checkin_id}", response_model=CheckinState)
def get_checkin(checkin_id: str) -> CheckinState:
    """Get answers, progress and completeness of a check-in."""
    return _state(_load_checkin(checkin_id))


@router.put("/{checkin_id}/answers/{question_id}", response_model=CheckinState)
def record_answer(checkin_id: str, question_id: str, payload: AnswerRequest) -> CheckinState:
    """Record one answer; out-of-domain values are rejected."""
    session = _load_checkin(checkin_id)
    try:
        session.collector.record(question_id, payload.value)
    except UnknownQuestion as e:
        raise HTTPException(status_code=404, detail=str(e))
    except InvalidAnswer as e:
        raise HTTPException(
            status_code=422,
            detail={"question_id": e.question_id, "message": e.reason},
        )
    except CheckinAlreadyCompleted as e:
        raise HTTPException(status_code=409, detail=str(e))
    return _state(session)


@router.post("/{checkin_id}/answers/{question_id}/toggle", response_model=CheckinState)
def toggle_answer(checkin_id: str, question_id: str, payload: ToggleRequest) -> CheckinState:
    """Check or uncheck one option of a multi-select question."""
    session = _load_checkin(checkin_id)
    try:
        session.collector.toggle(question_id, payload.value, payload.checked)
    except UnknownQuestion as e:
        raise HTTPException(status_code=404, detail=str(e))
    except InvalidAnswer as e:
        raise HTTPException(
            status_code=422,
            detail={"question_id": e.question_id, "message": e.reason},
        )
    except CheckinAlreadyCompleted as e:
        raise HTTPException(status_code=409, detail=str(e))
    return _state(session)


@router.post("/{checkin_id}/advance", response_model=CheckinState)
def advance_checkin(checkin_id: str) -> CheckinState:
    """Move to the next question; past the last one the check-in is finished."""
    session = _load_checkin(checkin_id)
    try:
        session.advance()
    except IncompleteResponse as e:
        raise _incomplete(e)
    return _state(session)


@router.post("/{checkin_id}/retreat", response_model=CheckinState)
def retreat_checkin(checkin_id: str) -> CheckinState:
    """Go back one question."""
    session = _load_checkin(checkin_id)
    session.retreat()
    return _state(session)


@router.post("/{checkin_id}/submit", response_model=CheckinResult)
def submit_checkin(checkin_id: str) -> CheckinResult:
    """Submit a single-page check-in once every required question is answered."""
    session = _load_checkin(checkin_id)
    try:
        session.submit()
    except IncompleteResponse as e:
        raise _incomplete(e)
    return get_result(checkin_id)


@router.get("/{checkin_id}/preview", response_model=CheckinResult)
def preview_checkin(checkin_id: str) -> CheckinResult:
    """Score the answers so far, using defaults for unanswered questions."""
    session = _load_checkin(checkin_id)
    score = session.preview()
    return CheckinResult(
        checkin_id=checkin_id,
        score=score,
        levels=levels(score),
        recommendation=recommend(score.overall),
        is_complete=session.collector.is_complete(),
    )


@router.get("/{checkin_id}/result", response_model=CheckinResult)
def get_result(checkin_id: str) -> CheckinResult:
    """Get the final scores, levels and recommendation of a finished check-in."""
    session = _load_checkin(checkin_id)
    if not session.finished:
        raise HTTPException(status_code=409, detail="Check-in is not finished")
    score = session.result()
    return CheckinResult(
        checkin_id=checkin_id,
        score=score,
        levels=levels(score),
        recommendation=recommend(score.overall),
        is_complete=True,
    )


@router.post("/{checkin_id}/reset", response_model=CheckinState)
def reset_checkin(checkin_id: str) -> CheckinState:
    """Discard all answers and start the questionnaire over."""
    session = _load_checkin(checkin_id)
    try:
        session.reset()
    except CheckinAlreadyCompleted as e:
        raise HTTPException(status_code=409, detail=str(e))
    return _state(session)


@router.post("/{checkin_id}/continue", response_model=CheckinContinueResponse)
def continue_checkin(checkin_id: str) -> CheckinContinueResponse:
    """Hand the final score to the dashboard. Allowed once per check-in."""
    session = _load_checkin(checkin_id)
    if not session.finished:
        raise HTTPException(status_code=409, detail="Check-in is not finished")
    try:
        score = session.continue_()
    except CheckinAlreadyCompleted as e:
        raise HTTPException(status_code=409, detail=str(e))
    except PyMongoError as e:
        raise HTTPException(
            status_code=503, detail=f"Store unavailable: {e.__class__.__name__}"
        )
    return CheckinContinueResponse(
        checkin_id=checkin_id,
        score=score,
        completed_at=session.completed_at,
    )
