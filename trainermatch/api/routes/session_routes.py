"""
Session Routes

POST /sessions - Schedule a session (trainer is emailed)
GET /sessions - List sessions by start time (trainers see only their own)
GET /sessions/{id} - Session detail
PATCH /sessions/{id} - Update session
POST /sessions/{id}/replace-trainer - Reassign to another trainer
POST /sessions/{id}/feedback - Record feedback, marks session COMPLETED
POST /sessions/{id}/attendance - Record attendance
"""

from typing import List, Optional

from fastapi import APIRouter, Depends, Query

from trainermatch.api.deps import get_session_service
from trainermatch.core.auth import require_roles
from trainermatch.models import UserRole
from trainermatch.services.session_service import SessionService
from trainermatch.schemas.schemas import (
    AttendanceRequest, FeedbackRequest, ReplaceTrainerRequest, SessionCreate,
    SessionResponse, SessionUpdate
)

router = APIRouter(prefix="/sessions", tags=["Sessions"])

vendor_staff = require_roles(UserRole.VENDOR_ADMIN, UserRole.VENDOR_USER)
session_viewers = require_roles(
    UserRole.VENDOR_ADMIN, UserRole.VENDOR_USER, UserRole.TRAINER, UserRole.SUPER_ADMIN
)
session_editors = require_roles(UserRole.VENDOR_ADMIN, UserRole.VENDOR_USER, UserRole.TRAINER)
session_reporters = require_roles(UserRole.TRAINER, UserRole.VENDOR_ADMIN)


@router.post("", response_model=SessionResponse, status_code=201)
async def create_session(
    data: SessionCreate,
    user: dict = Depends(vendor_staff),
    service: SessionService = Depends(get_session_service)
):
    return service.create(data)


@router.get("", response_model=List[SessionResponse])
async def list_sessions(
    trainer_id: Optional[str] = Query(None, alias="trainerId"),
    user: dict = Depends(session_viewers),
    service: SessionService = Depends(get_session_service)
):
    """
    List sessions ordered by start time.

    Trainers always get their own sessions (trainerId is ignored);
    a trainer account without a profile gets an empty list.
    """
    if user["role"] == UserRole.TRAINER.value:
        if not user["trainer_id"]:
            return []
        trainer_id = user["trainer_id"]
    return service.find_all(trainer_id)


@router.get("/{session_id}", response_model=SessionResponse)
async def get_session(
    session_id: str,
    user: dict = Depends(session_viewers),
    service: SessionService = Depends(get_session_service)
):
    return service.get(session_id)


@router.patch("/{session_id}", response_model=SessionResponse)
async def update_session(
    session_id: str,
    data: SessionUpdate,
    user: dict = Depends(session_editors),
    service: SessionService = Depends(get_session_service)
):
    return service.update(session_id, data)


@router.post("/{session_id}/replace-trainer", response_model=SessionResponse)
async def replace_trainer(
    session_id: str,
    data: ReplaceTrainerRequest,
    user: dict = Depends(vendor_staff),
    service: SessionService = Depends(get_session_service)
):
    """Hand the session to another trainer and email them."""
    return service.replace_trainer(session_id, data.trainer_id)


@router.post("/{session_id}/feedback", response_model=SessionResponse)
async def add_feedback(
    session_id: str,
    data: FeedbackRequest,
    user: dict = Depends(session_reporters),
    service: SessionService = Depends(get_session_service)
):
    return service.add_feedback(session_id, data.feedback, data.rating)


@router.post("/{session_id}/attendance", response_model=SessionResponse)
async def mark_attendance(
    session_id: str,
    data: AttendanceRequest,
    user: dict = Depends(session_reporters),
    service: SessionService = Depends(get_session_service)
):
    return service.mark_attendance(session_id, data.attendance)
