"""
Match Routes (vendor staff)

POST /matches - Record a scored requirement/trainer match
GET /matches/requirement/{id} - Matches for a requirement, best first
PATCH /matches/{id}/status - Accept / reject a match
POST /matches/requirement/{id}/auto-notify - Alert trainers scoring above 70%
"""

from typing import List

from fastapi import APIRouter, Depends

from trainermatch.api.deps import get_match_service
from trainermatch.core.auth import require_roles
from trainermatch.models import UserRole
from trainermatch.services.match_service import MatchService
from trainermatch.schemas.schemas import (
    AutoNotifyResponse, MatchCreate, MatchResponse, MatchStatusUpdate
)

router = APIRouter(prefix="/matches", tags=["Matches"])

vendor_staff = require_roles(UserRole.VENDOR_ADMIN, UserRole.VENDOR_USER)


@router.post("", response_model=MatchResponse, status_code=201)
async def create_match(
    data: MatchCreate,
    user: dict = Depends(vendor_staff),
    service: MatchService = Depends(get_match_service)
):
    """Store a match. 409 if the trainer is already matched to the requirement."""
    return service.create(data)


@router.get("/requirement/{requirement_id}", response_model=List[MatchResponse])
async def get_requirement_matches(
    requirement_id: str,
    user: dict = Depends(vendor_staff),
    service: MatchService = Depends(get_match_service)
):
    return service.find_by_requirement(requirement_id)


@router.patch("/{match_id}/status", response_model=MatchResponse)
async def update_match_status(
    match_id: str,
    data: MatchStatusUpdate,
    user: dict = Depends(vendor_staff),
    service: MatchService = Depends(get_match_service)
):
    return service.update_status(match_id, data.status)


@router.post("/requirement/{requirement_id}/auto-notify", response_model=AutoNotifyResponse)
async def auto_notify(
    requirement_id: str,
    user: dict = Depends(vendor_staff),
    service: MatchService = Depends(get_match_service)
):
    """Queue email / WhatsApp alerts for every stored match scoring above 0.7."""
    return service.auto_notify(requirement_id)
