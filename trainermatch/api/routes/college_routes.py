"""
College Routes

POST /colleges - Add a college (with contacts) to the caller's vendor
GET /colleges - List colleges (own vendor; super admins see all)
POST /colleges/ai/trigger-follow-up - Flag colleges with unanswered proposals
GET /colleges/{id} - College detail with activity timeline
PUT /colleges/{id}/status - Move a college along the pipeline
POST /colleges/{id}/activities - Log a timeline entry
"""

from typing import List, Optional

from fastapi import APIRouter, Depends

from trainermatch.api.deps import get_college_service
from trainermatch.core.auth import require_roles
from trainermatch.models import UserRole
from trainermatch.services.college_service import CollegeService
from trainermatch.schemas.schemas import (
    ActivityCreate, CollegeCreate, CollegeDetailResponse, CollegeResponse, CollegeStatusUpdate,
    FollowUpResponse
)

router = APIRouter(prefix="/colleges", tags=["Colleges"])

college_admins = require_roles(UserRole.VENDOR_ADMIN, UserRole.SUPER_ADMIN)
college_viewers = require_roles(UserRole.VENDOR_ADMIN, UserRole.VENDOR_USER, UserRole.SUPER_ADMIN)


def tenant_of(user: dict) -> Optional[str]:
    """None for super admins (every vendor), otherwise the caller's vendor ("" if none)."""
    if user["role"] == UserRole.SUPER_ADMIN.value:
        return None
    return user["vendor_id"] or ""


@router.post("", response_model=CollegeResponse, status_code=201)
async def create_college(
    data: CollegeCreate,
    user: dict = Depends(college_admins),
    service: CollegeService = Depends(get_college_service)
):
    """Vendor admins create under their own vendor; super admins must pass vendorId."""
    return service.create(data, vendor_id=user["vendor_id"])


@router.get("", response_model=List[CollegeResponse])
async def list_colleges(
    user: dict = Depends(college_viewers),
    service: CollegeService = Depends(get_college_service)
):
    if user["role"] == UserRole.SUPER_ADMIN.value:
        return service.find_all()
    if not user["vendor_id"]:
        return []
    return service.find_all(vendor_id=user["vendor_id"])


@router.post("/ai/trigger-follow-up", response_model=FollowUpResponse)
async def trigger_follow_up(
    user: dict = Depends(college_admins),
    service: CollegeService = Depends(get_college_service)
):
    """Rule-based sweep: 'Proposal Sent' for over three days with no recent follow-up."""
    return service.trigger_follow_up(vendor_id=tenant_of(user))


@router.get("/{college_id}", response_model=CollegeDetailResponse)
async def get_college(
    college_id: str,
    user: dict = Depends(college_viewers),
    service: CollegeService = Depends(get_college_service)
):
    return service.get(college_id, vendor_id=tenant_of(user))


@router.put("/{college_id}/status", response_model=CollegeDetailResponse)
async def update_college_status(
    college_id: str,
    data: CollegeStatusUpdate,
    user: dict = Depends(college_admins),
    service: CollegeService = Depends(get_college_service)
):
    return service.update_status(
        college_id, data.status, performed_by=user["email"], vendor_id=tenant_of(user)
    )


@router.post("/{college_id}/activities", response_model=CollegeDetailResponse, status_code=201)
async def add_college_activity(
    college_id: str,
    data: ActivityCreate,
    user: dict = Depends(college_viewers),
    service: CollegeService = Depends(get_college_service)
):
    return service.add_activity(
        college_id, data, performed_by=user["email"], vendor_id=tenant_of(user)
    )
