"""
Trainer Routes

POST /trainers - Create trainer (vendor admin / super admin)
GET /trainers/profile - Get own profile
PUT /trainers/profile - Update own profile
GET /trainers/stats - Own matches / proposals / rating
GET /trainers/availability - Own availability slots
POST /trainers/availability - Add availability slot
GET /trainers - List trainers
GET /trainers/{id} - Trainer detail
"""

from typing import List

from fastapi import APIRouter, Depends

from trainermatch.api.deps import get_trainer_service
from trainermatch.core.auth import get_current_trainer, require_roles
from trainermatch.models import UserRole
from trainermatch.services.trainer_service import TrainerService
from trainermatch.schemas.schemas import (
    AvailabilityCreate, AvailabilityResponse, TrainerCreate, TrainerResponse,
    TrainerStatsResponse, TrainerUpdate
)

router = APIRouter(prefix="/trainers", tags=["Trainers"])

DIRECTORY_ROLES = (UserRole.VENDOR_ADMIN, UserRole.VENDOR_USER, UserRole.SUPER_ADMIN, UserRole.TRAINER)


@router.post("", response_model=TrainerResponse, status_code=201)
async def create_trainer(
    data: TrainerCreate,
    user: dict = Depends(require_roles(UserRole.VENDOR_ADMIN, UserRole.SUPER_ADMIN)),
    service: TrainerService = Depends(get_trainer_service)
):
    return service.create(data)


# /profile, /stats and /availability are declared before /{trainer_id}

@router.get("/profile", response_model=TrainerResponse)
async def get_profile(
    trainer: dict = Depends(get_current_trainer),
    service: TrainerService = Depends(get_trainer_service)
):
    """Get current trainer's profile."""
    return service.get(trainer["trainer_id"])


@router.put("/profile", response_model=TrainerResponse)
async def update_profile(
    data: TrainerUpdate,
    trainer: dict = Depends(get_current_trainer),
    service: TrainerService = Depends(get_trainer_service)
):
    """Update own profile. Only fields present in the body change."""
    return service.update(trainer["trainer_id"], data)


@router.get("/stats", response_model=TrainerStatsResponse)
async def get_stats(
    trainer: dict = Depends(get_current_trainer),
    service: TrainerService = Depends(get_trainer_service)
):
    """
    Trainer dashboard numbers:
    - matches: all matches for this trainer
    - proposals: SUBMITTED + ACCEPTED proposals
    - rating: average rating, 0 if none
    """
    return service.get_stats(trainer["trainer_id"])


@router.get("/availability", response_model=List[AvailabilityResponse])
async def get_availability(
    trainer: dict = Depends(get_current_trainer),
    service: TrainerService = Depends(get_trainer_service)
):
    return service.get_availability(trainer["trainer_id"])


@router.post("/availability", response_model=AvailabilityResponse, status_code=201)
async def add_availability(
    data: AvailabilityCreate,
    trainer: dict = Depends(get_current_trainer),
    service: TrainerService = Depends(get_trainer_service)
):
    """Add a slot. Slots are blocked (isAvailable=false) unless stated otherwise."""
    return service.add_availability(trainer["trainer_id"], data)


@router.get("", response_model=List[TrainerResponse])
async def list_trainers(
    user: dict = Depends(require_roles(*DIRECTORY_ROLES)),
    service: TrainerService = Depends(get_trainer_service)
):
    return service.find_all()


@router.get("/{trainer_id}", response_model=TrainerResponse)
async def get_trainer(
    trainer_id: str,
    user: dict = Depends(require_roles(*DIRECTORY_ROLES)),
    service: TrainerService = Depends(get_trainer_service)
):
    return service.get(trainer_id)
