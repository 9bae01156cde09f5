"""
Proposal Routes

POST /proposals - Submit a proposal (trainers)
POST /proposals/{id}/status - Accept / reject a proposal
GET /proposals - List all proposals
GET /proposals/requirement/{id} - Proposals for a requirement
"""

from typing import List

from fastapi import APIRouter, Depends

from trainermatch.api.deps import get_proposal_service
from trainermatch.core.auth import get_current_trainer, require_roles
from trainermatch.models import UserRole
from trainermatch.services.proposal_service import ProposalService
from trainermatch.schemas.schemas import ProposalCreate, ProposalResponse, ProposalStatusUpdate

router = APIRouter(prefix="/proposals", tags=["Proposals"])

reviewers = require_roles(UserRole.VENDOR_ADMIN, UserRole.VENDOR_USER, UserRole.SUPER_ADMIN)


@router.post("", response_model=ProposalResponse, status_code=201)
async def create_proposal(
    data: ProposalCreate,
    trainer: dict = Depends(get_current_trainer),
    service: ProposalService = Depends(get_proposal_service)
):
    """Submit a proposal as the current trainer. Status starts as SUBMITTED."""
    return service.create(data, trainer_id=trainer["trainer_id"])


@router.post("/{proposal_id}/status", response_model=ProposalResponse)
async def update_proposal_status(
    proposal_id: str,
    data: ProposalStatusUpdate,
    user: dict = Depends(reviewers),
    service: ProposalService = Depends(get_proposal_service)
):
    """Update status; the trainer is emailed on ACCEPTED / REJECTED."""
    return service.update_status(proposal_id, data.status)


@router.get("", response_model=List[ProposalResponse])
async def list_proposals(
    user: dict = Depends(reviewers),
    service: ProposalService = Depends(get_proposal_service)
):
    return service.find_all()


@router.get("/requirement/{requirement_id}", response_model=List[ProposalResponse])
async def get_requirement_proposals(
    requirement_id: str,
    user: dict = Depends(reviewers),
    service: ProposalService = Depends(get_proposal_service)
):
    return service.find_by_requirement(requirement_id)
