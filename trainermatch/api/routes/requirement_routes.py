"""
Requirement Routes

POST /requirements - Post a requirement (vendor staff)
GET /requirements - List requirements with match/proposal counts
GET /requirements/{id} - Requirement detail with matches and proposals
DELETE /requirements/{id} - Delete requirement and its documents
"""

from typing import List

from fastapi import APIRouter, Depends

from trainermatch.api.deps import get_document_service, get_requirement_service
from trainermatch.core.auth import require_roles
from trainermatch.models import UserRole
from trainermatch.services.document_service import DocumentService
from trainermatch.services.requirement_service import RequirementService
from trainermatch.schemas.schemas import (
    MessageResponse, RequirementCreate, RequirementDetailResponse, RequirementResponse
)

router = APIRouter(prefix="/requirements", tags=["Requirements"])

READ_ROLES = (UserRole.VENDOR_ADMIN, UserRole.VENDOR_USER, UserRole.SUPER_ADMIN, UserRole.TRAINER)


@router.post("", response_model=RequirementResponse, status_code=201)
async def create_requirement(
    data: RequirementCreate,
    user: dict = Depends(require_roles(UserRole.VENDOR_ADMIN, UserRole.VENDOR_USER)),
    service: RequirementService = Depends(get_requirement_service)
):
    """Create a requirement for the caller's vendor."""
    return service.create(data, vendor_id=user["vendor_id"])


@router.get("", response_model=List[RequirementResponse])
async def list_requirements(
    user: dict = Depends(require_roles(*READ_ROLES)),
    service: RequirementService = Depends(get_requirement_service)
):
    return service.find_all()


@router.get("/{requirement_id}", response_model=RequirementDetailResponse)
async def get_requirement(
    requirement_id: str,
    user: dict = Depends(require_roles(*READ_ROLES)),
    service: RequirementService = Depends(get_requirement_service)
):
    return service.get(requirement_id)


@router.delete("/{requirement_id}", response_model=MessageResponse)
async def delete_requirement(
    requirement_id: str,
    user: dict = Depends(require_roles(UserRole.VENDOR_ADMIN, UserRole.SUPER_ADMIN)),
    service: RequirementService = Depends(get_requirement_service),
    documents: DocumentService = Depends(get_document_service)
):
    """
    Delete a requirement. Matches and proposals go with it,
    as do documents attached to it. Vendor admins can only delete their own.
    """
    vendor_id = None if user["role"] == UserRole.SUPER_ADMIN.value else (user["vendor_id"] or "")
    removed = service.delete(requirement_id, documents, vendor_id=vendor_id)
    return MessageResponse(message=f"Requirement deleted ({removed} documents removed)")
