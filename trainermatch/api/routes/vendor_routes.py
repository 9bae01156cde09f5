"""
Vendor Routes

GET /vendors - List vendor organizations (super admin)
"""

from typing import List

from fastapi import APIRouter, Depends

from trainermatch.api.deps import get_user_service
from trainermatch.core.auth import require_roles
from trainermatch.models import UserRole
from trainermatch.services.user_service import UserService
from trainermatch.schemas.schemas import VendorResponse

router = APIRouter(prefix="/vendors", tags=["Vendors"])


@router.get("", response_model=List[VendorResponse])
async def list_vendors(
    user: dict = Depends(require_roles(UserRole.SUPER_ADMIN)),
    service: UserService = Depends(get_user_service)
):
    return service.list_vendors()
