"""
Authentication Routes

POST /auth/register - Register new user
POST /auth/login - Login and get JWT token
GET /auth/me - Get current user info
"""

from fastapi import APIRouter, HTTPException, Depends

from trainermatch.api.deps import get_user_service
from trainermatch.core.auth import create_access_token, get_current_user
from trainermatch.services.user_service import UserService
from trainermatch.schemas.schemas import (
    RegisterRequest, LoginRequest, TokenResponse, UserResponse, MessageResponse
)

router = APIRouter(prefix="/auth", tags=["Authentication"])


@router.post("/register", response_model=MessageResponse, status_code=201)
async def register(request: RegisterRequest, service: UserService = Depends(get_user_service)):
    """
    Register a new user account.

    Vendor admins without a vendorId get a new vendor organization;
    trainers get a trainer profile. Login afterwards to get a token.
    """
    user = service.register(request)
    return MessageResponse(message=f"Registered successfully as {user.role.value}. Please login.")


@router.post("/login", response_model=TokenResponse)
async def login(request: LoginRequest, service: UserService = Depends(get_user_service)):
    """
    Login and receive JWT access token.

    Include token in requests: Authorization: Bearer <token>
    """
    user = service.authenticate(request.email, request.password)
    if not user:
        raise HTTPException(status_code=401, detail="Invalid email or password")

    if not user.is_active:
        raise HTTPException(status_code=403, detail="Account deactivated")

    token = create_access_token(data={"sub": user.id, "role": user.role.value})

    return TokenResponse(access_token=token, user_id=user.id, role=user.role.value)


@router.get("/me", response_model=UserResponse)
async def get_me(user: dict = Depends(get_current_user), service: UserService = Depends(get_user_service)):
    """Get current authenticated user's info."""
    row = service.get(user["user_id"])

    return UserResponse(
        id=row.id, email=row.email, role=row.role, vendor_id=row.vendor_id,
        trainer_id=user["trainer_id"], is_active=row.is_active, created_at=row.created_at
    )
