"""
Authentication Utility - JWT and Password handling.

Provides:
- Password hashing with bcrypt
- JWT token creation/verification
- FastAPI dependencies for protected routes, including the role gate
"""

from datetime import datetime, timedelta
from typing import Callable, Optional
from jose import JWTError, jwt
from passlib.context import CryptContext
from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy import select
from sqlalchemy.orm import Session, selectinload

from trainermatch.core.config import get_settings
from trainermatch.db.postgres import get_db
from trainermatch.models import User, UserRole

# Password hashing
pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")

# Bearer token extractor; missing header is reported as 401 by get_current_user
bearer_scheme = HTTPBearer(auto_error=False)


def hash_password(password: str) -> str:
    """Hash password with bcrypt."""
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify password against hash."""
    if not hashed_password:
        return False
    return pwd_context.verify(plain_password, hashed_password)


def create_access_token(data: dict, expires_delta: Optional[timedelta] = None) -> str:
    """Create JWT access token."""
    settings = get_settings()
    to_encode = data.copy()
    expire = datetime.utcnow() + (expires_delta or timedelta(minutes=settings.jwt_expire_minutes))
    to_encode.update({"exp": expire})
    return jwt.encode(to_encode, settings.jwt_secret_key, algorithm=settings.jwt_algorithm)


def decode_token(token: str) -> Optional[dict]:
    """Decode and verify JWT token."""
    settings = get_settings()
    try:
        return jwt.decode(token, settings.jwt_secret_key, algorithms=[settings.jwt_algorithm])
    except JWTError:
        return None


def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    db: Session = Depends(get_db),
) -> dict:
    """
    FastAPI dependency - Get current authenticated user.

    Usage:
        @router.get("/protected")
        def route(user: dict = Depends(get_current_user)):
            return user
    """
    credentials_exception = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Invalid or expired token",
        headers={"WWW-Authenticate": "Bearer"},
    )

    if credentials is None:
        raise credentials_exception

    payload = decode_token(credentials.credentials)
    if not payload:
        raise credentials_exception

    user_id = payload.get("sub")
    if not user_id:
        raise credentials_exception

    # Verify user exists
    user = db.scalar(
        select(User).options(selectinload(User.trainer)).where(User.id == user_id)
    )
    if not user:
        raise credentials_exception

    if not user.is_active:
        raise HTTPException(status_code=403, detail="Account deactivated")

    return {
        "user_id": user.id,
        "email": user.email,
        "role": user.role.value,
        "vendor_id": user.vendor_id,
        "trainer_id": user.trainer.id if user.trainer else None,
    }


def require_roles(*roles: UserRole) -> Callable:
    """
    Dependency factory - reject users whose role isn't in the allowed set.

    Usage:
        @router.delete("/{id}")
        def delete(user: dict = Depends(require_roles(UserRole.VENDOR_ADMIN))):
            ...
    """
    allowed = {r.value for r in roles}

    def _role_gate(user: dict = Depends(get_current_user)) -> dict:
        if user["role"] not in allowed:
            raise HTTPException(
                status_code=403,
                detail=f"Requires one of roles: {', '.join(sorted(allowed))}"
            )
        return user

    return _role_gate


def get_current_trainer(user: dict = Depends(require_roles(UserRole.TRAINER))) -> dict:
    """Dependency - Require trainer role and an existing trainer profile."""
    if not user["trainer_id"]:
        raise HTTPException(status_code=404, detail="Trainer profile not found for this user")
    return user
