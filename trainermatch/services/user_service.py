"""
User Service - registration, login lookup and vendor listing.
"""

import logging
from typing import List, Optional

from fastapi import HTTPException
from sqlalchemy import select
from sqlalchemy.orm import Session, selectinload

from trainermatch.core.auth import hash_password, verify_password
from trainermatch.models import Trainer, User, UserRole, Vendor
from trainermatch.schemas.schemas import RegisterRequest
from trainermatch.services.notification_service import NotificationService

logger = logging.getLogger(__name__)

VENDOR_ROLES = {UserRole.VENDOR_ADMIN, UserRole.VENDOR_USER}


def default_vendor_name(email: str) -> str:
    return f"{email.split('@')[0]}'s Organization"


class UserService:

    def __init__(self, db: Session, notifier: NotificationService = None):
        self.db = db
        self.notifier = notifier or NotificationService()

    def get_by_email(self, email: str) -> Optional[User]:
        return self.db.scalar(
            select(User).options(selectinload(User.trainer)).where(User.email == email)
        )

    def get(self, user_id: str) -> Optional[User]:
        return self.db.scalar(
            select(User).options(selectinload(User.trainer)).where(User.id == user_id)
        )

    def register(self, data: RegisterRequest) -> User:
        """
        Create a user account.

        - SUPER_ADMIN accounts can't be self-registered
        - VENDOR_ADMIN without vendorId gets a new vendor (vendorName or derived from email)
        - VENDOR_USER must join an existing vendor
        - TRAINER gets a trainer profile linked to the account
        A welcome email is queued afterwards.
        """
        if data.role == UserRole.SUPER_ADMIN:
            raise HTTPException(status_code=403, detail="SUPER_ADMIN accounts cannot be self-registered")

        if self.get_by_email(data.email):
            raise HTTPException(status_code=400, detail="Email already registered")

        vendor_id = None
        if data.role in VENDOR_ROLES:
            if data.vendor_id:
                if self.db.get(Vendor, data.vendor_id) is None:
                    raise HTTPException(status_code=400, detail="Vendor not found")
                vendor_id = data.vendor_id
            elif data.role == UserRole.VENDOR_ADMIN:
                vendor = Vendor(
                    name=data.vendor_name or default_vendor_name(data.email),
                    description="Auto-created vendor organization",
                )
                self.db.add(vendor)
                self.db.flush()
                vendor_id = vendor.id
                logger.info("Created vendor %s for %s", vendor.id, data.email)
            else:
                raise HTTPException(status_code=400, detail="vendorId is required for vendor users")

        user = User(
            email=data.email,
            password_hash=hash_password(data.password),
            role=data.role,
            vendor_id=vendor_id,
        )
        self.db.add(user)
        self.db.flush()

        if data.role == UserRole.TRAINER:
            if self.db.scalar(select(Trainer.id).where(Trainer.email == data.email)):
                raise HTTPException(status_code=400, detail="A trainer profile already uses this email")
            self.db.add(Trainer(
                name=data.full_name or data.email.split("@")[0],
                email=data.email,
                skills=data.skills,
                location=data.location,
                user_id=user.id,
            ))
            self.db.flush()

        self.db.commit()
        logger.info("Registered %s as %s", user.email, user.role.value)
        self.notifier.send_email(
            user.email,
            "Welcome to TrainerMatch!",
            "Thank you for signing up. We are excited to have you on board.",
        )
        return user

    def authenticate(self, email: str, password: str) -> Optional[User]:
        """Return the user when the credentials match, else None."""
        user = self.get_by_email(email)
        if not user or not verify_password(password, user.password_hash):
            return None
        return user

    def list_vendors(self) -> List[Vendor]:
        return list(self.db.scalars(select(Vendor).order_by(Vendor.created_at.desc())).all())
