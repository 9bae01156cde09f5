"""
College Service - a vendor's college pipeline (colleges, contacts and their
activity timeline).

Every pipeline move is logged as a CollegeActivity; the follow-up sweep flags
colleges that have sat in "Proposal Sent" without a reply.
"""

import logging
from datetime import datetime, timedelta
from typing import List, Optional

from fastapi import HTTPException
from sqlalchemy import and_, func, select
from sqlalchemy.orm import Session, selectinload

from trainermatch.models import (
    FOLLOW_UP_STATUS, PROPOSAL_SENT_STATUS, College, CollegeActivity, CollegeActivityType,
    Contact, Requirement, Vendor
)
from trainermatch.models.base import utcnow
from trainermatch.schemas.schemas import (
    ActivityCreate, CollegeCreate, CollegeDetailResponse, CollegeResponse, FollowUpResponse
)

logger = logging.getLogger(__name__)

SYSTEM_ACTOR = "System"
FOLLOW_UP_ACTOR = "AI Agent"
# How long a sent proposal may go unanswered before a follow-up is flagged
FOLLOW_UP_AFTER = timedelta(days=3)


class CollegeService:

    def __init__(self, db: Session):
        self.db = db

    def _requirement_counts(self, college_ids: List[str]) -> dict:
        if not college_ids:
            return {}
        rows = self.db.execute(
            select(Requirement.college_id, func.count(Requirement.id))
            .where(Requirement.college_id.in_(college_ids))
            .group_by(Requirement.college_id)
        ).all()
        return {college_id: count for college_id, count in rows}

    def _to_response(self, college: College, requirement_count: int = 0, schema=CollegeResponse):
        return schema.model_validate(college).model_copy(
            update={"requirement_count": requirement_count}
        )

    def _load(self, college_id: str, vendor_id: Optional[str] = None) -> College:
        """
        Fetch a college with contacts and timeline.

        vendor_id=None skips the tenant check (super admins); any other value,
        including "", must own the college or it is reported as not found.
        """
        college = self.db.scalar(
            select(College)
            .options(selectinload(College.contacts), selectinload(College.activities))
            .where(College.id == college_id)
        )
        if not college or (vendor_id is not None and college.vendor_id != vendor_id):
            raise HTTPException(status_code=404, detail="College not found")
        return college

    def create(self, data: CollegeCreate, vendor_id: Optional[str]) -> CollegeResponse:
        """Create a college (status 'Proposal Prepared') with its initial contacts."""
        vendor_id = vendor_id or data.vendor_id
        if not vendor_id:
            raise HTTPException(status_code=400, detail="vendorId is required")
        if self.db.get(Vendor, vendor_id) is None:
            raise HTTPException(status_code=400, detail="Vendor not found")

        college = College(
            name=data.name,
            location=data.location,
            vendor_id=vendor_id,
            last_action="College created",
            contacts=[Contact(name=c.name, email=c.email, phone=c.phone) for c in data.contacts],
            activities=[CollegeActivity(
                type=CollegeActivityType.STATUS_CHANGE,
                description="College created and Proposal Sent to Draft.",
                performed_by=SYSTEM_ACTOR,
            )],
        )
        self.db.add(college)
        self.db.flush()
        logger.info("College %s created for vendor %s", college.id, vendor_id)
        return self._to_response(college)

    def find_all(self, vendor_id: Optional[str] = None) -> List[CollegeResponse]:
        """Most recently updated first. vendor_id=None lists every vendor's colleges."""
        stmt = select(College).options(selectinload(College.contacts)).order_by(College.updated_at.desc())
        if vendor_id:
            stmt = stmt.where(College.vendor_id == vendor_id)
        colleges = self.db.scalars(stmt).all()

        counts = self._requirement_counts([c.id for c in colleges])
        return [self._to_response(c, counts.get(c.id, 0)) for c in colleges]

    def get(self, college_id: str, vendor_id: Optional[str] = None) -> CollegeDetailResponse:
        """College detail with its activity timeline, newest first."""
        college = self._load(college_id, vendor_id)
        counts = self._requirement_counts([college.id])
        return self._to_response(college, counts.get(college.id, 0), schema=CollegeDetailResponse)

    def update_status(self, college_id: str, status: str, performed_by: str = None,
                      vendor_id: Optional[str] = None) -> CollegeDetailResponse:
        college = self._load(college_id, vendor_id)

        college.status = status
        college.last_action = f"Status updated to {status}"
        college.activities.insert(0, CollegeActivity(
            type=CollegeActivityType.STATUS_CHANGE,
            description=f'Status updated to "{status}"',
            performed_by=performed_by or SYSTEM_ACTOR,
        ))
        self.db.flush()
        logger.info("College %s moved to %s", college_id, status)
        return self.get(college_id)

    def add_activity(self, college_id: str, data: ActivityCreate, performed_by: str = None,
                     vendor_id: Optional[str] = None) -> CollegeDetailResponse:
        """Log a timeline entry; its description becomes the college's last action."""
        college = self._load(college_id, vendor_id)

        college.last_action = data.description
        college.activities.insert(0, CollegeActivity(
            type=data.type,
            description=data.description,
            performed_by=performed_by,
        ))
        self.db.flush()
        return self.get(college_id)

    def trigger_follow_up(self, vendor_id: Optional[str] = None,
                          now: datetime = None) -> FollowUpResponse:
        """
        Flag colleges stuck in 'Proposal Sent' for more than three days.

        A college that already got a follow-up inside that window is skipped.
        Flagged colleges move to FOLLOW_UP_STATUS and get an AI_FOLLOW_UP
        timeline entry. vendor_id=None sweeps every vendor.
        """
        cutoff = (now or utcnow()) - FOLLOW_UP_AFTER
        stmt = select(College).where(
            College.status == PROPOSAL_SENT_STATUS,
            College.updated_at < cutoff,
            ~College.activities.any(and_(
                CollegeActivity.type == CollegeActivityType.AI_FOLLOW_UP,
                CollegeActivity.created_at > cutoff,
            )),
        ).order_by(College.updated_at)
        if vendor_id is not None:
            stmt = stmt.where(College.vendor_id == vendor_id)

        flagged = []
        for college in self.db.scalars(stmt).all():
            college.status = FOLLOW_UP_STATUS
            college.last_action = "AI initiated auto-follow up"
            self.db.add(CollegeActivity(
                college_id=college.id,
                type=CollegeActivityType.AI_FOLLOW_UP,
                description="No response for 3 days. AI suggests sending follow-up email.",
                performed_by=FOLLOW_UP_ACTOR,
            ))
            flagged.append(college.name)
        self.db.flush()

        logger.info("Follow-up sweep flagged %d colleges", len(flagged))
        return FollowUpResponse(processed=len(flagged), colleges=flagged)
