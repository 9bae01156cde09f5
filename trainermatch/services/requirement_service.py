"""
Requirement Service

Requirements are vendor-owned; matches and proposals cascade with them in the
relational store, and their documents are removed from MongoDB on delete.
"""

import logging
from typing import List, Optional

from fastapi import HTTPException
from sqlalchemy import func, select
from sqlalchemy.orm import Session, selectinload

from trainermatch.models import College, Match, Proposal, Requirement, Vendor
from trainermatch.schemas.schemas import (
    RequirementCreate, RequirementDetailResponse, RequirementResponse
)
from trainermatch.services.document_service import DocumentService

logger = logging.getLogger(__name__)


def _match_count():
    return (
        select(func.count(Match.id))
        .where(Match.requirement_id == Requirement.id)
        .correlate(Requirement)
        .scalar_subquery()
    )


def _proposal_count():
    return (
        select(func.count(Proposal.id))
        .where(Proposal.requirement_id == Requirement.id)
        .correlate(Requirement)
        .scalar_subquery()
    )


class RequirementService:

    def __init__(self, db: Session):
        self.db = db

    def create(self, data: RequirementCreate, vendor_id: Optional[str] = None) -> RequirementResponse:
        """
        Create a requirement.

        The caller's vendor wins over a vendorId in the body; a vendor is
        mandatory and the college, when given, must belong to it.
        """
        vendor_id = vendor_id or data.vendor_id
        if not vendor_id:
            raise HTTPException(status_code=400, detail="vendorId is required")
        if self.db.get(Vendor, vendor_id) is None:
            raise HTTPException(status_code=400, detail="Vendor not found")

        if data.college_id:
            college = self.db.get(College, data.college_id)
            if college is None or college.vendor_id != vendor_id:
                raise HTTPException(status_code=400, detail="College not found for this vendor")

        if data.budget_min is not None and data.budget_max is not None and data.budget_min > data.budget_max:
            raise HTTPException(status_code=400, detail="budgetMin cannot exceed budgetMax")

        requirement = Requirement(**data.model_dump(exclude={"vendor_id"}), vendor_id=vendor_id)
        self.db.add(requirement)
        self.db.flush()
        logger.info("Requirement %s created for vendor %s", requirement.id, vendor_id)
        return RequirementResponse.model_validate(requirement)

    def find_all(self) -> List[RequirementResponse]:
        """Newest first, with match / proposal counts."""
        rows = self.db.execute(
            select(Requirement, _match_count(), _proposal_count())
            .options(selectinload(Requirement.vendor), selectinload(Requirement.college))
            .order_by(Requirement.created_at.desc())
        ).all()
        return [
            RequirementResponse.model_validate(requirement).model_copy(
                update={"match_count": matches, "proposal_count": proposals}
            )
            for requirement, matches, proposals in rows
        ]

    def get(self, requirement_id: str) -> RequirementDetailResponse:
        """Detail with matches (best score first, trainer joined) and proposals."""
        requirement = self.db.scalar(
            select(Requirement)
            .options(
                selectinload(Requirement.vendor),
                selectinload(Requirement.college),
                selectinload(Requirement.matches).selectinload(Match.trainer),
                selectinload(Requirement.proposals).selectinload(Proposal.trainer),
            )
            .where(Requirement.id == requirement_id)
        )
        if not requirement:
            raise HTTPException(status_code=404, detail="Requirement not found")

        detail = RequirementDetailResponse.model_validate(requirement)
        matches = sorted(detail.matches, key=lambda m: m.score, reverse=True)
        return detail.model_copy(update={
            "matches": matches,
            "match_count": len(detail.matches),
            "proposal_count": len(detail.proposals),
        })

    def delete(self, requirement_id: str, documents: DocumentService,
               vendor_id: Optional[str] = None) -> int:
        """
        Delete a requirement; returns how many documents went with it.
        With vendor_id set, only that vendor's requirements are visible.
        """
        requirement = self.db.get(Requirement, requirement_id)
        if not requirement or (vendor_id is not None and requirement.vendor_id != vendor_id):
            raise HTTPException(status_code=404, detail="Requirement not found")

        self.db.delete(requirement)
        self.db.flush()
        removed = documents.delete_for_requirement(requirement_id)
        logger.info("Requirement %s deleted with %d documents", requirement_id, removed)
        return removed
