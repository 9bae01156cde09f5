"""
Proposal Service - trainer bids on requirements.

Accepting or rejecting a proposal emails the trainer.
"""

import logging
from typing import List

from fastapi import HTTPException
from sqlalchemy import select
from sqlalchemy.orm import Session, selectinload

from trainermatch.models import Proposal, ProposalStatus, Requirement, Trainer
from trainermatch.schemas.schemas import ProposalCreate
from trainermatch.services.notification_service import NotificationService

logger = logging.getLogger(__name__)

FALLBACK_REQUIREMENT_TITLE = "Training Request"


class ProposalService:

    def __init__(self, db: Session, notifier: NotificationService = None):
        self.db = db
        self.notifier = notifier or NotificationService()

    def create(self, data: ProposalCreate, trainer_id: str) -> Proposal:
        if self.db.get(Requirement, data.requirement_id) is None:
            raise HTTPException(status_code=404, detail="Requirement not found")
        if self.db.get(Trainer, trainer_id) is None:
            raise HTTPException(status_code=404, detail="Trainer not found")

        proposal = Proposal(
            requirement_id=data.requirement_id,
            trainer_id=trainer_id,
            message=data.message,
            proposed_rate=data.proposed_rate,
        )
        self.db.add(proposal)
        self.db.flush()
        logger.info("Proposal %s submitted by trainer %s", proposal.id, trainer_id)
        return proposal

    def update_status(self, proposal_id: str, status: ProposalStatus) -> Proposal:
        proposal = self.db.scalar(
            select(Proposal)
            .options(selectinload(Proposal.trainer), selectinload(Proposal.requirement))
            .where(Proposal.id == proposal_id)
        )
        if not proposal:
            raise HTTPException(status_code=404, detail="Proposal not found")

        proposal.status = status
        self.db.commit()
        self._notify_trainer(proposal)
        return proposal

    def _notify_trainer(self, proposal: Proposal) -> None:
        if not proposal.trainer or not proposal.trainer.email:
            return
        title = proposal.requirement.title if proposal.requirement else FALLBACK_REQUIREMENT_TITLE

        if proposal.status == ProposalStatus.ACCEPTED:
            self.notifier.send_email(
                proposal.trainer.email,
                f"Proposal Accepted: {title}",
                f'Great news! Your proposal for "{title}" has been accepted. '
                "The vendor will contact you shortly.",
            )
        elif proposal.status == ProposalStatus.REJECTED:
            self.notifier.send_email(
                proposal.trainer.email,
                f"Update on Proposal: {title}",
                f'Your proposal for "{title}" was not selected at this time. '
                "We encourage you to apply for other opportunities.",
            )

    def find_all(self) -> List[Proposal]:
        return list(self.db.scalars(
            select(Proposal)
            .options(selectinload(Proposal.trainer), selectinload(Proposal.requirement))
            .order_by(Proposal.created_at.desc())
        ).all())

    def find_by_requirement(self, requirement_id: str) -> List[Proposal]:
        return list(self.db.scalars(
            select(Proposal)
            .options(selectinload(Proposal.trainer), selectinload(Proposal.requirement))
            .where(Proposal.requirement_id == requirement_id)
            .order_by(Proposal.created_at.desc())
        ).all())
