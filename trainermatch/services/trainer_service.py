"""
Trainer Service - trainer directory, own-profile edits, stats and availability.
"""

import logging
from typing import List

from fastapi import HTTPException
from sqlalchemy import func, select
from sqlalchemy.orm import Session

from trainermatch.models import (
    Match, Proposal, ProposalStatus, Rating, Trainer, TrainerAvailability, User
)
from trainermatch.schemas.schemas import (
    AvailabilityCreate, TrainerCreate, TrainerStatsResponse, TrainerUpdate
)

logger = logging.getLogger(__name__)

# Proposals still in play count towards a trainer's stats
OPEN_PROPOSAL_STATUSES = (ProposalStatus.SUBMITTED, ProposalStatus.ACCEPTED)


class TrainerService:

    def __init__(self, db: Session):
        self.db = db

    def get(self, trainer_id: str) -> Trainer:
        trainer = self.db.get(Trainer, trainer_id)
        if not trainer:
            raise HTTPException(status_code=404, detail="Trainer not found")
        return trainer

    def find_all(self) -> List[Trainer]:
        return list(self.db.scalars(select(Trainer).order_by(Trainer.name)).all())

    def create(self, data: TrainerCreate) -> Trainer:
        if self.db.scalar(select(Trainer.id).where(Trainer.email == data.email)):
            raise HTTPException(status_code=409, detail="Trainer with this email already exists")
        if data.user_id and self.db.get(User, data.user_id) is None:
            raise HTTPException(status_code=400, detail="User not found")

        trainer = Trainer(**data.model_dump())
        self.db.add(trainer)
        self.db.flush()
        logger.info("Trainer %s created (%s)", trainer.id, trainer.email)
        return trainer

    def update(self, trainer_id: str, data: TrainerUpdate) -> Trainer:
        """Apply the fields present in the request; 400 when there are none."""
        changes = data.model_dump(exclude_unset=True, exclude_none=True)
        if not changes:
            raise HTTPException(status_code=400, detail="No fields to update")

        trainer = self.get(trainer_id)
        for field, value in changes.items():
            setattr(trainer, field, value)
        self.db.flush()
        return trainer

    def get_stats(self, trainer_id: str) -> TrainerStatsResponse:
        """Match count, open proposal count and average rating (0 when unrated)."""
        matches = self.db.scalar(
            select(func.count(Match.id)).where(Match.trainer_id == trainer_id)
        ) or 0
        proposals = self.db.scalar(
            select(func.count(Proposal.id)).where(
                Proposal.trainer_id == trainer_id,
                Proposal.status.in_(OPEN_PROPOSAL_STATUSES),
            )
        ) or 0
        rating = self.db.scalar(
            select(func.avg(Rating.score)).where(Rating.trainer_id == trainer_id)
        )
        return TrainerStatsResponse(matches=matches, proposals=proposals, rating=float(rating or 0))

    def get_availability(self, trainer_id: str) -> List[TrainerAvailability]:
        return list(self.db.scalars(
            select(TrainerAvailability)
            .where(TrainerAvailability.trainer_id == trainer_id)
            .order_by(TrainerAvailability.date)
        ).all())

    def add_availability(self, trainer_id: str, data: AvailabilityCreate) -> TrainerAvailability:
        if data.end_time <= data.start_time:
            raise HTTPException(status_code=400, detail="endTime must be after startTime")

        slot = TrainerAvailability(trainer_id=trainer_id, **data.model_dump())
        self.db.add(slot)
        self.db.flush()
        return slot
