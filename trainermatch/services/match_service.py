"""
Match Service - stored requirement/trainer matches and trainer alerts.

Scores are supplied by the caller (0..1); how they are computed lives
outside this service.
"""

import logging
from typing import List

from fastapi import HTTPException
from sqlalchemy import select
from sqlalchemy.orm import Session, selectinload

from trainermatch.models import Match, MatchStatus, Requirement, Trainer
from trainermatch.schemas.schemas import AutoNotifyResponse, MatchCreate
from trainermatch.services.dashboard_service import round_half_up
from trainermatch.services.notification_service import AUTO_NOTIFY_THRESHOLD, NotificationService

logger = logging.getLogger(__name__)


class MatchService:

    def __init__(self, db: Session, notifier: NotificationService = None):
        self.db = db
        self.notifier = notifier or NotificationService()

    def _get_requirement(self, requirement_id: str) -> Requirement:
        requirement = self.db.get(Requirement, requirement_id)
        if not requirement:
            raise HTTPException(status_code=404, detail="Requirement not found")
        return requirement

    def create(self, data: MatchCreate) -> Match:
        self._get_requirement(data.requirement_id)
        trainer = self.db.get(Trainer, data.trainer_id)
        if not trainer:
            raise HTTPException(status_code=404, detail="Trainer not found")

        existing = self.db.scalar(
            select(Match.id).where(
                Match.requirement_id == data.requirement_id,
                Match.trainer_id == data.trainer_id,
            )
        )
        if existing:
            raise HTTPException(status_code=409, detail="Trainer is already matched to this requirement")

        match = Match(**data.model_dump())
        match.trainer = trainer
        self.db.add(match)
        self.db.flush()
        logger.info("Match %s: requirement %s <-> trainer %s (%.2f)",
                    match.id, data.requirement_id, data.trainer_id, data.score)
        return match

    def find_by_requirement(self, requirement_id: str) -> List[Match]:
        """Matches of one requirement, best score first."""
        self._get_requirement(requirement_id)
        return list(self.db.scalars(
            select(Match)
            .options(selectinload(Match.trainer))
            .where(Match.requirement_id == requirement_id)
            .order_by(Match.score.desc(), Match.created_at)
        ).all())

    def update_status(self, match_id: str, status: MatchStatus) -> Match:
        match = self.db.get(Match, match_id)
        if not match:
            raise HTTPException(status_code=404, detail="Match not found")
        match.status = status
        self.db.flush()
        return match

    def auto_notify(self, requirement_id: str) -> AutoNotifyResponse:
        """
        Alert every trainer whose stored match scores above AUTO_NOTIFY_THRESHOLD.

        One trainer's failure doesn't stop the others.
        """
        requirement = self._get_requirement(requirement_id)
        matches = self.find_by_requirement(requirement_id)
        logger.info("Auto-notifying for requirement %s, %d matches", requirement_id, len(matches))

        notified = []
        for match in matches:
            if match.score <= AUTO_NOTIFY_THRESHOLD or match.trainer is None:
                continue
            try:
                self.notifier.notify_trainer_match(
                    match.trainer, requirement.title, round_half_up(match.score * 100)
                )
            except Exception:
                logger.exception("Failed to notify trainer %s", match.trainer.id)
                continue
            notified.append(match.trainer.email)

        return AutoNotifyResponse(notified=len(notified), trainers=notified)
