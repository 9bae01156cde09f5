"""
Session Service - scheduled training engagements.

The assigned trainer is emailed when a session is created and when it is
handed over to another trainer. Emails are queued only after the change
is committed.
"""

import logging
from typing import Any, List, Optional

from fastapi import HTTPException
from sqlalchemy import select
from sqlalchemy.orm import Session, selectinload

from trainermatch.models import College, Requirement, SessionStatus, Trainer, TrainingSession
from trainermatch.schemas.schemas import SessionCreate, SessionUpdate
from trainermatch.services.notification_service import NotificationService

logger = logging.getLogger(__name__)

DATE_FORMAT = "%d %b %Y, %H:%M"


class SessionService:

    def __init__(self, db: Session, notifier: NotificationService = None):
        self.db = db
        self.notifier = notifier or NotificationService()

    def _check_refs(self, college_id=None, trainer_id=None, requirement_id=None) -> Optional[Trainer]:
        if college_id and self.db.get(College, college_id) is None:
            raise HTTPException(status_code=400, detail="College not found")
        if requirement_id and self.db.get(Requirement, requirement_id) is None:
            raise HTTPException(status_code=400, detail="Requirement not found")
        if trainer_id:
            trainer = self.db.get(Trainer, trainer_id)
            if trainer is None:
                raise HTTPException(status_code=400, detail="Trainer not found")
            return trainer
        return None

    def create(self, data: SessionCreate) -> TrainingSession:
        if data.end_time <= data.start_time:
            raise HTTPException(status_code=400, detail="endTime must be after startTime")
        trainer = self._check_refs(data.college_id, data.trainer_id, data.requirement_id)

        session = TrainingSession(**data.model_dump())
        self.db.add(session)
        self.db.commit()
        logger.info("Session %s scheduled", session.id)

        if trainer and trainer.email:
            self.notifier.send_email(
                trainer.email,
                f"New Session Scheduled: {session.title}",
                f'You have been scheduled for a new session "{session.title}" on '
                f"{session.start_time.strftime(DATE_FORMAT)}. Location: {session.location}.",
            )
        return session

    def find_all(self, trainer_id: Optional[str] = None) -> List[TrainingSession]:
        """Sessions by start time, optionally only one trainer's."""
        stmt = (
            select(TrainingSession)
            .options(selectinload(TrainingSession.college), selectinload(TrainingSession.trainer))
            .order_by(TrainingSession.start_time)
        )
        if trainer_id:
            stmt = stmt.where(TrainingSession.trainer_id == trainer_id)
        return list(self.db.scalars(stmt).all())

    def get(self, session_id: str) -> TrainingSession:
        session = self.db.scalar(
            select(TrainingSession)
            .options(selectinload(TrainingSession.college), selectinload(TrainingSession.trainer))
            .where(TrainingSession.id == session_id)
        )
        if not session:
            raise HTTPException(status_code=404, detail="Session not found")
        return session

    def update(self, session_id: str, data: SessionUpdate) -> TrainingSession:
        changes = data.model_dump(exclude_unset=True, exclude_none=True)
        if not changes:
            raise HTTPException(status_code=400, detail="No fields to update")

        session = self.get(session_id)
        for field, value in changes.items():
            setattr(session, field, value)
        if session.end_time <= session.start_time:
            raise HTTPException(status_code=400, detail="endTime must be after startTime")
        self.db.flush()
        return session

    def replace_trainer(self, session_id: str, trainer_id: str) -> TrainingSession:
        session = self.get(session_id)
        trainer = self._check_refs(trainer_id=trainer_id)
        if trainer is None:
            raise HTTPException(status_code=400, detail="trainerId is required")

        session.trainer = trainer
        self.db.commit()
        logger.info("Session %s reassigned to trainer %s", session_id, trainer_id)

        if trainer.email:
            self.notifier.send_email(
                trainer.email,
                f"Session Re-assigned: {session.title}",
                f'You have been assigned to cover session "{session.title}" on '
                f"{session.start_time.strftime(DATE_FORMAT)}.",
            )
        return session

    def add_feedback(self, session_id: str, feedback: str, rating: int) -> TrainingSession:
        """Record feedback; a session with feedback is COMPLETED."""
        session = self.get(session_id)
        session.feedback = feedback
        session.feedback_rating = rating
        session.status = SessionStatus.COMPLETED
        self.db.flush()
        return session

    def mark_attendance(self, session_id: str, attendance: Any) -> TrainingSession:
        session = self.get(session_id)
        session.attendance = attendance
        self.db.flush()
        return session
