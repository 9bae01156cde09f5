"""Scheduled training engagements."""

from datetime import datetime
from typing import Any, Optional

from sqlalchemy import JSON, DateTime, Enum, ForeignKey, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from trainermatch.models.base import Base, new_id, utcnow
from trainermatch.models.enums import SessionStatus


class TrainingSession(Base):
    __tablename__ = "sessions"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_id)
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    status: Mapped[SessionStatus] = mapped_column(
        Enum(SessionStatus, name="session_status_enum"),
        default=SessionStatus.SCHEDULED,
        nullable=False,
    )
    start_time: Mapped[datetime] = mapped_column(DateTime, nullable=False, index=True)
    end_time: Mapped[datetime] = mapped_column(DateTime, nullable=False)
    location: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    college_id: Mapped[Optional[str]] = mapped_column(
        String(36), ForeignKey("colleges.id", ondelete="SET NULL"), nullable=True, index=True
    )
    trainer_id: Mapped[Optional[str]] = mapped_column(
        String(36), ForeignKey("trainers.id", ondelete="SET NULL"), nullable=True, index=True
    )
    requirement_id: Mapped[Optional[str]] = mapped_column(
        String(36), ForeignKey("requirements.id", ondelete="SET NULL"), nullable=True
    )
    feedback: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    feedback_rating: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    attendance: Mapped[Optional[Any]] = mapped_column(JSON, nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime, default=utcnow, nullable=False)

    college: Mapped[Optional["College"]] = relationship()
    trainer: Mapped[Optional["Trainer"]] = relationship()
    requirement: Mapped[Optional["Requirement"]] = relationship()
