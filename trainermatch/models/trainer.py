"""Trainer directory: profiles, availability slots and ratings."""

from datetime import datetime
from typing import List, Optional

from sqlalchemy import JSON, Boolean, DateTime, Float, ForeignKey, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from trainermatch.models.base import Base, new_id, utcnow


class Trainer(Base):
    """A service provider matched against requirements."""

    __tablename__ = "trainers"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_id)
    name: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    email: Mapped[str] = mapped_column(String(255), unique=True, index=True, nullable=False)
    phone: Mapped[Optional[str]] = mapped_column(String(50), nullable=True)
    skills: Mapped[List[str]] = mapped_column(JSON, default=list, nullable=False)
    domain: Mapped[List[str]] = mapped_column(JSON, default=list, nullable=False)
    tags: Mapped[List[str]] = mapped_column(JSON, default=list, nullable=False)
    bio: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    hourly_rate: Mapped[Optional[float]] = mapped_column(Float, nullable=True)
    location: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    rating: Mapped[Optional[float]] = mapped_column(Float, nullable=True)
    user_id: Mapped[Optional[str]] = mapped_column(
        String(36), ForeignKey("users.id", ondelete="SET NULL"), unique=True, nullable=True
    )
    created_at: Mapped[datetime] = mapped_column(DateTime, default=utcnow, nullable=False)

    user: Mapped[Optional["User"]] = relationship(back_populates="trainer")
    availability: Mapped[List["TrainerAvailability"]] = relationship(
        back_populates="trainer",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by="TrainerAvailability.date",
    )
    ratings: Mapped[List["Rating"]] = relationship(
        back_populates="trainer", cascade="all, delete-orphan", passive_deletes=True
    )
    matches: Mapped[List["Match"]] = relationship(
        back_populates="trainer", cascade="all, delete-orphan", passive_deletes=True
    )


class TrainerAvailability(Base):
    __tablename__ = "trainer_availability"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_id)
    trainer_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("trainers.id", ondelete="CASCADE"), nullable=False, index=True
    )
    date: Mapped[datetime] = mapped_column(DateTime, nullable=False)
    start_time: Mapped[datetime] = mapped_column(DateTime, nullable=False)
    end_time: Mapped[datetime] = mapped_column(DateTime, nullable=False)
    is_available: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)

    trainer: Mapped["Trainer"] = relationship(back_populates="availability")


class Rating(Base):
    """A 1-5 rating left for a trainer."""

    __tablename__ = "ratings"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_id)
    trainer_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("trainers.id", ondelete="CASCADE"), nullable=False, index=True
    )
    score: Mapped[int] = mapped_column(Integer, nullable=False)
    comment: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime, default=utcnow, nullable=False)

    trainer: Mapped["Trainer"] = relationship(back_populates="ratings")
