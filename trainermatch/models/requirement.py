"""Requirements and what hangs off them: matches and trainer proposals."""

from datetime import datetime
from typing import List, Optional

from sqlalchemy import (
    JSON,
    CheckConstraint,
    DateTime,
    Enum,
    Float,
    ForeignKey,
    String,
    Text,
    UniqueConstraint,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from trainermatch.models.base import Base, new_id, utcnow
from trainermatch.models.enums import MatchStatus, ProposalStatus, RequirementStatus


class Requirement(Base):
    """A vendor's posted training need."""

    __tablename__ = "requirements"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_id)
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    # First tag doubles as the requirement's category on the dashboard
    tags: Mapped[List[str]] = mapped_column(JSON, default=list, nullable=False)
    status: Mapped[RequirementStatus] = mapped_column(
        Enum(RequirementStatus, name="requirement_status_enum"),
        default=RequirementStatus.OPEN,
        nullable=False,
    )
    vendor_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("vendors.id", ondelete="CASCADE"), nullable=False, index=True
    )
    college_id: Mapped[Optional[str]] = mapped_column(
        String(36), ForeignKey("colleges.id", ondelete="SET NULL"), nullable=True, index=True
    )
    location: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    start_date: Mapped[Optional[datetime]] = mapped_column(DateTime, nullable=True)
    end_date: Mapped[Optional[datetime]] = mapped_column(DateTime, nullable=True)
    budget_min: Mapped[Optional[float]] = mapped_column(Float, nullable=True)
    budget_max: Mapped[Optional[float]] = mapped_column(Float, nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime, default=utcnow, nullable=False, index=True)

    vendor: Mapped["Vendor"] = relationship(back_populates="requirements")
    college: Mapped[Optional["College"]] = relationship(back_populates="requirements")
    matches: Mapped[List["Match"]] = relationship(
        back_populates="requirement", cascade="all, delete-orphan", passive_deletes=True
    )
    proposals: Mapped[List["Proposal"]] = relationship(
        back_populates="requirement", cascade="all, delete-orphan", passive_deletes=True
    )


class Match(Base):
    """Scored association between a requirement and a trainer."""

    __tablename__ = "matches"
    __table_args__ = (
        UniqueConstraint("requirement_id", "trainer_id", name="uq_requirement_trainer"),
        CheckConstraint("score >= 0 AND score <= 1", name="ck_match_score_range"),
    )

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_id)
    requirement_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("requirements.id", ondelete="CASCADE"), nullable=False, index=True
    )
    trainer_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("trainers.id", ondelete="CASCADE"), nullable=False, index=True
    )
    status: Mapped[MatchStatus] = mapped_column(
        Enum(MatchStatus, name="match_status_enum"), default=MatchStatus.PENDING, nullable=False
    )
    score: Mapped[float] = mapped_column(Float, default=0.0, nullable=False)
    explanation: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime, default=utcnow, nullable=False, index=True)

    requirement: Mapped["Requirement"] = relationship(back_populates="matches")
    trainer: Mapped["Trainer"] = relationship(back_populates="matches")


class Proposal(Base):
    """A trainer's bid on a requirement."""

    __tablename__ = "proposals"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_id)
    requirement_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("requirements.id", ondelete="CASCADE"), nullable=False, index=True
    )
    trainer_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("trainers.id", ondelete="CASCADE"), nullable=False, index=True
    )
    message: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    proposed_rate: Mapped[Optional[float]] = mapped_column(Float, nullable=True)
    status: Mapped[ProposalStatus] = mapped_column(
        Enum(ProposalStatus, name="proposal_status_enum"),
        default=ProposalStatus.SUBMITTED,
        nullable=False,
    )
    created_at: Mapped[datetime] = mapped_column(DateTime, default=utcnow, nullable=False)

    requirement: Mapped["Requirement"] = relationship(back_populates="proposals")
    trainer: Mapped["Trainer"] = relationship()
