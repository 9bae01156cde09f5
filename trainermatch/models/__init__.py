"""SQLAlchemy models for the TrainerMatch relational store."""

from trainermatch.models.base import Base
from trainermatch.models.enums import (
    DEFAULT_COLLEGE_STATUS,
    FOLLOW_UP_STATUS,
    PROPOSAL_SENT_STATUS,
    CollegeActivityType,
    MatchStatus,
    ProposalStatus,
    RequirementStatus,
    SessionStatus,
    UserRole,
)
from trainermatch.models.vendor import College, CollegeActivity, Contact, Vendor
from trainermatch.models.user import User
from trainermatch.models.trainer import Rating, Trainer, TrainerAvailability
from trainermatch.models.requirement import Match, Proposal, Requirement
from trainermatch.models.session import TrainingSession

__all__ = [
    # Base
    "Base",
    # Enums
    "UserRole",
    "RequirementStatus",
    "MatchStatus",
    "ProposalStatus",
    "SessionStatus",
    "DEFAULT_COLLEGE_STATUS",
    "PROPOSAL_SENT_STATUS",
    "FOLLOW_UP_STATUS",
    "CollegeActivityType",
    # Tenants
    "Vendor",
    "College",
    "Contact",
    "CollegeActivity",
    "User",
    # Trainers
    "Trainer",
    "TrainerAvailability",
    "Rating",
    # Requirements
    "Requirement",
    "Match",
    "Proposal",
    # Sessions
    "TrainingSession",
]
