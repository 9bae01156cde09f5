"""Database enums for the TrainerMatch schema."""

import enum


class UserRole(str, enum.Enum):
    """Platform roles carried in the request context."""

    SUPER_ADMIN = "SUPER_ADMIN"
    VENDOR_ADMIN = "VENDOR_ADMIN"
    VENDOR_USER = "VENDOR_USER"
    TRAINER = "TRAINER"


class RequirementStatus(str, enum.Enum):
    """Requirement lifecycle. Everything but DRAFT counts as active."""

    DRAFT = "DRAFT"
    OPEN = "OPEN"
    IN_PROGRESS = "IN_PROGRESS"
    COMPLETED = "COMPLETED"
    CANCELLED = "CANCELLED"


class MatchStatus(str, enum.Enum):
    """Match review status."""

    PENDING = "PENDING"
    ACCEPTED = "ACCEPTED"
    REJECTED = "REJECTED"


class ProposalStatus(str, enum.Enum):
    """Trainer proposal status."""

    SUBMITTED = "SUBMITTED"
    ACCEPTED = "ACCEPTED"
    REJECTED = "REJECTED"


class SessionStatus(str, enum.Enum):
    """Training session lifecycle."""

    SCHEDULED = "SCHEDULED"
    CONFIRMED = "CONFIRMED"
    COMPLETED = "COMPLETED"
    CANCELLED = "CANCELLED"


# Default pipeline status for a newly added college
DEFAULT_COLLEGE_STATUS = "Proposal Prepared"

# Pipeline status the follow-up sweep watches, and the status it moves colleges to
PROPOSAL_SENT_STATUS = "Proposal Sent"
FOLLOW_UP_STATUS = "AI Auto Follow-Up Initiated"


class CollegeActivityType:
    """Activity types written by the platform itself. Users may log any other type."""

    STATUS_CHANGE = "STATUS_CHANGE"
    AI_FOLLOW_UP = "AI_FOLLOW_UP"
