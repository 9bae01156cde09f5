"""
Pydantic Schemas - Request/Response Validation

All API request and response schemas in one file for simplicity.
Responses serialize with camelCase keys (the dashboard frontend's contract);
requests accept either camelCase or snake_case.
"""

from pydantic import BaseModel, ConfigDict, EmailStr, Field
from pydantic.alias_generators import to_camel
from typing import Optional, List, Any
from datetime import datetime

from trainermatch.models.enums import (
    MatchStatus, ProposalStatus, RequirementStatus, SessionStatus, UserRole
)


class CamelModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


# ============================================================
# AUTH SCHEMAS
# ============================================================

class RegisterRequest(CamelModel):
    email: EmailStr
    password: str = Field(..., min_length=8)
    role: UserRole
    vendor_id: Optional[str] = None
    # Vendor roles without vendor_id get a new vendor with this name
    vendor_name: Optional[str] = None
    # Trainer profile bootstrap
    full_name: Optional[str] = None
    skills: List[str] = []
    location: Optional[str] = None

class LoginRequest(CamelModel):
    email: EmailStr
    password: str

# OAuth2-style token payload keeps snake_case keys
class TokenResponse(BaseModel):
    access_token: str
    token_type: str = "bearer"
    user_id: str
    role: str

class UserResponse(CamelModel):
    id: str
    email: str
    role: UserRole
    vendor_id: Optional[str] = None
    trainer_id: Optional[str] = None
    is_active: bool
    created_at: datetime


# ============================================================
# SUMMARY SCHEMAS (joined records)
# ============================================================

class VendorSummary(CamelModel):
    id: str
    name: str

class TrainerSummary(CamelModel):
    id: str
    name: Optional[str] = None
    email: str

class CollegeSummary(CamelModel):
    id: str
    name: str

class RequirementSummary(CamelModel):
    id: str
    title: str
    status: RequirementStatus


# ============================================================
# DASHBOARD SCHEMAS
# ============================================================

class DashboardStatsResponse(CamelModel):
    total_colleges: int
    active_requirements: int
    trainers_matched: int
    sessions_scheduled: int

class MatchSuccessPoint(CamelModel):
    month: str
    success: int
    total: int

class TrainerPerformance(CamelModel):
    trainer: str
    matches: int
    rating: float

class CategoryShare(CamelModel):
    category: str
    percentage: int

class AnalyticsResponse(CamelModel):
    match_success_data: List[MatchSuccessPoint]
    trainer_performance_data: List[TrainerPerformance]
    category_distribution: List[CategoryShare]
    match_success: int

class AdminStatCard(CamelModel):
    name: str
    value: str
    icon: str
    change: str
    color: str

class RecentUser(CamelModel):
    id: str
    email: str
    role: UserRole
    created_at: datetime
    vendor: Optional[VendorSummary] = None
    trainer: Optional[TrainerSummary] = None

class AdminStatsResponse(CamelModel):
    stats: List[AdminStatCard]
    recent_users: List[RecentUser]


# ============================================================
# VENDOR / COLLEGE SCHEMAS
# ============================================================

class VendorResponse(CamelModel):
    id: str
    name: str
    description: Optional[str] = None
    website: Optional[str] = None
    created_at: datetime

class ContactIn(CamelModel):
    name: str
    email: Optional[str] = None
    phone: Optional[str] = None

class ContactResponse(ContactIn):
    id: str

class CollegeCreate(CamelModel):
    name: str = Field(..., min_length=2, max_length=255)
    location: Optional[str] = None
    vendor_id: Optional[str] = None
    contacts: List[ContactIn] = []

class CollegeStatusUpdate(CamelModel):
    status: str = Field(..., min_length=1, max_length=100)

class CollegeResponse(CamelModel):
    id: str
    name: str
    location: Optional[str] = None
    status: str
    last_action: Optional[str] = None
    vendor_id: str
    contacts: List[ContactResponse] = []
    requirement_count: int = 0
    created_at: datetime
    updated_at: datetime

class ActivityCreate(CamelModel):
    type: str = Field(..., min_length=1, max_length=50)
    description: str = Field(..., min_length=1)

class ActivityResponse(ActivityCreate):
    id: str
    college_id: str
    performed_by: Optional[str] = None
    created_at: datetime

# Detail view adds the timeline, newest first
class CollegeDetailResponse(CollegeResponse):
    activities: List[ActivityResponse] = []

class FollowUpResponse(CamelModel):
    processed: int
    colleges: List[str]


# ============================================================
# TRAINER SCHEMAS
# ============================================================

class TrainerCreate(CamelModel):
    name: Optional[str] = None
    email: EmailStr
    phone: Optional[str] = None
    skills: List[str] = []
    domain: List[str] = []
    tags: List[str] = []
    bio: Optional[str] = None
    hourly_rate: Optional[float] = Field(None, ge=0)
    location: Optional[str] = None
    rating: Optional[float] = Field(None, ge=0, le=5)
    user_id: Optional[str] = None

class TrainerUpdate(CamelModel):
    name: Optional[str] = None
    phone: Optional[str] = None
    skills: Optional[List[str]] = None
    domain: Optional[List[str]] = None
    tags: Optional[List[str]] = None
    bio: Optional[str] = None
    hourly_rate: Optional[float] = Field(None, ge=0)
    location: Optional[str] = None

class TrainerResponse(CamelModel):
    id: str
    name: Optional[str] = None
    email: str
    phone: Optional[str] = None
    skills: List[str] = []
    domain: List[str] = []
    tags: List[str] = []
    bio: Optional[str] = None
    hourly_rate: Optional[float] = None
    location: Optional[str] = None
    rating: Optional[float] = None
    user_id: Optional[str] = None
    created_at: datetime

class TrainerStatsResponse(CamelModel):
    matches: int
    proposals: int
    rating: float

class AvailabilityCreate(CamelModel):
    date: datetime
    start_time: datetime
    end_time: datetime
    is_available: bool = False

class AvailabilityResponse(AvailabilityCreate):
    id: str
    trainer_id: str


# ============================================================
# REQUIREMENT / MATCH / PROPOSAL SCHEMAS
# ============================================================

class RequirementCreate(CamelModel):
    title: str = Field(..., min_length=3, max_length=255)
    description: Optional[str] = None
    tags: List[str] = []
    status: RequirementStatus = RequirementStatus.OPEN
    vendor_id: Optional[str] = None
    college_id: Optional[str] = None
    location: Optional[str] = None
    start_date: Optional[datetime] = None
    end_date: Optional[datetime] = None
    budget_min: Optional[float] = Field(None, ge=0)
    budget_max: Optional[float] = Field(None, ge=0)

class RequirementResponse(CamelModel):
    id: str
    title: str
    description: Optional[str] = None
    tags: List[str] = []
    status: RequirementStatus
    vendor_id: str
    college_id: Optional[str] = None
    location: Optional[str] = None
    start_date: Optional[datetime] = None
    end_date: Optional[datetime] = None
    budget_min: Optional[float] = None
    budget_max: Optional[float] = None
    created_at: datetime
    vendor: Optional[VendorSummary] = None
    college: Optional[CollegeSummary] = None
    match_count: int = 0
    proposal_count: int = 0

class MatchCreate(CamelModel):
    requirement_id: str
    trainer_id: str
    score: float = Field(..., ge=0, le=1)
    explanation: Optional[str] = None
    status: MatchStatus = MatchStatus.PENDING

class MatchStatusUpdate(CamelModel):
    status: MatchStatus

class MatchResponse(CamelModel):
    id: str
    requirement_id: str
    trainer_id: str
    status: MatchStatus
    score: float
    explanation: Optional[str] = None
    created_at: datetime
    trainer: Optional[TrainerSummary] = None

class AutoNotifyResponse(CamelModel):
    notified: int
    trainers: List[str]

class ProposalCreate(CamelModel):
    requirement_id: str
    message: Optional[str] = None
    proposed_rate: Optional[float] = Field(None, ge=0)

class ProposalStatusUpdate(CamelModel):
    status: ProposalStatus

class ProposalResponse(CamelModel):
    id: str
    requirement_id: str
    trainer_id: str
    message: Optional[str] = None
    proposed_rate: Optional[float] = None
    status: ProposalStatus
    created_at: datetime
    trainer: Optional[TrainerSummary] = None
    requirement: Optional[RequirementSummary] = None

class RequirementDetailResponse(RequirementResponse):
    matches: List[MatchResponse] = []
    proposals: List[ProposalResponse] = []


# ============================================================
# SESSION SCHEMAS
# ============================================================

class SessionCreate(CamelModel):
    title: str = Field(..., min_length=3, max_length=255)
    start_time: datetime
    end_time: datetime
    location: Optional[str] = None
    college_id: Optional[str] = None
    trainer_id: Optional[str] = None
    requirement_id: Optional[str] = None
    status: SessionStatus = SessionStatus.SCHEDULED

class SessionUpdate(CamelModel):
    title: Optional[str] = None
    start_time: Optional[datetime] = None
    end_time: Optional[datetime] = None
    location: Optional[str] = None
    status: Optional[SessionStatus] = None

class ReplaceTrainerRequest(CamelModel):
    trainer_id: str = Field(..., min_length=1)

class FeedbackRequest(CamelModel):
    feedback: str
    rating: int = Field(..., ge=1, le=5)

class AttendanceRequest(CamelModel):
    attendance: Any

class SessionResponse(CamelModel):
    id: str
    title: str
    status: SessionStatus
    start_time: datetime
    end_time: datetime
    location: Optional[str] = None
    college_id: Optional[str] = None
    trainer_id: Optional[str] = None
    requirement_id: Optional[str] = None
    feedback: Optional[str] = None
    feedback_rating: Optional[int] = None
    attendance: Optional[Any] = None
    created_at: datetime
    trainer: Optional[TrainerSummary] = None
    college: Optional[CollegeSummary] = None


# ============================================================
# DOCUMENT / UPLOAD SCHEMAS
# ============================================================

class DocumentCreate(CamelModel):
    title: str = Field(..., min_length=1, max_length=255)
    type: str = "OTHER"
    url: str
    folder_name: Optional[str] = None
    college_id: Optional[str] = None
    trainer_id: Optional[str] = None
    requirement_id: Optional[str] = None

class DocumentResponse(CamelModel):
    id: str
    title: str
    type: str
    url: str
    folder_name: Optional[str] = None
    college_id: Optional[str] = None
    trainer_id: Optional[str] = None
    requirement_id: Optional[str] = None
    created_at: datetime
    college: Optional[CollegeSummary] = None
    trainer: Optional[TrainerSummary] = None
    requirement: Optional[RequirementSummary] = None

class UploadResponse(CamelModel):
    url: str
    filename: str
    size: int
    content_type: Optional[str] = None


# ============================================================
# GENERIC SCHEMAS
# ============================================================

class MessageResponse(CamelModel):
    message: str
    success: bool = True
