"""
Dashboard Analytics Service

PURPOSE:
Summary statistics over requirements, matches, trainers and sessions for the
vendor and admin dashboards.

HOW IT WORKS:
1. Count queries for the headline cards (get_stats, get_admin_stats)
2. Fetch matches and requirements created in the trailing 6 calendar months
3. Aggregate in memory:
   - month-bucketed match success (6 buckets, oldest first)
   - trainer leaderboard (accepted matches per trainer, top 5)
   - category distribution (first tag per requirement, top 5)
   - overall success rate

The aggregation helpers are plain functions over anything exposing the
model attributes, so they can be exercised without a database.
"""

import logging
import math
from datetime import datetime, timedelta
from typing import Iterable, List, Optional, Tuple

from sqlalchemy import func, select
from sqlalchemy.orm import Session, selectinload

from trainermatch.models import (
    College, Match, MatchStatus, Requirement, RequirementStatus, SessionStatus,
    Trainer, TrainingSession, User, Vendor
)
from trainermatch.schemas.schemas import (
    AdminStatCard, AdminStatsResponse, AnalyticsResponse, DashboardStatsResponse,
    RecentUser, TrainerSummary, VendorSummary
)

logger = logging.getLogger(__name__)

MONTH_ABBREVIATIONS = ["Jan", "Feb", "Mar", "Apr", "May", "Jun",
                       "Jul", "Aug", "Sep", "Oct", "Nov", "Dec"]

ANALYTICS_WINDOW_MONTHS = 6
LEADERBOARD_SIZE = 5
CATEGORY_LIMIT = 5
# No rating source is wired into the leaderboard yet
PLACEHOLDER_TRAINER_RATING = 4.5
FALLBACK_CATEGORY = "Other"
RECENT_USERS_LIMIT = 5


# ============================================================
# DATE / ROUNDING HELPERS
# ============================================================

def round_half_up(value: float) -> int:
    """Round to the nearest integer, .5 going up (Python's round() is banker's)."""
    return int(math.floor(value + 0.5))


def percentage(part: int, total: int) -> int:
    """Whole-number percentage of part in total; 0 when total is 0."""
    if total <= 0:
        return 0
    return round_half_up(part * 100 / total)


def shift_months(moment: datetime, months: int) -> datetime:
    """
    Move a timestamp by whole calendar months.

    The day of month is kept; when the target month is shorter the surplus
    days roll into the following month (31 Aug - 6 months -> 3 Mar, or
    2 Mar in a leap year). Time of day is preserved.
    """
    index = moment.year * 12 + (moment.month - 1) + months
    year, month0 = divmod(index, 12)
    first_of_month = moment.replace(year=year, month=month0 + 1, day=1)
    return first_of_month + timedelta(days=moment.day - 1)


def trailing_months(now: datetime, count: int = ANALYTICS_WINDOW_MONTHS) -> List[Tuple[int, int]]:
    """(year, month) pairs for the last `count` calendar months, oldest first."""
    current = now.year * 12 + (now.month - 1)
    months = []
    for offset in range(count - 1, -1, -1):
        year, month0 = divmod(current - offset, 12)
        months.append((year, month0 + 1))
    return months


def window_start(now: datetime) -> datetime:
    """Lower created-at bound of the analytics window."""
    return shift_months(now, -ANALYTICS_WINDOW_MONTHS)


# ============================================================
# AGGREGATIONS
# ============================================================

def aggregate_match_success(matches: Iterable, now: datetime) -> List[dict]:
    """
    Matches created and accepted per calendar month over the trailing window.

    Always returns exactly ANALYTICS_WINDOW_MONTHS entries, oldest first.
    """
    buckets = {ym: {"success": 0, "total": 0} for ym in trailing_months(now)}

    for match in matches:
        key = (match.created_at.year, match.created_at.month)
        bucket = buckets.get(key)
        if bucket is None:
            continue
        bucket["total"] += 1
        if match.status == MatchStatus.ACCEPTED:
            bucket["success"] += 1

    return [
        {"month": MONTH_ABBREVIATIONS[month - 1], "success": counts["success"], "total": counts["total"]}
        for (year, month), counts in buckets.items()
    ]


def aggregate_trainer_performance(matches: Iterable) -> List[dict]:
    """
    Accepted matches per trainer, most first, top LEADERBOARD_SIZE.

    Trainers are keyed by display name (name, else email). Equal counts keep
    the order in which trainers were first seen.
    """
    counts = {}
    for match in matches:
        if match.status != MatchStatus.ACCEPTED:
            continue
        trainer = match.trainer
        if trainer is None:
            continue
        display_name = trainer.name or trainer.email
        counts[display_name] = counts.get(display_name, 0) + 1

    ranked = sorted(counts.items(), key=lambda item: item[1], reverse=True)
    return [
        {"trainer": name, "matches": count, "rating": PLACEHOLDER_TRAINER_RATING}
        for name, count in ranked[:LEADERBOARD_SIZE]
    ]


def requirement_category(requirement) -> str:
    """First tag, or 'Other' for untagged requirements."""
    tags = requirement.tags or []
    return tags[0] if tags else FALLBACK_CATEGORY


def aggregate_category_distribution(requirements: Iterable) -> List[dict]:
    """Share of requirements per category, largest first, top CATEGORY_LIMIT."""
    counts = {}
    total = 0
    for requirement in requirements:
        category = requirement_category(requirement)
        counts[category] = counts.get(category, 0) + 1
        total += 1

    shares = [
        {"category": category[:1].upper() + category[1:], "percentage": percentage(count, total)}
        for category, count in counts.items()
    ]
    shares.sort(key=lambda share: share["percentage"], reverse=True)
    return shares[:CATEGORY_LIMIT]


def overall_match_success(matches: Iterable) -> int:
    """Accepted share of all matches, as a whole percentage."""
    total = 0
    accepted = 0
    for match in matches:
        total += 1
        if match.status == MatchStatus.ACCEPTED:
            accepted += 1
    return percentage(accepted, total)


# ============================================================
# SERVICE
# ============================================================

class DashboardService:
    """
    Dashboard queries over a request-scoped session.
    Query failures are logged and re-raised.
    """

    def __init__(self, db: Session):
        self.db = db

    def _count(self, model, *criteria) -> int:
        stmt = select(func.count()).select_from(model)
        if criteria:
            stmt = stmt.where(*criteria)
        return self.db.scalar(stmt) or 0

    def get_stats(self) -> DashboardStatsResponse:
        """Headline counts over the whole dataset."""
        try:
            logger.debug("Fetching dashboard stats")
            return DashboardStatsResponse(
                total_colleges=self._count(College),
                active_requirements=self._count(Requirement, Requirement.status != RequirementStatus.DRAFT),
                trainers_matched=self._count(Match, Match.status == MatchStatus.ACCEPTED),
                sessions_scheduled=self._count(TrainingSession, TrainingSession.status == SessionStatus.SCHEDULED),
            )
        except Exception:
            logger.exception("Dashboard stats query failed")
            raise

    def get_analytics(self, now: Optional[datetime] = None) -> AnalyticsResponse:
        """Trailing 6-month analytics for the vendor dashboard."""
        now = now or datetime.utcnow()
        since = window_start(now)
        try:
            matches = self.db.scalars(
                select(Match)
                .options(selectinload(Match.trainer))
                .where(Match.created_at >= since)
                .order_by(Match.created_at)
            ).all()
            requirements = self.db.scalars(
                select(Requirement)
                .where(Requirement.created_at >= since)
                .order_by(Requirement.created_at)
            ).all()
        except Exception:
            logger.exception("Analytics query failed")
            raise

        return AnalyticsResponse(
            match_success_data=aggregate_match_success(matches, now),
            trainer_performance_data=aggregate_trainer_performance(matches),
            category_distribution=aggregate_category_distribution(requirements),
            match_success=overall_match_success(matches),
        )

    def get_admin_stats(self, now: Optional[datetime] = None) -> AdminStatsResponse:
        """Platform-wide counts plus the most recent sign-ups."""
        now = now or datetime.utcnow()
        try:
            total_users = self._count(User)
            total_vendors = self._count(Vendor)
            total_trainers = self._count(Trainer)
            new_registrations = self._count(User, User.created_at >= now - timedelta(hours=24))

            recent = self.db.scalars(
                select(User)
                .options(selectinload(User.vendor), selectinload(User.trainer))
                .order_by(User.created_at.desc())
                .limit(RECENT_USERS_LIMIT)
            ).all()
        except Exception:
            logger.exception("Admin stats query failed")
            raise

        stats = [
            AdminStatCard(name="Total Users", value=str(total_users), icon="Users",
                          change="+12%", color="bg-blue-500"),
            AdminStatCard(name="Active Vendors", value=str(total_vendors), icon="Building2",
                          change="+5%", color="bg-indigo-500"),
            AdminStatCard(name="Total Trainers", value=str(total_trainers), icon="Activity",
                          change="Stable", color="bg-emerald-500"),
            AdminStatCard(name="New Registrations", value=str(new_registrations), icon="ShieldCheck",
                          change="24h", color="bg-amber-500"),
        ]
        recent_users = [
            RecentUser(
                id=u.id,
                email=u.email,
                role=u.role,
                created_at=u.created_at,
                vendor=VendorSummary.model_validate(u.vendor) if u.vendor else None,
                trainer=TrainerSummary.model_validate(u.trainer) if u.trainer else None,
            )
            for u in recent
        ]
        return AdminStatsResponse(stats=stats, recent_users=recent_users)
