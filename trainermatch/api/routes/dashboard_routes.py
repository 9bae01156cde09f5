"""
Dashboard Routes (public, read-only)

GET /dashboard/stats - Headline counts
GET /dashboard/analytics - 6-month match success, trainer leaderboard, categories
GET /dashboard/admin-stats - Platform counts and recent sign-ups
"""

from fastapi import APIRouter, Depends

from trainermatch.api.deps import get_dashboard_service
from trainermatch.services.dashboard_service import DashboardService
from trainermatch.schemas.schemas import (
    AdminStatsResponse, AnalyticsResponse, DashboardStatsResponse
)

router = APIRouter(prefix="/dashboard", tags=["Dashboard"])


@router.get("/stats", response_model=DashboardStatsResponse)
async def get_stats(service: DashboardService = Depends(get_dashboard_service)):
    return service.get_stats()


@router.get("/analytics", response_model=AnalyticsResponse)
async def get_analytics(service: DashboardService = Depends(get_dashboard_service)):
    """
    Analytics over the trailing 6 calendar months.

    - matchSuccessData: per month {month, success, total}, oldest first
    - trainerPerformanceData: top 5 trainers by accepted matches
    - categoryDistribution: top 5 requirement categories (first tag) by share
    - matchSuccess: overall accepted percentage
    """
    return service.get_analytics()


@router.get("/admin-stats", response_model=AdminStatsResponse)
async def get_admin_stats(service: DashboardService = Depends(get_dashboard_service)):
    return service.get_admin_stats()
