"""
API Routes - Combines all route modules into single router.
"""

from fastapi import APIRouter

from trainermatch.api.routes.auth_routes import router as auth_router
from trainermatch.api.routes.dashboard_routes import router as dashboard_router
from trainermatch.api.routes.document_routes import router as document_router
from trainermatch.api.routes.upload_routes import router as upload_router
from trainermatch.api.routes.requirement_routes import router as requirement_router
from trainermatch.api.routes.trainer_routes import router as trainer_router
from trainermatch.api.routes.match_routes import router as match_router
from trainermatch.api.routes.proposal_routes import router as proposal_router
from trainermatch.api.routes.session_routes import router as session_router
from trainermatch.api.routes.college_routes import router as college_router
from trainermatch.api.routes.vendor_routes import router as vendor_router

# Main API router
api_router = APIRouter()

# Include all sub-routers
api_router.include_router(auth_router)
api_router.include_router(dashboard_router)
api_router.include_router(document_router)
api_router.include_router(upload_router)
api_router.include_router(requirement_router)
api_router.include_router(trainer_router)
api_router.include_router(match_router)
api_router.include_router(proposal_router)
api_router.include_router(session_router)
api_router.include_router(college_router)
api_router.include_router(vendor_router)
