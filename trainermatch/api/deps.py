"""
Service factories for route injection.

Each request gets services bound to its own session; tests override
get_notification_service to capture queued notifications.
"""

from fastapi import Depends
from sqlalchemy.orm import Session

from trainermatch.db.postgres import get_db
from trainermatch.services.college_service import CollegeService
from trainermatch.services.dashboard_service import DashboardService
from trainermatch.services.document_service import DocumentService
from trainermatch.services.match_service import MatchService
from trainermatch.services.notification_service import NotificationService, get_notification_service
from trainermatch.services.proposal_service import ProposalService
from trainermatch.services.requirement_service import RequirementService
from trainermatch.services.session_service import SessionService
from trainermatch.services.trainer_service import TrainerService
from trainermatch.services.user_service import UserService


def get_dashboard_service(db: Session = Depends(get_db)) -> DashboardService:
    return DashboardService(db)


def get_document_service(db: Session = Depends(get_db)) -> DocumentService:
    return DocumentService(db)


def get_college_service(db: Session = Depends(get_db)) -> CollegeService:
    return CollegeService(db)


def get_trainer_service(db: Session = Depends(get_db)) -> TrainerService:
    return TrainerService(db)


def get_requirement_service(db: Session = Depends(get_db)) -> RequirementService:
    return RequirementService(db)


def get_user_service(
    db: Session = Depends(get_db),
    notifier: NotificationService = Depends(get_notification_service),
) -> UserService:
    return UserService(db, notifier)


def get_match_service(
    db: Session = Depends(get_db),
    notifier: NotificationService = Depends(get_notification_service),
) -> MatchService:
    return MatchService(db, notifier)


def get_proposal_service(
    db: Session = Depends(get_db),
    notifier: NotificationService = Depends(get_notification_service),
) -> ProposalService:
    return ProposalService(db, notifier)


def get_session_service(
    db: Session = Depends(get_db),
    notifier: NotificationService = Depends(get_notification_service),
) -> SessionService:
    return SessionService(db, notifier)
