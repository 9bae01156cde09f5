"""Tests for training sessions and trainer proposals, including their emails."""

from datetime import datetime

import pytest
from fastapi import HTTPException
from sqlalchemy.exc import OperationalError

from trainermatch.models import Proposal, ProposalStatus, SessionStatus, TrainingSession, UserRole
from trainermatch.schemas.schemas import RegisterRequest, SessionCreate
from trainermatch.services.notification_service import NotificationService
from trainermatch.services.proposal_service import ProposalService
from trainermatch.services.session_service import SessionService
from trainermatch.services.user_service import UserService


@pytest.fixture
def make_session(db):
    def _make(title="Kickoff Workshop", trainer=None, start=datetime(2025, 3, 1, 9), **fields):
        session = TrainingSession(
            title=title,
            start_time=start,
            end_time=start.replace(hour=start.hour + 2),
            trainer_id=trainer.id if trainer else None,
            **fields,
        )
        db.add(session)
        db.commit()
        return session
    return _make


class TestCreateSession:

    def test_schedules_and_emails_trainer(self, client, queue, vendor_user, college, trainer_user, auth):
        _, alice = trainer_user
        response = client.post("/api/sessions", headers=auth(vendor_user), json={
            "title": "Kickoff Workshop",
            "startTime": "2025-03-01T09:00:00",
            "endTime": "2025-03-01T11:00:00",
            "location": "Room 101",
            "collegeId": college.id,
            "trainerId": alice.id,
        })

        assert response.status_code == 201
        body = response.json()
        assert body["status"] == "SCHEDULED"
        assert body["trainer"]["name"] == "Alice Johnson"
        assert body["college"]["name"] == "MIT"

        emails = queue.of_type("email")
        assert len(emails) == 1
        assert emails[0]["recipient"] == "alice@example.com"
        assert emails[0]["subject"] == "New Session Scheduled: Kickoff Workshop"
        assert "01 Mar 2025, 09:00" in emails[0]["message"]
        assert "Room 101" in emails[0]["message"]

    def test_without_trainer_sends_nothing(self, client, queue, vendor_user, auth):
        response = client.post("/api/sessions", headers=auth(vendor_user), json={
            "title": "Open Slot", "startTime": "2025-03-01T09:00:00", "endTime": "2025-03-01T10:00:00",
        })

        assert response.status_code == 201
        assert response.json()["trainerId"] is None
        assert queue.payloads == []

    def test_end_must_follow_start(self, client, vendor_user, auth):
        response = client.post("/api/sessions", headers=auth(vendor_user), json={
            "title": "Backwards", "startTime": "2025-03-01T11:00:00", "endTime": "2025-03-01T09:00:00",
        })
        assert response.status_code == 400

    def test_unknown_trainer(self, client, vendor_user, auth):
        response = client.post("/api/sessions", headers=auth(vendor_user), json={
            "title": "Ghost", "startTime": "2025-03-01T09:00:00", "endTime": "2025-03-01T10:00:00",
            "trainerId": "nobody",
        })
        assert response.status_code == 400

    def test_super_admin_cannot_schedule(self, client, super_admin, auth):
        response = client.post("/api/sessions", headers=auth(super_admin), json={
            "title": "Nope", "startTime": "2025-03-01T09:00:00", "endTime": "2025-03-01T10:00:00",
        })
        assert response.status_code == 403


class TestListSessions:

    def test_ordered_by_start_time(self, client, vendor_user, make_session, auth):
        make_session("Later", start=datetime(2025, 4, 1, 9))
        make_session("Sooner", start=datetime(2025, 2, 1, 9))

        response = client.get("/api/sessions", headers=auth(vendor_user))

        assert [s["title"] for s in response.json()] == ["Sooner", "Later"]

    def test_vendor_may_filter_by_trainer(self, client, vendor_user, make_session, make_trainer, auth):
        bob = make_trainer("Bob")
        make_session("Bob's", trainer=bob)
        make_session("Unassigned")

        response = client.get("/api/sessions", params={"trainerId": bob.id}, headers=auth(vendor_user))

        assert [s["title"] for s in response.json()] == ["Bob's"]

    def test_trainer_sees_only_own(self, client, trainer_user, make_session, make_trainer, auth):
        user, alice = trainer_user
        bob = make_trainer("Bob")
        make_session("Alice's", trainer=alice)
        make_session("Bob's", trainer=bob)

        mine = client.get("/api/sessions", headers=auth(user))
        snooping = client.get("/api/sessions", params={"trainerId": bob.id}, headers=auth(user))

        assert [s["title"] for s in mine.json()] == ["Alice's"]
        assert [s["title"] for s in snooping.json()] == ["Alice's"]

    def test_trainer_without_profile_gets_empty_list(self, client, make_user, make_session, auth):
        make_session()
        user = make_user(UserRole.TRAINER, email="pending@example.com")

        response = client.get("/api/sessions", headers=auth(user))

        assert response.status_code == 200
        assert response.json() == []


class TestUpdateSession:

    def test_detail_and_missing(self, client, super_admin, make_session, auth):
        session = make_session()

        detail = client.get(f"/api/sessions/{session.id}", headers=auth(super_admin))

        assert detail.json()["title"] == "Kickoff Workshop"
        assert client.get("/api/sessions/nope", headers=auth(super_admin)).status_code == 404

    def test_partial_update(self, client, vendor_user, make_session, auth):
        session = make_session()

        response = client.patch(f"/api/sessions/{session.id}", headers=auth(vendor_user),
                                json={"location": "Auditorium", "status": "CONFIRMED"})

        assert response.status_code == 200
        body = response.json()
        assert body["location"] == "Auditorium"
        assert body["status"] == "CONFIRMED"
        assert body["title"] == "Kickoff Workshop"

    def test_empty_update_rejected(self, client, vendor_user, make_session, auth):
        session = make_session()
        assert client.patch(f"/api/sessions/{session.id}", headers=auth(vendor_user),
                            json={}).status_code == 400

    def test_super_admin_cannot_edit(self, client, super_admin, make_session, auth):
        session = make_session()
        assert client.patch(f"/api/sessions/{session.id}", headers=auth(super_admin),
                            json={"location": "Elsewhere"}).status_code == 403

    def test_replace_trainer_emails_new_trainer(self, client, queue, vendor_user, trainer_user,
                                                make_session, make_trainer, auth):
        _, alice = trainer_user
        bob = make_trainer("Bob")
        session = make_session(trainer=alice)

        response = client.post(f"/api/sessions/{session.id}/replace-trainer",
                               headers=auth(vendor_user), json={"trainerId": bob.id})

        assert response.status_code == 200
        assert response.json()["trainerId"] == bob.id
        assert response.json()["trainer"]["name"] == "Bob"

        emails = queue.of_type("email")
        assert [e["recipient"] for e in emails] == ["bob@example.com"]
        assert emails[0]["subject"] == "Session Re-assigned: Kickoff Workshop"

    def test_replace_trainer_requires_trainer_id(self, client, db, queue, vendor_user, trainer_user,
                                                 make_session, auth):
        _, alice = trainer_user
        session = make_session(trainer=alice)

        response = client.post(f"/api/sessions/{session.id}/replace-trainer",
                               headers=auth(vendor_user), json={"trainerId": ""})

        assert response.status_code == 422
        db.expire_all()
        assert db.get(TrainingSession, session.id).trainer_id == alice.id
        assert queue.payloads == []

    def test_replace_trainer_service_rejects_blank_id(self, db, queue, make_session):
        session = make_session()

        with pytest.raises(HTTPException) as excinfo:
            SessionService(db, NotificationService(queue=queue)).replace_trainer(session.id, "")

        assert excinfo.value.status_code == 400
        assert queue.payloads == []

    def test_feedback_completes_session(self, client, db, trainer_user, make_session, auth):
        user, alice = trainer_user
        session = make_session(trainer=alice)

        response = client.post(f"/api/sessions/{session.id}/feedback", headers=auth(user),
                               json={"feedback": "Engaged cohort", "rating": 5})

        assert response.status_code == 200
        assert response.json()["status"] == "COMPLETED"
        assert response.json()["feedbackRating"] == 5

        db.expire_all()
        assert db.get(TrainingSession, session.id).status == SessionStatus.COMPLETED

    def test_feedback_rating_bounds(self, client, trainer_user, make_session, auth):
        user, alice = trainer_user
        session = make_session(trainer=alice)

        response = client.post(f"/api/sessions/{session.id}/feedback", headers=auth(user),
                               json={"feedback": "Off the charts", "rating": 6})
        assert response.status_code == 422

    def test_attendance(self, client, vendor_admin, make_session, auth):
        session = make_session()
        attendance = {"present": 28, "absent": 2}

        response = client.post(f"/api/sessions/{session.id}/attendance", headers=auth(vendor_admin),
                               json={"attendance": attendance})

        assert response.status_code == 200
        assert response.json()["attendance"] == attendance

    def test_vendor_user_cannot_record_attendance(self, client, vendor_user, make_session, auth):
        session = make_session()
        response = client.post(f"/api/sessions/{session.id}/attendance", headers=auth(vendor_user),
                               json={"attendance": {"present": 1}})
        assert response.status_code == 403


class TestProposals:

    def test_trainer_submits(self, client, trainer_user, make_requirement, auth):
        user, alice = trainer_user
        requirement = make_requirement("Cloud Bootcamp")

        response = client.post("/api/proposals", headers=auth(user), json={
            "requirementId": requirement.id, "message": "I run this course monthly", "proposedRate": 120,
        })

        assert response.status_code == 201
        body = response.json()
        assert body["status"] == "SUBMITTED"
        assert body["trainerId"] == alice.id
        assert body["requirement"]["title"] == "Cloud Bootcamp"

    def test_unknown_requirement(self, client, trainer_user, auth):
        user, _ = trainer_user
        response = client.post("/api/proposals", headers=auth(user), json={"requirementId": "missing"})
        assert response.status_code == 404

    def test_trainer_without_profile(self, client, make_user, make_requirement, auth):
        user = make_user(UserRole.TRAINER, email="pending@example.com")
        response = client.post("/api/proposals", headers=auth(user),
                               json={"requirementId": make_requirement().id})
        assert response.status_code == 404

    def test_vendor_cannot_submit(self, client, vendor_user, make_requirement, auth):
        response = client.post("/api/proposals", headers=auth(vendor_user),
                               json={"requirementId": make_requirement().id})
        assert response.status_code == 403

    @pytest.mark.parametrize("status, subject", [
        ("ACCEPTED", "Proposal Accepted: Python Bootcamp"),
        ("REJECTED", "Update on Proposal: Python Bootcamp"),
    ])
    def test_decision_emails_trainer(self, client, db, queue, vendor_admin, trainer_user,
                                     make_requirement, auth, status, subject):
        _, alice = trainer_user
        proposal = Proposal(requirement_id=make_requirement().id, trainer_id=alice.id)
        db.add(proposal)
        db.commit()

        response = client.post(f"/api/proposals/{proposal.id}/status", headers=auth(vendor_admin),
                               json={"status": status})

        assert response.status_code == 200
        assert response.json()["status"] == status
        emails = queue.of_type("email")
        assert [(e["recipient"], e["subject"]) for e in emails] == [("alice@example.com", subject)]

    def test_resubmitted_status_sends_nothing(self, client, db, queue, vendor_user, trainer_user,
                                              make_requirement, auth):
        _, alice = trainer_user
        proposal = Proposal(requirement_id=make_requirement().id, trainer_id=alice.id,
                            status=ProposalStatus.ACCEPTED)
        db.add(proposal)
        db.commit()

        client.post(f"/api/proposals/{proposal.id}/status", headers=auth(vendor_user),
                    json={"status": "SUBMITTED"})

        assert queue.payloads == []

    def test_list_by_requirement(self, client, db, super_admin, trainer_user, make_requirement,
                                 make_trainer, auth):
        _, alice = trainer_user
        wanted, other = make_requirement("Wanted"), make_requirement("Other")
        db.add_all([
            Proposal(requirement_id=wanted.id, trainer_id=alice.id),
            Proposal(requirement_id=other.id, trainer_id=make_trainer("Bob").id),
        ])
        db.commit()

        everything = client.get("/api/proposals", headers=auth(super_admin)).json()
        scoped = client.get(f"/api/proposals/requirement/{wanted.id}", headers=auth(super_admin)).json()

        assert len(everything) == 2
        assert [p["trainer"]["name"] for p in scoped] == ["Alice Johnson"]


def failing_commit():
    raise OperationalError("COMMIT", {}, Exception("database is locked"))


class TestEmailsFollowCommit:

    def test_failed_commit_queues_no_session_email(self, db, queue, make_trainer, monkeypatch):
        bob = make_trainer("Bob")
        monkeypatch.setattr(db, "commit", failing_commit)
        service = SessionService(db, NotificationService(queue=queue))

        with pytest.raises(OperationalError):
            service.create(SessionCreate(
                title="Kickoff Workshop",
                start_time=datetime(2025, 3, 1, 9),
                end_time=datetime(2025, 3, 1, 11),
                trainer_id=bob.id,
            ))

        assert queue.payloads == []
        db.rollback()

    def test_failed_commit_queues_no_proposal_email(self, db, queue, trainer_user, make_requirement,
                                                    monkeypatch):
        _, alice = trainer_user
        proposal = Proposal(requirement_id=make_requirement().id, trainer_id=alice.id)
        db.add(proposal)
        db.commit()
        monkeypatch.setattr(db, "commit", failing_commit)

        with pytest.raises(OperationalError):
            ProposalService(db, NotificationService(queue=queue)).update_status(
                proposal.id, ProposalStatus.ACCEPTED
            )

        assert queue.payloads == []
        db.rollback()

    def test_failed_commit_queues_no_welcome_email(self, db, queue, monkeypatch):
        monkeypatch.setattr(db, "commit", failing_commit)

        with pytest.raises(OperationalError):
            UserService(db, NotificationService(queue=queue)).register(RegisterRequest(
                email="tom@example.com", password="s3cret-pass", role=UserRole.TRAINER,
            ))

        assert queue.payloads == []
        db.rollback()
